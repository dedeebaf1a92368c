"""Reminder service — who to contact this week, and the outreach log.

Classification is an ordered rule table evaluated first-match-wins:

    recently_contacted   opened/sent log entry within the cool-down  -> nothing
    coupon_expiring      coupon expires in (0, 72h)                  -> HIGH
    near_points_reward   points in [90%, 100%) of the reward         -> HIGH
    near_stars_goal      exactly one star short of the goal          -> HIGH
    inactive_recent      last visit 15 to 30 days ago                -> MEDIUM
    inactive_long        last visit more than 30 days ago            -> LOW

Candidates come back in customer order; sort_candidates() applies the
display order.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable

from django.utils import timezone

from clubman.conf import ClubmanSettings, get_clubman_settings
from clubman.exceptions import ClubmanError
from clubman.protocols.records import (
    CommerceInfo,
    CustomerInfo,
    Priority,
    ReminderLogInfo,
    ReminderStatus,
    ReminderType,
    RewardInfo,
)
from clubman.services.activity import EMPTY_SUMMARY, ActivityService, CustomerSummary
from clubman.signals import reminder_logged

logger = logging.getLogger(__name__)

_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
_SUPPRESSING_STATUSES = (ReminderStatus.OPENED, ReminderStatus.SENT)
_CONFIRM_STATUSES = (ReminderStatus.SENT, ReminderStatus.SKIPPED)


@dataclass(frozen=True)
class ReminderCandidate:
    """A suggestion to contact a customer."""

    customer: CustomerInfo
    reminder_type: str
    reason: str
    priority: str
    last_visit_at: datetime | None
    progress_text: str


@dataclass(frozen=True)
class ReminderContext:
    """Everything a rule may look at for one customer."""

    customer: CustomerInfo
    commerce: CommerceInfo
    summary: CustomerSummary
    points_reward: RewardInfo | None
    logs: tuple[ReminderLogInfo, ...]
    now: datetime
    config: ClubmanSettings

    @property
    def inactive_for(self) -> timedelta | None:
        if self.summary.last_visit_at is None:
            return None
        return self.now - self.summary.last_visit_at


@dataclass(frozen=True)
class ReminderRule:
    """
    One classification rule.

    ``check`` returns the progress text when the rule matches and None
    otherwise. A matching ``suppress`` rule ends classification with no
    candidate.
    """

    name: str
    check: Callable[[ReminderContext], str | None]
    reminder_type: str | None = None
    priority: str | None = None
    reason: str = ""
    suppress: bool = False


def _format_decimal(value) -> str:
    value = Decimal(value)
    if value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return str(value.normalize())


def _recently_contacted(ctx: ReminderContext) -> str | None:
    since = ctx.now - timedelta(days=ctx.config.REMINDER_COOLDOWN_DAYS)
    for log in ctx.logs:
        if log.status in _SUPPRESSING_STATUSES and log.created_at > since:
            return log.status
    return None


def _coupon_expiring(ctx: ReminderContext) -> str | None:
    customer = ctx.customer
    if not customer.discount_available or customer.discount_expires_at is None:
        return None
    remaining = customer.discount_expires_at - ctx.now
    if timedelta(0) < remaining < timedelta(hours=ctx.config.COUPON_EXPIRING_HOURS):
        return f"{_format_decimal(ctx.commerce.discount_percent)}% OFF disponible"
    return None


def _near_points_reward(ctx: ReminderContext) -> str | None:
    reward = ctx.points_reward
    if not ctx.commerce.enable_points or reward is None:
        return None
    threshold = reward.points_threshold or 0
    points = ctx.customer.total_points
    if threshold > 0 and Decimal(threshold) * ctx.config.NEAR_REWARD_RATIO <= points < threshold:
        return f"{points} / {threshold} pts"
    return None


def _near_stars_goal(ctx: ReminderContext) -> str | None:
    goal = ctx.commerce.stars_goal
    if ctx.commerce.enable_stars and goal > 1 and ctx.customer.current_stars == goal - 1:
        return f"{ctx.customer.current_stars} / {goal} sellos"
    return None


def _inactive_recent(ctx: ReminderContext) -> str | None:
    age = ctx.inactive_for
    lower = timedelta(days=ctx.config.INACTIVE_RECENT_DAYS)
    upper = timedelta(days=ctx.config.INACTIVE_DAYS)
    if age is not None and lower <= age <= upper:
        return f"Hace {age.days} días"
    return None


def _inactive_long(ctx: ReminderContext) -> str | None:
    age = ctx.inactive_for
    if age is not None and age > timedelta(days=ctx.config.INACTIVE_DAYS):
        return f"Hace {age.days} días"
    return None


REMINDER_RULES: tuple[ReminderRule, ...] = (
    ReminderRule("recently_contacted", _recently_contacted, suppress=True),
    ReminderRule(
        "coupon_expiring",
        _coupon_expiring,
        ReminderType.COUPON_EXPIRING,
        Priority.HIGH,
        "Cupón por vencer",
    ),
    ReminderRule(
        "near_points_reward",
        _near_points_reward,
        ReminderType.NEAR_REWARD,
        Priority.HIGH,
        "A un paso del premio",
    ),
    ReminderRule(
        "near_stars_goal",
        _near_stars_goal,
        ReminderType.NEAR_REWARD,
        Priority.HIGH,
        "A un sello del premio",
    ),
    ReminderRule(
        "inactive_recent",
        _inactive_recent,
        ReminderType.INACTIVE,
        Priority.MEDIUM,
        "Inactivo reciente",
    ),
    ReminderRule(
        "inactive_long",
        _inactive_long,
        ReminderType.INACTIVE,
        Priority.LOW,
        "Inactivo (+30 días)",
    ),
)


def classify(ctx: ReminderContext, rules=REMINDER_RULES) -> ReminderCandidate | None:
    """Run ``rules`` in order and return the first match as a candidate."""
    for rule in rules:
        progress = rule.check(ctx)
        if progress is None:
            continue
        if rule.suppress:
            logger.debug("Customer %s skipped by %s", ctx.customer.id, rule.name)
            return None
        return ReminderCandidate(
            customer=ctx.customer,
            reminder_type=rule.reminder_type,
            reason=rule.reason,
            priority=rule.priority,
            last_visit_at=ctx.summary.last_visit_at,
            progress_text=progress,
        )
    return None


def sort_candidates(candidates) -> list[ReminderCandidate]:
    """HIGH before MEDIUM before LOW, keeping the incoming order within a priority."""
    return sorted(candidates, key=lambda c: _PRIORITY_RANK.get(c.priority, len(_PRIORITY_RANK)))


def filter_by_priority(candidates, priority: str) -> list[ReminderCandidate]:
    return [c for c in candidates if c.priority == priority]


def next_candidate(candidates) -> ReminderCandidate | None:
    """First HIGH candidate, else the first candidate, else None."""
    candidates = list(candidates)
    for candidate in candidates:
        if candidate.priority == Priority.HIGH:
            return candidate
    return candidates[0] if candidates else None


class ReminderService:
    """
    Service for reminder candidates and the outreach log.

    Usage:
        service = ReminderService()
        for candidate in sort_candidates(service.get_candidates(commerce_id)):
            log = service.log_opened(commerce_id, candidate.customer.id, candidate.reminder_type)
            ...
            service.confirm(commerce_id, candidate.customer.id, ReminderStatus.SENT)
    """

    def __init__(self, store=None, rules=REMINDER_RULES):
        if store is None:
            from clubman.adapters import get_record_store

            store = get_record_store()
        self.store = store
        self.rules = rules

    def get_candidates(self, commerce_id: str, now: datetime | None = None) -> list[ReminderCandidate]:
        """
        Classify every member of a commerce.

        Args:
            commerce_id: Commerce id
            now: Evaluation time (defaults to timezone.now())

        Returns:
            At most one candidate per customer, in customer order.
            Empty for an unknown commerce.
        """
        commerce = self.store.get_by_id(CommerceInfo, commerce_id)
        if commerce is None:
            logger.debug("No reminder candidates: commerce %s not found", commerce_id)
            return []

        now = now or timezone.now()
        config = get_clubman_settings()
        points_reward = None
        if commerce.points_reward_id:
            points_reward = self.store.get_by_id(RewardInfo, commerce.points_reward_id)

        logs = defaultdict(list)
        for log in self.store.filter(ReminderLogInfo, commerce_id=commerce_id):
            logs[log.customer_id].append(log)

        summaries = ActivityService(self.store).summaries_for_commerce(commerce_id)
        candidates = []
        for customer in self.store.filter(CustomerInfo, commerce_id=commerce_id):
            ctx = ReminderContext(
                customer=customer,
                commerce=commerce,
                summary=summaries.get(customer.id, EMPTY_SUMMARY),
                points_reward=points_reward,
                logs=tuple(logs[customer.id]),
                now=now,
                config=config,
            )
            candidate = classify(ctx, self.rules)
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    def log_opened(
        self,
        commerce_id: str,
        customer_id: str,
        reminder_type: str,
        message_text: str = "",
        staff_user_id: str = "",
        now: datetime | None = None,
    ) -> ReminderLogInfo:
        """
        Record that a reminder message was opened for sending.

        Raises:
            ClubmanError: INVALID_REMINDER_TYPE
        """
        if reminder_type not in ReminderType.values:
            raise ClubmanError("INVALID_REMINDER_TYPE", reminder_type=reminder_type)

        log = self.store.insert(
            ReminderLogInfo(
                commerce_id=commerce_id,
                customer_id=customer_id,
                reminder_type=reminder_type,
                status=ReminderStatus.OPENED,
                created_at=now or timezone.now(),
                message_text=message_text,
                staff_user_id=staff_user_id,
            )
        )
        reminder_logged.send(sender=self.__class__, log=log)
        return log

    def confirm(self, commerce_id: str, customer_id: str, status: str) -> ReminderLogInfo | None:
        """
        Move the customer's newest ``opened`` entry to sent or skipped.

        Returns:
            The updated entry, or None when nothing is pending

        Raises:
            ClubmanError: INVALID_REMINDER_STATUS
        """
        if status not in _CONFIRM_STATUSES:
            raise ClubmanError("INVALID_REMINDER_STATUS", status=status)

        pending = self.store.filter(
            ReminderLogInfo,
            commerce_id=commerce_id,
            customer_id=customer_id,
            status=ReminderStatus.OPENED,
        )
        if not pending:
            logger.debug("No opened reminder to confirm for customer %s", customer_id)
            return None

        latest = max(pending, key=lambda log: log.created_at)
        log = self.store.update(ReminderLogInfo, latest.id, status=status)
        reminder_logged.send(sender=self.__class__, log=log)
        return log
