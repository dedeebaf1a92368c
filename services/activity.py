"""Activity service — visit summaries derived from the transaction log.

The transaction log is the only source of activity history. Summaries are
recomputed on every call; summaries_for_commerce() groups the log in a
single pass for callers that need every member of a commerce at once.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal

from django.utils import timezone

from clubman.conf import clubman_settings
from clubman.protocols.records import (
    CommerceInfo,
    CustomerInfo,
    RewardInfo,
    TransactionInfo,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustomerSummary:
    """Visit summary of one customer."""

    last_visit_at: datetime | None = None
    total_visits: int = 0
    total_amount: Decimal = Decimal("0")
    recent_transactions: tuple[TransactionInfo, ...] = field(default_factory=tuple)


EMPTY_SUMMARY = CustomerSummary()

_RANKINGS = {
    "visits": lambda pair: pair[1].total_visits,
    "amount": lambda pair: pair[1].total_amount,
}


@dataclass(frozen=True)
class CommerceAnalytics:
    """Membership health of a commerce."""

    total_members: int
    active_count: int
    inactive_count: int
    rewards_delivered: int
    return_rate: float  # percentage of active members


def summarize_transactions(transactions) -> CustomerSummary:
    """Build a summary from one customer's transactions (any order)."""
    ordered = sorted(transactions, key=lambda tx: tx.created_at, reverse=True)
    if not ordered:
        return EMPTY_SUMMARY
    return CustomerSummary(
        last_visit_at=ordered[0].created_at,
        total_visits=len(ordered),
        total_amount=sum((Decimal(tx.amount) for tx in ordered), Decimal("0")),
        recent_transactions=tuple(ordered[: clubman_settings.RECENT_TRANSACTIONS_LIMIT]),
    )


class ActivityService:
    """
    Service for customer activity views.

    Works on any RecordStore; defaults to the configured backend.
    """

    def __init__(self, store=None):
        if store is None:
            from clubman.adapters import get_record_store

            store = get_record_store()
        self.store = store

    def summarize(self, customer_id: str) -> CustomerSummary:
        """
        Summarize a customer's visits.

        Args:
            customer_id: Customer id

        Returns:
            CustomerSummary (empty summary if the customer never bought)
        """
        return summarize_transactions(self.store.filter(TransactionInfo, customer_id=customer_id))

    def summaries_for_commerce(self, commerce_id: str) -> dict[str, CustomerSummary]:
        """
        Summaries of every customer with activity in a commerce.

        Customers without transactions are absent; use
        ``summaries.get(customer_id, EMPTY_SUMMARY)``.
        """
        grouped = defaultdict(list)
        for tx in self.store.filter(TransactionInfo, commerce_id=commerce_id):
            grouped[tx.customer_id].append(tx)
        return {customer_id: summarize_transactions(txs) for customer_id, txs in grouped.items()}

    def _members_with_summaries(self, commerce_id: str):
        summaries = self.summaries_for_commerce(commerce_id)
        return [
            (customer, summaries.get(customer.id, EMPTY_SUMMARY))
            for customer in self.store.filter(CustomerInfo, commerce_id=commerce_id)
        ]

    def inactive_customers(
        self,
        commerce_id: str,
        days: int,
        now: datetime | None = None,
    ) -> list[tuple[CustomerInfo, CustomerSummary]]:
        """Customers whose last visit is older than ``days``. Never-visited customers are excluded."""
        cutoff = (now or timezone.now()) - timedelta(days=days)
        return [
            (customer, summary)
            for customer, summary in self._members_with_summaries(commerce_id)
            if summary.last_visit_at is not None and summary.last_visit_at < cutoff
        ]

    def top_customers(
        self,
        commerce_id: str,
        by: str = "visits",
        limit: int | None = None,
    ) -> list[tuple[CustomerInfo, CustomerSummary]]:
        """Top customers by visit count or total spend."""
        if by not in _RANKINGS:
            raise ValueError(f"Unknown ranking {by!r}; use 'visits' or 'amount'")
        key = _RANKINGS[by]

        ranked = sorted(self._members_with_summaries(commerce_id), key=key, reverse=True)
        return ranked[: limit or clubman_settings.TOP_CUSTOMERS_LIMIT]

    def commerce_analytics(self, commerce_id: str, now: datetime | None = None) -> CommerceAnalytics:
        """Active/inactive split, delivered rewards and return rate."""
        cutoff = (now or timezone.now()) - timedelta(days=clubman_settings.INACTIVE_DAYS)
        members = self._members_with_summaries(commerce_id)

        active = sum(
            1 for _, summary in members if summary.last_visit_at is not None and summary.last_visit_at >= cutoff
        )
        total = len(members)
        delivered = len(
            self.store.filter(
                TransactionInfo,
                lambda tx: bool(tx.redeemed_reward_id),
                commerce_id=commerce_id,
            )
        )
        return CommerceAnalytics(
            total_members=total,
            active_count=active,
            inactive_count=total - active,
            rewards_delivered=delivered,
            return_rate=(active / total * 100) if total else 0.0,
        )

    def active_benefits_count(self, commerce_id: str, now: datetime | None = None) -> int:
        """
        Benefits currently waiting to be used in a commerce.

        Counts unexpired coupons plus customers already eligible for the
        configured points reward and for the stars reward.
        """
        commerce = self.store.get_by_id(CommerceInfo, commerce_id)
        if commerce is None:
            return 0
        now = now or timezone.now()
        customers = self.store.filter(CustomerInfo, commerce_id=commerce_id)

        count = sum(
            1
            for c in customers
            if c.discount_available and (c.discount_expires_at is None or c.discount_expires_at > now)
        )

        if commerce.enable_points and commerce.points_reward_id:
            reward = self.store.get_by_id(RewardInfo, commerce.points_reward_id)
            if reward is not None:
                threshold = reward.points_threshold or 0
                count += sum(1 for c in customers if c.total_points >= threshold)

        if commerce.enable_stars and commerce.stars_reward_id:
            goal = commerce.stars_goal or 5
            count += sum(1 for c in customers if c.current_stars >= goal)

        return count
