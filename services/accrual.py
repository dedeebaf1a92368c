"""Accrual service — apply a purchase to a customer's points, stars and coupon.

Each enabled mechanism is applied independently:

    points  floor(amount * points_value / 100) in PERCENTAGE mode,
            floor(points_value) per purchase in FIXED mode. A points
            redemption subtracts the reward threshold from the new balance.
    stars   +1 per purchase, or current_stars - threshold on a stars
            redemption (no star is earned on that purchase).
    coupon  every purchase renews the coupon for discount_expiration_days;
            applying the existing coupon is recorded on the transaction.

Floors use math.floor over Decimal arithmetic (exact product, rounding
toward negative infinity), per transaction, never on aggregates.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from decimal import Decimal

from django.utils import timezone

from clubman.conf import clubman_settings
from clubman.exceptions import ClubmanError
from clubman.gates import Gates, parse_amount
from clubman.protocols.records import (
    CommerceInfo,
    CustomerInfo,
    EntryMethod,
    PointsMode,
    RewardInfo,
    RewardType,
    TransactionInfo,
)
from clubman.signals import purchase_recorded

logger = logging.getLogger(__name__)

_BALANCE_FIELDS = (
    "total_points",
    "current_stars",
    "total_stars",
    "discount_available",
    "discount_expires_at",
    "last_discount_used_at",
)


@dataclass(frozen=True)
class Accrual:
    """Outcome of applying one purchase to a customer snapshot."""

    customer: CustomerInfo
    transaction: TransactionInfo
    warnings: tuple[str, ...] = ()


@dataclass
class PurchaseResult:
    """Result of registering a purchase."""

    ok: bool
    customer: CustomerInfo | None = None
    transaction: TransactionInfo | None = None
    error_code: str | None = None
    message: str | None = None
    warnings: list[str] = field(default_factory=list)


def calculate_points(commerce: CommerceInfo, amount: Decimal) -> int:
    """Points earned by one purchase (0 when points are disabled)."""
    if not commerce.enable_points:
        return 0
    value = Decimal(commerce.points_value)
    if commerce.points_mode == PointsMode.PERCENTAGE:
        return math.floor(Decimal(amount) * value / 100)
    return math.floor(value)


def _clamped(balance: int, customer: CustomerInfo, what: str, warnings: list[str]) -> int:
    if balance >= 0:
        return balance
    logger.warning(
        "DATA_INTEGRITY: %s of customer %s (commerce %s) would be %d after redemption; clamped to 0",
        what,
        customer.id,
        customer.commerce_id,
        balance,
    )
    warnings.append("DATA_INTEGRITY")
    return 0


def apply_purchase(
    customer: CustomerInfo,
    commerce: CommerceInfo,
    amount,
    reward: RewardInfo | None = None,
    *,
    apply_coupon: bool = False,
    staff_user_id: str = "",
    method: str = EntryMethod.SCAN,
    now: datetime | None = None,
    enforce_threshold: bool = True,
) -> Accrual:
    """
    Apply one purchase to a customer snapshot. Pure: nothing is stored.

    Args:
        customer: Customer snapshot
        commerce: Commerce with its program configuration
        amount: Purchase amount (int, Decimal, float or numeric string)
        reward: Reward redeemed on this purchase, if any
        apply_coupon: Use the customer's coupon on this purchase
        staff_user_id: Who registered the purchase
        method: SCAN or MANUAL
        now: Purchase time (defaults to timezone.now())
        enforce_threshold: Reject redemptions the snapshot cannot cover.
            When False, a balance that would go negative is clamped to 0
            and reported as a DATA_INTEGRITY warning.

    Returns:
        Accrual with the updated customer and the new transaction

    Raises:
        GateError: INVALID_AMOUNT, INVALID_CONFIGURATION, REWARD_MISMATCH,
            COUPON_UNAVAILABLE
    """
    now = now or timezone.now()
    value = parse_amount(amount)
    Gates.program_configuration(commerce)
    if reward is not None:
        Gates.reward_redemption(customer, commerce, reward, enforce_threshold=enforce_threshold)
    if apply_coupon:
        Gates.coupon_application(customer, commerce, now)

    changes = {}
    warnings: list[str] = []

    points = calculate_points(commerce, value)
    if commerce.enable_points:
        balance = customer.total_points + points
        if reward is not None and reward.reward_type == RewardType.POINTS:
            balance -= reward.threshold
        changes["total_points"] = _clamped(balance, customer, "points", warnings)

    stars_gained = None
    if commerce.enable_stars:
        if reward is not None and reward.reward_type == RewardType.STARS:
            remaining = customer.current_stars - reward.threshold
            changes["current_stars"] = _clamped(remaining, customer, "stars", warnings)
            stars_gained = 0
        else:
            changes["current_stars"] = customer.current_stars + 1
            changes["total_stars"] = customer.total_stars + 1
            stars_gained = 1

    coupon_generated = None
    discount_applied = None
    if commerce.enable_coupon:
        days = commerce.discount_expiration_days or clubman_settings.DEFAULT_DISCOUNT_EXPIRATION_DAYS
        changes["discount_available"] = True
        changes["discount_expires_at"] = now + timedelta(days=days)
        coupon_generated = True
        if apply_coupon:
            changes["last_discount_used_at"] = now
            discount_applied = commerce.discount_percent

    transaction = TransactionInfo(
        commerce_id=commerce.id,
        customer_id=customer.id,
        amount=value,
        points=points,
        created_at=now,
        staff_user_id=staff_user_id,
        method=method,
        stars_gained=stars_gained,
        coupon_generated=coupon_generated,
        discount_applied=discount_applied,
        redeemed_reward_id=reward.id if reward is not None else None,
        points_mode_used=commerce.points_mode,
        points_value_used=commerce.points_value,
        config_version_used=commerce.config_version,
    )
    return Accrual(replace(customer, **changes), transaction, tuple(warnings))


class AccrualService:
    """
    Service for registering purchases.

    The customer row is re-read for update inside store.atomic() so the
    read-balance/write-balance step cannot interleave with another purchase.
    """

    def __init__(self, store=None, limiter=None):
        from clubman.adapters import get_record_store, get_usage_limiter

        self.store = store if store is not None else get_record_store()
        self.limiter = limiter if limiter is not None else get_usage_limiter(self.store)

    def register_purchase(
        self,
        commerce_id: str,
        customer_id: str,
        amount,
        reward_id: str | None = None,
        apply_coupon: bool = False,
        staff_user_id: str = "",
        method: str = EntryMethod.SCAN,
        now: datetime | None = None,
    ) -> PurchaseResult:
        """
        Register a purchase and persist its effects.

        Expected domain failures (bad amount, unknown ids, reward or coupon
        not redeemable) come back as ``PurchaseResult(ok=False)`` with
        nothing written. A broken program configuration raises.

        Args:
            commerce_id: Commerce id
            customer_id: Customer id (must be a member of the commerce)
            amount: Purchase amount
            reward_id: Reward redeemed on this purchase
            apply_coupon: Use the customer's coupon
            staff_user_id: Who registered the purchase
            method: SCAN or MANUAL
            now: Purchase time (defaults to timezone.now())

        Returns:
            PurchaseResult

        Raises:
            GateError: INVALID_CONFIGURATION
        """
        now = now or timezone.now()

        commerce = self.store.get_by_id(CommerceInfo, commerce_id)
        if commerce is None:
            return self._rejected(ClubmanError("UNKNOWN_COMMERCE", commerce_id=commerce_id))
        Gates.program_configuration(commerce)

        try:
            parse_amount(amount)
            snapshot = self._get_member(commerce, customer_id)
            reward = self._get_reward(commerce, reward_id) if reward_id else None
            if reward is not None:
                Gates.reward_redemption(snapshot, commerce, reward)
            if apply_coupon:
                Gates.coupon_application(snapshot, commerce, now)

            with self.store.atomic():
                current = self.store.get_by_id(CustomerInfo, customer_id, for_update=True)
                if current is None:
                    raise ClubmanError("UNKNOWN_CUSTOMER", customer_id=customer_id)
                accrual = apply_purchase(
                    current,
                    commerce,
                    amount,
                    reward,
                    apply_coupon=apply_coupon,
                    staff_user_id=staff_user_id,
                    method=method,
                    now=now,
                    enforce_threshold=False,
                )
                customer = self.store.update(
                    CustomerInfo,
                    current.id,
                    **{name: getattr(accrual.customer, name) for name in _BALANCE_FIELDS},
                )
                transaction = self.store.insert(accrual.transaction)
        except ClubmanError as e:
            if e.code == "INVALID_CONFIGURATION":
                raise
            return self._rejected(e)

        self.limiter.increment_scan_count(commerce.id, now=now)
        purchase_recorded.send(
            sender=self.__class__,
            commerce_id=commerce.id,
            customer=customer,
            transaction=transaction,
        )
        logger.debug(
            "Purchase %s registered for customer %s: +%d pts",
            transaction.id,
            customer.id,
            transaction.points,
        )
        return PurchaseResult(
            ok=True,
            customer=customer,
            transaction=transaction,
            warnings=list(accrual.warnings),
        )

    def _get_member(self, commerce: CommerceInfo, customer_id: str) -> CustomerInfo:
        customer = self.store.get_by_id(CustomerInfo, customer_id)
        if customer is None or customer.commerce_id != commerce.id:
            raise ClubmanError("UNKNOWN_CUSTOMER", customer_id=customer_id)
        return customer

    def _get_reward(self, commerce: CommerceInfo, reward_id: str) -> RewardInfo:
        reward = self.store.get_by_id(RewardInfo, reward_id)
        if reward is None:
            raise ClubmanError("REWARD_MISMATCH", message="Reward not found", reward_id=reward_id)
        return reward

    def _rejected(self, error: ClubmanError) -> PurchaseResult:
        logger.info("Purchase rejected: %s %s", error.code, error.data)
        return PurchaseResult(ok=False, error_code=error.code, message=error.message)
