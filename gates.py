"""
Clubman Gates - Validation rules.

G1: PurchaseAmount - Amount is a finite, non-negative number
G2: ProgramConfiguration - Commerce rules are usable by the accrual engine
G3: RewardRedemption - Reward belongs to the program and its threshold is met
G4: CouponApplication - An unexpired coupon exists to apply
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation

from clubman.exceptions import ClubmanError
from clubman.protocols.records import (
    CommerceInfo,
    CustomerInfo,
    PointsMode,
    RewardInfo,
    RewardType,
)


class GateError(ClubmanError):
    """Gate validation error."""

    def __init__(self, gate_name: str, code: str, message: str | None = None, details: dict | None = None):
        self.gate_name = gate_name
        self.details = details or {}
        super().__init__(code, message, **self.details)
        self.args = (f"[{gate_name}] {self.message}",)


@dataclass
class GateResult:
    """Result of a gate check."""

    passed: bool
    gate_name: str
    message: str = ""


def parse_amount(amount) -> Decimal:
    """
    Parse a purchase amount.

    Accepts int, Decimal, float or a numeric string. Never coerces bad input
    to zero.

    Raises:
        GateError: INVALID_AMOUNT
    """
    gate = "G1_PurchaseAmount"
    if amount is None or isinstance(amount, bool):
        raise GateError(gate, "INVALID_AMOUNT", "Amount is required.", {"amount": amount})
    try:
        if isinstance(amount, (str, float)):
            value = Decimal(str(amount).strip())
        else:
            value = Decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        raise GateError(gate, "INVALID_AMOUNT", "Amount is not a number.", {"amount": str(amount)})

    if not value.is_finite():
        raise GateError(gate, "INVALID_AMOUNT", "Amount is not a finite number.", {"amount": str(amount)})
    if value < 0:
        raise GateError(gate, "INVALID_AMOUNT", "Amount cannot be negative.", {"amount": str(amount)})
    return value


# =============================================================================
# Gates
# =============================================================================


class Gates:
    """Clubman validation gates."""

    # =========================================================================
    # G1: Purchase Amount
    # =========================================================================

    @classmethod
    def purchase_amount(cls, amount) -> GateResult:
        """
        G1: Amount must be a finite, non-negative number.

        Raises:
            GateError: INVALID_AMOUNT
        """
        parse_amount(amount)
        return GateResult(True, "G1_PurchaseAmount")

    @classmethod
    def check_purchase_amount(cls, amount) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.purchase_amount(amount)
            return True
        except GateError:
            return False

    # =========================================================================
    # G2: Program Configuration
    # =========================================================================

    @classmethod
    def program_configuration(cls, commerce: CommerceInfo) -> GateResult:
        """
        G2: Commerce rules must be usable.

        A broken configuration is a programming/data fault, not a domain
        condition: callers let this error propagate.

        Raises:
            GateError: INVALID_CONFIGURATION
        """
        gate = "G2_ProgramConfiguration"
        problems = []

        if commerce.enable_points:
            if commerce.points_mode not in PointsMode.values:
                problems.append(f"unknown points mode {commerce.points_mode!r}")
            if commerce.points_value is None or commerce.points_value < 0:
                problems.append("points value must be >= 0")
        if commerce.enable_stars and (commerce.stars_goal or 0) < 1:
            problems.append("stars goal must be >= 1")
        if commerce.enable_coupon:
            if (commerce.discount_expiration_days or 0) < 0:
                problems.append("discount expiration days must be >= 0")
            if not (0 <= (commerce.discount_percent or 0) <= 100):
                problems.append("discount percent must be between 0 and 100")

        if problems:
            raise GateError(
                gate,
                "INVALID_CONFIGURATION",
                "; ".join(problems),
                {"commerce_id": commerce.id},
            )
        return GateResult(True, gate)

    @classmethod
    def check_program_configuration(cls, commerce: CommerceInfo) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.program_configuration(commerce)
            return True
        except GateError:
            return False

    # =========================================================================
    # G3: Reward Redemption
    # =========================================================================

    @classmethod
    def reward_redemption(
        cls,
        customer: CustomerInfo,
        commerce: CommerceInfo,
        reward: RewardInfo,
        enforce_threshold: bool = True,
    ) -> GateResult:
        """
        G3: Reward must be redeemable by this customer.

        The reward must belong to the commerce, be active and of an enabled
        type. With enforce_threshold, the customer's balance must already
        cover the threshold.

        Raises:
            GateError: REWARD_MISMATCH
        """
        gate = "G3_RewardRedemption"
        details = {"reward_id": reward.id, "customer_id": customer.id}

        if reward.commerce_id != commerce.id:
            raise GateError(gate, "REWARD_MISMATCH", "Reward belongs to another commerce.", details)
        if not reward.active:
            raise GateError(gate, "REWARD_MISMATCH", "Reward is not active.", details)

        if reward.reward_type == RewardType.POINTS:
            enabled, balance = commerce.enable_points, customer.total_points
        elif reward.reward_type == RewardType.STARS:
            enabled, balance = commerce.enable_stars, customer.current_stars
        else:
            raise GateError(gate, "REWARD_MISMATCH", f"Unknown reward type {reward.reward_type!r}.", details)

        if not enabled:
            raise GateError(
                gate,
                "REWARD_MISMATCH",
                f"{reward.reward_type} rewards are not enabled for this commerce.",
                details,
            )
        if enforce_threshold and balance < reward.threshold:
            raise GateError(
                gate,
                "REWARD_MISMATCH",
                "Reward threshold not reached.",
                {**details, "balance": balance, "threshold": reward.threshold},
            )
        return GateResult(True, gate)

    @classmethod
    def check_reward_redemption(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.reward_redemption(*args, **kwargs)
            return True
        except GateError:
            return False

    # =========================================================================
    # G4: Coupon Application
    # =========================================================================

    @classmethod
    def coupon_application(
        cls,
        customer: CustomerInfo,
        commerce: CommerceInfo,
        now: datetime,
    ) -> GateResult:
        """
        G4: Applying a coupon needs coupons enabled and an unexpired coupon.

        Raises:
            GateError: COUPON_UNAVAILABLE
        """
        gate = "G4_CouponApplication"
        details = {"customer_id": customer.id}

        if not commerce.enable_coupon:
            raise GateError(gate, "COUPON_UNAVAILABLE", "Coupons are not enabled.", details)
        if not customer.discount_available:
            raise GateError(gate, "COUPON_UNAVAILABLE", "Customer has no coupon.", details)
        if customer.discount_expires_at is not None and customer.discount_expires_at <= now:
            raise GateError(gate, "COUPON_UNAVAILABLE", "Coupon expired.", details)
        return GateResult(True, gate)

    @classmethod
    def check_coupon_application(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.coupon_application(*args, **kwargs)
            return True
        except GateError:
            return False
