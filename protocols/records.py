"""Typed records for the loyalty store tables.

One frozen dataclass per table. Engines only ever see these records; the
store adapters convert to and from their own row format.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


def new_id() -> str:
    return str(uuid.uuid4())


class PointsMode(models.TextChoices):
    PERCENTAGE = "PERCENTAGE", _("Porcentaje del monto")
    FIXED = "FIXED", _("Fijo por compra")


class PlanType(models.TextChoices):
    FREE = "FREE", _("Gratis")
    PRO = "PRO", _("Pro")


class RewardType(models.TextChoices):
    POINTS = "POINTS", _("Puntos")
    STARS = "STARS", _("Estrellas")


class EntryMethod(models.TextChoices):
    SCAN = "SCAN", _("Escaneo QR")
    MANUAL = "MANUAL", _("Manual")


class ReminderType(models.TextChoices):
    INACTIVE = "inactive", _("Inactivo")
    NEAR_REWARD = "near_reward", _("Cerca del premio")
    COUPON_EXPIRING = "coupon_expiring", _("Cupón por vencer")


class ReminderStatus(models.TextChoices):
    OPENED = "opened", _("Abierto")
    SENT = "sent", _("Enviado")
    SKIPPED = "skipped", _("Omitido")


class Priority(models.TextChoices):
    HIGH = "HIGH", _("Alta")
    MEDIUM = "MEDIUM", _("Media")
    LOW = "LOW", _("Baja")


@dataclass(frozen=True)
class CommerceInfo:
    """A commerce and its program configuration."""

    name: str
    id: str = field(default_factory=new_id)
    enable_points: bool = False
    enable_stars: bool = False
    enable_coupon: bool = False
    points_mode: str = PointsMode.PERCENTAGE
    points_value: Decimal = Decimal("0")
    points_reward_id: str | None = None
    stars_reward_id: str | None = None
    stars_goal: int = 5
    discount_percent: Decimal = Decimal("0")
    discount_expiration_days: int = 0
    config_version: int = 1
    plan_type: str = PlanType.FREE
    customer_limit: int = 100
    monthly_scan_limit: int = 100
    scans_current_month: int = 0
    scans_reset_date: datetime | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class CustomerInfo:
    """A customer's membership in one commerce's program."""

    commerce_id: str
    name: str
    id: str = field(default_factory=new_id)
    phone: str = ""
    email: str = ""
    qr_token: str = ""
    total_points: int = 0
    current_stars: int = 0
    total_stars: int = 0
    discount_available: bool = False
    discount_expires_at: datetime | None = None
    last_discount_used_at: datetime | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class TransactionInfo:
    """One purchase event. Append-only."""

    commerce_id: str
    customer_id: str
    amount: Decimal
    points: int
    created_at: datetime
    id: str = field(default_factory=new_id)
    staff_user_id: str = ""
    method: str = EntryMethod.SCAN
    stars_gained: int | None = None
    coupon_generated: bool | None = None
    discount_applied: Decimal | None = None
    redeemed_reward_id: str | None = None
    points_mode_used: str | None = None
    points_value_used: Decimal | None = None
    config_version_used: int | None = None


@dataclass(frozen=True)
class RewardInfo:
    """A points or stars threshold unlocking a benefit."""

    commerce_id: str
    name: str
    reward_type: str
    id: str = field(default_factory=new_id)
    description: str = ""
    points_threshold: int | None = None
    stars_threshold: int | None = None
    active: bool = True

    @property
    def threshold(self) -> int:
        if self.reward_type == RewardType.POINTS:
            return self.points_threshold or 0
        return self.stars_threshold or 0


@dataclass(frozen=True)
class ReminderLogInfo:
    """Outreach audit entry (WhatsApp reminder)."""

    commerce_id: str
    customer_id: str
    reminder_type: str
    status: str
    created_at: datetime
    id: str = field(default_factory=new_id)
    message_text: str = ""
    staff_user_id: str = ""


Record = CommerceInfo | CustomerInfo | TransactionInfo | RewardInfo | ReminderLogInfo

SCHEMA: dict[type, str] = {
    CommerceInfo: "commerces",
    CustomerInfo: "customers",
    TransactionInfo: "transactions",
    RewardInfo: "rewards",
    ReminderLogInfo: "whatsapp_reminders_log",
}


def table_for(record_type: type) -> str:
    """Table name for a record type."""
    from clubman.exceptions import ClubmanError

    try:
        return SCHEMA[record_type]
    except KeyError:
        raise ClubmanError("UNKNOWN_TABLE", record_type=getattr(record_type, "__name__", str(record_type)))
