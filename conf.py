"""
Clubman configuration.

Usage in settings.py:
    CLUBMAN = {
        "DEFAULT_REGION": "AR",
        "REMINDER_COOLDOWN_DAYS": 7,
        "RECORD_STORE_BACKEND": "clubman.adapters.memory.InMemoryRecordStore",
    }
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from django.conf import settings


@dataclass
class ClubmanSettings:
    """Clubman configuration settings."""

    # Collaborator backends (dotted paths, resolved with import_string)
    RECORD_STORE_BACKEND: str = "clubman.adapters.django_store.DjangoRecordStore"
    USAGE_LIMITER_BACKEND: str = "clubman.adapters.usage.StoreUsageLimiter"

    # Phone normalization default region
    DEFAULT_REGION: str = "AR"

    # Reminder candidates
    REMINDER_COOLDOWN_DAYS: int = 7
    COUPON_EXPIRING_HOURS: int = 72
    NEAR_REWARD_RATIO: Decimal | str = "0.9"
    INACTIVE_RECENT_DAYS: int = 15
    INACTIVE_DAYS: int = 30

    # Reminder stats (estimated share of contacted customers that came back)
    RECOVERY_RATE: Decimal | str = "0.2"

    # Activity
    RECENT_TRANSACTIONS_LIMIT: int = 10
    TOP_CUSTOMERS_LIMIT: int = 10

    # Program defaults
    DEFAULT_DISCOUNT_EXPIRATION_DAYS: int = 30
    DEFAULT_MONTHLY_SCAN_LIMIT: int = 100

    def __post_init__(self):
        self.NEAR_REWARD_RATIO = Decimal(str(self.NEAR_REWARD_RATIO))
        self.RECOVERY_RATE = Decimal(str(self.RECOVERY_RATE))


def get_clubman_settings() -> ClubmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "CLUBMAN", {})
    return ClubmanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_clubman_settings(), name)


clubman_settings = _LazySettings()
