"""Plan usage protocol (monthly scan limits)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class UsageInfo:
    """Scan usage of a commerce for the current month."""

    count: int
    limit: int  # 0 means unlimited
    is_over_limit: bool
    percentage: float
    plan_type: str


@runtime_checkable
class UsageLimiter(Protocol):
    """
    Protocol for plan/usage limits.

    The accrual service only reports scans; blocking new scans when
    is_over_limit is the caller's job.
    """

    def increment_scan_count(self, commerce_id: str, now: datetime | None = None) -> None:
        """Count one scan. A commerce with no reset date starts its period at now."""
        ...

    def get_usage(self, commerce_id: str) -> UsageInfo:
        ...

    def process_monthly_resets(self, now: datetime | None = None) -> int:
        """Reset counters whose month has rolled over. Returns how many were reset."""
        ...
