"""UsageLimiter adapter keeping scan counters on the commerce record."""

import logging

from django.utils import timezone

from clubman.conf import clubman_settings
from clubman.protocols.records import CommerceInfo, PlanType
from clubman.protocols.usage import UsageInfo

logger = logging.getLogger(__name__)


class StoreUsageLimiter:
    """
    Monthly scan limits per plan.

    PRO plans are unlimited (limit 0). FREE plans are over the limit once
    the month's count reaches monthly_scan_limit.
    """

    def __init__(self, store=None):
        if store is None:
            from clubman.adapters import get_record_store

            store = get_record_store()
        self.store = store

    def increment_scan_count(self, commerce_id: str, now=None) -> None:
        with self.store.atomic():
            commerce = self.store.get_by_id(CommerceInfo, commerce_id, for_update=True)
            if commerce is None:
                return
            changes = {"scans_current_month": (commerce.scans_current_month or 0) + 1}
            if commerce.scans_reset_date is None:
                # First scan opens the counting period.
                changes["scans_reset_date"] = now or timezone.now()
            self.store.update(CommerceInfo, commerce_id, **changes)

    def get_usage(self, commerce_id: str) -> UsageInfo:
        commerce = self.store.get_by_id(CommerceInfo, commerce_id)
        if commerce is None:
            return UsageInfo(count=0, limit=0, is_over_limit=False, percentage=0.0, plan_type=PlanType.FREE)

        count = commerce.scans_current_month or 0
        if commerce.plan_type == PlanType.PRO:
            return UsageInfo(count=count, limit=0, is_over_limit=False, percentage=0.0, plan_type=PlanType.PRO)

        limit = commerce.monthly_scan_limit or clubman_settings.DEFAULT_MONTHLY_SCAN_LIMIT
        return UsageInfo(
            count=count,
            limit=limit,
            is_over_limit=count >= limit,
            percentage=min(100.0, count / limit * 100),
            plan_type=commerce.plan_type,
        )

    def process_monthly_resets(self, now=None) -> int:
        now = timezone.localtime(now or timezone.now())
        reset = 0
        for commerce in self.store.get_all(CommerceInfo):
            last = commerce.scans_reset_date or commerce.created_at
            if last is not None:
                last = timezone.localtime(last)
                if (last.year, last.month) == (now.year, now.month):
                    continue
            self.store.update(CommerceInfo, commerce.id, scans_current_month=0, scans_reset_date=now)
            reset += 1
        if reset:
            logger.info("Monthly scan counters reset for %d commerces", reset)
        return reset
