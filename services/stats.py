"""Reminder stats — outreach sent this month and an estimate of returns."""

import math
from dataclasses import dataclass
from datetime import datetime

from django.utils import timezone

from clubman.conf import clubman_settings
from clubman.protocols.records import ReminderLogInfo, ReminderStatus


@dataclass(frozen=True)
class ReminderStats:
    sent_this_month: int
    recovered_this_month: int  # estimate: floor(sent * RECOVERY_RATE), not measured


class ReminderStatsService:
    """Monthly outreach numbers for a commerce."""

    def __init__(self, store=None):
        if store is None:
            from clubman.adapters import get_record_store

            store = get_record_store()
        self.store = store

    def get_stats(self, commerce_id: str, now: datetime | None = None) -> ReminderStats:
        """
        Count ``sent`` entries in the current calendar month (local time).

        recovered_this_month is a fixed share of the sent count. It does not
        look at later transactions.
        """
        now = timezone.localtime(now or timezone.now())
        month = (now.year, now.month)

        sent = 0
        for log in self.store.filter(ReminderLogInfo, commerce_id=commerce_id, status=ReminderStatus.SENT):
            created = timezone.localtime(log.created_at)
            if (created.year, created.month) == month:
                sent += 1

        return ReminderStats(
            sent_this_month=sent,
            recovered_this_month=math.floor(sent * clubman_settings.RECOVERY_RATE),
        )
