"""Tests for ReminderStatsService."""

from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from clubman.protocols.records import ReminderStatus
from clubman.services.stats import ReminderStatsService


@pytest.fixture
def service(store):
    return ReminderStatsService(store=store)


class TestReminderStats:
    def test_counts_current_month_only(self, service, commerce, customer, add_log, now):
        for hours in range(1, 11):
            add_log(customer, ReminderStatus.SENT, now - timedelta(hours=hours))
        add_log(customer, ReminderStatus.SENT, now - timedelta(days=30))
        add_log(customer, ReminderStatus.SENT, now - timedelta(days=35))

        stats = service.get_stats(commerce.id, now=now)

        assert stats.sent_this_month == 10
        assert stats.recovered_this_month == 2

    def test_only_sent_entries_count(self, service, commerce, customer, add_log, now):
        add_log(customer, ReminderStatus.SENT, now)
        add_log(customer, ReminderStatus.OPENED, now)
        add_log(customer, ReminderStatus.SKIPPED, now)

        assert service.get_stats(commerce.id, now=now).sent_this_month == 1

    def test_recovered_rounds_down(self, service, commerce, customer, add_log, now):
        for _ in range(4):
            add_log(customer, ReminderStatus.SENT, now)

        assert service.get_stats(commerce.id, now=now).recovered_this_month == 0

    def test_month_uses_local_time(self, service, commerce, customer, add_log):
        # 2026-06-01 01:00 UTC is still May 31 in Buenos Aires (UTC-3)
        local_may = datetime(2026, 6, 1, 1, 0, tzinfo=dt_timezone.utc)
        add_log(customer, ReminderStatus.SENT, local_may)

        may = service.get_stats(commerce.id, now=datetime(2026, 5, 31, 12, 0, tzinfo=dt_timezone.utc))
        june = service.get_stats(commerce.id, now=datetime(2026, 6, 2, 12, 0, tzinfo=dt_timezone.utc))

        assert may.sent_this_month == 1
        assert june.sent_this_month == 0

    def test_same_month_other_year(self, service, commerce, customer, add_log, now):
        add_log(customer, ReminderStatus.SENT, now - timedelta(days=365))

        assert service.get_stats(commerce.id, now=now).sent_this_month == 0

    def test_other_commerce_ignored(self, service, other_commerce, commerce, customer, add_log, now):
        add_log(customer, ReminderStatus.SENT, now)

        stats = service.get_stats(other_commerce.id, now=now)

        assert (stats.sent_this_month, stats.recovered_this_month) == (0, 0)

    @pytest.mark.parametrize("rate,expected", [("0.5", 5), ("0", 0)])
    def test_recovery_rate_setting(self, service, commerce, customer, add_log, now, settings, rate, expected):
        settings.CLUBMAN = {"RECOVERY_RATE": rate}
        for _ in range(10):
            add_log(customer, ReminderStatus.SENT, now)

        assert service.get_stats(commerce.id, now=now).recovered_this_month == expected
