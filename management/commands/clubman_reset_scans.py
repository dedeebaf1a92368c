"""Management command to reset monthly scan counters."""

from django.core.management.base import BaseCommand

from clubman.adapters import get_usage_limiter


class Command(BaseCommand):
    help = "Reset scans_current_month for commerces whose last reset was in a previous month"

    def handle(self, *args, **options):
        reset_count = get_usage_limiter().process_monthly_resets()
        self.stdout.write(
            self.style.SUCCESS(f"Reset scan counters for {reset_count} commerces.")
        )
