"""Clubman services.

- accrual: AccrualService, apply_purchase, calculate_points
- activity: ActivityService, summarize_transactions
- reminders: ReminderService, REMINDER_RULES, sort_candidates
- stats: ReminderStatsService
- enrollment: EnrollmentService
- commerce: delete_commerce_cascade
"""

from clubman.services import accrual
from clubman.services import activity
from clubman.services import commerce
from clubman.services import enrollment
from clubman.services import reminders
from clubman.services import stats

__all__ = ["accrual", "activity", "commerce", "enrollment", "reminders", "stats"]
