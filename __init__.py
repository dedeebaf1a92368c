"""
Django Clubman - Loyalty club management.

Usage:
    from clubman import AccrualService, ReminderService

    result = AccrualService().register_purchase(commerce_id, customer_id, "1500")
    if not result.ok:
        show_error(result.error_code)

    candidates = ReminderService().get_candidates(commerce_id)
"""


def __getattr__(name):
    if name == "AccrualService":
        from clubman.services.accrual import AccrualService

        return AccrualService
    if name == "ActivityService":
        from clubman.services.activity import ActivityService

        return ActivityService
    if name == "ReminderService":
        from clubman.services.reminders import ReminderService

        return ReminderService
    if name == "ReminderStatsService":
        from clubman.services.stats import ReminderStatsService

        return ReminderStatsService
    if name == "EnrollmentService":
        from clubman.services.enrollment import EnrollmentService

        return EnrollmentService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AccrualService",
    "ActivityService",
    "ReminderService",
    "ReminderStatsService",
    "EnrollmentService",
]
__version__ = "0.1.0"
