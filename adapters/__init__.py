"""Collaborator adapters and their settings-driven lookup."""

from django.utils.module_loading import import_string

from clubman.conf import clubman_settings


def get_record_store():
    """Instantiate the configured RecordStore."""
    return import_string(clubman_settings.RECORD_STORE_BACKEND)()


def get_usage_limiter(store=None):
    """Instantiate the configured UsageLimiter over ``store``."""
    backend_class = import_string(clubman_settings.USAGE_LIMITER_BACKEND)
    return backend_class(store=store)
