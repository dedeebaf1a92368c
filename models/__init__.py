"""Clubman models.

ORM tables behind clubman.adapters.django_store.DjangoRecordStore.
Engines never use these directly; they work on clubman.protocols records.
"""

from clubman.models.commerce import Commerce
from clubman.models.customer import Customer
from clubman.models.reward import Reward
from clubman.models.transaction import Transaction
from clubman.models.reminder_log import ReminderLog

__all__ = [
    "Commerce",
    "Customer",
    "Reward",
    "Transaction",
    # Outreach audit
    "ReminderLog",
]
