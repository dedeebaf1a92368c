"""
Clubman signals — public event API.

Emitted signals:
- purchase_recorded: Emitted by AccrualService.register_purchase()
- reminder_logged: Emitted by ReminderService.log_opened() and confirm()
"""

from django.dispatch import Signal

purchase_recorded = Signal()  # sender=AccrualService, commerce_id, customer, transaction
reminder_logged = Signal()  # sender=ReminderService, log
