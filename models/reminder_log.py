"""WhatsApp reminder log (outreach audit)."""

import uuid as uuid_lib

from django.db import models
from django.utils.translation import gettext_lazy as _

from clubman.protocols.records import ReminderStatus, ReminderType


class ReminderLog(models.Model):
    """
    One outreach attempt to a customer.

    Created as "opened" when staff opens the message, then confirmed as
    "sent" or "skipped". Used for cool-down suppression and monthly stats.
    """

    id = models.UUIDField(primary_key=True, default=uuid_lib.uuid4, editable=False)
    commerce = models.ForeignKey(
        "clubman.Commerce",
        on_delete=models.CASCADE,
        related_name="reminder_logs",
        verbose_name=_("comercio"),
    )
    customer = models.ForeignKey(
        "clubman.Customer",
        on_delete=models.CASCADE,
        related_name="reminder_logs",
        verbose_name=_("cliente"),
    )
    reminder_type = models.CharField(
        _("tipo"),
        max_length=20,
        choices=ReminderType.choices,
    )
    message_text = models.TextField(_("mensaje"), blank=True)
    status = models.CharField(
        _("estado"),
        max_length=10,
        choices=ReminderStatus.choices,
        default=ReminderStatus.OPENED,
        db_index=True,
    )
    staff_user_id = models.CharField(_("usuario"), max_length=100, blank=True)
    created_at = models.DateTimeField(_("creado en"), db_index=True)

    class Meta:
        db_table = "clubman_whatsapp_reminder_log"
        verbose_name = _("recordatorio de WhatsApp")
        verbose_name_plural = _("recordatorios de WhatsApp")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["commerce", "customer", "-created_at"], name="clubman_wha_commerc_4c2f8b_idx"),
        ]

    def __str__(self):
        return f"[{self.status}] {self.reminder_type}"
