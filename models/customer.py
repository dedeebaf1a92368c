"""Customer model (membership in one commerce's program)."""

import uuid as uuid_lib

from django.db import models
from django.utils.translation import gettext_lazy as _


class Customer(models.Model):
    """
    A customer's enrollment in one commerce.

    Balances are mutated only by the accrual service. Deleted only when the
    commerce is deleted (cascade).
    """

    id = models.UUIDField(primary_key=True, default=uuid_lib.uuid4, editable=False)
    commerce = models.ForeignKey(
        "clubman.Commerce",
        on_delete=models.CASCADE,
        related_name="customers",
        verbose_name=_("comercio"),
    )

    name = models.CharField(_("nombre"), max_length=200)
    phone = models.CharField(_("teléfono"), max_length=20, blank=True, db_index=True)
    email = models.EmailField(_("email"), blank=True)
    qr_token = models.CharField(_("token QR"), max_length=40, unique=True)

    # Points
    total_points = models.IntegerField(_("puntos"), default=0)

    # Stars
    current_stars = models.PositiveIntegerField(_("estrellas actuales"), default=0)
    total_stars = models.PositiveIntegerField(
        _("estrellas acumuladas"),
        default=0,
        help_text=_("Total histórico (nunca decrece)"),
    )

    # Coupon
    discount_available = models.BooleanField(_("cupón disponible"), default=False)
    discount_expires_at = models.DateTimeField(_("cupón vence"), null=True, blank=True)
    last_discount_used_at = models.DateTimeField(_("último cupón usado"), null=True, blank=True)

    created_at = models.DateTimeField(_("creado en"), auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _("cliente")
        verbose_name_plural = _("clientes")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["commerce", "phone"], name="clubman_cus_commerc_6f3a1e_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.qr_token})"
