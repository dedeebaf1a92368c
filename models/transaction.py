"""Transaction model (purchase events)."""

import uuid as uuid_lib

from django.db import models
from django.utils.translation import gettext_lazy as _

from clubman.protocols.records import EntryMethod, PointsMode


class Transaction(models.Model):
    """
    Immutable record of one purchase.

    Source of truth for activity history. Append-only.
    The *_used fields keep the program rules in effect at purchase time.
    """

    id = models.UUIDField(primary_key=True, default=uuid_lib.uuid4, editable=False)
    commerce = models.ForeignKey(
        "clubman.Commerce",
        on_delete=models.CASCADE,
        related_name="transactions",
        verbose_name=_("comercio"),
    )
    customer = models.ForeignKey(
        "clubman.Customer",
        on_delete=models.CASCADE,
        related_name="transactions",
        verbose_name=_("cliente"),
    )
    staff_user_id = models.CharField(_("usuario"), max_length=100, blank=True)

    amount = models.DecimalField(_("monto"), max_digits=12, decimal_places=2)
    points = models.IntegerField(_("puntos otorgados"), default=0)
    stars_gained = models.PositiveIntegerField(_("estrellas"), null=True, blank=True)
    coupon_generated = models.BooleanField(_("cupón generado"), null=True, blank=True)
    discount_applied = models.DecimalField(
        _("descuento aplicado (%)"),
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
    )
    redeemed_reward = models.ForeignKey(
        "clubman.Reward",
        on_delete=models.SET_NULL,
        related_name="redemptions",
        null=True,
        blank=True,
        verbose_name=_("premio canjeado"),
    )
    method = models.CharField(
        _("método"),
        max_length=10,
        choices=EntryMethod.choices,
        default=EntryMethod.SCAN,
    )

    # Audit
    points_mode_used = models.CharField(
        _("modo de puntos usado"),
        max_length=20,
        choices=PointsMode.choices,
        blank=True,
        null=True,
    )
    points_value_used = models.DecimalField(
        _("valor de puntos usado"),
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
    )
    config_version_used = models.PositiveIntegerField(_("versión usada"), null=True, blank=True)

    created_at = models.DateTimeField(_("creado en"), db_index=True)

    class Meta:
        verbose_name = _("transacción")
        verbose_name_plural = _("transacciones")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer", "-created_at"], name="clubman_tra_custome_2b8c4d_idx"),
            models.Index(fields=["commerce", "-created_at"], name="clubman_tra_commerc_9d1e7a_idx"),
        ]

    def __str__(self):
        return f"{self.amount} → +{self.points}pts"
