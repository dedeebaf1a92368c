"""Commerce model (tenant + program configuration)."""

import uuid as uuid_lib

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from clubman.protocols.records import PlanType, PointsMode


class Commerce(models.Model):
    """
    Merchant tenant operating one loyalty program.

    Program mechanisms (points, stars, coupon) are enabled independently.
    Which one is "primary" is a presentation rule, not enforced here.
    """

    id = models.UUIDField(primary_key=True, default=uuid_lib.uuid4, editable=False)
    name = models.CharField(_("nombre"), max_length=200)

    # Program switches
    enable_points = models.BooleanField(_("puntos habilitados"), default=False)
    enable_stars = models.BooleanField(_("estrellas habilitadas"), default=False)
    enable_coupon = models.BooleanField(_("cupón habilitado"), default=False)

    # Points
    points_mode = models.CharField(
        _("modo de puntos"),
        max_length=20,
        choices=PointsMode.choices,
        default=PointsMode.PERCENTAGE,
    )
    points_value = models.DecimalField(
        _("valor de puntos"),
        max_digits=10,
        decimal_places=2,
        default=0,
        help_text=_("Porcentaje del monto o puntos fijos por compra"),
    )
    points_reward = models.ForeignKey(
        "clubman.Reward",
        on_delete=models.SET_NULL,
        related_name="+",
        null=True,
        blank=True,
        verbose_name=_("premio de puntos"),
    )

    # Stars
    stars_goal = models.PositiveIntegerField(_("meta de estrellas"), default=5)
    stars_reward = models.ForeignKey(
        "clubman.Reward",
        on_delete=models.SET_NULL,
        related_name="+",
        null=True,
        blank=True,
        verbose_name=_("premio de estrellas"),
    )

    # Coupon
    discount_percent = models.DecimalField(
        _("descuento (%)"),
        max_digits=5,
        decimal_places=2,
        default=0,
    )
    discount_expiration_days = models.PositiveIntegerField(
        _("vigencia del cupón (días)"),
        default=30,
    )

    config_version = models.PositiveIntegerField(_("versión de configuración"), default=1)

    # Plan
    plan_type = models.CharField(
        _("plan"),
        max_length=10,
        choices=PlanType.choices,
        default=PlanType.FREE,
    )
    customer_limit = models.PositiveIntegerField(
        _("límite de clientes"),
        default=100,
        help_text=_("0 = sin límite"),
    )
    monthly_scan_limit = models.PositiveIntegerField(_("límite mensual de escaneos"), default=100)
    scans_current_month = models.PositiveIntegerField(_("escaneos del mes"), default=0)
    scans_reset_date = models.DateTimeField(
        _("último reinicio de escaneos"), default=timezone.now, null=True, blank=True
    )

    created_at = models.DateTimeField(_("creado en"), auto_now_add=True)

    class Meta:
        verbose_name = _("comercio")
        verbose_name_plural = _("comercios")
        ordering = ["name"]

    def __str__(self):
        return self.name
