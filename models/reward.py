"""Reward model."""

import uuid as uuid_lib

from django.db import models
from django.utils.translation import gettext_lazy as _

from clubman.protocols.records import RewardType


class Reward(models.Model):
    """Points or stars threshold that unlocks a benefit."""

    id = models.UUIDField(primary_key=True, default=uuid_lib.uuid4, editable=False)
    commerce = models.ForeignKey(
        "clubman.Commerce",
        on_delete=models.CASCADE,
        related_name="rewards",
        verbose_name=_("comercio"),
    )
    name = models.CharField(_("nombre"), max_length=200)
    description = models.TextField(_("descripción"), blank=True)
    reward_type = models.CharField(
        _("tipo"),
        max_length=10,
        choices=RewardType.choices,
    )
    points_threshold = models.PositiveIntegerField(_("puntos necesarios"), null=True, blank=True)
    stars_threshold = models.PositiveIntegerField(_("estrellas necesarias"), null=True, blank=True)
    active = models.BooleanField(_("activo"), default=True)

    class Meta:
        verbose_name = _("premio")
        verbose_name_plural = _("premios")

    def __str__(self):
        return self.name
