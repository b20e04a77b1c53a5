"""
Piece and Client models.

Piece = any material the shop handles: raw stock, intermediate or finished.
Client = who places orders (created on first order).
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Piece(models.Model):
    """
    A material or product identifier (P1, P2 ... P9).

    Pieces carry no data of their own; they are referenced by
    transformations (as input and output) and by orders.
    """

    name = models.CharField(
        unique=True,
        max_length=20,
        verbose_name=_("Name"),
        help_text=_("Piece identifier, e.g. P5"),
    )

    class Meta:
        db_table = "resolver_piece"
        verbose_name = _("Piece")
        verbose_name_plural = _("Pieces")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Client(models.Model):
    """Client placing orders."""

    name = models.CharField(
        unique=True,
        max_length=100,
        verbose_name=_("Name"),
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))

    class Meta:
        db_table = "resolver_client"
        verbose_name = _("Client")
        verbose_name_plural = _("Clients")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
