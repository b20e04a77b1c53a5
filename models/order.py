"""
Order model.

Orders are written by the intake (see resolver.services.intake) and are
read-only to the resolution engine.
"""

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _


class Order(models.Model):
    """
    Client order for `quantity` units of a finished piece.

    `due_date` is a production day index. Penalties are in minor units.
    """

    piece = models.ForeignKey(
        "resolver.Piece",
        on_delete=models.PROTECT,
        related_name="orders",
        verbose_name=_("Piece"),
    )
    client = models.ForeignKey(
        "resolver.Client",
        on_delete=models.PROTECT,
        related_name="orders",
        verbose_name=_("Client"),
    )
    number = models.PositiveIntegerField(
        verbose_name=_("Number"),
        help_text=_("Order number in the client's document"),
    )
    quantity = models.PositiveIntegerField(
        verbose_name=_("Quantity"),
    )
    due_date = models.PositiveIntegerField(
        verbose_name=_("Due date"),
        help_text=_("Production day the order is due"),
    )
    late_pen = models.BigIntegerField(
        default=0,
        verbose_name=_("Late penalty"),
        help_text=_("Per-day penalty for late delivery, in cents"),
    )
    early_pen = models.BigIntegerField(
        default=0,
        verbose_name=_("Early penalty"),
        help_text=_("Per-day penalty for early delivery, in cents"),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))

    class Meta:
        db_table = "resolver_order"
        verbose_name = _("Order")
        verbose_name_plural = _("Orders")
        ordering = ["id"]
        indexes = [
            models.Index(fields=["client", "number"], name="resolver_or_client_num_idx"),
        ]

    def clean(self):
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": _("Must be at least 1.")})

    def __str__(self) -> str:
        return f"Order {self.number} ({self.quantity}x piece {self.piece_id})"
