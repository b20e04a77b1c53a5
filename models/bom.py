"""
BomEntry model.

BomEntry = one production step for one unit of one order.

For an order of P units resolved into a chain of S transformations the
emitter writes P * S entries:

    piece_number 1..P  (which unit)
    step_number  1..S  (root-to-finished production order)

Entries are written once, as a batch, and never updated.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class BomEntry(models.Model):
    """A numbered (unit, step) pair of an order's bill of materials."""

    order = models.ForeignKey(
        "resolver.Order",
        on_delete=models.CASCADE,
        related_name="bom_entries",
        verbose_name=_("Order"),
    )
    transformation = models.ForeignKey(
        "resolver.Transformation",
        on_delete=models.PROTECT,
        related_name="bom_entries",
        verbose_name=_("Transformation"),
    )
    piece_number = models.PositiveIntegerField(verbose_name=_("Piece number"))
    pieces_total = models.PositiveIntegerField(verbose_name=_("Pieces total"))
    step_number = models.PositiveIntegerField(verbose_name=_("Step number"))
    steps_total = models.PositiveIntegerField(verbose_name=_("Steps total"))

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))

    class Meta:
        db_table = "resolver_bom_entry"
        verbose_name = _("BOM entry")
        verbose_name_plural = _("BOM entries")
        ordering = ["order", "piece_number", "step_number", "id"]
        indexes = [
            models.Index(
                fields=["order", "piece_number", "step_number"],
                name="resolver_bom_order_pos_idx",
            ),
        ]

    def __str__(self) -> str:
        return (
            f"Order {self.order_id} piece {self.piece_number}/{self.pieces_total} "
            f"step {self.step_number}/{self.steps_total}"
        )

    @property
    def is_last_step(self) -> bool:
        return self.step_number == self.steps_total
