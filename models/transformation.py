"""
Transformation model.

Transformation = one directed production edge: consuming `quantity` units
of `from_piece` with `tool` yields one unit of `to_piece` at `cost`.

Several transformations may share the same `to_piece`; those are the
alternative ways of producing it.
"""

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _
from simple_history.models import HistoricalRecords


class Tool(models.TextChoices):
    """Tools available on the production lines."""

    T1 = "T1", _("Tool 1")
    T2 = "T2", _("Tool 2")
    T3 = "T3", _("Tool 3")
    T4 = "T4", _("Tool 4")
    T5 = "T5", _("Tool 5")
    T6 = "T6", _("Tool 6")


class TransformationQuerySet(models.QuerySet):
    def producing(self, piece_ids):
        """
        Transformations whose output is one of `piece_ids`.

        Ordered by id so that callers walking candidates see a stable
        order (first-minimum tie-breaks depend on it).
        """
        return self.filter(to_piece_id__in=list(piece_ids)).order_by("id")


class Transformation(models.Model):
    """
    Production edge `from_piece -> to_piece`.

    Money is stored in integer minor units (cents).
    """

    from_piece = models.ForeignKey(
        "resolver.Piece",
        on_delete=models.PROTECT,
        related_name="consumed_by",
        verbose_name=_("From piece"),
        help_text=_("Piece consumed by this step"),
    )
    to_piece = models.ForeignKey(
        "resolver.Piece",
        on_delete=models.PROTECT,
        related_name="produced_by",
        verbose_name=_("To piece"),
        help_text=_("Piece produced by this step"),
    )
    tool = models.CharField(
        max_length=2,
        choices=Tool.choices,
        verbose_name=_("Tool"),
    )
    quantity = models.PositiveIntegerField(
        default=1,
        verbose_name=_("Quantity"),
        help_text=_("Units of the input piece consumed per unit produced"),
    )
    cost = models.PositiveBigIntegerField(
        default=0,
        verbose_name=_("Cost"),
        help_text=_("Cost in minor units (cents)"),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("updated at"))

    history = HistoricalRecords()

    objects = TransformationQuerySet.as_manager()

    class Meta:
        db_table = "resolver_transformation"
        verbose_name = _("Transformation")
        verbose_name_plural = _("Transformations")
        ordering = ["id"]
        indexes = [
            models.Index(fields=["to_piece"], name="resolver_tr_to_piece_idx"),
            models.Index(fields=["from_piece"], name="resolver_tr_from_piece_idx"),
        ]

    def clean(self):
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": _("Must be at least 1.")})
        if (
            self.from_piece_id is not None
            and self.from_piece_id == self.to_piece_id
        ):
            raise ValidationError({"to_piece": _("Must differ from the input piece.")})

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.from_piece_id}->{self.to_piece_id} [{self.tool}] ${self.cost}"
