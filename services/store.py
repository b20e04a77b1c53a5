"""
Store access -- the reads and the one write the engine performs.

Thin functions over the ORM so the resolution steps depend on a small,
named surface instead of querysets spread across modules. Every query
goes to the RESOLVER["DATABASE"] alias, the same one the event bus
announces on.
"""

from __future__ import annotations

from collections.abc import Iterable

from django.db import transaction

from resolver.conf import get_setting
from resolver.exceptions import ResolverError
from resolver.models import BomEntry, Order, Transformation


def get_order(order_id: int) -> Order:
    """Fetch an order, raising ORDER_NOT_FOUND if absent."""
    try:
        return (
            Order.objects.using(get_setting("DATABASE"))
            .select_related("piece", "client")
            .get(pk=order_id)
        )
    except Order.DoesNotExist:
        raise ResolverError("ORDER_NOT_FOUND", order_id=order_id)


def get_immediate_transformations(to_pieces: int | Iterable[int]) -> list[Transformation]:
    """
    Transformations producing any of `to_pieces`.

    Empty means "no known way to produce": raw material and missing data
    look the same at this layer.
    """
    if isinstance(to_pieces, int):
        to_pieces = [to_pieces]
    return list(Transformation.objects.using(get_setting("DATABASE")).producing(to_pieces))


def insert_bom_batch(entries: list[BomEntry]) -> list[int]:
    """Insert all entries or none; return their ids in insertion order."""
    using = get_setting("DATABASE")
    with transaction.atomic(using=using):
        created = BomEntry.objects.using(using).bulk_create(entries)
    return [entry.pk for entry in created]


def get_bom_entry(entry_id: int) -> BomEntry:
    """Fetch a BOM entry, raising BOM_ENTRY_NOT_FOUND if absent."""
    try:
        return (
            BomEntry.objects.using(get_setting("DATABASE"))
            .select_related("transformation")
            .get(pk=entry_id)
        )
    except BomEntry.DoesNotExist:
        raise ResolverError("BOM_ENTRY_NOT_FOUND", entry_id=entry_id)
