"""
BOM emission -- number a chain per ordered unit and persist it.

For an order of P units and a chain of S transformations (built
finished -> root), the batch holds P * S entries:

    for piece_number in 1..P:
        for step_number in 1..S:
            transformation = chain[S - step_number]

so step 1 is the root material's transformation and step S yields the
finished piece.

The rows and their `new_bom_entry` announcement share one transaction:
either every row exists and the ids are announced, or nothing happened.
"""

from __future__ import annotations

import logging

from django.db import transaction

from resolver.conf import get_event_bus, get_setting
from resolver.exceptions import ResolverError
from resolver.models import BomEntry, Order, Transformation
from resolver.protocols.bus import NotificationChannel, join_ids
from resolver.services.store import insert_bom_batch

logger = logging.getLogger(__name__)


def plan_bom_entries(order: Order, chain: list[Transformation]) -> list[BomEntry]:
    """Build (unsaved) BOM entries for every unit of `order`."""
    steps_total = len(chain)
    pieces_total = order.quantity
    production_order = list(reversed(chain))

    return [
        BomEntry(
            order=order,
            transformation=transformation,
            piece_number=piece_number,
            pieces_total=pieces_total,
            step_number=step_number,
            steps_total=steps_total,
        )
        for piece_number in range(1, pieces_total + 1)
        for step_number, transformation in enumerate(production_order, start=1)
    ]


def emit_bom(order: Order, chain: list[Transformation], bus=None) -> list[int]:
    """
    Write the BOM batch for `order` and announce it.

    Args:
        order: Order being resolved
        chain: Selected transformations, finished -> root
        bus: EventBus (defaults to the configured one)

    Returns:
        Ids of the inserted entries, in (piece_number, step_number) order

    Raises:
        ResolverError: EMPTY_CHAIN when there is nothing to produce,
            INVALID_QUANTITY when the order asks for no units
    """
    if not chain:
        raise ResolverError("EMPTY_CHAIN", order_id=order.pk, piece=order.piece_id)
    if order.quantity < 1:
        raise ResolverError("INVALID_QUANTITY", order_id=order.pk, quantity=order.quantity)

    bus = bus or get_event_bus()
    entries = plan_bom_entries(order, chain)
    using = get_setting("DATABASE")

    with transaction.atomic(using=using):
        entry_ids = insert_bom_batch(entries)
        bus.notify(NotificationChannel.NEW_BOM_ENTRY, join_ids(entry_ids))

        from resolver.signals import bom_batch_emitted

        transaction.on_commit(
            lambda: bom_batch_emitted.send(
                sender=emit_bom, order=order, entry_ids=entry_ids
            ),
            using=using,
        )

    logger.debug(
        f"BOM batch for order {order.pk}: {order.quantity} x {len(chain)} steps",
        extra={
            "order": order.pk,
            "pieces_total": order.quantity,
            "steps_total": len(chain),
        },
    )

    return entry_ids
