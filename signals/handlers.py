"""
Resolver Signal Handlers.

Log the committed outcomes of intake and emission.

This module is imported in apps.py to register handlers.
"""

import logging

from django.dispatch import receiver

from resolver.signals import bom_batch_emitted, order_placed

logger = logging.getLogger(__name__)


@receiver(order_placed)
def log_order_placed(sender, order, **kwargs):
    logger.info(
        f"Order {order.pk} placed: {order.quantity}x piece {order.piece_id}",
        extra={
            "order": order.pk,
            "client": order.client_id,
            "piece": order.piece_id,
            "quantity": order.quantity,
        },
    )


@receiver(bom_batch_emitted)
def log_bom_batch_emitted(sender, order, entry_ids, **kwargs):
    logger.info(
        f"Emitted {len(entry_ids)} BOM entries for order {order.pk}",
        extra={
            "order": order.pk,
            "entries": len(entry_ids),
            "first_entry": entry_ids[0] if entry_ids else None,
        },
    )
