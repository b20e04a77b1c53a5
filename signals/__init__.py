"""
Resolver Signals.

In-process hooks for code living next to the resolver (reporting,
schedulers). Cross-process consumers use the event bus instead.

Signals:
    order_placed: Intake committed a new order
    bom_batch_emitted: A BOM batch was committed
    order_resolution_failed: An order could not be resolved into a BOM
"""

from django.dispatch import Signal

# Intake committed a new order
# Sent on commit by place_client_order()
# Args: order
order_placed = Signal()

# BOM batch committed
# Sent on commit by emit_bom()
# Args: order, entry_ids
bom_batch_emitted = Signal()

# Resolution failed for one order (loop keeps running)
# Sent by Resolver when an order is skipped
# Args: order_id, error
order_resolution_failed = Signal()

__all__ = ["order_placed", "bom_batch_emitted", "order_resolution_failed"]
