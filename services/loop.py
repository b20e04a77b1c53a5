"""
Resolution loop -- the resolver process body.

Waits on the event bus and handles one notification at a time, in
delivery order:

    new_order      "42"       -> recipe -> index -> path -> BOM batch
    new_bom_entry  "7,8,9"    -> fetch entries -> compatibility check
    anything else             -> warning, ignored

Error policy (RESOLVER["FAIL_FAST"]):
    False (default)  a bad payload or a failed order is logged and the
                     loop moves on to the next notification
    True             the error propagates and ends the loop

Transport errors raised by the bus always propagate.
"""

from __future__ import annotations

import logging

from django.db import DatabaseError, close_old_connections
from django.db.models import Max

from resolver.conf import get_event_bus, get_setting
from resolver.exceptions import ResolverError
from resolver.models import BomEntry, Order
from resolver.protocols.bus import Notification, NotificationChannel
from resolver.results import ResolutionResult
from resolver.services.bom import emit_bom
from resolver.services.paths import get_path_selector
from resolver.services.recipes import build_recipe, index_by_destination
from resolver.services.store import get_bom_entry, get_order

logger = logging.getLogger(__name__)


def parse_decimal_id(token: str) -> int | None:
    """Parse one ASCII decimal id, None if it is not one."""
    token = token.strip()
    if token and token.isascii() and token.isdigit():
        return int(token)
    return None


def parse_order_id(payload: str) -> int:
    """Payload of `new_order`: a single decimal id."""
    order_id = parse_decimal_id(payload)
    if order_id is None:
        raise ResolverError(
            "INVALID_PAYLOAD", channel=NotificationChannel.NEW_ORDER.value, payload=payload
        )
    return order_id


def parse_entry_ids(payload: str) -> list[int]:
    """
    Payload of `new_bom_entry`: comma-joined decimal ids.

    Tokens that are not ids are skipped; an empty result is an error.
    """
    ids = []
    for token in payload.split(","):
        entry_id = parse_decimal_id(token)
        if entry_id is None:
            logger.warning(
                f"Skipping invalid BOM entry id {token!r}",
                extra={"token": token, "payload": payload},
            )
            continue
        ids.append(entry_id)

    if not ids:
        raise ResolverError(
            "INVALID_PAYLOAD",
            channel=NotificationChannel.NEW_BOM_ENTRY.value,
            payload=payload,
        )
    return ids


class Resolver:
    """
    Event-driven order resolver.

    Usage:
        Resolver().run()                      # blocks for the process lifetime
        Resolver(bus=bus).dispatch(notification)
        Resolver().resolve_order(42)
    """

    def __init__(self, bus=None, fail_fast: bool | None = None, path_selector=None):
        self.bus = bus or get_event_bus()
        self.fail_fast = get_setting("FAIL_FAST") if fail_fast is None else fail_fast
        self.path_selector = path_selector or get_path_selector()
        self._handlers = {
            NotificationChannel.NEW_ORDER: self.on_new_order,
            NotificationChannel.NEW_BOM_ENTRY: self.on_new_bom_batch,
        }

    # ══════════════════════════════════════════════════════════════
    # LOOP
    # ══════════════════════════════════════════════════════════════

    def run(self, resolve_backlog: bool = False) -> None:
        """
        Subscribe to both channels and handle notifications until the bus
        stops (in-memory bus) or fails (transport error, raised).

        Stale or broken database connections are closed between
        notifications, as Django does around each request.
        """
        close_old_connections()
        if resolve_backlog:
            self.resolve_backlog()
            close_old_connections()

        logger.info(
            "Resolver started",
            extra={"fail_fast": self.fail_fast, "bus": type(self.bus).__name__},
        )

        for notification in self.bus.listen(NotificationChannel.values):
            close_old_connections()
            try:
                self.dispatch(notification)
            finally:
                close_old_connections()

    def dispatch(self, notification: Notification):
        """Route one notification to its handler."""
        channel = NotificationChannel.parse(notification.channel)
        if channel is None:
            logger.warning(
                f"Ignoring notification on unknown channel {notification.channel!r}",
                extra={"channel": notification.channel, "payload": notification.payload},
            )
            return None

        try:
            return self._handlers[channel](notification.payload)
        except (ResolverError, DatabaseError) as e:
            if self.fail_fast:
                raise
            logger.error(
                f"Failed to handle {channel.value} '{notification.payload}': {e}",
                extra={"channel": channel.value, "payload": notification.payload},
            )
            return None

    # ══════════════════════════════════════════════════════════════
    # HANDLERS
    # ══════════════════════════════════════════════════════════════

    def on_new_order(self, payload: str) -> ResolutionResult:
        return self.resolve_order(parse_order_id(payload))

    def on_new_bom_batch(self, payload: str) -> list[BomEntry]:
        return self.check_bom_batch(payload)

    def resolve_order(self, order_id: int) -> ResolutionResult:
        """
        Order -> recipe -> chain -> BOM batch.

        Raises:
            ResolverError: ORDER_NOT_FOUND, CYCLIC_RECIPE, EMPTY_CHAIN
        """
        from resolver.signals import order_resolution_failed

        logger.info(f"Resolving order {order_id}", extra={"order": order_id})

        try:
            order = get_order(order_id)
            recipe = build_recipe(order.piece_id)
            chain = self.path_selector(order.piece_id, index_by_destination(recipe))
            entry_ids = emit_bom(order, chain, bus=self.bus)
        except (ResolverError, DatabaseError) as e:
            order_resolution_failed.send(sender=self.__class__, order_id=order_id, error=e)
            raise

        result = ResolutionResult(order=order, chain=chain, entry_ids=entry_ids)

        logger.info(
            f"Resolved order {order_id}: {result.pieces_total} x {result.steps_total} steps",
            extra={
                "order": order_id,
                "pieces_total": result.pieces_total,
                "steps_total": result.steps_total,
                "unit_cost": result.total_cost,
            },
        )

        return result

    def check_bom_batch(self, payload: str) -> list[BomEntry]:
        """
        Fetch the announced entries and check them against the lines.

        Raises:
            ResolverError: INVALID_PAYLOAD (before any lookup),
                BOM_ENTRY_NOT_FOUND
        """
        entry_ids = parse_entry_ids(payload)
        entries = [get_bom_entry(entry_id) for entry_id in entry_ids]
        self.check_compatibility(entries)
        return entries

    def check_compatibility(self, entries: list[BomEntry]) -> None:
        """
        Line/tool compatibility of a BOM batch.

        Lines and their tool sets are not modelled yet, so the batch is only
        summarised here.
        """
        tools = sorted({entry.transformation.tool for entry in entries})
        logger.info(
            f"BOM batch of {len(entries)} entries needs tools {', '.join(tools)}",
            extra={
                "entries": len(entries),
                "orders": sorted({entry.order_id for entry in entries}),
                "tools": tools,
            },
        )

    # ══════════════════════════════════════════════════════════════
    # BACKLOG
    # ══════════════════════════════════════════════════════════════

    def resolve_backlog(self) -> list[ResolutionResult]:
        """
        Resolve every order that has no BOM entries yet.

        Runs synchronously before the loop subscribes, so it never competes
        with it for the same order. The highest order id at query time is
        logged: orders placed after it and before the subscription are only
        resolved through their own `new_order` notification, or by the next
        backlog run.
        """
        orders = Order.objects.using(get_setting("DATABASE"))
        last_order = orders.aggregate(last=Max("id"))["last"]
        pending = list(
            orders.filter(id__lte=last_order or 0, bom_entries__isnull=True)
            .order_by("id")
            .values_list("id", flat=True)
        )
        logger.info(
            f"Backlog: {len(pending)} unresolved orders up to order {last_order}; "
            f"later orders are resolved from their new_order notification",
            extra={"orders": len(pending), "last_order": last_order},
        )

        results = []
        for order_id in pending:
            try:
                results.append(self.resolve_order(order_id))
            except (ResolverError, DatabaseError) as e:
                if self.fail_fast:
                    raise
                logger.error(
                    f"Backlog order {order_id} failed: {e}",
                    extra={"order": order_id},
                )
        return results
