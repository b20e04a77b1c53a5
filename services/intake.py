"""
Order intake -- client order documents into Order rows.

Document shape (one per order):

    {
        "client": {"name_id": "Client AA"},
        "order": {
            "number": 18,
            "work_piece": "P5",
            "quantity": 8,
            "due_date": 7,
            "late_pen": "$1,000",
            "early_pen": "$10",
        },
    }

The order row and its `new_order` announcement are committed together.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from django.db import DatabaseError, transaction

from resolver.conf import get_event_bus, get_setting
from resolver.exceptions import ResolverError
from resolver.models import Client, Order, Piece
from resolver.protocols.bus import NotificationChannel

logger = logging.getLogger(__name__)

_ASCII_DIGITS = "0123456789"


def parse_money_string(money: str) -> int:
    """
    Parse a money string into minor units (cents).

    Every non-digit character is dropped, so the caller must know the
    string is well formed: "$123.45" and "123.45€" both give 12345, and
    so would "1a2b3c4d5".

    Raises:
        ResolverError: INVALID_MONEY if no digit is left
    """
    digits = "".join(c for c in money if c in _ASCII_DIGITS)
    if not digits:
        raise ResolverError("INVALID_MONEY", value=money)
    return int(digits)


# PositiveIntegerField / BigIntegerField upper bounds
_MAX_COUNT = 2147483647
_MAX_MONEY = 9223372036854775807


def _section(document, name: str) -> Mapping:
    section = document.get(name) if isinstance(document, Mapping) else None
    if not isinstance(section, Mapping):
        raise ResolverError("INVALID_DOCUMENT", field=name, reason="missing")
    return section


def _field(section: Mapping, section_name: str, name: str):
    try:
        return section[name]
    except KeyError:
        raise ResolverError("INVALID_DOCUMENT", field=f"{section_name}.{name}", reason="missing")


def _read_text(section: Mapping, section_name: str, name: str, max_length: int) -> str:
    value = _field(section, section_name, name)
    if not isinstance(value, str) or not value.strip() or len(value) > max_length:
        raise ResolverError("INVALID_DOCUMENT", field=f"{section_name}.{name}", value=value)
    return value


def _read_count(section: Mapping, name: str) -> int:
    """Non-negative integer field; ints and decimal strings are accepted."""
    value = _field(section, "order", name)
    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        number = int(value)
    else:
        number = None

    if number is None or not 0 <= number <= _MAX_COUNT:
        raise ResolverError("INVALID_DOCUMENT", field=f"order.{name}", value=value)
    return number


def _read_money(section: Mapping, name: str) -> int:
    value = parse_money_string(str(_field(section, "order", name)))
    if value > _MAX_MONEY:
        raise ResolverError("INVALID_MONEY", field=f"order.{name}", reason="out of range")
    return value


def place_client_order(document: dict, bus=None) -> Order:
    """
    Insert one client order and announce it on `new_order`.

    The document is fully checked before anything is written. Creates the
    client on first order.

    Raises:
        ResolverError: INVALID_DOCUMENT, PIECE_NOT_FOUND, INVALID_MONEY,
            INVALID_QUANTITY
    """
    client_data = _section(document, "client")
    order_data = _section(document, "order")

    client_name = _read_text(client_data, "client", "name_id", max_length=100)
    work_piece = _read_text(order_data, "order", "work_piece", max_length=20)
    number = _read_count(order_data, "number")
    quantity = _read_count(order_data, "quantity")
    due_date = _read_count(order_data, "due_date")
    late_pen = _read_money(order_data, "late_pen")
    early_pen = _read_money(order_data, "early_pen")
    if quantity < 1:
        raise ResolverError("INVALID_QUANTITY", quantity=quantity)

    bus = bus or get_event_bus()
    using = get_setting("DATABASE")

    with transaction.atomic(using=using):
        try:
            piece = Piece.objects.using(using).get(name=work_piece)
        except Piece.DoesNotExist:
            raise ResolverError("PIECE_NOT_FOUND", piece=work_piece)

        client, created = Client.objects.using(using).get_or_create(name=client_name)
        if created:
            logger.debug(f"Client {client.name} not found, created", extra={"client": client.pk})

        order = Order.objects.using(using).create(
            piece=piece,
            client=client,
            number=number,
            quantity=quantity,
            due_date=due_date,
            late_pen=late_pen,
            early_pen=early_pen,
        )

        bus.notify(NotificationChannel.NEW_ORDER, str(order.pk))

        from resolver.signals import order_placed

        transaction.on_commit(
            lambda: order_placed.send(sender=place_client_order, order=order),
            using=using,
        )

    return order


def place_client_orders(documents: Iterable[dict], bus=None) -> list[Order]:
    """
    Place several orders, each in its own transaction.

    A failing document is logged and skipped; the others still go in.
    """
    placed = []
    for document in documents:
        try:
            placed.append(place_client_order(document, bus=bus))
        except (ResolverError, DatabaseError) as e:
            logger.error(
                f"Error placing order: {e}",
                extra={"document": document},
            )
    return placed
