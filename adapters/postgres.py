"""
PostgreSQL Event Bus -- LISTEN/NOTIFY.

Publishing goes through Django's connection with `pg_notify()`, so a
notification issued inside `transaction.atomic()` is delivered by
PostgreSQL only when that transaction commits.

Listening needs a connection of its own (autocommit, never shared with the
ORM), opened with psycopg from the same Django database settings.

Settings:
    RESOLVER = {
        "EVENT_BUS": "resolver.adapters.postgres.PostgresEventBus",
        "DATABASE": "default",
    }
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

import psycopg
from psycopg import sql
from django.db import connections

from resolver.conf import get_setting
from resolver.protocols.bus import Notification

logger = logging.getLogger(__name__)


class PostgresEventBus:
    """
    EventBus over PostgreSQL LISTEN/NOTIFY.

    Example:
        bus = PostgresEventBus()
        for notification in bus.listen(["new_order"]):
            ...
    """

    def __init__(self, using: str | None = None):
        self.using = using or get_setting("DATABASE")

    def notify(self, channel: str, payload: str) -> None:
        with connections[self.using].cursor() as cursor:
            cursor.execute("SELECT pg_notify(%s, %s)", [str(channel), payload])

        logger.debug(
            f"NOTIFY {channel} '{payload}'",
            extra={"channel": str(channel), "payload": payload},
        )

    def listen(self, channels: Iterable[str]) -> Iterator[Notification]:
        channels = [str(c) for c in channels]

        with self.connect() as conn:
            for channel in channels:
                conn.execute(sql.SQL("LISTEN {}").format(sql.Identifier(channel)))

            logger.info(
                f"Listening on {', '.join(channels)}",
                extra={"channels": channels, "database": self.using},
            )

            # Blocks until the server sends something; a dropped
            # connection surfaces here as psycopg.OperationalError.
            for notify in conn.notifies():
                yield Notification(channel=notify.channel, payload=notify.payload)

    def connect(self) -> psycopg.Connection:
        """Open the dedicated listener connection."""
        params = connections[self.using].get_connection_params()
        # Django's cursor classes only make sense on ORM connections
        params.pop("cursor_factory", None)
        return psycopg.connect(**params, autocommit=True)
