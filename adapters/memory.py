"""
In-memory Event Bus -- process-local queue.

Use this adapter for development or testing when PostgreSQL is not
available. Notifications follow the same transactional rule as
LISTEN/NOTIFY: they are queued only when the enclosing transaction
commits (via `transaction.on_commit` on the RESOLVER["DATABASE"]
alias).

Unlike a real server connection, `listen()` stops once the queue is
drained, so a resolver loop over this bus returns instead of blocking.

Configuration:
    RESOLVER = {
        "EVENT_BUS": "resolver.adapters.memory.InMemoryEventBus",
    }
"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterable, Iterator

from django.db import transaction

from resolver.conf import get_setting
from resolver.protocols.bus import Notification


class InMemoryEventBus:
    """
    In-process implementation of the EventBus protocol.

    `sent` keeps every delivered notification, in order, for assertions.
    """

    def __init__(self, using: str | None = None):
        self.using = using or get_setting("DATABASE")
        self._lock = threading.Lock()
        self._queue: deque[Notification] = deque()
        self.sent: list[Notification] = []

    def notify(self, channel: str, payload: str) -> None:
        notification = Notification(channel=str(channel), payload=payload)
        transaction.on_commit(lambda: self.deliver(notification), using=self.using)

    def deliver(self, notification: Notification) -> None:
        """Queue a notification right away, as if the transport delivered it."""
        with self._lock:
            self._queue.append(notification)
            self.sent.append(notification)

    def listen(self, channels: Iterable[str]) -> Iterator[Notification]:
        subscribed = {str(c) for c in channels}
        while True:
            with self._lock:
                if not self._queue:
                    return
                notification = self._queue.popleft()
            # Unsubscribed channels are dropped, as the server would never
            # have sent them.
            if notification.channel in subscribed:
                yield notification

    def pending(self) -> list[Notification]:
        with self._lock:
            return list(self._queue)

    def clear(self) -> None:
        with self._lock:
            self._queue.clear()
            self.sent.clear()
