"""
Event Bus Protocol.

Defines the interface used by intake, emitter and the resolution loop to
announce and receive "something changed" notifications.

Channels (exact strings are the wire contract):
    new_order      payload: decimal order id           ("42")
    new_bom_entry  payload: comma-joined decimal ids   ("7,8,9")
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from django.db import models
from django.utils.translation import gettext_lazy as _


# ══════════════════════════════════════════════════════════════
# DATA TYPES
# ══════════════════════════════════════════════════════════════


class NotificationChannel(models.TextChoices):
    """Named topics the resolver knows about."""

    NEW_ORDER = "new_order", _("New order")
    NEW_BOM_ENTRY = "new_bom_entry", _("New BOM batch")

    @classmethod
    def parse(cls, name: str) -> "NotificationChannel | None":
        """Map a wire channel name to its member, None if unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class Notification:
    """One notification as delivered by the bus."""

    channel: str
    payload: str = ""


def join_ids(ids: Iterable[int]) -> str:
    """Wire format for id lists: decimal, comma-joined, no spaces."""
    return ",".join(str(i) for i in ids)


# ══════════════════════════════════════════════════════════════
# PROTOCOL
# ══════════════════════════════════════════════════════════════


@runtime_checkable
class EventBus(Protocol):
    """
    Protocol for publishing and consuming notifications.

    `notify()` must be transactional: when called inside
    `transaction.atomic()`, the notification is delivered only if the
    enclosing transaction commits.
    """

    def notify(self, channel: str, payload: str) -> None:
        """
        Announce `payload` on `channel`.

        Args:
            channel: Channel name (see NotificationChannel)
            payload: Small text token
        """
        ...

    def listen(self, channels: Iterable[str]) -> Iterator[Notification]:
        """
        Subscribe to `channels` and yield notifications as they arrive.

        Blocks between notifications. Transport failures are raised to
        the caller.
        """
        ...
