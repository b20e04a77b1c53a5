"""
Resolver Protocols.

Defines interfaces for external integrations.
"""

from resolver.protocols.bus import EventBus, Notification, NotificationChannel, join_ids

__all__ = [
    # Event bus protocol
    "EventBus",
    # Data types
    "Notification",
    "NotificationChannel",
    # Wire format
    "join_ids",
]
