"""
Resolver Adapters.

Implementations of the EventBus protocol:
- memory.InMemoryEventBus: process-local queue (tests, development)
- postgres.PostgresEventBus: LISTEN/NOTIFY (loaded by dotted path from settings)
"""

from resolver.adapters.memory import InMemoryEventBus

__all__ = [
    "InMemoryEventBus",
]
