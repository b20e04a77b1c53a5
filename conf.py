"""
Resolver Settings.

Supports two formats (dict takes priority):

    # Option 1: Dict
    RESOLVER = {
        "EVENT_BUS": "resolver.adapters.memory.InMemoryEventBus",
        "FAIL_FAST": True,
    }

    # Option 2: Flat
    RESOLVER_EVENT_BUS = "resolver.adapters.memory.InMemoryEventBus"
    RESOLVER_FAIL_FAST = True

All settings have sensible defaults.
"""

import threading

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


# ── Defaults ──

DEFAULTS = {
    "EVENT_BUS": "resolver.adapters.postgres.PostgresEventBus",
    "PATH_STRATEGY": "greedy",
    "FAIL_FAST": False,
    "DATABASE": "default",
}


# ── Accessors ──

_sentinel = object()


def get_setting(name, default=_sentinel):
    """
    Get a resolver setting.

    Looks up in order:
    1. RESOLVER dict (e.g. RESOLVER = {"FAIL_FAST": True})
    2. Flat setting (e.g. RESOLVER_FAIL_FAST = True)
    3. DEFAULTS
    """
    resolver_dict = getattr(settings, "RESOLVER", {})
    if name in resolver_dict:
        return resolver_dict[name]

    flat_value = getattr(settings, f"RESOLVER_{name}", _sentinel)
    if flat_value is not _sentinel:
        return flat_value

    if default is not _sentinel:
        return default

    return DEFAULTS.get(name)


_event_bus_lock = threading.Lock()
_event_bus_instance = None


def get_event_bus():
    """
    Return the configured event bus instance.

    The bus carries the `new_order` / `new_bom_entry` notifications
    between intake, emitter and the resolution loop.
    """
    global _event_bus_instance

    if _event_bus_instance is None:
        with _event_bus_lock:
            if _event_bus_instance is None:  # double-checked
                from django.utils.module_loading import import_string

                path = get_setting("EVENT_BUS")
                try:
                    bus_class = import_string(path)
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import event bus '{path}': {e}"
                    ) from e
                _event_bus_instance = bus_class()

    return _event_bus_instance


def reset_event_bus() -> None:
    """Reset singleton (for tests)."""
    global _event_bus_instance
    _event_bus_instance = None
