"""
Tests for the event bus adapters and settings (resolver.adapters, resolver.conf).

Verifies that:
- both adapters satisfy the EventBus protocol
- the in-memory bus delivers on commit only, in order, per subscription
- the PostgreSQL bus issues pg_notify / LISTEN and maps notifies
- get_event_bus / get_setting resolve configuration
"""

import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from django.core.exceptions import ImproperlyConfigured
from django.db import transaction

from resolver.adapters.memory import InMemoryEventBus
from resolver.adapters.postgres import PostgresEventBus
from resolver.conf import get_event_bus, get_setting, reset_event_bus
from resolver.protocols.bus import EventBus, Notification, NotificationChannel, join_ids


# ═══════════════════════════════════════════════════════════════════
# Protocol
# ═══════════════════════════════════════════════════════════════════


class TestProtocol:
    """Tests for the bus protocol types."""

    def test_memory_bus_is_event_bus(self):
        assert isinstance(InMemoryEventBus(), EventBus)

    def test_postgres_bus_is_event_bus(self):
        assert isinstance(PostgresEventBus(using="default"), EventBus)

    def test_channel_names(self):
        assert NotificationChannel.NEW_ORDER == "new_order"
        assert NotificationChannel.NEW_BOM_ENTRY == "new_bom_entry"

    def test_parse_channel(self):
        assert NotificationChannel.parse("new_order") is NotificationChannel.NEW_ORDER
        assert NotificationChannel.parse("NEW_ORDER") is None

    def test_join_ids(self):
        assert join_ids([7, 8, 9]) == "7,8,9"
        assert join_ids([42]) == "42"


# ═══════════════════════════════════════════════════════════════════
# InMemoryEventBus
# ═══════════════════════════════════════════════════════════════════


class TestInMemoryEventBus:
    """Tests for the in-memory adapter."""

    def test_notify_waits_for_commit(self, db, django_capture_on_commit_callbacks):
        bus = InMemoryEventBus()

        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            bus.notify(NotificationChannel.NEW_ORDER, "1")

        assert bus.pending() == []
        assert len(callbacks) == 1

        callbacks[0]()
        assert bus.pending() == [Notification("new_order", "1")]

    def test_rolled_back_notify_is_dropped(self, db, django_capture_on_commit_callbacks):
        bus = InMemoryEventBus()

        with django_capture_on_commit_callbacks(execute=True):
            try:
                with transaction.atomic():
                    bus.notify(NotificationChannel.NEW_ORDER, "1")
                    raise RuntimeError("rollback")
            except RuntimeError:
                pass
            bus.notify(NotificationChannel.NEW_ORDER, "2")

        assert [n.payload for n in bus.sent] == ["2"]

    def test_listen_in_delivery_order(self):
        bus = InMemoryEventBus()
        bus.deliver(Notification("new_order", "1"))
        bus.deliver(Notification("new_bom_entry", "5,6"))
        bus.deliver(Notification("new_order", "2"))

        received = list(bus.listen(["new_order", "new_bom_entry"]))

        assert [n.payload for n in received] == ["1", "5,6", "2"]
        assert bus.pending() == []

    def test_listen_filters_channels(self):
        bus = InMemoryEventBus()
        bus.deliver(Notification("new_order", "1"))
        bus.deliver(Notification("other", "x"))

        received = list(bus.listen([NotificationChannel.NEW_ORDER]))

        assert received == [Notification("new_order", "1")]

    def test_listen_sees_notifications_delivered_while_iterating(self):
        bus = InMemoryEventBus()
        bus.deliver(Notification("new_order", "1"))

        received = []
        for notification in bus.listen(["new_order"]):
            received.append(notification.payload)
            if notification.payload == "1":
                bus.deliver(Notification("new_order", "2"))

        assert received == ["1", "2"]

    def test_clear(self):
        bus = InMemoryEventBus()
        bus.deliver(Notification("new_order", "1"))

        bus.clear()

        assert bus.pending() == []
        assert bus.sent == []


# ═══════════════════════════════════════════════════════════════════
# PostgresEventBus
# ═══════════════════════════════════════════════════════════════════


class TestPostgresEventBus:
    """Tests for the LISTEN/NOTIFY adapter (connections mocked)."""

    def test_default_database(self):
        assert PostgresEventBus().using == "default"

    def test_database_from_settings(self, settings):
        settings.RESOLVER = {"DATABASE": "events"}

        assert PostgresEventBus().using == "events"

    def test_notify_uses_pg_notify(self):
        cursor = MagicMock()
        with patch("resolver.adapters.postgres.connections") as mock_connections:
            mock_connections.__getitem__.return_value.cursor.return_value.__enter__.return_value = cursor

            PostgresEventBus(using="default").notify(NotificationChannel.NEW_ORDER, "42")

        mock_connections.__getitem__.assert_called_with("default")
        cursor.execute.assert_called_once_with("SELECT pg_notify(%s, %s)", ["new_order", "42"])

    def test_listen_subscribes_and_yields(self):
        conn = MagicMock()
        conn.__enter__.return_value = conn
        conn.notifies.return_value = iter([
            SimpleNamespace(channel="new_order", payload="1", pid=100),
            SimpleNamespace(channel="new_bom_entry", payload="3,4", pid=100),
        ])
        bus = PostgresEventBus(using="default")

        with patch.object(bus, "connect", return_value=conn):
            received = list(bus.listen(NotificationChannel.values))

        assert received == [
            Notification("new_order", "1"),
            Notification("new_bom_entry", "3,4"),
        ]
        assert conn.execute.call_count == 2
        conn.__exit__.assert_called_once()

    def test_listen_propagates_transport_errors(self):
        import psycopg

        conn = MagicMock()
        conn.__enter__.return_value = conn
        conn.notifies.side_effect = psycopg.OperationalError("server closed the connection")
        bus = PostgresEventBus(using="default")

        with patch.object(bus, "connect", return_value=conn):
            with pytest.raises(psycopg.OperationalError):
                list(bus.listen(["new_order"]))

    def test_connect_uses_django_params(self):
        with patch("resolver.adapters.postgres.connections") as mock_connections:
            mock_connections.__getitem__.return_value.get_connection_params.return_value = {
                "dbname": "factory",
                "user": "mes",
                "cursor_factory": object(),
            }
            with patch("resolver.adapters.postgres.psycopg.connect") as mock_connect:
                PostgresEventBus(using="default").connect()

        mock_connect.assert_called_once_with(dbname="factory", user="mes", autocommit=True)


# ═══════════════════════════════════════════════════════════════════
# Settings
# ═══════════════════════════════════════════════════════════════════


class TestSettings:
    """Tests for resolver.conf."""

    @pytest.fixture(autouse=True)
    def fresh_bus(self):
        reset_event_bus()
        yield
        reset_event_bus()

    def test_event_bus_from_settings(self):
        assert isinstance(get_event_bus(), InMemoryEventBus)

    def test_event_bus_is_singleton(self):
        assert get_event_bus() is get_event_bus()

    def test_bad_event_bus_path(self, settings):
        settings.RESOLVER = {"EVENT_BUS": "resolver.adapters.nowhere.Bus"}

        with pytest.raises(ImproperlyConfigured, match="Failed to import event bus"):
            get_event_bus()

    def test_dict_beats_flat(self, settings):
        settings.RESOLVER = {"PATH_STRATEGY": "cheapest"}
        settings.RESOLVER_PATH_STRATEGY = "greedy"

        assert get_setting("PATH_STRATEGY") == "cheapest"

    def test_flat_setting(self, settings):
        settings.RESOLVER = {}
        settings.RESOLVER_FAIL_FAST = True

        assert get_setting("FAIL_FAST") is True

    def test_defaults(self, settings):
        settings.RESOLVER = {}

        assert get_setting("EVENT_BUS") == "resolver.adapters.postgres.PostgresEventBus"
        assert get_setting("FAIL_FAST") is False
        assert get_setting("DATABASE") == "default"

    def test_explicit_default(self, settings):
        settings.RESOLVER = {}

        assert get_setting("UNKNOWN", "fallback") == "fallback"
