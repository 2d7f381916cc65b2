"""Unit tests for domain event primitives and the in-memory bus."""

from __future__ import annotations

from uuid import UUID

import pytest

from modules.customers.events import CustomerDeleted
from shared.domain.events import DomainEvent
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


class CapturingHandler:
    def __init__(self) -> None:
        self.handled = []

    def handle(self, event) -> None:
        self.handled.append(event)


class TestDomainEvent:
    def test_event_name_is_class_name(self):
        event = CustomerDeleted(aggregate_id=3)
        assert event.event_name == "CustomerDeleted"
        assert isinstance(event.event_id, UUID)

    def test_payload_is_json_safe(self):
        event = CustomerDeleted(aggregate_id=3)
        payload = event.to_payload()
        assert payload["aggregate_id"] == "3"
        assert payload["event_name"] == "CustomerDeleted"
        assert payload["event_id"] == str(event.event_id)
        assert payload["occurred_on"] == event.occurred_on.isoformat()

    def test_events_are_immutable(self):
        event = CustomerDeleted(aggregate_id=3)
        with pytest.raises(AttributeError):
            event.aggregate_id = 4


class TestInMemoryEventBus:
    def test_routes_events_by_type(self):
        bus = InMemoryEventBus()
        handler = CapturingHandler()
        bus.subscribe(CustomerDeleted, handler)

        event = CustomerDeleted(aggregate_id=1)
        bus.publish(event)
        bus.publish(DomainEvent(aggregate_id=2))

        assert handler.handled == [event]

    def test_subscribe_is_idempotent(self):
        bus = InMemoryEventBus()
        handler = CapturingHandler()
        bus.subscribe(CustomerDeleted, handler)
        bus.subscribe(CustomerDeleted, handler)

        bus.publish(CustomerDeleted(aggregate_id=1))

        assert len(handler.handled) == 1
        assert bus.handlers_for(CustomerDeleted) == [handler]

    def test_unsubscribe(self):
        bus = InMemoryEventBus()
        handler = CapturingHandler()
        bus.subscribe(CustomerDeleted, handler)
        bus.unsubscribe(CustomerDeleted, handler)

        bus.publish(CustomerDeleted(aggregate_id=1))

        assert handler.handled == []
        assert bus.handlers_for(CustomerDeleted) == []

    def test_handler_errors_propagate(self):
        bus = InMemoryEventBus()

        class FailingHandler:
            def handle(self, event) -> None:
                raise RuntimeError("handler failed")

        bus.subscribe(CustomerDeleted, FailingHandler())
        with pytest.raises(RuntimeError):
            bus.publish(CustomerDeleted(aggregate_id=1))
