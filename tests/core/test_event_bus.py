"""Tests for the event bus system."""

from dataclasses import dataclass

import pytest

from airtraffic.core.event_bus import Event, EventBus, EventPriority
from airtraffic.simulation.events import CollisionEvent, SimulationEvent, StatusEvent
from airtraffic.simulation.fuel import FuelBand


@dataclass
class SampleEvent(Event):
    """Test event with data."""

    data: str = ""


class TestEventBus:
    """Test suite for EventBus."""

    def test_subscribe_and_publish(self) -> None:
        """Test that subscribed handlers receive published events."""
        bus = EventBus()
        received = []

        bus.subscribe(SampleEvent, received.append)
        event = SampleEvent(data="test")
        bus.publish(event)

        assert received == [event]

    def test_priority_order(self) -> None:
        """Test that handlers are called in priority order."""
        bus = EventBus()
        call_order = []

        bus.subscribe(SampleEvent, lambda e: call_order.append("normal"), EventPriority.NORMAL)
        bus.subscribe(SampleEvent, lambda e: call_order.append("critical"), EventPriority.CRITICAL)
        bus.subscribe(SampleEvent, lambda e: call_order.append("low"), EventPriority.LOW)
        bus.subscribe(SampleEvent, lambda e: call_order.append("high"), EventPriority.HIGH)

        bus.publish(SampleEvent())

        assert call_order == ["critical", "high", "normal", "low"]

    def test_different_event_types_isolated(self) -> None:
        """Test that unrelated event types don't interfere."""
        bus = EventBus()
        received = []

        bus.subscribe(CollisionEvent, received.append)
        bus.publish(SampleEvent(data="x"))
        bus.publish(StatusEvent(step_index=0, aircraft_id=1, band=FuelBand.MODERATE))

        assert received == []

    def test_base_class_subscription_receives_subclasses(self) -> None:
        """Test that subscribing to SimulationEvent yields the whole stream in order."""
        bus = EventBus()
        received = []
        bus.subscribe(SimulationEvent, received.append)

        events = [
            CollisionEvent(step_index=0, aircraft_a=1, aircraft_b=2),
            StatusEvent(step_index=0, aircraft_id=1, band=FuelBand.EFFICIENT),
        ]
        for event in events:
            bus.publish(event)

        assert received == events

    def test_priority_across_base_and_subclass(self) -> None:
        """Test priority ordering is merged across class levels."""
        bus = EventBus()
        call_order = []

        bus.subscribe(SimulationEvent, lambda e: call_order.append("base"), EventPriority.LOW)
        bus.subscribe(CollisionEvent, lambda e: call_order.append("exact"), EventPriority.NORMAL)
        bus.subscribe(Event, lambda e: call_order.append("root"), EventPriority.CRITICAL)

        bus.publish(CollisionEvent(step_index=0, aircraft_a=1, aircraft_b=2))

        assert call_order == ["root", "exact", "base"]

    def test_unsubscribe(self) -> None:
        """Test that unsubscribed handlers no longer receive events."""
        bus = EventBus()
        received = []

        bus.subscribe(SampleEvent, received.append)
        bus.unsubscribe(SampleEvent, received.append)
        bus.publish(SampleEvent())

        assert received == []
        assert bus.get_subscriber_count(SampleEvent) == 0

    def test_unsubscribe_unknown_handler_is_noop(self) -> None:
        """Test unsubscribing something never subscribed does nothing."""
        bus = EventBus()
        bus.unsubscribe(SampleEvent, print)
        assert bus.get_subscriber_count(SampleEvent) == 0

    def test_handler_exception_propagates(self) -> None:
        """Test that handler errors reach the publisher."""
        bus = EventBus()

        def failing(event: SampleEvent) -> None:
            raise RuntimeError("boom")

        bus.subscribe(SampleEvent, failing)
        with pytest.raises(RuntimeError, match="boom"):
            bus.publish(SampleEvent())

    def test_clear(self) -> None:
        """Test clearing removes all handlers."""
        bus = EventBus()
        bus.subscribe(SampleEvent, print)
        bus.subscribe(CollisionEvent, print)
        bus.clear()
        assert bus.get_subscriber_count(SampleEvent) == 0
        assert bus.get_subscriber_count(CollisionEvent) == 0


class TestEventEquality:
    """Test that event equality ignores timestamps."""

    def test_events_equal_despite_timestamp(self) -> None:
        """Test two events with the same fields compare equal."""
        a = CollisionEvent(step_index=1, aircraft_a=1, aircraft_b=2, timestamp=1.0)
        b = CollisionEvent(step_index=1, aircraft_a=1, aircraft_b=2, timestamp=2.0)
        assert a == b

    def test_events_differ_on_fields(self) -> None:
        """Test events with different fields are not equal."""
        a = StatusEvent(step_index=0, aircraft_id=1, band=FuelBand.EFFICIENT)
        b = StatusEvent(step_index=0, aircraft_id=1, band=FuelBand.MODERATE)
        assert a != b
