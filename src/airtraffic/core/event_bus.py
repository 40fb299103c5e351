"""Event bus for synchronous simulation event dispatch.

This module provides a priority-based event bus. Handlers subscribe to an
event class and receive instances of that class and of its subclasses, so
subscribing to a common base class yields the whole stream in emission order.

Typical usage example:
    from airtraffic.core.event_bus import EventBus, EventPriority
    from airtraffic.simulation.events import SimulationEvent

    bus = EventBus()
    bus.subscribe(SimulationEvent, handler_func, EventPriority.HIGH)
    bus.publish(CollisionEvent(step_index=0, aircraft_a=1, aircraft_b=2))
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class EventPriority(Enum):
    """Priority levels for event handlers.

    Handlers are executed in order from CRITICAL to LOW.
    """

    CRITICAL = auto()  # executed first
    HIGH = auto()
    NORMAL = auto()
    LOW = auto()


@dataclass
class Event:
    """Base class for all events.

    The timestamp is informational and does not take part in equality.

    Attributes:
        timestamp: Unix timestamp when the event was created.
    """

    timestamp: float = field(default_factory=time.time, compare=False, repr=False)


class EventBus:
    """Central event bus for synchronous event dispatch.

    Handlers are called synchronously, ordered by priority. A handler
    subscribed to a base class sees every subclass event.

    Examples:
        >>> bus = EventBus()
        >>> bus.subscribe(CollisionEvent, lambda e: print(e.aircraft_a))
        >>> bus.publish(CollisionEvent(step_index=0, aircraft_a=1, aircraft_b=2))
        1
    """

    def __init__(self) -> None:
        """Initialize an empty event bus."""
        self._handlers: dict[type[Event], list[tuple[Callable[[Any], None], EventPriority]]] = {}

    def subscribe(
        self,
        event_type: type[Event],
        handler: Callable[[Any], None],
        priority: EventPriority = EventPriority.NORMAL,
    ) -> None:
        """Subscribe a handler to an event type and its subclasses.

        Args:
            event_type: The class of event to subscribe to.
            handler: Callable that accepts the event as its only parameter.
            priority: Priority level for this handler. Defaults to NORMAL.
        """
        handlers = self._handlers.setdefault(event_type, [])
        handlers.append((handler, priority))

        # Stable sort keeps subscription order within a priority level
        handlers.sort(key=lambda x: x[1].value)

    def unsubscribe(self, event_type: type[Event], handler: Callable[[Any], None]) -> None:
        """Unsubscribe a handler from an event type.

        If the handler is not subscribed, this is a no-op.

        Args:
            event_type: The event type to unsubscribe from.
            handler: The handler function to remove.
        """
        if event_type in self._handlers:
            self._handlers[event_type] = [
                (h, p) for h, p in self._handlers[event_type] if h != handler
            ]

            if not self._handlers[event_type]:
                del self._handlers[event_type]

    def publish(self, event: Event) -> None:
        """Publish an event to all matching subscribers.

        Handlers registered on the event's own class and on each of its
        Event base classes are merged and called in priority order. A
        handler exception propagates to the caller.

        Args:
            event: The event to publish.
        """
        matched: list[tuple[Callable[[Any], None], EventPriority]] = []
        for cls in type(event).__mro__:
            if isinstance(cls, type) and issubclass(cls, Event) and cls in self._handlers:
                matched.extend(self._handlers[cls])

        matched.sort(key=lambda x: x[1].value)
        for handler, _ in matched:
            handler(event)

    def clear(self) -> None:
        """Remove all event handlers."""
        self._handlers.clear()

    def get_subscriber_count(self, event_type: type[Event]) -> int:
        """Get the number of handlers subscribed directly to an event type.

        Args:
            event_type: The event type to query.

        Returns:
            Number of handlers subscribed to this event type.
        """
        return len(self._handlers.get(event_type, []))
