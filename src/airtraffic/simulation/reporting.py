"""Event stream consumers.

EventLogger writes every simulation event to the log. RunSummary keeps
running totals that the command line prints at the end of a run.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field

from airtraffic.core.event_bus import EventBus, EventPriority
from airtraffic.core.logging_system import get_logger
from airtraffic.simulation.events import CollisionEvent, SimulationEvent, StatusEvent
from airtraffic.simulation.fuel import FuelBand


class EventLogger:
    """Logs simulation events as they are published."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize the logger.

        Args:
            logger: Destination logger. Defaults to the "events" component logger.
        """
        self._log = logger or get_logger("events")

    def attach(self, bus: EventBus) -> None:
        """Subscribe to every simulation event on a bus."""
        bus.subscribe(SimulationEvent, self.handle, EventPriority.LOW)

    def handle(self, event: SimulationEvent) -> None:
        """Log one event: collisions at WARNING, fuel statuses at INFO."""
        if isinstance(event, CollisionEvent):
            self._log.warning(
                "[step %d] Collision detected between aircraft %d and %d",
                event.step_index,
                event.aircraft_a,
                event.aircraft_b,
            )
        elif isinstance(event, StatusEvent):
            self._log.info(
                "[step %d] Aircraft %d fuel efficiency: %s",
                event.step_index,
                event.aircraft_id,
                event.band.value,
            )


@dataclass
class RunSummary:
    """Aggregates of one run's event stream.

    Aircraft ids need not be unique, so per-aircraft results are kept in
    registration order rather than keyed by id.

    Attributes:
        steps: Number of distinct steps seen.
        collisions: Number of collision events.
        collision_pairs: Collision count per (aircraft_a, aircraft_b).
        final_statuses: Status events of the most recent step, one per aircraft.
    """

    steps: int = 0
    collisions: int = 0
    collision_pairs: Counter = field(default_factory=Counter)
    final_statuses: list[StatusEvent] = field(default_factory=list)
    _last_step: int | None = field(default=None, repr=False)
    _status_step: int | None = field(default=None, repr=False)

    def attach(self, bus: EventBus) -> None:
        """Subscribe to every simulation event on a bus."""
        bus.subscribe(SimulationEvent, self.record)

    def record(self, event: SimulationEvent) -> None:
        """Fold one event into the summary."""
        if event.step_index != self._last_step:
            self.steps += 1
            self._last_step = event.step_index

        if isinstance(event, CollisionEvent):
            self.collisions += 1
            self.collision_pairs[(event.aircraft_a, event.aircraft_b)] += 1
        elif isinstance(event, StatusEvent):
            if event.step_index != self._status_step:
                self.final_statuses = []
                self._status_step = event.step_index
            self.final_statuses.append(event)

    @property
    def final_bands(self) -> dict[int, FuelBand]:
        """Last reported band per aircraft id; shared ids keep the last aircraft's band."""
        return {status.aircraft_id: status.band for status in self.final_statuses}

    def band_counts(self) -> dict[FuelBand, int]:
        """Count aircraft per final fuel band, in band order."""
        counts = Counter(status.band for status in self.final_statuses)
        return {band: counts.get(band, 0) for band in FuelBand}
