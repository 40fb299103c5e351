"""Events produced by the simulation engine.

One ordered stream per run: for each step, collision events in pair order
followed by one status event per aircraft in registration order.
"""

from dataclasses import dataclass

from airtraffic.core.event_bus import Event
from airtraffic.simulation.fuel import FuelBand


@dataclass
class SimulationEvent(Event):
    """Base class for events emitted during a simulation step.

    Attributes:
        step_index: Zero-based index of the step that produced the event.
    """

    step_index: int = 0


@dataclass
class CollisionEvent(SimulationEvent):
    """Two aircraft came closer than the collision threshold.

    Attributes:
        aircraft_a: Id of the earlier-registered aircraft of the pair.
        aircraft_b: Id of the later-registered aircraft of the pair.
    """

    aircraft_a: int = 0
    aircraft_b: int = 0


@dataclass
class StatusEvent(SimulationEvent):
    """Fuel band of an aircraft at the end of a step."""

    aircraft_id: int = 0
    band: FuelBand = FuelBand.EFFICIENT
