"""Aircraft records tracked by the airspace registry."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from airtraffic.physics.vectors import Vector3

INITIAL_FUEL = 5000.0


@dataclass(frozen=True)
class AircraftSpec:
    """Initial parameters for an aircraft, supplied by the data-entry side.

    Attributes:
        id: Caller-chosen identifier. Not required to be unique.
        position: Initial position.
        velocity: Initial velocity (displacement per step).
    """

    id: int
    position: Vector3
    velocity: Vector3

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AircraftSpec":
        """Build a spec from a scenario mapping.

        Args:
            data: Mapping with ``id``, ``position`` and ``velocity`` keys,
                vectors given as 3-element lists.

        Returns:
            AircraftSpec instance.

        Raises:
            KeyError: If a key is missing.
            ValueError: If a vector is malformed or the id is not an integer.

        Examples:
            >>> AircraftSpec.from_dict({"id": 7, "position": [0, 0, 0], "velocity": [1, 0, 0]})
        """
        aircraft_id = data["id"]
        if isinstance(aircraft_id, bool) or not isinstance(aircraft_id, int):
            raise ValueError(f"Aircraft id must be an integer, got: {aircraft_id!r}")

        return cls(
            id=aircraft_id,
            position=Vector3.from_sequence(data["position"]),
            velocity=Vector3.from_sequence(data["velocity"]),
        )


@dataclass
class Aircraft:
    """Simulated aircraft state.

    Mutated in place by the simulation engine every step.

    Attributes:
        id: Aircraft identifier.
        position: Current position.
        velocity: Current velocity.
        fuel: Remaining fuel. Has no floor and may go negative.
    """

    id: int
    position: Vector3
    velocity: Vector3
    fuel: float = INITIAL_FUEL

    @classmethod
    def from_spec(cls, spec: AircraftSpec, fuel: float = INITIAL_FUEL) -> "Aircraft":
        """Create a fresh aircraft from its spec."""
        return cls(
            id=spec.id,
            position=spec.position,
            velocity=spec.velocity,
            fuel=fuel,
        )

    def get_state(self) -> dict[str, Any]:
        """Get current aircraft state as a dictionary."""
        return {
            "id": self.id,
            "position": self.position.to_list(),
            "velocity": self.velocity.to_list(),
            "fuel": self.fuel,
        }
