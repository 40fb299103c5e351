"""Velocity-correction hooks.

After collisions are resolved, the engine offers each aircraft to a pilot
that may replace its velocity before the next step. A pilot is any callable
``(aircraft_id, velocity) -> Vector3 | None``; returning None keeps the
current velocity. Pilots driven by external input may return an awaitable,
in which case the engine must be run with its async entry points.

Pilots may also define ``begin_step(step_index)``, which the engine calls
before offering the first aircraft of each step. The engine is the only
thing that advances a ScriptedPilot's step.
"""

import logging
from collections.abc import Awaitable, Mapping
from typing import Any, Protocol, runtime_checkable

from airtraffic.physics.vectors import Vector3

logger = logging.getLogger(__name__)


@runtime_checkable
class VelocityCorrectionHook(Protocol):
    """Callable that may override an aircraft's velocity once per step."""

    def __call__(
        self, aircraft_id: int, velocity: Vector3
    ) -> Vector3 | None | Awaitable[Vector3 | None]: ...


class NoOpPilot:
    """Pilot that never changes anything."""

    def __call__(self, aircraft_id: int, velocity: Vector3) -> Vector3 | None:
        return None


def parse_corrections(data: Mapping[Any, Any] | None) -> dict[int, dict[int, Vector3]]:
    """Parse the ``corrections`` section of a scenario.

    Args:
        data: Mapping of step -> {aircraft id -> [vx, vy, vz]}. Keys may be
            strings holding integers, as produced by some YAML writers.

    Returns:
        Mapping of step index -> aircraft id -> velocity.

    Raises:
        ValueError: If a key is not an integer or a vector is malformed.
    """
    corrections: dict[int, dict[int, Vector3]] = {}
    for step, per_aircraft in (data or {}).items():
        if not isinstance(per_aircraft, Mapping):
            raise ValueError(f"Corrections for step {step!r} must be a mapping")
        parsed: dict[int, Vector3] = {}
        for aircraft_id, velocity in per_aircraft.items():
            try:
                parsed[int(aircraft_id)] = Vector3.from_sequence(velocity)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Correction [{step!r}][{aircraft_id!r}] is invalid: {e}") from e
        try:
            corrections[int(step)] = parsed
        except (TypeError, ValueError) as e:
            raise ValueError(f"Correction step {step!r} is not an integer") from e
    return corrections


class ScriptedPilot:
    """Pilot that replays a fixed schedule of velocity corrections.

    Corrections are keyed by step index, then by aircraft id. Aircraft or
    steps without an entry keep their velocity. Duplicate aircraft ids in
    the registry receive the same correction.

    Examples:
        >>> pilot = ScriptedPilot({2: {1: Vector3(0.0, 1.0, 0.0)}})
        >>> pilot.begin_step(2)
        >>> pilot(1, Vector3(1.0, 0.0, 0.0))
        Vector3(x=0.0, y=1.0, z=0.0)
    """

    def __init__(self, corrections: Mapping[int, Mapping[int, Vector3]] | None = None) -> None:
        """Initialize with a correction schedule.

        Args:
            corrections: Mapping of step index -> aircraft id -> new velocity.
        """
        self._corrections = {
            step: dict(per_aircraft) for step, per_aircraft in (corrections or {}).items()
        }
        self._step = 0
        self.applied = 0

    @classmethod
    def from_config(cls, data: Mapping[Any, Any] | None) -> "ScriptedPilot":
        """Build a pilot from the ``corrections`` section of a scenario.

        Args:
            data: Mapping of step -> {aircraft id -> [vx, vy, vz]}. Keys may be
                strings holding integers, as produced by some YAML writers.

        Returns:
            ScriptedPilot instance.

        Raises:
            ValueError: If a key is not an integer or a vector is malformed.
        """
        return cls(parse_corrections(data))

    @property
    def steps(self) -> list[int]:
        """Step indices that carry at least one correction."""
        return sorted(self._corrections)

    def begin_step(self, step_index: int) -> None:
        """Select the schedule entry for the step about to be offered."""
        self._step = step_index

    def __call__(self, aircraft_id: int, velocity: Vector3) -> Vector3 | None:
        correction = self._corrections.get(self._step, {}).get(aircraft_id)
        if correction is None:
            return None

        logger.info(
            "Step %d: aircraft %d velocity %s -> %s", self._step, aircraft_id, velocity, correction
        )
        self.applied += 1
        return correction
