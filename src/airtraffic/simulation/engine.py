"""Discrete-time simulation engine for the airspace.

Each step runs a fixed sequence of registry-wide passes:

1. Position integration (``position += velocity``, unit time step).
2. Fuel depletion, proportional to the L1 norm of velocity.
3. Collision detection and resolution, pairs in registration order.
4. Velocity corrections offered to the pilot hook, one aircraft at a time.
5. Fuel-band classification, one status event per aircraft.

A step is all-or-nothing: if any pass raises, aircraft state is restored
to what it was before the step and no events from that step are published.
Events are published only once the step has committed; a failing bus
handler then raises EventDeliveryError without undoing the step.

Typical usage example:
    from airtraffic.simulation.engine import SimulationEngine

    engine = SimulationEngine(registry, pilot=ScriptedPilot(corrections))
    events = engine.run(steps=10)
"""

import inspect
import logging
from enum import Enum
from typing import Any

from airtraffic.airspace.registry import AirspaceRegistry
from airtraffic.core.event_bus import EventBus
from airtraffic.physics.vectors import Vector3
from airtraffic.simulation.collision import COLLISION_THRESHOLD, CollisionDetector
from airtraffic.simulation.events import CollisionEvent, SimulationEvent, StatusEvent
from airtraffic.simulation.fuel import BURN_RATE, burn_fuel, classify_fuel
from airtraffic.simulation.pilots import NoOpPilot, VelocityCorrectionHook

logger = logging.getLogger(__name__)


class SimulationError(Exception):
    """Raised when a simulation step cannot be executed."""


class EventDeliveryError(SimulationError):
    """Raised when an event handler fails after a step has been committed.

    The step is not rolled back. Every event of the step was still offered
    to the bus.

    Attributes:
        events: The step's events, as run_step() would have returned them.
    """

    def __init__(self, message: str, events: list[SimulationEvent]) -> None:
        super().__init__(message)
        self.events = events


class EngineState(Enum):
    """Engine lifecycle."""

    IDLE = "idle"  # not yet run
    RUNNING = "running"
    FINISHED = "finished"  # finished steps_completed steps


class SimulationEngine:
    """Drives the per-step pipeline over an airspace registry.

    The engine holds no state between steps other than the registry and a
    step counter. Events are returned from each call and published on the
    engine's event bus once their step has completed.

    Attributes:
        registry: Aircraft being simulated. Owned by the engine during a run.
        pilot: Velocity-correction hook.
        event_bus: Bus receiving every SimulationEvent.
        burn_rate: Fuel per unit of L1 velocity per step.
        state: Current lifecycle state.
        steps_completed: Number of steps fully executed.
    """

    def __init__(
        self,
        registry: AirspaceRegistry,
        pilot: VelocityCorrectionHook | None = None,
        event_bus: EventBus | None = None,
        collision_threshold: float = COLLISION_THRESHOLD,
        burn_rate: float = BURN_RATE,
    ) -> None:
        """Initialize the engine.

        Args:
            registry: Airspace registry to simulate.
            pilot: Velocity-correction hook. Defaults to a no-op pilot.
            event_bus: Bus to publish events on. A private bus is created if None.
            collision_threshold: Distance below which two aircraft conflict.
            burn_rate: Fuel per unit of L1 velocity per step.
        """
        self.registry = registry
        self.pilot: VelocityCorrectionHook = pilot if pilot is not None else NoOpPilot()
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.detector = CollisionDetector(collision_threshold)
        self.burn_rate = burn_rate

        self.state = EngineState.IDLE
        self.steps_completed = 0

    def run(self, steps: int) -> list[SimulationEvent]:
        """Run a number of steps with a synchronous pilot.

        Args:
            steps: Number of steps, >= 0. Zero performs no passes.

        Returns:
            All events emitted, in order.

        Raises:
            ValueError: If steps is negative.
            SimulationError: If the pilot is asynchronous or returns an awaitable.
        """
        self._check_steps(steps)
        if steps and is_async_pilot(self.pilot):
            raise SimulationError("Pilot is asynchronous; use run_async()")

        logger.info("Running %d steps over %d aircraft", steps, self.registry.count)

        events: list[SimulationEvent] = []
        for _ in range(steps):
            events.extend(self.run_step())
        return events

    async def run_async(self, steps: int) -> list[SimulationEvent]:
        """Run a number of steps, awaiting the pilot where it returns an awaitable.

        Args:
            steps: Number of steps, >= 0.

        Returns:
            All events emitted, in order.

        Raises:
            ValueError: If steps is negative.
        """
        self._check_steps(steps)
        logger.info("Running %d steps over %d aircraft (async)", steps, self.registry.count)

        events: list[SimulationEvent] = []
        for _ in range(steps):
            events.extend(await self.run_step_async())
        return events

    def run_step(self) -> list[SimulationEvent]:
        """Execute one step with a synchronous pilot.

        Returns:
            Events for this step: collisions in pair order, then statuses.

        Raises:
            SimulationError: If the pilot returns an awaitable. The step is
                rolled back.
            EventDeliveryError: If a bus handler fails after the step committed.
        """
        step_index = self.steps_completed
        snapshot = self._begin_step()

        try:
            collisions = self._physics_passes(step_index)

            corrections = []
            self._notify_pilot(step_index)
            for aircraft in self.registry:
                result = self.pilot(aircraft.id, aircraft.velocity)
                if inspect.isawaitable(result):
                    if inspect.iscoroutine(result):
                        result.close()
                    raise SimulationError(
                        "Pilot returned an awaitable; use run_step_async() for asynchronous pilots"
                    )
                corrections.append(result)

            events = self._finish_step(step_index, collisions, corrections)

        except BaseException:
            self._rollback(snapshot)
            raise

        self._publish(events)
        return events

    async def run_step_async(self) -> list[SimulationEvent]:
        """Execute one step, awaiting the pilot for each aircraft in turn.

        The pipeline order is the same as run_step(); the pilot may suspend
        the step while waiting on external input.

        Returns:
            Events for this step.
        """
        step_index = self.steps_completed
        snapshot = self._begin_step()

        try:
            collisions = self._physics_passes(step_index)

            corrections = []
            self._notify_pilot(step_index)
            for aircraft in self.registry:
                result: Any = self.pilot(aircraft.id, aircraft.velocity)
                if inspect.isawaitable(result):
                    result = await result
                corrections.append(result)

            events = self._finish_step(step_index, collisions, corrections)

        except BaseException:
            self._rollback(snapshot)
            raise

        self._publish(events)
        return events

    def _check_steps(self, steps: int) -> None:
        if isinstance(steps, bool) or not isinstance(steps, int) or steps < 0:
            raise ValueError(f"Number of steps must be a non-negative integer, got: {steps!r}")

    def _begin_step(self) -> tuple[EngineState, list[tuple[Vector3, Vector3, float]]]:
        previous_state = self.state
        self.state = EngineState.RUNNING
        states = [(ac.position, ac.velocity, ac.fuel) for ac in self.registry]
        return previous_state, states

    def _rollback(self, snapshot: tuple[EngineState, list[tuple[Vector3, Vector3, float]]]) -> None:
        previous_state, states = snapshot
        for aircraft, (position, velocity, fuel) in zip(self.registry, states):
            aircraft.position = position
            aircraft.velocity = velocity
            aircraft.fuel = fuel
        self.state = previous_state
        logger.error("Step %d aborted; aircraft state restored", self.steps_completed)

    def _physics_passes(self, step_index: int) -> list[CollisionEvent]:
        """Integrate positions, burn fuel, then detect and resolve collisions."""
        for aircraft in self.registry:
            aircraft.position = aircraft.position + aircraft.velocity

        for aircraft in self.registry:
            burn_fuel(aircraft, self.burn_rate)

        return [
            CollisionEvent(
                step_index=step_index,
                aircraft_a=conflict.aircraft_a.id,
                aircraft_b=conflict.aircraft_b.id,
            )
            for conflict in self.detector.detect_and_resolve(self.registry)
        ]

    def _notify_pilot(self, step_index: int) -> None:
        begin_step = getattr(self.pilot, "begin_step", None)
        if callable(begin_step):
            begin_step(step_index)

    def _finish_step(
        self,
        step_index: int,
        collisions: list[CollisionEvent],
        corrections: list[Vector3 | None],
    ) -> list[SimulationEvent]:
        """Apply pilot corrections and classify fuel."""
        for aircraft, correction in zip(self.registry, corrections):
            if correction is not None and not isinstance(correction, Vector3):
                raise SimulationError(
                    f"Pilot returned {type(correction).__name__} for aircraft {aircraft.id}, "
                    "expected Vector3 or None"
                )

        for aircraft, correction in zip(self.registry, corrections):
            if correction is not None:
                aircraft.velocity = correction

        events: list[SimulationEvent] = list(collisions)
        events.extend(
            StatusEvent(step_index=step_index, aircraft_id=ac.id, band=classify_fuel(ac.fuel))
            for ac in self.registry
        )

        self.steps_completed += 1
        self.state = EngineState.FINISHED
        logger.debug(
            "Step %d complete: %d collisions, %d aircraft",
            step_index,
            len(collisions),
            self.registry.count,
        )
        return events

    def _publish(self, events: list[SimulationEvent]) -> None:
        """Deliver a committed step's events, raising after all were offered."""
        failure: Exception | None = None
        for event in events:
            try:
                self.event_bus.publish(event)
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.exception("Event handler failed for %s", type(event).__name__)
                if failure is None:
                    failure = e

        if failure is not None:
            raise EventDeliveryError(
                f"Step {self.steps_completed - 1} committed; event handler failed: {failure}",
                events,
            ) from failure


def is_async_pilot(pilot: Any) -> bool:
    """Check whether a pilot must be awaited.

    Args:
        pilot: Function or callable object.

    Returns:
        True if the pilot (or its __call__) is a coroutine function.
    """
    if inspect.iscoroutinefunction(pilot):
        return True
    return inspect.iscoroutinefunction(getattr(pilot, "__call__", None))
