"""Simulation package.

Provides the per-step simulation engine, its collision and fuel rules,
velocity-correction pilots and the events the engine emits.
"""

from airtraffic.simulation.collision import COLLISION_THRESHOLD, CollisionDetector, Conflict
from airtraffic.simulation.engine import (
    EngineState,
    EventDeliveryError,
    SimulationEngine,
    SimulationError,
)
from airtraffic.simulation.events import CollisionEvent, SimulationEvent, StatusEvent
from airtraffic.simulation.fuel import FuelBand, burn_fuel, classify_fuel, fuel_consumption
from airtraffic.simulation.pilots import (
    NoOpPilot,
    ScriptedPilot,
    VelocityCorrectionHook,
    parse_corrections,
)

__all__ = [
    "COLLISION_THRESHOLD",
    "CollisionDetector",
    "CollisionEvent",
    "Conflict",
    "EngineState",
    "EventDeliveryError",
    "FuelBand",
    "NoOpPilot",
    "ScriptedPilot",
    "SimulationEngine",
    "SimulationError",
    "SimulationEvent",
    "StatusEvent",
    "VelocityCorrectionHook",
    "burn_fuel",
    "classify_fuel",
    "fuel_consumption",
    "parse_corrections",
]
