"""Airspace package.

Provides aircraft records and the fixed-capacity registry that owns them.
"""

from airtraffic.airspace.aircraft import INITIAL_FUEL, Aircraft, AircraftSpec
from airtraffic.airspace.registry import (
    AircraftCountExceedsCapacityError,
    AirspaceRegistry,
    CapacityExceededError,
    IndexOutOfRangeError,
    InvalidCapacityError,
    RegistryError,
    build_registry,
)

__all__ = [
    "INITIAL_FUEL",
    "Aircraft",
    "AircraftCountExceedsCapacityError",
    "AircraftSpec",
    "AirspaceRegistry",
    "CapacityExceededError",
    "IndexOutOfRangeError",
    "InvalidCapacityError",
    "RegistryError",
    "build_registry",
]
