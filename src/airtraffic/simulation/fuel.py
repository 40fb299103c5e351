"""Fuel consumption and fuel-efficiency classification.

Fuel burn is linear in the L1 norm of velocity, independent of the
distance actually covered, and has no floor.

Typical usage:
    from airtraffic.simulation.fuel import burn_fuel, classify_fuel

    burn_fuel(aircraft)
    band = classify_fuel(aircraft.fuel)
"""

from enum import Enum

from airtraffic.airspace.aircraft import Aircraft
from airtraffic.physics.vectors import Vector3

BURN_RATE = 0.1  # fuel units per unit of |vx| + |vy| + |vz|
EFFICIENT_ABOVE = 4000.0
MODERATE_ABOVE = 2000.0


class FuelBand(Enum):
    """Fuel-efficiency bands, ordered from most to least fuel."""

    EFFICIENT = "Efficient"  # fuel > 4000
    MODERATE = "Moderate"  # 2000 < fuel <= 4000
    INEFFICIENT = "Inefficient"  # fuel <= 2000


def fuel_consumption(velocity: Vector3, burn_rate: float = BURN_RATE) -> float:
    """Calculate fuel burned in one step at a given velocity.

    Args:
        velocity: Velocity held during the step.
        burn_rate: Fuel per unit of L1 velocity.

    Returns:
        Fuel consumed (non-negative).

    Examples:
        >>> fuel_consumption(Vector3(1.0, -2.0, 0.0))
        0.30000000000000004
    """
    return burn_rate * velocity.l1_norm()


def burn_fuel(aircraft: Aircraft, burn_rate: float = BURN_RATE) -> float:
    """Deduct one step of fuel from an aircraft.

    Applied regardless of the current fuel level, so fuel can go negative.

    Returns:
        Fuel consumed.
    """
    consumed = fuel_consumption(aircraft.velocity, burn_rate)
    aircraft.fuel -= consumed
    return consumed


def classify_fuel(fuel: float) -> FuelBand:
    """Classify a fuel level into its band.

    Upper bounds are inclusive: exactly 4000.0 is MODERATE and exactly
    2000.0 is INEFFICIENT.

    Args:
        fuel: Current fuel level.

    Returns:
        FuelBand for this level.
    """
    if fuel > EFFICIENT_ABOVE:
        return FuelBand.EFFICIENT
    elif fuel > MODERATE_ABOVE:
        return FuelBand.MODERATE
    else:
        return FuelBand.INEFFICIENT
