"""Pairwise collision detection and resolution.

Every unordered pair of aircraft is checked once per step, in registration
order (i < j). A pair closer than the threshold is resolved by reversing
both velocities. Positions are left alone, so a pair that does not separate
within one step is flagged and reversed again on the next step.

Typical usage:
    from airtraffic.simulation.collision import CollisionDetector

    detector = CollisionDetector(threshold=1.0)
    for conflict in detector.detect_and_resolve(registry):
        print(conflict.aircraft_a.id, conflict.aircraft_b.id)
"""

import logging
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from airtraffic.airspace.aircraft import Aircraft
from airtraffic.airspace.registry import AirspaceRegistry

logger = logging.getLogger(__name__)

COLLISION_THRESHOLD = 1.0


@dataclass
class Conflict:
    """A pair of aircraft found within the collision threshold.

    Attributes:
        index_a: Registry index of the first aircraft (lower index).
        index_b: Registry index of the second aircraft.
        aircraft_a: First aircraft.
        aircraft_b: Second aircraft.
        distance: Euclidean distance between them when detected.
    """

    index_a: int
    index_b: int
    aircraft_a: Aircraft
    aircraft_b: Aircraft
    distance: float


def pairwise_distances(positions: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Compute the Euclidean distance matrix for an (n, 3) position array.

    Args:
        positions: Array of positions, one row per aircraft.

    Returns:
        Symmetric (n, n) array of distances.
    """
    diff = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
    return np.sqrt(np.sum(diff * diff, axis=-1))


def reverse_velocity(aircraft: Aircraft) -> None:
    """Negate an aircraft's velocity component-wise."""
    aircraft.velocity = -aircraft.velocity


class CollisionDetector:
    """Detects and resolves proximity conflicts across the registry.

    Examples:
        >>> detector = CollisionDetector()
        >>> conflicts = detector.detect_and_resolve(registry)
    """

    def __init__(self, threshold: float = COLLISION_THRESHOLD) -> None:
        """Initialize the detector.

        Args:
            threshold: Distance strictly below which two aircraft conflict.

        Raises:
            ValueError: If threshold is negative.
        """
        if threshold < 0:
            raise ValueError(f"Collision threshold must be non-negative, got: {threshold}")
        self.threshold = threshold

    def detect(self, registry: AirspaceRegistry) -> list[Conflict]:
        """Find all conflicting pairs without modifying any aircraft.

        Args:
            registry: Airspace registry to scan.

        Returns:
            Conflicts in lexicographic (i, j) order.
        """
        if registry.count < 2:
            return []

        distances = pairwise_distances(registry.positions_array())
        conflicts = []

        for i in range(registry.count):
            for j in range(i + 1, registry.count):
                distance = float(distances[i, j])
                if distance < self.threshold:
                    conflicts.append(
                        Conflict(
                            index_a=i,
                            index_b=j,
                            aircraft_a=registry.get(i),
                            aircraft_b=registry.get(j),
                            distance=distance,
                        )
                    )

        return conflicts

    def detect_and_resolve(self, registry: AirspaceRegistry) -> list[Conflict]:
        """Find conflicting pairs and reverse both velocities of each.

        Reversals are applied pair by pair in order, so an aircraft in two
        conflicts in the same step ends up with its original velocity.

        Args:
            registry: Airspace registry to scan and update.

        Returns:
            Conflicts in lexicographic (i, j) order.
        """
        conflicts = self.detect(registry)

        for conflict in conflicts:
            logger.warning(
                "Collision detected between aircraft %d and %d (distance %.3f)",
                conflict.aircraft_a.id,
                conflict.aircraft_b.id,
                conflict.distance,
            )
            reverse_velocity(conflict.aircraft_a)
            reverse_velocity(conflict.aircraft_b)

        return conflicts
