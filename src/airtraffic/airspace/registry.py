"""Fixed-capacity registry of aircraft in the simulated airspace.

The registry owns every aircraft record for the duration of a run. It is
bounds-checked: registration past capacity and lookups past the current
count raise errors instead of touching storage.

Typical usage example:
    from airtraffic.airspace.registry import AirspaceRegistry

    registry = AirspaceRegistry(capacity=4)
    index = registry.register(spec)
    aircraft = registry.get(index)
"""

import logging
from collections.abc import Iterator, Sequence

import numpy as np
import numpy.typing as npt

from airtraffic.airspace.aircraft import INITIAL_FUEL, Aircraft, AircraftSpec

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when registry operations fail."""


class InvalidCapacityError(RegistryError, ValueError):
    """Raised when a registry is created with a non-positive capacity."""


class CapacityExceededError(RegistryError):
    """Raised when registering into a full registry."""


class IndexOutOfRangeError(RegistryError, IndexError):
    """Raised when looking up an index outside the registered range."""


class AircraftCountExceedsCapacityError(RegistryError, ValueError):
    """Raised when a run asks for more aircraft than the declared capacity."""


class AirspaceRegistry:
    """Ordered, fixed-capacity collection of aircraft.

    Insertion order is iteration order. There is no removal operation.

    Examples:
        >>> registry = AirspaceRegistry(capacity=2)
        >>> registry.register(AircraftSpec(1, Vector3.zero(), Vector3.zero()))
        0
        >>> registry.count
        1
    """

    def __init__(self, capacity: int, initial_fuel: float = INITIAL_FUEL) -> None:
        """Initialize an empty registry.

        Args:
            capacity: Maximum number of aircraft. Must be a positive integer.
            initial_fuel: Fuel given to each registered aircraft.

        Raises:
            InvalidCapacityError: If capacity is not a positive integer.
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise InvalidCapacityError(f"Capacity must be a positive integer, got: {capacity!r}")

        self._capacity = capacity
        self._initial_fuel = initial_fuel
        self._aircraft: list[Aircraft] = []

        logger.debug("Created airspace registry with capacity %d", capacity)

    @property
    def capacity(self) -> int:
        """Maximum number of aircraft."""
        return self._capacity

    @property
    def count(self) -> int:
        """Number of registered aircraft."""
        return len(self._aircraft)

    @property
    def is_full(self) -> bool:
        """Whether no further aircraft can be registered."""
        return self.count >= self._capacity

    def register(self, spec: AircraftSpec) -> int:
        """Register a new aircraft at the end of the registry.

        Args:
            spec: Initial aircraft parameters.

        Returns:
            Index assigned to the new aircraft.

        Raises:
            CapacityExceededError: If the registry is full. The registry is
                left unchanged.
        """
        if self.is_full:
            raise CapacityExceededError(
                f"Cannot register aircraft {spec.id}: registry is full ({self._capacity})"
            )

        self._aircraft.append(Aircraft.from_spec(spec, fuel=self._initial_fuel))
        index = len(self._aircraft) - 1

        logger.info("Registered aircraft %d at index %d", spec.id, index)
        return index

    def get(self, index: int) -> Aircraft:
        """Get the aircraft stored at an index.

        Args:
            index: Registration index, 0 <= index < count.

        Returns:
            The live aircraft record (mutations are visible to the registry).

        Raises:
            IndexOutOfRangeError: If index is outside the registered range.
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < self.count:
            raise IndexOutOfRangeError(f"Aircraft index out of range: {index!r} (count={self.count})")

        return self._aircraft[index]

    def iterate(self) -> Iterator[Aircraft]:
        """Iterate over live aircraft records in registration order."""
        return iter(self._aircraft)

    def positions_array(self) -> npt.NDArray[np.float64]:
        """Get current positions as an (n, 3) array, in registration order."""
        if not self._aircraft:
            return np.empty((0, 3), dtype=np.float64)
        return np.array([ac.position.to_array() for ac in self._aircraft], dtype=np.float64)

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[Aircraft]:
        return self.iterate()

    def __repr__(self) -> str:
        return f"AirspaceRegistry(count={self.count}, capacity={self._capacity})"


def build_registry(
    capacity: int,
    specs: Sequence[AircraftSpec],
    initial_fuel: float = INITIAL_FUEL,
) -> AirspaceRegistry:
    """Create a registry and register every spec, in order.

    The aircraft count is checked against capacity before anything is
    created.

    Args:
        capacity: Registry capacity.
        specs: Aircraft to register.
        initial_fuel: Fuel given to each aircraft.

    Returns:
        Populated registry.

    Raises:
        InvalidCapacityError: If capacity is not a positive integer.
        AircraftCountExceedsCapacityError: If there are more specs than capacity.
    """
    if isinstance(capacity, int) and not isinstance(capacity, bool) and len(specs) > capacity:
        raise AircraftCountExceedsCapacityError(
            f"Number of aircraft ({len(specs)}) exceeds capacity ({capacity})"
        )

    registry = AirspaceRegistry(capacity, initial_fuel=initial_fuel)
    for spec in specs:
        registry.register(spec)

    return registry
