"""Vector mathematics for aircraft kinematics.

This module provides the 3D vector type used for aircraft positions and
velocities, plus the distance and norm helpers the simulation pipeline needs.

Typical usage example:
    from airtraffic.physics.vectors import Vector3

    position = Vector3(100.0, 500.0, 200.0)
    velocity = Vector3(1.0, 0.0, -0.5)
    position = position + velocity
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt


@dataclass(frozen=True)
class Vector3:
    """3D vector with the operations used by the airspace simulation.

    Represents either a point (position) or a displacement per step
    (velocity). Instances are immutable; every operation returns a new
    vector.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.

    Examples:
        >>> v1 = Vector3(1.0, 2.0, 3.0)
        >>> v2 = Vector3(4.0, 5.0, 6.0)
        >>> v1 + v2
        Vector3(x=5.0, y=7.0, z=9.0)
    """

    x: float
    y: float
    z: float

    def __add__(self, other: "Vector3") -> "Vector3":
        """Add two vectors component-wise."""
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        """Subtract two vectors component-wise."""
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3":
        """Multiply vector by scalar.

        Args:
            scalar: Scalar value.

        Returns:
            Scaled vector.
        """
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> "Vector3":
        return self.__mul__(scalar)

    def __neg__(self) -> "Vector3":
        """Negate vector component-wise (reverse direction).

        Returns:
            Negated vector.

        Examples:
            >>> -Vector3(1.0, -2.0, 0.5)
            Vector3(x=-1.0, y=2.0, z=-0.5)
        """
        return Vector3(-self.x, -self.y, -self.z)

    def magnitude(self) -> float:
        """Calculate the Euclidean length of the vector.

        Examples:
            >>> Vector3(3.0, 4.0, 0.0).magnitude()
            5.0
        """
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def l1_norm(self) -> float:
        """Calculate the sum of absolute components (Manhattan length).

        Fuel burn is proportional to this value, not to the Euclidean
        length.

        Examples:
            >>> Vector3(1.0, -2.0, 0.5).l1_norm()
            3.5
        """
        return abs(self.x) + abs(self.y) + abs(self.z)

    def distance_to(self, other: "Vector3") -> float:
        """Calculate Euclidean distance to another point.

        Args:
            other: Other vector (point).

        Returns:
            Euclidean distance.

        Examples:
            >>> Vector3(0.0, 0.0, 0.0).distance_to(Vector3(3.0, 4.0, 0.0))
            5.0
        """
        return (self - other).magnitude()

    def to_array(self) -> npt.NDArray[np.float64]:
        """Convert to numpy array [x, y, z]."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_list(self) -> list[float]:
        """Convert to a plain list, suitable for YAML output."""
        return [self.x, self.y, self.z]

    @classmethod
    def from_array(cls, arr: npt.NDArray[np.float64]) -> "Vector3":
        """Create vector from numpy array.

        Args:
            arr: Numpy array with at least 3 elements.

        Returns:
            Vector3 instance.
        """
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Vector3":
        """Create vector from a 3-element sequence such as a YAML list.

        Args:
            values: Sequence of exactly three numbers.

        Returns:
            Vector3 instance.

        Raises:
            ValueError: If the sequence does not have exactly 3 elements.

        Examples:
            >>> Vector3.from_sequence([1, 2, 3])
            Vector3(x=1.0, y=2.0, z=3.0)
        """
        if isinstance(values, (str, bytes)) or len(values) != 3:
            raise ValueError(f"Expected 3 components, got: {values!r}")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    @classmethod
    def zero(cls) -> "Vector3":
        """Create a zero vector (0, 0, 0)."""
        return cls(0.0, 0.0, 0.0)

    def __str__(self) -> str:
        """String representation of the vector."""
        return f"Vector3(x={self.x:.2f}, y={self.y:.2f}, z={self.z:.2f})"

    def __repr__(self) -> str:
        """Detailed representation of the vector."""
        return f"Vector3(x={self.x}, y={self.y}, z={self.z})"
