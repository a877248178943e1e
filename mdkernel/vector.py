"""Three-component vector primitive."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import DegenerateGeometryError

Scalar = Union[int, float, np.floating]


@dataclass(frozen=True)
class Vec3:
    """
    Immutable 3D vector of floats.

    Arithmetic is componentwise between vectors and broadcasts with scalars:

        >>> Vec3(1, 2, 3) * 2
        Vec3(x=2.0, y=4.0, z=6.0)
        >>> Vec3(1, 2, 3) * Vec3(2, 2, 2)
        Vec3(x=2.0, y=4.0, z=6.0)

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        """Coerce components to Python floats."""
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @classmethod
    def zero(cls) -> Vec3:
        """Return the zero vector."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, values: ArrayLike) -> Vec3:
        """Create a vector from any length-3 sequence or array."""
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape != (3,):
            raise ValueError(f"Vec3 needs 3 components, got shape {arr.shape}")
        return cls(arr[0], arr[1], arr[2])

    def to_array(self) -> NDArray[np.floating]:
        """Return the components as a float64 array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3 | Scalar) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        return Vec3(self.x + other, self.y + other, self.z + other)

    def __sub__(self, other: Vec3 | Scalar) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        return Vec3(self.x - other, self.y - other, self.z - other)

    def __mul__(self, other: Vec3 | Scalar) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: Scalar) -> Vec3:
        return self * other

    def __truediv__(self, other: Vec3 | Scalar) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x / other.x, self.y / other.y, self.z / other.z)
        return Vec3(self.x / other, self.y / other, self.z / other)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def sqr_magnitude(self) -> float:
        """Return the squared Euclidean norm."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def magnitude(self) -> float:
        """Return the Euclidean norm."""
        return math.sqrt(self.sqr_magnitude())

    def unit(self) -> Vec3:
        """
        Return the unit vector pointing along this vector.

        Raises:
            DegenerateGeometryError: If the vector has zero length.
        """
        norm = self.magnitude()
        if norm == 0.0:
            raise DegenerateGeometryError("cannot normalize a zero-length vector")
        return self / norm

    def is_finite(self) -> bool:
        """Return True if no component is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)


def dot(a: Vec3, b: Vec3) -> float:
    """Dot product."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Cross product."""
    return Vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def distance(a: Vec3, b: Vec3) -> float:
    """Euclidean distance between two points (no boundary applied)."""
    return (a - b).magnitude()


def angle(a: Vec3, b: Vec3) -> float:
    """
    Angle between two vectors in radians.

    The cosine is clamped to [-1, 1] so that rounding on (anti)parallel
    vectors cannot push arccos out of its domain.

    Raises:
        DegenerateGeometryError: If either vector has zero length.
    """
    norms = a.magnitude() * b.magnitude()
    if norms == 0.0:
        raise DegenerateGeometryError("angle is undefined for a zero-length vector")
    cosine = np.clip(dot(a, b) / norms, -1.0, 1.0)
    return float(np.arccos(cosine))
