"""Boundary geometries: how positions fold and how separations are measured."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..errors import ConfigurationError
from ..vector import Vec3


class BoundaryCondition(ABC):
    """
    Abstract topology of the simulation domain.

    A boundary condition knows how to bring a position back into the
    canonical domain and how to measure the separation between two positions
    under its topology.
    """

    @abstractmethod
    def fold(self, position: Vec3) -> Vec3:
        """Return the canonical image of a position."""
        ...

    @abstractmethod
    def separation(self, a: Vec3, b: Vec3) -> Vec3:
        """Return the vector pointing from b to a under this topology."""
        ...

    @property
    @abstractmethod
    def volume(self) -> float:
        """Return the domain volume."""
        ...

    @abstractmethod
    def image_count(self, position: Vec3) -> tuple[int, int, int]:
        """Return how many domain lengths a position lies outside, per axis."""
        ...

    def contains(self, position: Vec3) -> bool:
        """Return True if the position already lies in the canonical domain."""
        return self.image_count(position) == (0, 0, 0)

    def validate_cutoff(self, cutoff: float) -> None:
        """Check that an interaction cutoff is compatible with this geometry."""
        if cutoff <= 0:
            raise ConfigurationError(f"cutoff must be positive, got {cutoff}")


@dataclass(frozen=True)
class PeriodicBoundary(BoundaryCondition):
    """
    Orthorhombic periodic boundary with the minimum image convention.

    The canonical domain is [0, x] x [0, y] x [0, z], anchored at the origin.

    Attributes:
        x: Extent along the first axis.
        y: Extent along the second axis.
        z: Extent along the third axis.
    """

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        """Validate extents."""
        for axis, length in zip("xyz", (self.x, self.y, self.z)):
            if not length > 0 or not math.isfinite(length):
                raise ConfigurationError(
                    f"periodic extent {axis} must be positive and finite, got {length}"
                )
            object.__setattr__(self, axis, float(length))

    @classmethod
    def cubic(cls, length: float) -> PeriodicBoundary:
        """Create a cubic periodic boundary with given edge length."""
        return cls(length, length, length)

    @property
    def lengths(self) -> NDArray[np.floating]:
        """Return extents as an array [x, y, z]."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @property
    def volume(self) -> float:
        return self.x * self.y * self.z

    @staticmethod
    def _fold_axis(value: float, length: float) -> float:
        if 0.0 <= value <= length:
            return value
        return value - length * math.floor(value / length)

    def fold(self, position: Vec3) -> Vec3:
        """
        Fold a position into [0, x] x [0, y] x [0, z].

        One modulo per axis, so the fold terminates for any finite
        displacement. Positions already inside, including those sitting
        exactly on the upper edge, are returned unchanged.
        """
        return Vec3(
            self._fold_axis(position.x, self.x),
            self._fold_axis(position.y, self.y),
            self._fold_axis(position.z, self.z),
        )

    def fold_positions(self, positions: NDArray[np.floating]) -> NDArray[np.floating]:
        """
        Vectorized fold of an (N, 3) position array.

        Args:
            positions: Positions array of shape (N, 3).

        Returns:
            Folded positions array of shape (N, 3).
        """
        positions = np.asarray(positions, dtype=np.float64)
        lengths = self.lengths
        outside = (positions < 0.0) | (positions > lengths)
        folded = positions - lengths * np.floor(positions / lengths)
        return np.where(outside, folded, positions)

    def image_count(self, position: Vec3) -> tuple[int, int, int]:
        """
        Count whole extents beyond the closed range [0, L], per axis.

        A value exactly one extent past either edge (-L or 2L) counts as
        one image, matching the closed interval.
        """
        counts = []
        for value, length in zip(position, (self.x, self.y, self.z)):
            if 0.0 <= value <= length:
                counts.append(0)
            elif value > length:
                counts.append(math.ceil(value / length) - 1)
            else:
                counts.append(math.floor(value / length))
        return counts[0], counts[1], counts[2]

    def separation(self, a: Vec3, b: Vec3) -> Vec3:
        """
        Minimum image vector a - b.

        Each axis is shifted independently by whole extents so that the
        component lies in [-L/2, L/2]. A component of exactly half an extent
        is left alone, which keeps separation(a, b) == -separation(b, a).
        """
        dx = a.x - b.x
        dy = a.y - b.y
        dz = a.z - b.z
        return Vec3(
            dx - self.x * round(dx / self.x),
            dy - self.y * round(dy / self.y),
            dz - self.z * round(dz / self.z),
        )

    def validate_cutoff(self, cutoff: float) -> None:
        """
        Require the cutoff to be smaller than half of every extent.

        The minimum image convention only finds a single image of each
        neighbor under that condition.
        """
        super().validate_cutoff(cutoff)
        half = 0.5 * min(self.x, self.y, self.z)
        if cutoff >= half:
            raise ConfigurationError(
                f"cutoff {cutoff} must be smaller than half the shortest "
                f"periodic extent ({half})"
            )


@dataclass(frozen=True)
class OpenBoundary(BoundaryCondition):
    """Unbounded free space: no folding, plain difference vectors."""

    def fold(self, position: Vec3) -> Vec3:
        return position

    def separation(self, a: Vec3, b: Vec3) -> Vec3:
        return a - b

    @property
    def volume(self) -> float:
        return math.inf

    def image_count(self, position: Vec3) -> tuple[int, int, int]:
        return 0, 0, 0
