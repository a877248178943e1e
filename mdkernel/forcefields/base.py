"""Base interface for force curves."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..errors import ConfigurationError, DegenerateGeometryError

if TYPE_CHECKING:
    from ..system import Domain, Particle
    from ..vector import Vec3

# Separations shorter than this are treated as coincident particles.
MIN_SEPARATION = 1e-12


class ForceCurve(ABC):
    """
    Abstract base class for interaction models.

    A force curve is bound to one domain and reads its particle sequence
    and boundary geometry at call time; it keeps no per-particle state.
    It answers two questions about a single particle: the net force acting
    on it, and its share of the potential energy. Shares are defined so that
    summing them over the domain gives the total potential energy.

    Neighbor filtering is brute force: every other particle is visited and
    kept when its minimum-image separation is shorter than the cutoff.
    That is O(N) per particle and O(N^2) per full force evaluation.
    """

    def __init__(self, domain: Domain, cutoff: float | None = None) -> None:
        """
        Initialize force curve.

        Args:
            domain: Domain whose particles interact through this curve.
            cutoff: Interaction cutoff, or None for curves without neighbors.
        """
        self.domain = domain
        self._cutoff: float | None = None
        if cutoff is not None:
            self.cutoff = cutoff

    @property
    def cutoff(self) -> float | None:
        """Return the interaction cutoff."""
        return self._cutoff

    @cutoff.setter
    def cutoff(self, value: float) -> None:
        """Set the cutoff after checking it against the boundary geometry."""
        value = float(value)
        self._validate_cutoff(value)
        self._cutoff = value

    def _validate_cutoff(self, cutoff: float) -> None:
        self.domain.boundary.validate_cutoff(cutoff)

    def neighbors(self, particle: Particle) -> list[tuple[Particle, Vec3]]:
        """
        Find the particles within the cutoff of a particle.

        Args:
            particle: The central particle.

        Returns:
            List of (neighbor, separation) pairs where separation points
            from the neighbor to the central particle.
        """
        if self._cutoff is None:
            raise ConfigurationError(f"{type(self).__name__} has no cutoff")

        cutoff_sq = self._cutoff * self._cutoff
        boundary = self.domain.boundary
        position = particle.position
        found = []
        for other in list(self.domain.particles):
            if other is particle:
                continue
            sep = boundary.separation(position, other.position)
            if sep.sqr_magnitude() < cutoff_sq:
                found.append((other, sep))
        return found

    @staticmethod
    def _check_separation(particle: Particle, other: Particle, r: float) -> None:
        if r < MIN_SEPARATION:
            raise DegenerateGeometryError(
                f"particles {particle.name!r} and {other.name!r} coincide "
                f"(separation {r:.3e})"
            )

    @abstractmethod
    def force(self, particle: Particle) -> Vec3:
        """
        Compute the net force on a particle at its current position.

        Args:
            particle: Particle belonging to the bound domain.

        Returns:
            Force vector.
        """
        ...

    @abstractmethod
    def potential_energy(self, particle: Particle) -> float:
        """
        Compute a particle's share of the potential energy.

        Args:
            particle: Particle belonging to the bound domain.

        Returns:
            Potential energy share.
        """
        ...

    def forces(self) -> NDArray[np.floating]:
        """Return forces on all particles as an (N, 3) array."""
        return np.array(
            [self.force(p).to_array() for p in list(self.domain.particles)]
        ).reshape(-1, 3)

    def total_potential_energy(self) -> float:
        """Return the total potential energy of the domain."""
        return float(sum(self.potential_energy(p) for p in list(self.domain.particles)))
