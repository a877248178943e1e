"""The particle container and its boundary geometry."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

import numpy as np
from numpy.typing import NDArray

from ..errors import DivergentDisplacementError
from ..vector import Vec3
from .boundary import BoundaryCondition
from .particle import Particle

logger = logging.getLogger(__name__)


class Domain:
    """
    Ordered collection of particles plus the boundary geometry they live in.

    The order of the particle list is bookkeeping only; integrators visit
    particles in this order and snapshots are written in it.

    Attributes:
        boundary: The owned boundary condition.
        particles: The particle sequence.
    """

    def __init__(
        self,
        boundary: BoundaryCondition,
        particles: Iterable[Particle] | None = None,
    ) -> None:
        """
        Initialize a domain.

        Args:
            boundary: Boundary condition owned by this domain.
            particles: Optional initial particles, added in order.
        """
        self.boundary = boundary
        self.particles: list[Particle] = []
        for particle in particles or ():
            self.add_particle(particle)

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(list(self.particles))

    def __getitem__(self, index: int) -> Particle:
        return self.particles[index]

    @property
    def n_particles(self) -> int:
        """Return number of particles."""
        return len(self.particles)

    def add_particle(self, particle: Particle) -> None:
        """Append a particle to the domain."""
        if any(p is particle for p in self.particles):
            raise ValueError(f"particle {particle.name!r} is already in the domain")
        self.particles.append(particle)

    def remove_particle(self, particle: Particle) -> None:
        """Remove a particle from the domain (matched by identity)."""
        for index, p in enumerate(self.particles):
            if p is particle:
                del self.particles[index]
                return
        raise ValueError(f"particle {particle.name!r} is not in the domain")

    def fold_all(self) -> None:
        """
        Fold every particle back into the canonical domain.

        Raises:
            DivergentDisplacementError: If a position is not finite or lies
                more than one domain length outside the canonical range.
                The fold itself would still terminate; the error reports the
                physical instability that produced such a jump.
        """
        particles = list(self.particles)
        for index in range(len(particles)):
            particle = particles[index]
            position = particle.position
            if not position.is_finite():
                logger.error(
                    "Particle %d (%s) has position %s", index, particle.name, position
                )
                raise DivergentDisplacementError(
                    f"particle {index} ({particle.name}) has a non-finite "
                    f"position {position}"
                )
            images = self.boundary.image_count(position)
            if any(abs(n) > 1 for n in images):
                logger.error(
                    "Particle %d (%s) is %s domain lengths away at %s",
                    index,
                    particle.name,
                    images,
                    position,
                )
                raise DivergentDisplacementError(
                    f"particle {index} ({particle.name}) moved more than one domain "
                    f"length in a tick (images {images})"
                )
            particle.position = self.boundary.fold(position)

    def positions(self) -> NDArray[np.floating]:
        """Return positions as an (N, 3) array in domain order."""
        return np.array([p.position.to_array() for p in self.particles]).reshape(-1, 3)

    def velocities(self) -> NDArray[np.floating]:
        """Return velocities as an (N, 3) array in domain order."""
        return np.array([p.velocity.to_array() for p in self.particles]).reshape(-1, 3)

    def masses(self) -> NDArray[np.floating]:
        """Return masses as an (N,) array in domain order."""
        return np.array([p.mass for p in self.particles], dtype=np.float64)

    def names(self) -> list[str]:
        """Return particle names in domain order."""
        return [p.name for p in self.particles]

    def kinetic_energy(self) -> float:
        """Return the total kinetic energy."""
        return float(sum(p.kinetic_energy for p in self.particles))

    def momentum(self) -> Vec3:
        """Return the total linear momentum."""
        total = Vec3.zero()
        for p in self.particles:
            total = total + p.momentum
        return total

    def center_of_mass(self) -> Vec3:
        """Return the center of mass (unfolded coordinates)."""
        masses = self.masses()
        return Vec3.from_array(
            np.sum(masses[:, np.newaxis] * self.positions(), axis=0) / np.sum(masses)
        )
