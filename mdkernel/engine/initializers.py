"""Initial-condition generators."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..errors import ConfigurationError
from ..system.boundary import PeriodicBoundary
from ..vector import Vec3

if TYPE_CHECKING:
    from ..system import Domain, Particle

logger = logging.getLogger(__name__)


def _domain_extents(
    domain: Domain, extents: tuple[float, float, float] | None
) -> NDArray[np.floating]:
    """Return the region to fill: explicit extents, the periodic box, or a cube."""
    if extents is not None:
        return np.asarray(extents, dtype=np.float64)
    boundary = domain.boundary
    if isinstance(boundary, PeriodicBoundary):
        return boundary.lengths
    if math.isfinite(boundary.volume):
        edge = boundary.volume ** (1.0 / 3.0)
        return np.array([edge, edge, edge])
    raise ConfigurationError(
        f"{type(boundary).__name__} is unbounded; pass explicit extents"
    )


class Initializer(ABC):
    """
    Abstract base class for initial-condition generators.

    An initializer populates a domain through its add operation before the
    first tick.
    """

    @abstractmethod
    def initialize(self, domain: Domain) -> None:
        """
        Populate the domain.

        Args:
            domain: Domain to add particles to.
        """
        ...


class RandomInitializer(Initializer):
    """
    Uniformly random positions and velocities.

    Positions are drawn uniformly over the domain, velocity components
    uniformly from [-1, 1) times velocity_scale. Nothing prevents two
    particles from starting close together, which Lennard-Jones systems
    answer with very large forces; prefer LatticeInitializer for dense
    systems.
    """

    def __init__(
        self,
        template: Particle,
        count: int,
        seed: int | None = None,
        velocity_scale: float = 1.0,
        extents: tuple[float, float, float] | None = None,
    ) -> None:
        """
        Initialize random initializer.

        Args:
            template: Particle cloned for every new particle.
            count: Number of particles to add.
            seed: Random seed for reproducibility.
            velocity_scale: Scale of the velocity components.
            extents: Region to fill; defaults to the domain.
        """
        if count < 0:
            raise ConfigurationError(f"count must be non-negative, got {count}")
        self.template = template
        self.count = count
        self.seed = seed
        self.velocity_scale = velocity_scale
        self.extents = extents

    def initialize(self, domain: Domain) -> None:
        rng = np.random.default_rng(self.seed)
        extents = _domain_extents(domain, self.extents)
        positions = rng.uniform(0.0, 1.0, (self.count, 3)) * extents
        velocities = rng.uniform(-1.0, 1.0, (self.count, 3)) * self.velocity_scale

        for position, velocity in zip(positions, velocities):
            particle = self.template.clone()
            particle.position = Vec3.from_array(position)
            particle.velocity = Vec3.from_array(velocity)
            domain.add_particle(particle)

        logger.info("Placed %d %s particles at random", self.count, self.template.name)


class LatticeInitializer(Initializer):
    """
    Simple cubic lattice with optional random displacements.

    Lattice sites are (i + 0.5) * spacing along each axis; the spacing
    defaults to the domain extent divided by the number of sites per side.
    Velocities start at zero unless velocity_scale is set, in which case
    components are drawn uniformly from [-1, 1) times velocity_scale.
    """

    def __init__(
        self,
        template: Particle,
        count: int,
        spacing: float | None = None,
        jitter: float = 0.0,
        velocity_scale: float = 0.0,
        seed: int | None = None,
        extents: tuple[float, float, float] | None = None,
    ) -> None:
        """
        Initialize lattice initializer.

        Args:
            template: Particle cloned for every new particle.
            count: Number of particles to add.
            spacing: Lattice constant; defaults to filling the domain.
            jitter: Maximum random displacement per component.
            velocity_scale: Scale of uniform random velocity components.
            seed: Random seed for jitter and velocities.
            extents: Region to fill; defaults to the domain.
        """
        if count < 0:
            raise ConfigurationError(f"count must be non-negative, got {count}")
        self.template = template
        self.count = count
        self.spacing = spacing
        self.jitter = jitter
        self.velocity_scale = velocity_scale
        self.seed = seed
        self.extents = extents

    def initialize(self, domain: Domain) -> None:
        if self.count == 0:
            return
        rng = np.random.default_rng(self.seed)
        n_side = int(math.ceil(self.count ** (1.0 / 3.0) - 1e-9))
        if self.spacing is not None:
            spacing = np.full(3, float(self.spacing))
        else:
            spacing = _domain_extents(domain, self.extents) / n_side

        sites = []
        for ix in range(n_side):
            for iy in range(n_side):
                for iz in range(n_side):
                    if len(sites) < self.count:
                        sites.append([ix + 0.5, iy + 0.5, iz + 0.5])

        positions = np.array(sites) * spacing
        if self.jitter > 0:
            positions += rng.uniform(-self.jitter, self.jitter, positions.shape)

        velocities = rng.uniform(-1.0, 1.0, positions.shape) * self.velocity_scale

        for position, velocity in zip(positions, velocities):
            particle = self.template.clone()
            particle.position = Vec3.from_array(position)
            particle.velocity = Vec3.from_array(velocity)
            domain.add_particle(particle)

        logger.info(
            "Placed %d %s particles on a %d^3 lattice",
            self.count,
            self.template.name,
            n_side,
        )
