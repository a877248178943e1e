"""Base interface for integrators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

from ..errors import ConfigurationError

if TYPE_CHECKING:
    from ..forcefields import ForceCurve
    from ..system import Particle


class UpdateMode(str, Enum):
    """
    How the particles of one tick see each other.

    SEQUENTIAL: particles are advanced one after another and each force
        evaluation reads the current state, so a particle advanced later in
        the tick sees its neighbors' end-of-tick positions.
    SYNCHRONIZED: every force of a phase is evaluated against the same
        frozen positions (all tick-start positions, then all drifted
        positions), as in textbook velocity Verlet.
    """

    SEQUENTIAL = "sequential"
    SYNCHRONIZED = "synchronized"


class Integrator(ABC):
    """
    Abstract base class for time integration algorithms.

    An integrator is bound to one force curve and advances particles by
    one time step, mutating their position and velocity in place.

    Attributes:
        force_curve: The force curve used for every force evaluation.
    """

    def __init__(self, force_curve: ForceCurve) -> None:
        """
        Initialize integrator.

        Args:
            force_curve: Force curve to evaluate forces with.
        """
        self.force_curve = force_curve

    @staticmethod
    def _check_timestep(dt: float) -> None:
        if not dt > 0:
            raise ConfigurationError(f"timestep must be positive, got {dt}")

    @abstractmethod
    def integrate(self, particle: Particle, dt: float) -> None:
        """
        Advance a single particle by one time step.

        Args:
            particle: Particle to advance; fixed particles are left alone.
            dt: Time step.
        """
        ...

    @abstractmethod
    def integrate_synchronized(self, particles: Sequence[Particle], dt: float) -> None:
        """
        Advance all particles against frozen snapshots of the positions.

        Args:
            particles: Particles in iteration order.
            dt: Time step.
        """
        ...

    def integrate_all(
        self,
        particles: Sequence[Particle],
        dt: float,
        mode: UpdateMode = UpdateMode.SEQUENTIAL,
    ) -> None:
        """
        Advance a sequence of particles by one time step.

        Args:
            particles: Particles in iteration order.
            dt: Time step.
            mode: Update mode for the tick.
        """
        self._check_timestep(dt)
        particles = list(particles)
        if UpdateMode(mode) is UpdateMode.SYNCHRONIZED:
            self.integrate_synchronized(particles, dt)
            return
        for index in range(len(particles)):
            self.integrate(particles[index], dt)
