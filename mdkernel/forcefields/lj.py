"""Lennard-Jones force curve."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..vector import Vec3
from .base import ForceCurve

if TYPE_CHECKING:
    from ..system import Domain, Particle


class LennardJones(ForceCurve):
    """
    Lennard-Jones 12-6 potential.

    V(r) = 4 * epsilon * [(sigma/r)^12 - (sigma/r)^6]

    Each particle carries half of every pair energy, 2 * epsilon *
    [(sigma/r)^12 - (sigma/r)^6] per neighbor, so the plain sum of
    potential_energy over the domain is the system energy.

    Attributes:
        epsilon: Well depth.
        sigma: Length scale (zero crossing of V).
        cutoff: Interactions beyond this distance are ignored.
    """

    def __init__(
        self,
        domain: Domain,
        epsilon: float,
        sigma: float,
        cutoff: float,
    ) -> None:
        """
        Initialize Lennard-Jones force curve.

        Args:
            domain: Domain whose particles interact.
            epsilon: Well depth.
            sigma: Length scale.
            cutoff: Cutoff distance for interactions.
        """
        super().__init__(domain, cutoff)
        self.epsilon = float(epsilon)
        self.sigma = float(sigma)

    def _powers(self, particle: Particle, other: Particle, sep: Vec3):
        r2 = sep.sqr_magnitude()
        self._check_separation(particle, other, r2**0.5)
        sr2 = self.sigma * self.sigma / r2
        sr6 = sr2 * sr2 * sr2
        return r2, sr6, sr6 * sr6

    def force(self, particle: Particle) -> Vec3:
        """
        Compute the Lennard-Jones force on a particle.

        Per neighbor the magnitude is 24 * epsilon * (2 (sigma/r)^12 -
        (sigma/r)^6) / r along the unit separation. The scalar is divided by
        r^2 and multiplied by the raw separation vector, which carries the
        remaining power of r.
        """
        total = Vec3.zero()
        for other, sep in self.neighbors(particle):
            r2, sr6, sr12 = self._powers(particle, other, sep)
            scale = 24.0 * self.epsilon * (2.0 * sr12 - sr6) / r2
            total = total + sep * scale
        return total

    def potential_energy(self, particle: Particle) -> float:
        """Return the particle's half share of its pair energies."""
        energy = 0.0
        for other, sep in self.neighbors(particle):
            _, sr6, sr12 = self._powers(particle, other, sep)
            energy += 2.0 * self.epsilon * (sr12 - sr6)
        return energy

    def pair_potential(self, r: float) -> float:
        """Return the full pair energy V(r) at distance r (no cutoff applied)."""
        sr6 = (self.sigma / r) ** 6
        return 4.0 * self.epsilon * (sr6 * sr6 - sr6)

    def pair_force(self, r: float) -> float:
        """Return -dV/dr at distance r; positive values are repulsive."""
        sr6 = (self.sigma / r) ** 6
        return 24.0 * self.epsilon * (2.0 * sr6 * sr6 - sr6) / r

    @property
    def minimum_distance(self) -> float:
        """Return the distance of the potential minimum, 2^(1/6) sigma."""
        return 2.0 ** (1.0 / 6.0) * self.sigma
