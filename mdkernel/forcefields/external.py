"""Uniform external force."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..vector import Vec3, dot
from .base import ForceCurve

if TYPE_CHECKING:
    from ..system import Domain, Particle


class ConstantForce(ForceCurve):
    """
    The same force on every particle, independent of the others.

    V(x) = -F . x at the stored position. A periodic boundary folds that
    position every tick, so the energy jumps by F . L whenever a particle
    crosses a face; it is a conserved quantity only under OpenBoundary.

    Attributes:
        value: The applied force vector.
    """

    def __init__(self, domain: Domain, value: Vec3) -> None:
        """
        Initialize constant force.

        Args:
            domain: Domain the force acts on.
            value: Force vector applied to every particle.
        """
        super().__init__(domain)
        self.value = value

    def force(self, particle: Particle) -> Vec3:
        return self.value

    def potential_energy(self, particle: Particle) -> float:
        return -dot(self.value, particle.position)
