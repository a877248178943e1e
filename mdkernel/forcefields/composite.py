"""Composite force field combining several force curves."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..vector import Vec3
from .base import ForceCurve

if TYPE_CHECKING:
    from ..system import Domain, Particle


class ForceField(ForceCurve):
    """
    Sum of several force curves bound to the same domain.

    Implements the composite pattern: a ForceField is itself a ForceCurve,
    so an integrator can be bound to it directly.

    Example:
        ff = ForceField(domain, [
            LennardJones(domain, epsilon=1.0, sigma=1.0, cutoff=2.5),
            ConstantForce(domain, Vec3(0.0, 0.0, -0.1)),
        ])
    """

    def __init__(self, domain: Domain, curves: list[ForceCurve] | None = None) -> None:
        """
        Initialize composite force field.

        Args:
            domain: Domain shared by all curves.
            curves: List of force curves to combine.
        """
        super().__init__(domain)
        self.curves: list[ForceCurve] = []
        for curve in curves or ():
            self.add_curve(curve)

    def add_curve(self, curve: ForceCurve) -> None:
        """Add a force curve."""
        if curve.domain is not self.domain:
            raise ValueError(
                f"{type(curve).__name__} is bound to a different domain"
            )
        self.curves.append(curve)

    def remove_curve(self, curve: ForceCurve) -> None:
        """Remove a force curve."""
        self.curves.remove(curve)

    def force(self, particle: Particle) -> Vec3:
        total = Vec3.zero()
        for curve in self.curves:
            total = total + curve.force(particle)
        return total

    def potential_energy(self, particle: Particle) -> float:
        return float(sum(curve.potential_energy(particle) for curve in self.curves))

    def potential_energy_per_curve(self, particle: Particle) -> list[float]:
        """
        Return each curve's share separately.

        Useful for debugging and analysis.
        """
        return [curve.potential_energy(particle) for curve in self.curves]
