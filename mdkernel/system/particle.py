"""Point particle representation and the species used by the examples."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import ConfigurationError
from ..vector import Vec3


@dataclass(eq=False)
class Particle:
    """
    A point particle.

    Particles never reference each other; every relationship between them
    is computed on demand from positions held by the domain. Equality is
    identity, so two particles at the same place are still distinct.

    Attributes:
        name: Species label, used in snapshots.
        mass: Mass in amu.
        charge: Charge in elementary charges.
        position: Current position.
        velocity: Current velocity.
        fixed: Fixed particles are never moved by an integrator.
    """

    name: str
    mass: float
    charge: float = 0.0
    position: Vec3 = field(default_factory=Vec3.zero)
    velocity: Vec3 = field(default_factory=Vec3.zero)
    fixed: bool = False

    def __post_init__(self) -> None:
        """Validate the mass."""
        if not self.mass > 0:
            raise ConfigurationError(
                f"particle {self.name!r} needs a positive mass, got {self.mass}"
            )

    @property
    def kinetic_energy(self) -> float:
        """Return 0.5 * m * |v|^2."""
        return 0.5 * self.mass * self.velocity.sqr_magnitude()

    @property
    def momentum(self) -> Vec3:
        """Return m * v."""
        return self.velocity * self.mass

    def clone(self) -> Particle:
        """Return a fresh particle of the same species, at rest at the origin."""
        return Particle(
            name=self.name,
            mass=self.mass,
            charge=self.charge,
            fixed=self.fixed,
        )


def argon() -> Particle:
    """Return an argon atom (39.948 amu, neutral)."""
    return Particle(name="Ar", mass=39.948)


def water() -> Particle:
    """
    Return a coarse-grained monatomic water molecule.

    In the mW model a whole molecule is a single site, so it keeps three
    translational degrees of freedom like an atom.
    """
    return Particle(name="Water", mass=18.01528)
