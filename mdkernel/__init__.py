"""
mdkernel - a brute-force reference molecular dynamics kernel.

Point particles in a bounded domain, advanced tick by tick with velocity
Verlet under a pluggable force curve (Lennard-Jones or three-body mW
water), with periodic boundaries and the minimum image convention.

Quick Start:
    >>> from mdkernel import Domain, LennardJones, PeriodicBoundary, Simulation
    >>> from mdkernel import VelocityVerlet, LatticeInitializer, argon
    >>> domain = Domain(PeriodicBoundary.cubic(30.0))
    >>> lj = LennardJones(domain, epsilon=0.0103, sigma=3.405, cutoff=5.0)
    >>> sim = Simulation(domain, VelocityVerlet(lj), timestep=0.5,
    ...                  initializer=LatticeInitializer(argon(), 27))
    >>> sim.initialize()
    >>> sim.run(100)
"""

__version__ = "0.1.0"

from . import simulate
from .config import SimulationConfig
from .engine import (
    EnergyMonitor,
    LatticeInitializer,
    RandomInitializer,
    Simulation,
    TemperatureMonitor,
    XYZRecorder,
)
from .errors import (
    ConfigurationError,
    DegenerateEnsembleError,
    DegenerateGeometryError,
    DivergentDisplacementError,
    MDKernelError,
    SingularPotentialError,
)
from .forcefields import (
    ConstantForce,
    ForceCurve,
    ForceField,
    LennardJones,
    MonatomicWater,
)
from .integrators import UpdateMode, VelocityVerlet
from .system import Domain, OpenBoundary, Particle, PeriodicBoundary, argon, water
from .vector import Vec3

__all__ = [
    "simulate",
    "SimulationConfig",
    "Vec3",
    "Particle",
    "argon",
    "water",
    "Domain",
    "PeriodicBoundary",
    "OpenBoundary",
    "ForceCurve",
    "ForceField",
    "LennardJones",
    "MonatomicWater",
    "ConstantForce",
    "VelocityVerlet",
    "UpdateMode",
    "Simulation",
    "EnergyMonitor",
    "TemperatureMonitor",
    "XYZRecorder",
    "RandomInitializer",
    "LatticeInitializer",
    "MDKernelError",
    "ConfigurationError",
    "DegenerateGeometryError",
    "SingularPotentialError",
    "DivergentDisplacementError",
    "DegenerateEnsembleError",
]
