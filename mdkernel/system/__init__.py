"""Particles, boundary geometry and the domain that holds them."""

from .boundary import BoundaryCondition, OpenBoundary, PeriodicBoundary
from .domain import Domain
from .particle import Particle, argon, water

__all__ = [
    "BoundaryCondition",
    "PeriodicBoundary",
    "OpenBoundary",
    "Domain",
    "Particle",
    "argon",
    "water",
]
