"""Integrator implementations."""

from .base import Integrator, UpdateMode
from .velocity_verlet import VelocityVerlet

__all__ = [
    "Integrator",
    "UpdateMode",
    "VelocityVerlet",
]
