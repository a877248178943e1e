"""Exception hierarchy for the physics kernel."""

from __future__ import annotations


class MDKernelError(Exception):
    """Base class for all errors raised by mdkernel."""


class ConfigurationError(MDKernelError, ValueError):
    """Invalid simulation parameters (extents, cutoffs, masses, timesteps)."""


class NumericalError(MDKernelError, ArithmeticError):
    """A numerical singularity was reached during force evaluation or integration."""


class DegenerateGeometryError(NumericalError):
    """Coincident particles or a zero-length separation vector."""


class SingularPotentialError(NumericalError):
    """A separation reached the singular radius of a multi-body potential."""


class DivergentDisplacementError(NumericalError):
    """A particle moved further than one box length in a single tick."""


class DegenerateEnsembleError(NumericalError):
    """Velocity rescaling was requested for an ensemble with zero kinetic energy."""
