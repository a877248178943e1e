"""
Natural units used throughout the engine.

Energies in eV, lengths in Angstrom, masses in amu. The matching time unit
is sqrt(amu * Angstrom^2 / eV), roughly 10.18 fs.
"""

BOLTZMANN_CONSTANT = 8.617343e-5  # eV/K
TIME_UNIT = 1.018051e1  # fs


def fs_to_natural(femtoseconds: float) -> float:
    """Convert a time in femtoseconds into natural time units."""
    return femtoseconds / TIME_UNIT


def natural_to_fs(time: float) -> float:
    """Convert a time in natural units into femtoseconds."""
    return time * TIME_UNIT
