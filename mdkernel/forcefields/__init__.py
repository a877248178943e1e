"""Force curves."""

from .base import ForceCurve
from .composite import ForceField
from .external import ConstantForce
from .lj import LennardJones
from .mw import MonatomicWater

__all__ = [
    "ForceCurve",
    "ForceField",
    "ConstantForce",
    "LennardJones",
    "MonatomicWater",
]
