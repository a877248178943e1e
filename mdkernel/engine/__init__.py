"""Simulation loop, monitors and initializers."""

from .initializers import Initializer, LatticeInitializer, RandomInitializer
from .monitors import (
    CallbackMonitor,
    EnergyMonitor,
    Monitor,
    MonitorGroup,
    TemperatureMonitor,
    XYZRecorder,
    instantaneous_temperature,
)
from .simulation import Simulation

__all__ = [
    "Simulation",
    "Monitor",
    "MonitorGroup",
    "EnergyMonitor",
    "TemperatureMonitor",
    "XYZRecorder",
    "CallbackMonitor",
    "instantaneous_temperature",
    "Initializer",
    "RandomInitializer",
    "LatticeInitializer",
]
