"""Monitors: collaborators that observe or adjust the state after each tick."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import numpy as np

from ..errors import DegenerateEnsembleError
from ..units import BOLTZMANN_CONSTANT

if TYPE_CHECKING:
    from ..system import Domain
    from .simulation import Simulation

logger = logging.getLogger(__name__)


def instantaneous_temperature(
    domain: Domain, boltzmann_constant: float = BOLTZMANN_CONSTANT
) -> float:
    """
    Temperature from the kinetic energy, T = 2 KE / (3 N k_B).

    Returns 0 for an empty domain.
    """
    n = len(domain)
    if n == 0:
        return 0.0
    return 2.0 * domain.kinetic_energy() / (3.0 * n * boltzmann_constant)


class Monitor(ABC):
    """
    Abstract base class for simulation monitors.

    Monitors run once per tick, after integration and before positions are
    folded back into the domain. They may read anything and may rescale
    velocities, but must not add, remove or reorder particles.
    """

    @abstractmethod
    def on_tick(self, simulation: Simulation, tick: int) -> None:
        """
        Observe or adjust the state at a tick.

        Args:
            simulation: The running simulation.
            tick: Index of the tick that was just integrated.
        """
        ...

    @property
    @abstractmethod
    def frequency(self) -> int:
        """Return how often the monitor runs (every N ticks)."""
        ...

    def should_run(self, tick: int) -> bool:
        """Check if the monitor should run at this tick."""
        return tick % self.frequency == 0

    def initialize(self, simulation: Simulation) -> None:
        """Called before a run starts."""
        pass

    def finalize(self, simulation: Simulation) -> None:
        """Called after a run ends, even when it ends with an error."""
        pass


class MonitorGroup:
    """Collection of monitors with automatic frequency handling."""

    def __init__(self, monitors: list[Monitor] | None = None) -> None:
        self._monitors: list[Monitor] = list(monitors) if monitors else []

    def __iter__(self):
        return iter(list(self._monitors))

    def __len__(self) -> int:
        return len(self._monitors)

    def add(self, monitor: Monitor) -> None:
        """Add a monitor to the group."""
        self._monitors.append(monitor)

    def remove(self, monitor: Monitor) -> None:
        """Remove a monitor from the group."""
        self._monitors.remove(monitor)

    def initialize(self, simulation: Simulation) -> None:
        """Initialize all monitors."""
        for monitor in self._monitors:
            monitor.initialize(simulation)

    def on_tick(self, simulation: Simulation, tick: int) -> None:
        """Run all monitors that should fire at this tick."""
        for monitor in self._monitors:
            if monitor.should_run(tick):
                monitor.on_tick(simulation, tick)

    def finalize(self, simulation: Simulation) -> None:
        """Finalize all monitors."""
        for monitor in self._monitors:
            monitor.finalize(simulation)


class EnergyMonitor(Monitor):
    """
    Monitor that tracks kinetic, potential and total energy.

    Each sample is written to the given stream, or logged at INFO level
    when no stream is given, and kept in memory as a time series.
    """

    def __init__(
        self,
        frequency: int = 100,
        file: TextIO | None = None,
        boltzmann_constant: float = BOLTZMANN_CONSTANT,
    ) -> None:
        """
        Initialize energy monitor.

        Args:
            frequency: Sampling frequency (every N ticks).
            file: Optional output stream.
            boltzmann_constant: k_B in the energy unit of the simulation.
        """
        self._frequency = frequency
        self._file = file
        self._boltzmann_constant = boltzmann_constant
        self._ticks: list[int] = []
        self._kinetic: list[float] = []
        self._potential: list[float] = []
        self._temperature: list[float] = []

    @property
    def frequency(self) -> int:
        return self._frequency

    def on_tick(self, simulation: Simulation, tick: int) -> None:
        """Record energies and temperature."""
        domain = simulation.domain
        ke = domain.kinetic_energy()
        pe = simulation.force_curve.total_potential_energy()
        temp = instantaneous_temperature(domain, self._boltzmann_constant)

        self._ticks.append(tick)
        self._kinetic.append(ke)
        self._potential.append(pe)
        self._temperature.append(temp)

        line = f"Tick: {tick}, Etot: {ke + pe}, Ek: {ke}, Ep: {pe}, T: {temp}"
        if self._file is not None:
            self._file.write(line + "\n")
            self._file.flush()
        else:
            logger.info(line)

    @property
    def ticks(self) -> np.ndarray:
        """Return sampled tick indices."""
        return np.array(self._ticks, dtype=np.int64)

    @property
    def kinetic_energy(self) -> np.ndarray:
        """Return kinetic energy time series."""
        return np.array(self._kinetic)

    @property
    def potential_energy(self) -> np.ndarray:
        """Return potential energy time series."""
        return np.array(self._potential)

    @property
    def total_energy(self) -> np.ndarray:
        """Return total energy time series."""
        return self.kinetic_energy + self.potential_energy

    @property
    def temperature(self) -> np.ndarray:
        """Return temperature time series."""
        return np.array(self._temperature)

    def clear(self) -> None:
        """Clear stored data."""
        self._ticks.clear()
        self._kinetic.clear()
        self._potential.clear()
        self._temperature.clear()


class TemperatureMonitor(Monitor):
    """
    Velocity rescaling to a set-point temperature.

    Every velocity is multiplied by sqrt(T_target / T). This fixes the
    kinetic energy exactly but does not sample a canonical ensemble, so it
    is meant for equilibration.
    """

    def __init__(
        self,
        temperature: float,
        frequency: int = 1,
        boltzmann_constant: float = BOLTZMANN_CONSTANT,
    ) -> None:
        """
        Initialize temperature monitor.

        Args:
            temperature: Target temperature.
            frequency: Rescaling frequency (every N ticks).
            boltzmann_constant: k_B in the energy unit of the simulation.
        """
        self.temperature = temperature
        self._frequency = frequency
        self._boltzmann_constant = boltzmann_constant

    @property
    def frequency(self) -> int:
        return self._frequency

    def on_tick(self, simulation: Simulation, tick: int) -> None:
        """
        Rescale velocities to the target temperature.

        Raises:
            DegenerateEnsembleError: If the current temperature is zero, in
                which case no scale factor exists.
        """
        domain = simulation.domain
        current = instantaneous_temperature(domain, self._boltzmann_constant)
        if current == 0.0 or not math.isfinite(current):
            raise DegenerateEnsembleError(
                f"cannot rescale from temperature {current} at tick {tick}"
            )

        scale = math.sqrt(self.temperature / current)
        for particle in domain:
            particle.velocity = particle.velocity * scale
        logger.debug(
            "Tick %d: rescaled %.4g K -> %.4g K", tick, current, self.temperature
        )


class XYZRecorder(Monitor):
    """
    Snapshot recorder writing the XYZ text format.

    Each recorded tick is one frame:
        N
        tick <n>
        name x y z
        ...

    Frames follow the domain's particle order. Between `initialize` and
    `finalize` (or inside a `with` block) the file stays open; a frame
    written outside such a session opens, appends and closes the file.
    """

    def __init__(
        self,
        filename: str | Path,
        frequency: int = 100,
        precision: int = 8,
        append: bool = False,
    ) -> None:
        """
        Initialize XYZ recorder.

        Args:
            filename: Output file path.
            frequency: Recording frequency (every N ticks).
            precision: Decimal places for coordinates.
            append: Append to an existing file instead of truncating it.
        """
        self.filename = Path(filename)
        self.precision = precision
        self._frequency = frequency
        self._append = append
        self._file: TextIO | None = None
        self._n_frames = 0

    @property
    def frequency(self) -> int:
        return self._frequency

    @property
    def n_frames(self) -> int:
        """Number of frames written."""
        return self._n_frames

    @property
    def is_open(self) -> bool:
        """Whether the output file is currently held open."""
        return self._file is not None

    def open(self) -> None:
        """Open the output file."""
        if self._file is None:
            self._file = self.filename.open("a" if self._append else "w")

    def close(self) -> None:
        """Close the output file."""
        if self._file is not None:
            self._file.close()
            self._file = None
            # a reopened recorder continues the same file
            self._append = True

    def __enter__(self) -> XYZRecorder:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def initialize(self, simulation: Simulation) -> None:
        self.open()

    def finalize(self, simulation: Simulation) -> None:
        self.close()

    def on_tick(self, simulation: Simulation, tick: int) -> None:
        """Write one frame."""
        if self._file is None:
            self.open()
            try:
                self._write_frame(simulation, tick)
            finally:
                self.close()
        else:
            self._write_frame(simulation, tick)

    def _write_frame(self, simulation: Simulation, tick: int) -> None:
        particles = list(simulation.domain.particles)
        fmt = (
            f"{{}} {{:.{self.precision}f}} {{:.{self.precision}f}} "
            f"{{:.{self.precision}f}}\n"
        )
        self._file.write(f"{len(particles)}\n")
        self._file.write(f"tick {tick}\n")
        for particle in particles:
            self._file.write(fmt.format(particle.name, *particle.position))
        self._file.flush()
        self._n_frames += 1


class CallbackMonitor(Monitor):
    """
    Monitor that calls a user-defined function.

    Allows arbitrary custom logic.
    """

    def __init__(
        self,
        callback: Callable[[Simulation, int], None],
        frequency: int = 1,
    ) -> None:
        """
        Initialize callback monitor.

        Args:
            callback: Function to call with (simulation, tick).
            frequency: Calling frequency.
        """
        self._callback = callback
        self._frequency = frequency

    @property
    def frequency(self) -> int:
        return self._frequency

    def on_tick(self, simulation: Simulation, tick: int) -> None:
        """Call the callback function."""
        self._callback(simulation, tick)
