"""The per-tick orchestration loop."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from ..errors import ConfigurationError
from ..integrators.base import UpdateMode
from ..units import BOLTZMANN_CONSTANT
from .monitors import Monitor, MonitorGroup, instantaneous_temperature

if TYPE_CHECKING:
    from ..forcefields import ForceCurve
    from ..integrators import Integrator
    from ..system import Domain
    from .initializers import Initializer

logger = logging.getLogger(__name__)


class Simulation:
    """
    Molecular dynamics simulation context.

    Owned by the caller and passed around explicitly; there is no global
    world object. One tick is:

    1. integrate every particle in domain order (see UpdateMode)
    2. run the monitors against the updated state
    3. fold all positions back into the domain
    4. increment the tick counter

    Example usage:
        domain = Domain(PeriodicBoundary.cubic(30.0))
        lj = LennardJones(domain, epsilon=0.0103, sigma=3.405, cutoff=5.0)
        sim = Simulation(
            domain,
            VelocityVerlet(lj),
            timestep=fs_to_natural(5.0),
            initializer=LatticeInitializer(argon(), 100),
        )
        sim.add_monitor(TemperatureMonitor(300.0, frequency=50))
        sim.initialize()
        sim.run(20000)

    Attributes:
        domain: The particle container.
        integrator: Time integrator bound to a force curve on the domain.
        timestep: Time step per tick.
        initializer: Optional initial-condition generator.
        mode: Update mode of each tick.
        tick_count: Number of completed ticks.
    """

    def __init__(
        self,
        domain: Domain,
        integrator: Integrator,
        timestep: float,
        monitors: Iterable[Monitor] | None = None,
        initializer: Initializer | None = None,
        mode: UpdateMode | str = UpdateMode.SEQUENTIAL,
        boltzmann_constant: float = BOLTZMANN_CONSTANT,
    ) -> None:
        """
        Initialize simulation.

        Args:
            domain: Domain to simulate.
            integrator: Integrator whose force curve is bound to the domain.
            timestep: Time step per tick.
            monitors: Monitors run after every tick's integration.
            initializer: Optional initializer run by initialize().
            mode: SEQUENTIAL or SYNCHRONIZED particle updates.
            boltzmann_constant: k_B used by the temperature property.
        """
        if not timestep > 0:
            raise ConfigurationError(f"timestep must be positive, got {timestep}")
        if integrator.force_curve.domain is not domain:
            raise ValueError("integrator's force curve is bound to a different domain")

        self.domain = domain
        self.integrator = integrator
        self.timestep = float(timestep)
        self.initializer = initializer
        self.mode = UpdateMode(mode)
        self.tick_count = 0

        self._monitors = MonitorGroup(list(monitors) if monitors else None)
        self._boltzmann_constant = boltzmann_constant
        self._running = False
        self._wall_time = 0.0

    @property
    def force_curve(self) -> ForceCurve:
        """Return the force curve bound to the integrator."""
        return self.integrator.force_curve

    @property
    def monitors(self) -> list[Monitor]:
        """Return the registered monitors."""
        return list(self._monitors)

    @property
    def time(self) -> float:
        """Return the elapsed simulated time."""
        return self.tick_count * self.timestep

    @property
    def kinetic_energy(self) -> float:
        """Return current kinetic energy."""
        return self.domain.kinetic_energy()

    @property
    def potential_energy(self) -> float:
        """Return current potential energy."""
        return self.force_curve.total_potential_energy()

    @property
    def total_energy(self) -> float:
        """Return total energy."""
        return self.kinetic_energy + self.potential_energy

    @property
    def temperature(self) -> float:
        """Return current temperature."""
        return instantaneous_temperature(self.domain, self._boltzmann_constant)

    @property
    def performance(self) -> dict[str, float]:
        """Return performance statistics."""
        if self._wall_time == 0:
            return {"ticks_per_second": 0.0, "wall_time": 0.0}
        return {
            "ticks_per_second": self.tick_count / self._wall_time,
            "wall_time": self._wall_time,
        }

    def add_monitor(self, monitor: Monitor) -> None:
        """Add a monitor."""
        self._monitors.add(monitor)

    def remove_monitor(self, monitor: Monitor) -> None:
        """Remove a monitor."""
        self._monitors.remove(monitor)

    def initialize(self) -> None:
        """Populate the domain with the initializer, if one is set."""
        if self.initializer is None:
            return
        self.initializer.initialize(self.domain)
        self.domain.fold_all()
        logger.info(
            "Initialized domain with %d particles (volume %g)",
            len(self.domain),
            self.domain.boundary.volume,
        )

    def tick(self) -> None:
        """
        Perform one simulation tick.

        Raises:
            RuntimeError: If a monitor resized the particle sequence.
        """
        n_particles = len(self.domain)

        self.integrator.integrate_all(self.domain.particles, self.timestep, self.mode)

        self._monitors.on_tick(self, self.tick_count)
        if len(self.domain) != n_particles:
            raise RuntimeError(
                f"monitors changed the particle count from {n_particles} "
                f"to {len(self.domain)} during tick {self.tick_count}"
            )

        self.domain.fold_all()
        self.tick_count += 1

    def run(
        self,
        nsteps: int,
        callback: Callable[[Simulation], bool] | None = None,
    ) -> None:
        """
        Run the simulation for a number of ticks.

        Args:
            nsteps: Number of ticks to run.
            callback: Optional callback called after each tick.
                      Return True to stop the run early.
        """
        self._running = True
        self._monitors.initialize(self)
        logger.info(
            "Running %d ticks of %d particles (dt=%g, %s)",
            nsteps,
            len(self.domain),
            self.timestep,
            self.mode.value,
        )

        start_time = time.perf_counter()
        start_tick = self.tick_count
        try:
            for _ in range(nsteps):
                if not self._running:
                    break

                self.tick()

                if callback is not None and callback(self):
                    break
        except Exception:
            logger.error("Run failed at tick %d", self.tick_count)
            raise
        finally:
            elapsed = time.perf_counter() - start_time
            self._wall_time += elapsed
            self._monitors.finalize(self)
            self._running = False

        logger.info(
            "Finished %d ticks in %.2f s", self.tick_count - start_tick, elapsed
        )

    def stop(self) -> None:
        """Signal the run loop to stop after the current tick."""
        self._running = False
