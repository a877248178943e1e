"""
Simple high-level simulation API.

This module wires a domain, a force curve, an integrator and the usual
monitors together for the two reference systems: an argon gas under
Lennard-Jones and monatomic (mW) water.

Example:
    >>> from mdkernel import simulate
    >>> from mdkernel.config import SimulationConfig
    >>> result = simulate.argon(SimulationConfig(n_particles=27, n_steps=200))
    >>> print(result.mean_temperature)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from .config import SimulationConfig
from .engine import (
    EnergyMonitor,
    LatticeInitializer,
    Simulation,
    TemperatureMonitor,
    XYZRecorder,
)
from .forcefields import LennardJones, MonatomicWater
from .integrators import VelocityVerlet
from .system import Domain, PeriodicBoundary, argon as argon_atom, water
from .units import BOLTZMANN_CONSTANT, fs_to_natural

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Results from a simulation run."""

    # Energy time series
    ticks: NDArray[np.integer] = field(default_factory=lambda: np.array([]))
    kinetic_energy: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    potential_energy: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    total_energy: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    temperature: NDArray[np.floating] = field(default_factory=lambda: np.array([]))

    # Final configuration
    positions: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    names: list[str] = field(default_factory=list)

    # Summary statistics
    mean_temperature: float = 0.0
    mean_potential_energy: float = 0.0
    mean_kinetic_energy: float = 0.0
    energy_drift: float = 0.0
    energy_fluctuation: float = 0.0

    # Metadata
    n_particles: int = 0
    n_steps: int = 0
    timestep: float = 0.0


def _thermal_velocity_scale(temperature: float, mass: float) -> float:
    """Uniform [-1, 1) components have variance 1/3; match kT/m per component."""
    return math.sqrt(3.0 * BOLTZMANN_CONSTANT * temperature / mass)


def _collect(simulation: Simulation, energies: EnergyMonitor) -> SimulationResult:
    total = energies.total_energy
    result = SimulationResult(
        ticks=energies.ticks,
        kinetic_energy=energies.kinetic_energy,
        potential_energy=energies.potential_energy,
        total_energy=total,
        temperature=energies.temperature,
        positions=simulation.domain.positions(),
        names=simulation.domain.names(),
        n_particles=len(simulation.domain),
        n_steps=simulation.tick_count,
        timestep=simulation.timestep,
    )
    if len(total) > 0:
        result.mean_temperature = float(np.mean(energies.temperature))
        result.mean_potential_energy = float(np.mean(energies.potential_energy))
        result.mean_kinetic_energy = float(np.mean(energies.kinetic_energy))
        scale = abs(float(np.mean(total)))
        if scale > 0:
            result.energy_drift = float((total[-1] - total[0]) / scale)
            result.energy_fluctuation = float(np.std(total) / scale)
    return result


def build_argon(config: SimulationConfig) -> tuple[Simulation, EnergyMonitor]:
    """
    Build (but do not run) a Lennard-Jones argon simulation.

    Args:
        config: Simulation parameters.

    Returns:
        The initialized simulation and its energy monitor.
    """
    domain = Domain(PeriodicBoundary(*config.box))
    lj = LennardJones(
        domain, epsilon=config.epsilon, sigma=config.sigma, cutoff=config.cutoff
    )
    template = argon_atom()
    initializer = LatticeInitializer(
        template,
        config.n_particles,
        jitter=0.05 * config.sigma,
        velocity_scale=_thermal_velocity_scale(config.temperature, template.mass),
        seed=config.seed,
    )
    energies = EnergyMonitor(frequency=config.report_frequency)
    monitors = [
        TemperatureMonitor(config.temperature, frequency=config.rescale_frequency),
        energies,
    ]
    if config.trajectory:
        monitors.append(
            XYZRecorder(config.trajectory, frequency=config.trajectory_frequency)
        )

    simulation = Simulation(
        domain,
        VelocityVerlet(lj),
        timestep=config.timestep,
        monitors=monitors,
        initializer=initializer,
        mode=config.mode,
    )
    simulation.initialize()
    return simulation, energies


def argon(config: SimulationConfig | None = None) -> SimulationResult:
    """
    Run an argon gas under Lennard-Jones with velocity rescaling.

    Args:
        config: Simulation parameters; defaults to SimulationConfig().

    Returns:
        SimulationResult with energy series and summary statistics.
    """
    config = config if config is not None else SimulationConfig()
    simulation, energies = build_argon(config)
    logger.info(
        "Argon: N=%d, box=%s, T=%g K",
        config.n_particles,
        config.box,
        config.temperature,
    )
    simulation.run(config.n_steps)
    return _collect(simulation, energies)


def monatomic_water(
    n_molecules: int = 20,
    box: tuple[float, float, float] = (10.0, 100.0, 100.0),
    temperature: float = 130.0,
    n_steps: int = 1000,
    timestep_fs: float = 2.0,
    rescale_frequency: int = 1,
    report_frequency: int = 10,
    seed: int | None = None,
) -> SimulationResult:
    """
    Run mW water in a slab-shaped periodic box with velocity rescaling.

    Args:
        n_molecules: Number of water sites.
        box: Periodic extents in Angstrom.
        temperature: Set-point temperature in K.
        n_steps: Number of ticks.
        timestep_fs: Timestep in femtoseconds.
        rescale_frequency: Velocity rescaling frequency.
        report_frequency: Energy sampling frequency.
        seed: Random seed for the initial velocities.

    Returns:
        SimulationResult with energy series and summary statistics.
    """
    domain = Domain(PeriodicBoundary(*box))
    curve = MonatomicWater(domain)
    template = water()
    energies = EnergyMonitor(frequency=report_frequency)
    simulation = Simulation(
        domain,
        VelocityVerlet(curve),
        timestep=fs_to_natural(timestep_fs),
        monitors=[
            TemperatureMonitor(temperature, frequency=rescale_frequency),
            energies,
        ],
        initializer=LatticeInitializer(
            template,
            n_molecules,
            velocity_scale=_thermal_velocity_scale(temperature, template.mass),
            seed=seed,
        ),
    )
    simulation.initialize()
    logger.info("mW water: N=%d, box=%s, T=%g K", n_molecules, box, temperature)
    simulation.run(n_steps)
    return _collect(simulation, energies)
