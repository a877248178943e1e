#!/usr/bin/env python
"""
Example: argon gas under Lennard-Jones, wired by hand.

This script demonstrates how to:
1. Create a periodic domain and fill it from a lattice
2. Bind a Lennard-Jones force curve and a velocity Verlet integrator
3. Attach monitors (velocity rescaling, energy report, XYZ snapshots)
4. Run and inspect the energies

Units are eV, Angstrom and amu; 5 fs per tick.

Usage:
    python examples/run_argon.py [config.json]
"""

import sys

from mdkernel.config import SimulationConfig
from mdkernel.engine import (
    EnergyMonitor,
    LatticeInitializer,
    Simulation,
    TemperatureMonitor,
    XYZRecorder,
)
from mdkernel.forcefields import LennardJones
from mdkernel.integrators import VelocityVerlet
from mdkernel.logging_config import setup_logging
from mdkernel.system import Domain, PeriodicBoundary, argon
from mdkernel.units import BOLTZMANN_CONSTANT


def main():
    setup_logging()

    if len(sys.argv) > 1:
        config = SimulationConfig.from_json(sys.argv[1])
    else:
        config = SimulationConfig(n_steps=5000, trajectory="argon.xyz")

    domain = Domain(PeriodicBoundary(*config.box))
    lj = LennardJones(
        domain, epsilon=config.epsilon, sigma=config.sigma, cutoff=config.cutoff
    )

    template = argon()
    # uniform components on [-s, s) carry kT/m per axis when s^2 = 3 kT/m
    velocity_scale = (
        3.0 * BOLTZMANN_CONSTANT * config.temperature / template.mass
    ) ** 0.5

    energies = EnergyMonitor(frequency=config.report_frequency, file=sys.stdout)
    sim = Simulation(
        domain,
        VelocityVerlet(lj),
        timestep=config.timestep,
        initializer=LatticeInitializer(
            template,
            config.n_particles,
            jitter=0.05 * config.sigma,
            velocity_scale=velocity_scale,
            seed=config.seed,
        ),
        mode=config.mode,
    )
    sim.add_monitor(TemperatureMonitor(config.temperature, config.rescale_frequency))
    sim.add_monitor(energies)
    if config.trajectory:
        sim.add_monitor(XYZRecorder(config.trajectory, config.trajectory_frequency))

    sim.initialize()
    print(f"Argon: {len(domain)} atoms, box {config.box}, dt {config.timestep_fs} fs")
    sim.run(config.n_steps)

    print(f"\nFinal T:  {sim.temperature:.1f} K")
    print(f"Final E:  {sim.total_energy:.6f} eV")
    print(f"Speed:    {sim.performance['ticks_per_second']:.0f} ticks/s")


if __name__ == "__main__":
    main()
