#!/usr/bin/env python
"""
Quick start example - the simplest way to run a simulation.

Runs a short argon gas and a short mW water slab through the high-level
API and prints their summary statistics.

Usage:
    python examples/quickstart.py
"""

from mdkernel import simulate
from mdkernel.config import SimulationConfig
from mdkernel.logging_config import setup_logging


def main():
    setup_logging()

    print("=" * 60)
    print("mdkernel Quick Start")
    print("=" * 60)

    # 1. Argon gas with velocity rescaling to 300 K
    print("\n1. Argon gas (Lennard-Jones):")
    print("-" * 40)
    config = SimulationConfig(n_particles=64, n_steps=2000, report_frequency=100)
    result = simulate.argon(config)
    print(f"   Mean T:          {result.mean_temperature:.1f} K")
    print(f"   Mean Ep:         {result.mean_potential_energy:.5f} eV")
    print(f"   Energy drift:    {result.energy_drift:.2e}")

    # 2. Monatomic water in a slab
    print("\n2. mW water slab (three-body):")
    print("-" * 40)
    result = simulate.monatomic_water(n_molecules=20, n_steps=500)
    print(f"   Mean T:          {result.mean_temperature:.1f} K")
    print(f"   Mean Ep:         {result.mean_potential_energy:.5f} eV")

    print("\n" + "=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
