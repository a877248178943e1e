#!/usr/bin/env python
"""
Example: monatomic (mW) water in a thin periodic slab.

The slab is 10 Angstrom thick and 100 Angstrom wide, so the molecules
spread in a quasi two-dimensional layer. Velocities are rescaled to 130 K
every tick and the energies are plotted at the end (requires matplotlib).

Usage:
    python examples/run_water.py
"""

from mdkernel import plotting, simulate
from mdkernel.logging_config import setup_logging


def main():
    setup_logging()

    result = simulate.monatomic_water(
        n_molecules=20,
        box=(10.0, 100.0, 100.0),
        temperature=130.0,
        n_steps=2000,
        timestep_fs=2.0,
        report_frequency=10,
        seed=42,
    )

    print(f"Mean T:        {result.mean_temperature:.1f} K")
    print(f"Mean Ep:       {result.mean_potential_energy:.5f} eV")
    print(f"Fluctuation:   {result.energy_fluctuation:.2e}")

    plotting.energy(result, show=False)
    plotting.save("water_energy.png")
    plotting.temperature(result, show=False)
    plotting.save("water_temperature.png")


if __name__ == "__main__":
    main()
