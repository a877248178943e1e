"""
Plotting utilities for simulation results.

Requires matplotlib (the "plot" extra).

Example:
    >>> from mdkernel import simulate, plotting
    >>> result = simulate.argon()
    >>> plotting.energy(result, show=False)
    >>> plotting.save("argon_energy.png")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .forcefields import LennardJones
    from .simulate import SimulationResult

logger = logging.getLogger(__name__)


def _pyplot():
    import matplotlib.pyplot as plt

    return plt


def energy(
    result: SimulationResult,
    show: bool = True,
    figsize: tuple[float, float] = (10, 6),
) -> None:
    """
    Plot energy time series.

    Shows kinetic, potential, and total energy vs tick, and the relative
    drift of the total energy.

    Args:
        result: SimulationResult from a simulation.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.
    """
    plt = _pyplot()

    fig, axes = plt.subplots(1, 2, figsize=figsize)
    ticks = result.ticks

    ax = axes[0]
    ax.plot(ticks, result.kinetic_energy, "b-", label="Kinetic", alpha=0.7, lw=0.8)
    ax.plot(ticks, result.potential_energy, "r-", label="Potential", alpha=0.7, lw=0.8)
    ax.plot(ticks, result.total_energy, "k-", label="Total", lw=1.5)
    ax.set_xlabel("Tick")
    ax.set_ylabel("Energy (eV)")
    ax.set_title("Energy vs Tick")
    ax.legend()
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    if len(result.total_energy) > 0:
        e0 = result.total_energy[0]
        rel_error = (
            (result.total_energy - e0) / abs(e0) * 100
            if e0 != 0
            else result.total_energy * 0
        )
        ax.plot(ticks, rel_error, "k-", lw=1)
        ax.axhline(y=0, color="r", linestyle="--", alpha=0.5)
    ax.set_xlabel("Tick")
    ax.set_ylabel("Relative Energy Error (%)")
    ax.set_title(f"Energy Conservation (fluct: {result.energy_fluctuation:.2e})")
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    if show:
        plt.show()


def temperature(
    result: SimulationResult,
    show: bool = True,
    figsize: tuple[float, float] = (10, 4),
) -> None:
    """
    Plot temperature time series with its mean.

    Args:
        result: SimulationResult from a simulation.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.
    """
    plt = _pyplot()

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(result.ticks, result.temperature, "b-", alpha=0.7, lw=0.5)
    ax.axhline(
        y=result.mean_temperature,
        color="r",
        linestyle="--",
        lw=2,
        label=f"Mean T = {result.mean_temperature:.1f} K",
    )
    ax.set_xlabel("Tick")
    ax.set_ylabel("Temperature (K)")
    ax.set_title("Temperature vs Tick")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    if show:
        plt.show()


def pair_potential(
    curve: LennardJones,
    show: bool = True,
    n_points: int = 400,
    figsize: tuple[float, float] = (8, 5),
) -> None:
    """
    Plot the Lennard-Jones pair energy and force up to the cutoff.

    Args:
        curve: A LennardJones force curve.
        show: Whether to display the plot immediately.
        n_points: Number of sample distances.
        figsize: Figure size (width, height) in inches.
    """
    plt = _pyplot()

    r = np.linspace(0.9 * curve.sigma, curve.cutoff, n_points)
    v = np.array([curve.pair_potential(x) for x in r])
    f = np.array([curve.pair_force(x) for x in r])

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(r, v, "b-", lw=1.5, label="V(r)")
    ax.plot(r, f, "r-", lw=1.0, label="F(r)")
    ax.axvline(x=curve.minimum_distance, color="k", linestyle=":", alpha=0.5)
    ax.axhline(y=0.0, color="k", lw=0.5)
    ax.set_ylim(-3.0 * curve.epsilon, 3.0 * curve.epsilon)
    ax.set_xlabel("r")
    ax.set_ylabel("Energy / Force")
    ax.set_title("Lennard-Jones Pair Interaction")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    if show:
        plt.show()


def save(filename: str | Path, dpi: int = 150) -> None:
    """
    Save the current figure to a file.

    Args:
        filename: Output filename (e.g., "plot.png", "plot.pdf").
        dpi: Resolution in dots per inch.
    """
    plt = _pyplot()
    plt.savefig(filename, dpi=dpi, bbox_inches="tight")
    logger.info("Saved plot to %s", filename)


def show() -> None:
    """Display all pending plots."""
    _pyplot().show()
