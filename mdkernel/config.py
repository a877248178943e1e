"""
Simulation configuration.

A SimulationConfig gathers the parameters of a Lennard-Jones run in one
validated object that can be stored as JSON next to its results.
Units are natural units (eV, Angstrom, amu) except the timestep, which is
given in femtoseconds.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from .errors import ConfigurationError
from .integrators.base import UpdateMode
from .units import fs_to_natural


@dataclass
class SimulationConfig:
    """
    Parameters of a Lennard-Jones simulation.

    Defaults reproduce the argon gas run: 100 atoms in a 30 Angstrom
    periodic box at 300 K, 5 fs per tick.
    """

    box: tuple[float, float, float] = (30.0, 30.0, 30.0)
    n_particles: int = 100
    timestep_fs: float = 5.0
    n_steps: int = 20000
    epsilon: float = 0.0103
    sigma: float = 3.405
    cutoff: float = 5.0
    temperature: float = 300.0
    rescale_frequency: int = 50
    report_frequency: int = 1000
    trajectory: str | None = None
    trajectory_frequency: int = 50
    seed: int | None = None
    mode: str = UpdateMode.SEQUENTIAL.value

    def __post_init__(self) -> None:
        """Validate parameters."""
        self.box = tuple(float(v) for v in self.box)
        if len(self.box) != 3 or any(v <= 0 for v in self.box):
            raise ConfigurationError(
                f"box needs three positive extents, got {self.box}"
            )
        if self.n_particles < 0:
            raise ConfigurationError(
                f"n_particles must be non-negative, got {self.n_particles}"
            )
        if self.timestep_fs <= 0:
            raise ConfigurationError(
                f"timestep_fs must be positive, got {self.timestep_fs}"
            )
        if self.n_steps < 0:
            raise ConfigurationError(
                f"n_steps must be non-negative, got {self.n_steps}"
            )
        if self.cutoff >= 0.5 * min(self.box):
            raise ConfigurationError(
                f"cutoff {self.cutoff} must be smaller than half the shortest "
                f"box extent ({0.5 * min(self.box)})"
            )
        for name in ("rescale_frequency", "report_frequency", "trajectory_frequency"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(
                    f"{name} must be positive, got {getattr(self, name)}"
                )
        try:
            self.mode = UpdateMode(self.mode).value
        except ValueError as exc:
            raise ConfigurationError(f"unknown update mode {self.mode!r}") from exc

    @property
    def timestep(self) -> float:
        """Return the timestep in natural units."""
        return fs_to_natural(self.timestep_fs)

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a JSON-compatible dictionary."""
        data = asdict(self)
        data["box"] = list(self.box)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimulationConfig:
        """
        Create a configuration from a dictionary.

        Raises:
            ConfigurationError: If the dictionary has unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"unknown configuration keys: {unknown}")
        return cls(**data)

    def to_json(self, path: str | Path) -> None:
        """Write the configuration to a JSON file."""
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def from_json(cls, path: str | Path) -> SimulationConfig:
        """Read a configuration from a JSON file."""
        with open(path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
