"""Tests for initial-condition generators."""

import numpy as np
import pytest

from mdkernel.engine import LatticeInitializer, RandomInitializer
from mdkernel.errors import ConfigurationError
from mdkernel.system import Domain, OpenBoundary, PeriodicBoundary, argon


def min_pair_distance(positions):
    """Smallest distance between any two rows (no periodic images)."""
    diff = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
    dist = np.linalg.norm(diff, axis=-1)
    dist[np.diag_indices(len(positions))] = np.inf
    return dist.min()


class TestLatticeInitializer:
    """Test simple cubic lattice placement."""

    def test_fills_box(self):
        """27 particles in a box of 9 sit at 1.5, 4.5 and 7.5 per axis."""
        domain = Domain(PeriodicBoundary.cubic(9.0))
        LatticeInitializer(argon(), 27).initialize(domain)

        positions = domain.positions()
        assert len(domain) == 27
        for axis in range(3):
            assert np.allclose(np.unique(positions[:, axis]), [1.5, 4.5, 7.5])
        assert min_pair_distance(positions) == pytest.approx(3.0)

    def test_partial_lattice(self):
        """Counts that are not cubes leave the last sites empty."""
        domain = Domain(PeriodicBoundary.cubic(9.0))
        LatticeInitializer(argon(), 10).initialize(domain)
        assert len(domain) == 10

    def test_explicit_spacing(self):
        """A given lattice constant overrides filling the box."""
        domain = Domain(PeriodicBoundary.cubic(30.0))
        LatticeInitializer(argon(), 8, spacing=4.0).initialize(domain)
        assert domain.positions().max() == pytest.approx(6.0)

    def test_zero_velocity_by_default(self):
        """Lattice particles start at rest unless a scale is given."""
        domain = Domain(PeriodicBoundary.cubic(9.0))
        LatticeInitializer(argon(), 8).initialize(domain)
        assert domain.kinetic_energy() == 0.0

    def test_jitter_and_velocities_are_seeded(self):
        """The same seed gives the same start."""
        runs = []
        for _ in range(2):
            domain = Domain(PeriodicBoundary.cubic(9.0))
            LatticeInitializer(
                argon(), 8, jitter=0.1, velocity_scale=0.5, seed=11
            ).initialize(domain)
            runs.append((domain.positions(), domain.velocities()))

        assert np.array_equal(runs[0][0], runs[1][0])
        assert np.array_equal(runs[0][1], runs[1][1])
        assert np.all(np.abs(runs[0][1]) < 0.5)

    def test_particles_are_clones(self):
        """Every particle is a distinct copy of the template."""
        template = argon()
        domain = Domain(PeriodicBoundary.cubic(9.0))
        LatticeInitializer(template, 8).initialize(domain)

        assert all(p is not template for p in domain)
        assert domain.names() == ["Ar"] * 8

    def test_negative_count_raises(self):
        """The count must be non-negative."""
        with pytest.raises(ConfigurationError):
            LatticeInitializer(argon(), -1)


class TestRandomInitializer:
    """Test uniform random placement."""

    def test_positions_inside_domain(self):
        """Random positions fall inside the periodic box."""
        domain = Domain(PeriodicBoundary(10.0, 20.0, 30.0))
        RandomInitializer(argon(), 50, seed=1).initialize(domain)

        positions = domain.positions()
        assert len(domain) == 50
        assert np.all(positions >= 0.0)
        assert np.all(positions < [10.0, 20.0, 30.0])

    def test_velocity_scale(self):
        """Velocity components lie in [-scale, scale)."""
        domain = Domain(PeriodicBoundary.cubic(10.0))
        RandomInitializer(argon(), 50, seed=2, velocity_scale=0.25).initialize(domain)
        velocities = domain.velocities()
        assert np.all(velocities >= -0.25)
        assert np.all(velocities < 0.25)

    def test_deterministic_with_seed(self):
        """Equal seeds give equal starts."""
        a = Domain(PeriodicBoundary.cubic(10.0))
        b = Domain(PeriodicBoundary.cubic(10.0))
        RandomInitializer(argon(), 5, seed=3).initialize(a)
        RandomInitializer(argon(), 5, seed=3).initialize(b)
        assert np.array_equal(a.positions(), b.positions())

    def test_open_boundary_needs_extents(self):
        """Unbounded domains need an explicit region to fill."""
        with pytest.raises(ConfigurationError):
            RandomInitializer(argon(), 5).initialize(Domain(OpenBoundary()))

        domain = Domain(OpenBoundary())
        RandomInitializer(argon(), 5, extents=(1.0, 1.0, 1.0)).initialize(domain)
        assert np.all(domain.positions() <= 1.0)
