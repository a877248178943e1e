"""Tests for force curve implementations."""

import math

import numpy as np
import pytest

from mdkernel.errors import (
    ConfigurationError,
    DegenerateGeometryError,
    SingularPotentialError,
)
from mdkernel.forcefields import (
    ConstantForce,
    ForceCurve,
    ForceField,
    LennardJones,
    MonatomicWater,
)
from mdkernel.system import Domain, OpenBoundary, Particle, PeriodicBoundary, water
from mdkernel.vector import Vec3

R_MIN = 2.0 ** (1.0 / 6.0)


def make_domain(positions, box=10.0, mass=1.0, name="A"):
    """Periodic domain with one particle per position."""
    domain = Domain(PeriodicBoundary.cubic(box))
    for p in positions:
        domain.add_particle(Particle(name, mass, position=Vec3(*p)))
    return domain


def numerical_gradient(curve, particle, h=1e-6):
    """Central finite difference of the total potential energy."""
    origin = particle.position
    grad = np.zeros(3)
    for axis in range(3):
        step = np.zeros(3)
        step[axis] = h
        particle.position = origin + Vec3.from_array(step)
        e_plus = curve.total_potential_energy()
        particle.position = origin - Vec3.from_array(step)
        e_minus = curve.total_potential_energy()
        grad[axis] = (e_plus - e_minus) / (2 * h)
    particle.position = origin
    return grad


class TestForceCurveInterface:
    """Test the ForceCurve base class."""

    def test_abstract_class(self):
        """ForceCurve cannot be instantiated."""
        with pytest.raises(TypeError):
            ForceCurve(Domain(OpenBoundary()))

    def test_neighbors_within_cutoff(self):
        """Only particles strictly inside the cutoff are neighbors."""
        domain = make_domain(
            [(5.0, 5.0, 5.0), (6.0, 5.0, 5.0), (5.0, 7.5, 5.0), (5.0, 5.0, 8.0)]
        )
        lj = LennardJones(domain, epsilon=1.0, sigma=1.0, cutoff=2.5)
        found = lj.neighbors(domain[0])

        assert [other for other, _ in found] == [domain[1]]
        assert found[0][1] == Vec3(-1.0, 0.0, 0.0)

    def test_neighbors_use_minimum_image(self):
        """Particles near opposite faces are neighbors through the boundary."""
        domain = make_domain([(0.5, 5.0, 5.0), (9.5, 5.0, 5.0)])
        lj = LennardJones(domain, epsilon=1.0, sigma=1.0, cutoff=2.0)
        (other, sep), = lj.neighbors(domain[0])
        assert other is domain[1]
        assert sep == Vec3(1.0, 0.0, 0.0)

    def test_neighbors_without_cutoff_raises(self):
        """Curves without a cutoff have no neighbor list."""
        domain = make_domain([(1.0, 1.0, 1.0)])
        with pytest.raises(ConfigurationError):
            ConstantForce(domain, Vec3.zero()).neighbors(domain[0])

    def test_cutoff_checked_against_boundary(self):
        """A cutoff of half the box or more is rejected."""
        domain = make_domain([])
        with pytest.raises(ConfigurationError):
            LennardJones(domain, epsilon=1.0, sigma=1.0, cutoff=5.0)

        lj = LennardJones(domain, epsilon=1.0, sigma=1.0, cutoff=3.0)
        with pytest.raises(ConfigurationError):
            lj.cutoff = 6.0
        assert lj.cutoff == 3.0


class TestLennardJones:
    """Test the Lennard-Jones force curve."""

    @pytest.fixture
    def pair_at_minimum(self):
        """Two particles at the potential minimum."""
        domain = make_domain([(5.0, 5.0, 5.0), (5.0 + R_MIN, 5.0, 5.0)])
        return LennardJones(domain, epsilon=1.0, sigma=1.0, cutoff=3.0)

    def test_zero_force_at_minimum(self, pair_at_minimum):
        """Force vanishes at r = 2^(1/6) sigma."""
        for particle in pair_at_minimum.domain:
            force = pair_at_minimum.force(particle)
            assert np.allclose(force.to_array(), 0.0, atol=1e-12)

    def test_energy_at_minimum(self, pair_at_minimum):
        """System energy is -epsilon, split evenly between the pair."""
        a, b = pair_at_minimum.domain
        assert pair_at_minimum.potential_energy(a) == pytest.approx(-0.5)
        assert pair_at_minimum.potential_energy(b) == pytest.approx(-0.5)
        assert pair_at_minimum.total_potential_energy() == pytest.approx(-1.0)

    def test_pair_helpers(self, pair_at_minimum):
        """Test closed-form pair energy and force."""
        lj = pair_at_minimum
        assert lj.minimum_distance == pytest.approx(R_MIN)
        assert lj.pair_potential(1.0) == pytest.approx(0.0)
        assert lj.pair_potential(R_MIN) == pytest.approx(-1.0)
        assert lj.pair_force(R_MIN) == pytest.approx(0.0, abs=1e-12)
        assert lj.pair_force(0.95) > 0
        assert lj.pair_force(1.5) < 0

    def test_attractive_at_long_distance(self):
        """At r = 1.5 sigma the pair attracts with the analytic magnitude."""
        domain = make_domain([(4.25, 5.0, 5.0), (5.75, 5.0, 5.0)])
        lj = LennardJones(domain, epsilon=1.0, sigma=1.0, cutoff=3.0)
        a, b = domain

        fa = lj.force(a)
        fb = lj.force(b)

        assert fa.x == pytest.approx(-lj.pair_force(1.5))
        assert fa.x > 0
        assert fa == -fb

    def test_repulsive_at_short_distance(self):
        """Particles closer than sigma push apart."""
        domain = make_domain([(5.0, 5.0, 5.0), (5.0, 5.9, 5.0)])
        lj = LennardJones(domain, epsilon=1.0, sigma=1.0, cutoff=3.0)
        assert lj.force(domain[0]).y < 0
        assert lj.force(domain[1]).y > 0

    def test_cutoff(self):
        """No interaction beyond the cutoff."""
        domain = make_domain([(2.0, 5.0, 5.0), (5.5, 5.0, 5.0)])
        lj = LennardJones(domain, epsilon=1.0, sigma=1.0, cutoff=3.0)
        assert lj.force(domain[0]) == Vec3.zero()
        assert lj.total_potential_energy() == 0.0

    def test_force_is_negative_gradient(self):
        """Forces match finite differences of the total energy."""
        rng = np.random.default_rng(7)
        positions = [
            (5.0, 5.0, 5.0),
            (6.1, 5.0, 5.0),
            (5.5, 5.95, 5.0),
            (5.4, 5.3, 6.05),
        ]
        domain = make_domain(positions)
        for particle in domain:
            particle.position = particle.position + Vec3.from_array(
                rng.uniform(-0.05, 0.05, 3)
            )
        lj = LennardJones(domain, epsilon=1.0, sigma=1.0, cutoff=3.0)

        for particle in domain:
            expected = -numerical_gradient(lj, particle)
            assert np.allclose(lj.force(particle).to_array(), expected, atol=1e-5)

    def test_forces_sum_to_zero(self):
        """Pair forces obey Newton's third law."""
        rng = np.random.default_rng(3)
        domain = make_domain(rng.uniform(0.0, 10.0, (20, 3)))
        lj = LennardJones(domain, epsilon=0.01, sigma=1.0, cutoff=3.0)

        forces = lj.forces()
        assert forces.shape == (20, 3)
        scale = max(1.0, float(np.abs(forces).max()))
        assert np.allclose(np.sum(forces, axis=0), 0.0, atol=1e-10 * scale)

    def test_coincident_particles_raise(self):
        """Zero separation is a degenerate geometry."""
        domain = make_domain([(5.0, 5.0, 5.0), (5.0, 5.0, 5.0)])
        lj = LennardJones(domain, epsilon=1.0, sigma=1.0, cutoff=3.0)
        with pytest.raises(DegenerateGeometryError):
            lj.force(domain[0])


class TestMonatomicWater:
    """Test the three-body mW curve."""

    @staticmethod
    def reference_energy(curve, positions):
        """Direct evaluation of the mW energy over pairs and triplets."""
        rc = curve.a * curve.sigma
        positions = np.asarray(positions, dtype=float)
        n = len(positions)
        energy = 0.0
        for i in range(n):
            for j in range(i + 1, n):
                r = np.linalg.norm(positions[i] - positions[j])
                if r < rc:
                    energy += (
                        curve.A
                        * curve.epsilon
                        * (curve.B * (curve.sigma / r) ** 4 - 1.0)
                        * math.exp(curve.sigma / (r - rc))
                    )
        for i in range(n):
            for j in range(n):
                for k in range(n):
                    if i in (j, k) or j == k:
                        continue
                    u = positions[j] - positions[i]
                    w = positions[k] - positions[i]
                    r = np.linalg.norm(u)
                    s = np.linalg.norm(w)
                    if r >= rc or s >= rc:
                        continue
                    cos_t = np.dot(u, w) / (r * s)
                    energy += (
                        curve.lam
                        * curve.epsilon
                        * (cos_t - math.cos(curve.theta0)) ** 2
                        * math.exp(curve.gamma * curve.sigma / (r - rc))
                        * math.exp(curve.gamma * curve.sigma / (s - rc))
                    )
        return energy

    @pytest.fixture
    def cluster(self):
        """Four water sites all within the cutoff of each other."""
        positions = [
            (10.0, 10.0, 10.0),
            (12.8, 10.0, 10.0),
            (10.0, 12.9, 10.2),
            (9.9, 10.3, 12.7),
        ]
        domain = make_domain(positions, box=20.0, mass=water().mass, name="Water")
        return MonatomicWater(domain), positions

    def test_default_cutoff_is_singular_radius(self, cluster):
        """The cutoff defaults to a * sigma."""
        curve, _ = cluster
        assert curve.cutoff == pytest.approx(1.8 * 2.3925)
        assert curve.singular_radius == curve.cutoff

    def test_cutoff_beyond_singular_radius_raises(self):
        """A cutoff above a * sigma would reach the singularity."""
        domain = make_domain([], box=20.0)
        with pytest.raises(ConfigurationError):
            MonatomicWater(domain, cutoff=5.0)

    def test_pair_energy(self):
        """Two sites only feel the two-body term, shared evenly."""
        domain = make_domain([(5.0, 5.0, 5.0), (7.8, 5.0, 5.0)], box=20.0)
        curve = MonatomicWater(domain)
        expected = self.reference_energy(curve, [(5.0, 5.0, 5.0), (7.8, 5.0, 5.0)])

        assert expected < 0
        assert curve.total_potential_energy() == pytest.approx(expected)
        assert curve.potential_energy(domain[0]) == pytest.approx(0.5 * expected)

    def test_cluster_energy(self, cluster):
        """Total energy matches the direct pair and triplet sum."""
        curve, positions = cluster
        expected = self.reference_energy(curve, positions)
        assert curve.total_potential_energy() == pytest.approx(expected, rel=1e-10)

    def test_three_body_penalizes_linear_triplet(self):
        """A straight triplet sits far from the tetrahedral angle."""
        positions = [(10.0, 10.0, 10.0), (12.8, 10.0, 10.0), (7.2, 10.0, 10.0)]
        domain = make_domain(positions, box=20.0)
        curve = MonatomicWater(domain)
        two_body_only = MonatomicWater(domain, lam=0.0)

        center = domain[0]
        assert curve.potential_energy(center) > two_body_only.potential_energy(center)

    def test_three_body_counts_both_orderings(self):
        """A right-angle triplet contributes phi3 once per leg ordering."""
        positions = [(10.0, 10.0, 10.0), (12.8, 10.0, 10.0), (10.0, 12.8, 10.0)]
        domain = make_domain(positions, box=20.0)
        curve = MonatomicWater(domain)
        two_body_only = MonatomicWater(domain, lam=0.0)

        rc = 1.8 * 2.3925
        envelope = math.exp(1.2 * 2.3925 / (2.8 - rc))
        # cos(90 deg) = 0
        phi3 = 23.15 * 0.2685 * math.cos(1.910612) ** 2 * envelope**2

        center = domain[0]
        three_body = curve.potential_energy(center) - two_body_only.potential_energy(
            center
        )
        assert three_body == pytest.approx(2.0 * phi3, rel=1e-12)

    def test_force_is_negative_gradient(self, cluster):
        """Analytic forces match finite differences of the total energy."""
        curve, _ = cluster
        for particle in curve.domain:
            expected = -numerical_gradient(curve, particle)
            actual = curve.force(particle).to_array()
            assert np.allclose(actual, expected, rtol=1e-5, atol=1e-6)

    def test_forces_sum_to_zero(self, cluster):
        """Internal forces carry no net momentum."""
        curve, _ = cluster
        assert np.allclose(np.sum(curve.forces(), axis=0), 0.0, atol=1e-10)

    def test_singular_separation_raises(self, cluster):
        """A bond at the singular radius cannot be evaluated."""
        curve, _ = cluster
        a, b = curve.domain[0], curve.domain[1]
        with pytest.raises(SingularPotentialError):
            curve._bond_length(a, b, Vec3(curve.singular_radius, 0.0, 0.0))

    def test_coincident_sites_raise(self):
        """Zero separation is a degenerate geometry."""
        domain = make_domain([(5.0, 5.0, 5.0), (5.0, 5.0, 5.0)], box=20.0)
        curve = MonatomicWater(domain)
        with pytest.raises(DegenerateGeometryError):
            curve.force(domain[0])


class TestConstantForce:
    """Test the uniform external force."""

    def test_force_and_energy(self):
        """Every particle feels F; V = -F . x."""
        domain = make_domain([(1.0, 2.0, 3.0), (4.0, 5.0, 6.0)])
        gravity = ConstantForce(domain, Vec3(0.0, 0.0, -2.0))

        assert gravity.force(domain[0]) == Vec3(0.0, 0.0, -2.0)
        assert gravity.potential_energy(domain[0]) == pytest.approx(6.0)
        assert gravity.total_potential_energy() == pytest.approx(18.0)

    def test_energy_jumps_when_folded(self):
        """Folding across a periodic face shifts V by F . L."""
        domain = make_domain([(10.5, 5.0, 5.0)], box=10.0)
        push = ConstantForce(domain, Vec3(2.0, 0.0, 0.0))
        before = push.total_potential_energy()

        domain.fold_all()

        assert domain[0].position.x == pytest.approx(0.5)
        assert push.total_potential_energy() - before == pytest.approx(20.0)

    def test_energy_continuous_in_open_space(self):
        """Without folding, V follows the particle continuously."""
        domain = Domain(OpenBoundary(), [Particle("A", 1.0, position=Vec3(10.5, 0, 0))])
        push = ConstantForce(domain, Vec3(2.0, 0.0, 0.0))

        domain.fold_all()

        assert push.total_potential_energy() == pytest.approx(-21.0)


class TestForceFieldComposite:
    """Test combining several curves."""

    @pytest.fixture
    def domain(self):
        return make_domain([(4.25, 5.0, 5.0), (5.75, 5.0, 5.0)])

    def test_empty_forcefield(self, domain):
        """An empty field exerts nothing."""
        ff = ForceField(domain)
        assert ff.force(domain[0]) == Vec3.zero()
        assert ff.potential_energy(domain[0]) == 0.0

    def test_combine_forces(self, domain):
        """Forces and energies add."""
        lj = LennardJones(domain, epsilon=1.0, sigma=1.0, cutoff=3.0)
        push = ConstantForce(domain, Vec3(1.0, 0.0, 0.0))
        ff = ForceField(domain, [lj, push])

        a = domain[0]
        assert ff.force(a) == lj.force(a) + push.force(a)
        assert ff.potential_energy(a) == pytest.approx(
            lj.potential_energy(a) + push.potential_energy(a)
        )
        assert ff.potential_energy_per_curve(a) == [
            lj.potential_energy(a),
            push.potential_energy(a),
        ]

    def test_add_remove_curves(self, domain):
        """Test managing curves."""
        push = ConstantForce(domain, Vec3(1.0, 0.0, 0.0))
        ff = ForceField(domain)
        ff.add_curve(push)
        assert ff.force(domain[0]) == Vec3(1.0, 0.0, 0.0)
        ff.remove_curve(push)
        assert ff.force(domain[0]) == Vec3.zero()

    def test_curve_from_other_domain_rejected(self, domain):
        """All curves must share the field's domain."""
        other = make_domain([])
        with pytest.raises(ValueError):
            ForceField(domain, [ConstantForce(other, Vec3.zero())])
