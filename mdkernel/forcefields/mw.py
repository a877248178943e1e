"""
Monatomic water (mW) force curve.

The mW model (Molinero and Moore, J. Phys. Chem. B 113, 4008 (2009))
treats a water molecule as one site interacting through a re-parameterized
Stillinger-Weber potential:

    E = sum_{i<j} phi2(r_ij) + sum_i sum_{j!=k} phi3(r_ij, r_ik, theta_jik)

    phi2(r) = A eps [B (sigma/r)^4 - 1] exp(sigma / (r - a sigma))
    phi3(r, s, theta) = lam eps (cos theta - cos theta0)^2
                        exp(gamma sigma / (r - a sigma))
                        exp(gamma sigma / (s - a sigma))

The three-body sum runs over ordered neighbor pairs, so every angle is
counted twice; with the published lam this doubles the three-body term of
the j<k form.

Both terms vanish smoothly as a separation approaches a * sigma, and are
singular there; the cutoff may therefore not exceed a * sigma.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ..errors import ConfigurationError, SingularPotentialError
from ..vector import Vec3, angle
from .base import ForceCurve

if TYPE_CHECKING:
    from ..system import Domain, Particle


class MonatomicWater(ForceCurve):
    """
    Three-body mW water potential.

    Defaults are the published mW parameters in eV and Angstrom.

    Attributes:
        epsilon: Energy scale (eV).
        sigma: Length scale (Angstrom).
        lam: Strength of the three-body term.
        a: Reduced singular radius; interactions end at a * sigma.
        gamma: Decay constant of the three-body envelope.
        theta0: Reference angle in radians (tetrahedral).
        A: Two-body energy prefactor.
        B: Two-body repulsion coefficient.
    """

    def __init__(
        self,
        domain: Domain,
        epsilon: float = 0.2685,
        sigma: float = 2.3925,
        lam: float = 23.15,
        a: float = 1.8,
        gamma: float = 1.2,
        theta0: float = 1.910612,
        A: float = 7.049556277,
        B: float = 0.6022245584,
        cutoff: float | None = None,
    ) -> None:
        """
        Initialize mW force curve.

        Args:
            domain: Domain whose particles interact.
            epsilon: Energy scale.
            sigma: Length scale.
            lam: Three-body strength.
            a: Reduced singular radius.
            gamma: Three-body envelope decay.
            theta0: Reference angle in radians.
            A: Two-body prefactor.
            B: Two-body repulsion coefficient.
            cutoff: Cutoff distance; defaults to a * sigma.
        """
        self.epsilon = float(epsilon)
        self.sigma = float(sigma)
        self.lam = float(lam)
        self.a = float(a)
        self.gamma = float(gamma)
        self.theta0 = float(theta0)
        self.A = float(A)
        self.B = float(B)
        super().__init__(domain, self.singular_radius if cutoff is None else cutoff)

    @property
    def singular_radius(self) -> float:
        """Return a * sigma, where both terms are singular."""
        return self.a * self.sigma

    def _validate_cutoff(self, cutoff: float) -> None:
        super()._validate_cutoff(cutoff)
        if cutoff > self.singular_radius:
            raise ConfigurationError(
                f"mW cutoff {cutoff} exceeds the singular radius a*sigma = "
                f"{self.singular_radius}"
            )

    def _bond_length(self, center: Particle, other: Particle, sep: Vec3) -> float:
        r = sep.magnitude()
        self._check_separation(center, other, r)
        if r >= self.singular_radius:
            raise SingularPotentialError(
                f"separation {r} between {center.name!r} and {other.name!r} "
                f"reached the singular radius {self.singular_radius}"
            )
        return r

    def _pair(self, r: float) -> tuple[float, float]:
        """Return phi2(r) and its derivative."""
        gap = r - self.singular_radius
        envelope = math.exp(self.sigma / gap)
        s4 = (self.sigma / r) ** 4
        phi = self.A * self.epsilon * (self.B * s4 - 1.0) * envelope
        dphi = -self.A * self.epsilon * envelope * (
            4.0 * self.B * s4 / r + (self.B * s4 - 1.0) * self.sigma / (gap * gap)
        )
        return phi, dphi

    def _envelope(self, r: float) -> tuple[float, float]:
        """Return the three-body envelope and its logarithmic derivative."""
        gap = r - self.singular_radius
        exponent = self.gamma * self.sigma / gap
        return math.exp(exponent), -exponent / gap

    def _triplet(
        self, u: Vec3, r: float, w: Vec3, s: float
    ) -> tuple[float, Vec3, Vec3]:
        """
        Evaluate phi3 for bonds u and w leaving the same central particle.

        Returns:
            The energy and its gradients with respect to u and w. The
            central particle feels -(grad_u + grad_w); the particle at the
            far end of u feels +grad_u, and likewise for w.
        """
        u_hat = u / r
        w_hat = w / s
        cos_theta = math.cos(angle(u, w))
        deviation = cos_theta - math.cos(self.theta0)
        g_r, dlog_r = self._envelope(r)
        g_s, dlog_s = self._envelope(s)

        energy = self.lam * self.epsilon * deviation * deviation * g_r * g_s
        de_dcos = 2.0 * self.lam * self.epsilon * deviation * g_r * g_s

        # radial parts along each bond, angular parts perpendicular to it
        grad_u = u_hat * (energy * dlog_r) + (w_hat - u_hat * cos_theta) * (
            de_dcos / r
        )
        grad_w = w_hat * (energy * dlog_s) + (u_hat - w_hat * cos_theta) * (
            de_dcos / s
        )
        return energy, grad_u, grad_w

    def _bonds(self, particle: Particle) -> list[tuple[Particle, Vec3, float]]:
        return [
            (other, sep, self._bond_length(particle, other, sep))
            for other, sep in self.neighbors(particle)
        ]

    def force(self, particle: Particle) -> Vec3:
        """
        Compute the mW force on a particle.

        Three contributions: the pair terms, the triplets centered on the
        particle, and the triplets centered on each neighbor in which the
        particle is one of the two legs.
        """
        total = Vec3.zero()
        bonds = self._bonds(particle)

        for _, sep, r in bonds:
            _, dphi = self._pair(r)
            total = total - sep * (dphi / r)

        for i in range(len(bonds)):
            _, u, r = bonds[i]
            for j in range(len(bonds)):
                if i == j:
                    continue
                _, w, s = bonds[j]
                _, grad_u, grad_w = self._triplet(u, r, w, s)
                total = total - grad_u - grad_w

        # the particle is the first leg of (particle, other) and the second
        # leg of (other, particle); phi3 is symmetric in its legs
        for neighbor, _, _ in bonds:
            neighbor_bonds = self._bonds(neighbor)
            leg = None
            for other, sep, r in neighbor_bonds:
                if other is particle:
                    leg = (sep, r)
                    break
            if leg is None:
                continue
            u, r = leg
            for other, w, s in neighbor_bonds:
                if other is particle:
                    continue
                _, grad_u, _ = self._triplet(u, r, w, s)
                total = total + grad_u * 2.0

        return total

    def potential_energy(self, particle: Particle) -> float:
        """
        Return the particle's share of the potential energy.

        Half of each pair term plus every ordered triplet the particle
        centers.
        """
        bonds = self._bonds(particle)
        energy = 0.0
        for _, _, r in bonds:
            phi, _ = self._pair(r)
            energy += 0.5 * phi
        for i in range(len(bonds)):
            _, u, r = bonds[i]
            for j in range(len(bonds)):
                if i == j:
                    continue
                _, w, s = bonds[j]
                phi3, _, _ = self._triplet(u, r, w, s)
                energy += phi3
        return energy
