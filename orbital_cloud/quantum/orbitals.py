"""
Orbitals and the Approximate Density Model

Defines the Orbital value type, the Electron placeholder, and the
closed-form probability densities used to drive the point-cloud sampler.

Exact expressions are used for the 1s and 2s states. Every other state
falls back to an isotropic Gaussian sized from the bounding radius; it has
no angular structure and no radial nodes. The exact hydrogenic densities
live in hydrogen_wavefunctions.py.
"""

from dataclasses import dataclass

import numpy as np

from .quantum_constants import (
    ELECTRON_MASS_AMU,
    ELEMENTARY_CHARGE,
    effective_bohr_radius,
    get_orbital_name,
    validate_quantum_numbers,
)

PI = np.float32(np.pi)

# ============================================================================
# Orbital Value Type
# ============================================================================

@dataclass(frozen=True)
class Orbital:
    """
    Quantum numbers (n, l, m) of a hydrogen-like orbital.

    Construction validates 1 ≤ n, 0 ≤ l < n, |m| ≤ l and raises
    ValueError otherwise. Values are never clamped.
    """

    n: int
    l: int
    m: int

    def __post_init__(self):
        validate_quantum_numbers(self.n, self.l, self.m)

    @classmethod
    def ground_state(cls):
        return cls(1, 0, 0)

    @property
    def is_ground_state(self):
        return (self.n, self.l, self.m) == (1, 0, 0)

    @property
    def name(self):
        return get_orbital_name(self.n, self.l, self.m)

    def as_tuple(self):
        return (self.n, self.l, self.m)

    # Element-dependent queries, delegated to the approximate model

    def effective_bohr_radius(self, element):
        return effective_bohr_radius(element.atomic_number)

    def probability_density(self, element, position):
        return ApproximateDensity(element, self).probability_density(position)

    def max_density(self, element):
        return ApproximateDensity(element, self).max_density()

    def bounding_radius(self, element):
        return ApproximateDensity(element, self).bounding_radius()


class Electron:
    """Electron bound to an orbital. Carries no state beyond the orbital."""

    mass = ELECTRON_MASS_AMU
    charge = -ELEMENTARY_CHARGE

    __slots__ = ('_orbital',)

    def __init__(self, orbital):
        self._orbital = orbital

    @property
    def orbital(self):
        return self._orbital

    def __repr__(self):
        return f"Electron({self._orbital.name})"

# ============================================================================
# Density Helpers
# ============================================================================

def radial_distance(position):
    """
    Euclidean distance of position(s) from the nucleus.

    Args:
        position: A 3-vector or an (N, 3) array

    Returns:
        float32 scalar or (N,) float32 array
    """
    position = np.asarray(position, dtype=np.float32)
    if position.shape[-1] != 3:
        raise ValueError(f"Positions must have 3 components, got shape {position.shape}")
    return np.linalg.norm(position, axis=-1).astype(np.float32)


def bounding_radius_for(n, a):
    """4a for n=1, 8a for n=2, n²·4a beyond."""
    a = np.float32(a)
    if n == 1:
        return np.float32(4.0) * a
    if n == 2:
        return np.float32(8.0) * a
    return np.float32(n * n) * np.float32(4.0) * a


def radial_gaussian(r, sigma):
    """Isotropic 3D Gaussian density, normalized over all space."""
    sigma = np.float32(sigma)
    norm = np.float32(1.0) / (np.float32((2.0 * np.pi) ** 1.5) * sigma ** 3)
    return (norm * np.exp(np.float32(-0.5) * r * r / (sigma * sigma))).astype(np.float32)

# ============================================================================
# Approximate Density Model
# ============================================================================

class ApproximateDensity:
    """
    Probability density |ψ|² for one element and orbital.

    Provides the three queries the sampler needs: the density itself,
    an upper bound for rejection sampling, and a radius that holds the
    bulk of the probability mass. All values are float32, lengths in
    Angstroms.
    """

    def __init__(self, element, orbital):
        self.element = element
        self.orbital = orbital
        self.a = effective_bohr_radius(element.atomic_number)

    def probability_density(self, position):
        """
        Evaluate |ψ|² at one position or an (N, 3) array of positions.

        Returns:
            float32 scalar for a single position, else an (N,) array
        """
        r = radial_distance(position)
        a = self.a
        state = self.orbital.as_tuple()

        if state == (1, 0, 0):
            norm = np.float32(1.0) / (PI * a ** 3)
            density = norm * np.exp(np.float32(-2.0) * r / a)
        elif state == (2, 0, 0):
            norm = np.float32(1.0) / (np.float32(32.0) * PI * a ** 3)
            density = norm * np.exp(-r / a) * (np.float32(2.0) - r / a) ** 2
        else:
            density = radial_gaussian(r, self.bounding_radius() / np.float32(3.0))

        density = np.asarray(density, dtype=np.float32)
        return density if density.ndim else np.float32(density)

    def max_density(self):
        """
        Upper bound on the density.

        Exact for 1s and 2s (both peak at the nucleus). For the Gaussian
        fallback 1.0 is returned as a conservative placeholder.
        """
        a = self.a
        n, l = self.orbital.n, self.orbital.l
        if (n, l) == (1, 0):
            return np.float32(1.0) / (PI * a ** 3)
        if (n, l) == (2, 0):
            return np.float32(1.0) / (np.float32(32.0) * PI * a ** 3)
        return np.float32(1.0)

    def bounding_radius(self):
        """Radius capturing most of the probability mass."""
        return bounding_radius_for(self.orbital.n, self.a)

    def __repr__(self):
        return f"ApproximateDensity({self.element.symbol}, {self.orbital.name})"
