"""
Hydrogen Wave Function Calculations

Exact hydrogen-like wave functions: radial functions from generalized
Laguerre polynomials, real spherical harmonics, and the resulting
probability densities. Lengths are scaled by the effective Bohr radius
so heavier elements pull the cloud in toward the nucleus.

HydrogenicDensity exposes these through the same interface as the
approximate model, so the sampler can be switched to true orbital shapes.
"""

from functools import lru_cache

import numpy as np
from scipy import optimize, special
from scipy.integrate import tplquad

from .orbitals import ApproximateDensity, bounding_radius_for, radial_distance
from .quantum_constants import (
    MAX_DENSITY_ANGULAR_RESOLUTION,
    MAX_DENSITY_HEADROOM,
    MAX_DENSITY_RADIAL_RESOLUTION,
    effective_bohr_radius,
    validate_quantum_numbers,
)

# ============================================================================
# Radial Wave Functions
# ============================================================================

def radial_wavefunction(n, l, r, a=1.0):
    """
    Calculate radial part of hydrogen-like wave function R_nl(r).

    R_nl(r) = N * exp(-ρ/2) * ρ^l * L_{n-l-1}^{2l+1}(ρ),  ρ = 2r/(n*a)

    The normalization N = sqrt((2/(n*a))³ (n-l-1)! / (2n (n+l)!)) is
    evaluated in log space to stay finite for large n.

    Args:
        n: Principal quantum number (1, 2, 3, ...)
        l: Azimuthal quantum number (0 to n-1)
        r: Radial distance (same units as a, can be array)
        a: Effective Bohr radius

    Returns:
        R_nl(r): Radial wave function value(s)
    """
    validate_quantum_numbers(n, l, 0)

    r = np.asarray(r, dtype=float)
    rho = 2.0 * r / (n * a)

    log_norm = 0.5 * (
        3.0 * np.log(2.0 / (n * a))
        + special.gammaln(n - l)
        - np.log(2.0 * n)
        - special.gammaln(n + l + 1)
    )

    laguerre = special.eval_genlaguerre(n - l - 1, 2 * l + 1, rho)

    return np.exp(log_norm) * np.exp(-rho / 2.0) * np.power(rho, l) * laguerre

# ============================================================================
# Spherical Harmonics
# ============================================================================

def spherical_harmonic(l, m, theta, phi, real_form=True):
    """
    Calculate spherical harmonic Y_l^m(θ, φ).

    Args:
        l: Azimuthal quantum number (0, 1, 2, ...)
        m: Magnetic quantum number (-l to +l)
        theta: Polar angle (0 to π), measured from +z axis
        phi: Azimuthal angle (0 to 2π), measured from +x axis
        real_form: If True, return real-valued spherical harmonics

    Returns:
        Y_l^m(θ, φ): Complex or real spherical harmonic value(s)
    """
    if not real_form or m == 0:
        Y_lm = special.sph_harm_y(l, m, theta, phi)
        return np.real(Y_lm) if m == 0 and real_form else Y_lm

    # Real form: m > 0 takes the cosine (x-like) combination, m < 0 the
    # sine (y-like) one. The Condon-Shortley phase is undone so that
    # 2px points along +x.
    Y_abs = special.sph_harm_y(l, abs(m), theta, phi)
    phase = (-1) ** abs(m)
    if m > 0:
        return np.sqrt(2.0) * phase * np.real(Y_abs)
    return np.sqrt(2.0) * phase * np.imag(Y_abs)

# ============================================================================
# Complete Hydrogen Wave Functions
# ============================================================================

def cartesian_to_spherical(x, y, z):
    """
    Convert Cartesian coordinates to spherical coordinates.

    Returns:
        (r, theta, phi): radial distance, polar angle (0 to π),
        azimuthal angle (0 to 2π)
    """
    x, y, z = np.asarray(x, dtype=float), np.asarray(y, dtype=float), np.asarray(z, dtype=float)

    r = np.sqrt(x ** 2 + y ** 2 + z ** 2)
    theta = np.arccos(np.clip(z / np.maximum(r, 1e-10), -1, 1))
    phi = np.arctan2(y, x)

    phi = np.where(phi < 0, phi + 2 * np.pi, phi)

    return r, theta, phi


def hydrogen_orbital(n, l, m, x, y, z, a=1.0, real_form=True):
    """
    Calculate hydrogen-like wave function value at position (x, y, z).

    ψ_nlm(r, θ, φ) = R_nl(r) * Y_l^m(θ, φ)

    Args:
        n, l, m: Quantum numbers
        x, y, z: Cartesian coordinates (same units as a, can be arrays)
        a: Effective Bohr radius
        real_form: If True, use real spherical harmonics

    Returns:
        ψ_nlm: Wave function value(s) (complex or real)
    """
    validate_quantum_numbers(n, l, m)

    r, theta, phi = cartesian_to_spherical(x, y, z)

    return radial_wavefunction(n, l, r, a) * spherical_harmonic(l, m, theta, phi, real_form=real_form)


def probability_density(psi):
    """
    Calculate probability density |ψ|².

    Args:
        psi: Wave function value(s) (complex or real)

    Returns:
        |ψ|²: Probability density
    """
    if np.iscomplexobj(psi):
        return np.abs(psi) ** 2
    return psi ** 2

# ============================================================================
# Grid-Based Calculations
# ============================================================================

def calculate_density_grid(n, l, m, extent, resolution=64, a=1.0):
    """
    Calculate probability density on a cubic 3D grid.

    Args:
        n, l, m: Quantum numbers
        extent: Half-width of the cube (same units as a)
        resolution: Grid resolution (points per axis)
        a: Effective Bohr radius

    Returns:
        tuple: (x_grid, y_grid, z_grid, density_grid)
    """
    validate_quantum_numbers(n, l, m)

    axis = np.linspace(-extent, extent, resolution)
    x_grid, y_grid, z_grid = np.meshgrid(axis, axis, axis, indexing='ij')

    psi_grid = hydrogen_orbital(n, l, m, x_grid, y_grid, z_grid, a=a, real_form=True)

    return x_grid, y_grid, z_grid, probability_density(psi_grid)


def grid_normalization(n, l, m, extent, resolution=101, a=1.0):
    """
    Riemann-sum estimate of ∫|ψ|²dV over a cube. Close to 1.0 when the
    cube holds the orbital and the grid resolves it.
    """
    x_grid, _, _, density = calculate_density_grid(n, l, m, extent, resolution, a)
    spacing = x_grid[1, 0, 0] - x_grid[0, 0, 0]
    return float(density.sum() * spacing ** 3)


def verify_normalization(n, l, m, r_max=None, a=1.0):
    """
    Verify that wave function is normalized: ∫|ψ|²dV = 1

    Uses adaptive numerical integration over a spherical volume. Slow.

    Args:
        n, l, m: Quantum numbers
        r_max: Maximum radius for integration (default: 5*n² a)
        a: Effective Bohr radius

    Returns:
        float: Integral value (should be close to 1.0)
    """
    validate_quantum_numbers(n, l, m)

    if r_max is None:
        r_max = 5 * n ** 2 * a

    def integrand(phi, theta, r):
        x = r * np.sin(theta) * np.cos(phi)
        y = r * np.sin(theta) * np.sin(phi)
        z = r * np.cos(theta)

        psi = hydrogen_orbital(n, l, m, x, y, z, a=a, real_form=True)
        # Jacobian for spherical coordinates: r² sin(θ)
        return float(probability_density(psi)) * r ** 2 * np.sin(theta)

    result, _ = tplquad(
        integrand,
        0, r_max,
        0, np.pi,
        0, 2 * np.pi,
        epsabs=1e-4,
        epsrel=1e-4,
    )

    return result


def _polished_maximum(values, axes, objective, bounds):
    """Grid maximum refined by a bounded local search from the best grid point."""
    best = float(np.max(values))
    index = np.unravel_index(np.argmax(values), values.shape)
    start = np.array([axis[i] for axis, i in zip(axes, index)])

    result = optimize.minimize(lambda p: -objective(*p), start, method="L-BFGS-B", bounds=bounds)
    return max(best, float(-result.fun))


def max_radial_density(n, l, r_max, a=1.0, resolution=MAX_DENSITY_RADIAL_RESOLUTION):
    """max R_nl(r)² over 0 ≤ r ≤ r_max."""
    r = np.linspace(0.0, r_max, resolution)
    values = radial_wavefunction(n, l, r, a) ** 2
    return _polished_maximum(
        values, (r,),
        lambda radius: float(radial_wavefunction(n, l, radius, a) ** 2),
        [(0.0, r_max)],
    )


def max_angular_density(l, m, resolution=MAX_DENSITY_ANGULAR_RESOLUTION):
    """max Y_lm(θ, φ)² over the sphere, real harmonics."""
    theta = np.linspace(0.0, np.pi, resolution)
    phi = np.linspace(0.0, 2.0 * np.pi, 2 * resolution - 1)
    theta_grid, phi_grid = np.meshgrid(theta, phi, indexing='ij')
    values = np.real(spherical_harmonic(l, m, theta_grid, phi_grid)) ** 2
    return _polished_maximum(
        values, (theta, phi),
        lambda t, p: float(np.real(spherical_harmonic(l, m, t, p)) ** 2),
        [(0.0, np.pi), (0.0, 2.0 * np.pi)],
    )


@lru_cache(maxsize=128)
def estimate_max_density(atomic_number, n, l, m):
    """
    Upper bound on |ψ|² for rejection sampling. Cached per element and state.

    |ψ|² = R_nl(r)² · Y_lm(θ,φ)² separates, so the radial maximum out to
    the corner of the bounding cube times the angular maximum bounds the
    density anywhere in the cube.
    """
    a = float(effective_bohr_radius(atomic_number))
    corner = float(bounding_radius_for(n, a)) * np.sqrt(3.0)

    bound = max_radial_density(n, l, corner, a) * max_angular_density(l, m)
    return bound * MAX_DENSITY_HEADROOM

# ============================================================================
# Hydrogenic Density Model
# ============================================================================

class HydrogenicDensity(ApproximateDensity):
    """
    Exact hydrogen-like |ψ_nlm|² with real spherical harmonics.

    Shares the bounding radius of the approximate model so the two are
    sampled over the same volume.
    """

    def probability_density(self, position):
        position = np.asarray(position, dtype=np.float32)
        radial_distance(position)  # shape check
        n, l, m = self.orbital.as_tuple()

        psi = hydrogen_orbital(
            n, l, m,
            position[..., 0], position[..., 1], position[..., 2],
            a=float(self.a),
            real_form=True,
        )
        density = np.asarray(probability_density(psi), dtype=np.float32)
        return density if density.ndim else np.float32(density)

    def max_density(self):
        n, l, m = self.orbital.as_tuple()
        return np.float32(estimate_max_density(self.element.atomic_number, int(n), int(l), int(m)))

    def __repr__(self):
        return f"HydrogenicDensity({self.element.symbol}, {self.orbital.name})"
