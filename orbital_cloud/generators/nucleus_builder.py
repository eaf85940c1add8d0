"""
Nucleus Geometry

Deterministic placement of protons and neutrons for display. Particles are
spread over two concentric spheres with a Fibonacci lattice; nothing here
is simulated.
"""

from abc import ABC, abstractmethod

import numpy as np

from ..quantum.quantum_constants import (
    ELEMENTARY_CHARGE,
    GOLDEN_ANGLE,
    NEUTRON_MASS_AMU,
    NUCLEAR_RADIUS_R0,
    NUCLEAR_VISUAL_SCALE,
    PROTON_MASS_AMU,
    PROTON_SHELL_FRACTION,
)

# ============================================================================
# Particles
# ============================================================================

class Particle(ABC):
    """A nucleon with a fixed display position."""

    def __init__(self, position):
        self._position = np.asarray(position, dtype=np.float32).reshape(3)

    @property
    def position(self):
        return self._position.copy()

    @property
    @abstractmethod
    def mass(self) -> float:
        """Mass in atomic mass units."""

    @property
    @abstractmethod
    def charge(self) -> float:
        """Charge in elementary charge units."""

    def __repr__(self):
        x, y, z = self._position
        return f"{type(self).__name__}({x:.4f}, {y:.4f}, {z:.4f})"


class Proton(Particle):
    @property
    def mass(self):
        return PROTON_MASS_AMU

    @property
    def charge(self):
        return ELEMENTARY_CHARGE


class Neutron(Particle):
    @property
    def mass(self):
        return NEUTRON_MASS_AMU

    @property
    def charge(self):
        return 0.0

# ============================================================================
# Nucleus
# ============================================================================

class Nucleus:
    """Protons and neutrons of one atom."""

    def __init__(self, protons, neutrons):
        self.protons = list(protons)
        self.neutrons = list(neutrons)

    @property
    def proton_count(self):
        return len(self.protons)

    @property
    def neutron_count(self):
        return len(self.neutrons)

    @property
    def mass_number(self):
        return self.proton_count + self.neutron_count

    def total_mass(self):
        """Sum of nucleon masses (amu), ignoring binding energy."""
        return sum(p.mass for p in self.protons) + sum(n.mass for n in self.neutrons)

    def positions(self):
        """
        All nucleon positions as an (N, 3) float32 array, protons first.
        """
        particles = self.protons + self.neutrons
        if not particles:
            return np.zeros((0, 3), dtype=np.float32)
        return np.stack([p.position for p in particles])

    def __repr__(self):
        return f"Nucleus(protons={self.proton_count}, neutrons={self.neutron_count})"

# ============================================================================
# Placement
# ============================================================================

def nuclear_radius(mass_number):
    """
    Empirical nuclear radius r = r0 * A^(1/3), scaled into display units.
    """
    return np.float32(NUCLEAR_RADIUS_R0 * np.cbrt(mass_number) * NUCLEAR_VISUAL_SCALE)


def fibonacci_sphere(count, radius):
    """
    Spread ``count`` points evenly over a sphere using the golden-angle
    spiral.

    Args:
        count: Number of points
        radius: Sphere radius

    Returns:
        np.ndarray: (count, 3) float32 positions. Empty for 0 points; a
        single point sits at the origin.
    """
    if count == 0:
        return np.zeros((0, 3), dtype=np.float32)
    if count == 1:
        return np.zeros((1, 3), dtype=np.float32)

    i = np.arange(count, dtype=np.float64)
    y = 1.0 - 2.0 * (i + 0.5) / count
    radius_xy = np.sqrt(np.maximum(1.0 - y * y, 0.0))
    theta = GOLDEN_ANGLE * i

    points = np.column_stack([radius_xy * np.cos(theta), y, radius_xy * np.sin(theta)])
    return (points * radius).astype(np.float32)


class NucleusBuilder:
    """
    Builds a Nucleus with protons on an inner shell and neutrons on the
    outer one.
    """

    def __init__(self, proton_count, neutron_count):
        if proton_count < 0 or neutron_count < 0:
            raise ValueError(
                f"Particle counts must be non-negative, got protons={proton_count}, "
                f"neutrons={neutron_count}"
            )
        self.proton_count = int(proton_count)
        self.neutron_count = int(neutron_count)

    def build(self):
        total = max(self.proton_count + self.neutron_count, 1)
        base_radius = nuclear_radius(total)

        proton_positions = fibonacci_sphere(self.proton_count, base_radius * PROTON_SHELL_FRACTION)
        neutron_positions = fibonacci_sphere(self.neutron_count, base_radius)

        return Nucleus(
            [Proton(position) for position in proton_positions],
            [Neutron(position) for position in neutron_positions],
        )
