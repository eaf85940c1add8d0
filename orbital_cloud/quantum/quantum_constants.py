"""
Quantum Constants and Definitions

Physical constants, quantum number rules, and sampling parameters
for hydrogen-like orbital point clouds.
"""

from numbers import Integral

import numpy as np

# ============================================================================
# Physical Constants
# ============================================================================

# Bohr radius (Angstroms). All cloud positions are expressed in Angstroms.
BOHR_RADIUS_ANGSTROM = 0.52917721067

# Particle masses (atomic mass units)
PROTON_MASS_AMU = 1.007276
NEUTRON_MASS_AMU = 1.008665
ELECTRON_MASS_AMU = 0.000548580

# Charges (elementary charge units)
ELEMENTARY_CHARGE = 1.0

# ============================================================================
# Quantum Number Definitions
# ============================================================================

# Upper bound offered by the control surface. The density model itself
# accepts any n >= 1.
MAX_PRINCIPAL_QUANTUM_NUMBER = 6

# Orbital letter designations
ORBITAL_LETTERS = {
    0: 's',
    1: 'p',
    2: 'd',
    3: 'f',
    4: 'g',
    5: 'h',
    6: 'i',
}


def _is_integer(value):
    return isinstance(value, Integral) and not isinstance(value, bool)


def validate_quantum_numbers(n, l, m):
    """
    Validate quantum numbers for hydrogen-like orbitals.

    Args:
        n: Principal quantum number
        l: Azimuthal quantum number
        m: Magnetic quantum number

    Returns:
        bool: True if valid, raises ValueError if invalid

    Raises:
        ValueError: If quantum numbers are invalid
    """
    if not _is_integer(n) or n < 1:
        raise ValueError(f"Principal quantum number n must be positive integer, got {n}")

    if not _is_integer(l) or l < 0 or l >= n:
        raise ValueError(f"Azimuthal quantum number l must be 0 ≤ l < n, got l={l}, n={n}")

    if not _is_integer(m) or abs(m) > l:
        raise ValueError(f"Magnetic quantum number m must satisfy |m| ≤ l, got m={m}, l={l}")

    return True

# ============================================================================
# Sampler Parameters
# ============================================================================

# Seed used when the caller does not pick one, so unchanged inputs
# reproduce the same cloud.
DEFAULT_SEED = 42

DEFAULT_SAMPLE_COUNT = 20_000

# Floor applied to max-density estimates before dividing by them
MIN_MAX_DENSITY = 1e-6

# Rejection sampling budget: attempts per round are
# max(samples * ATTEMPTS_PER_SAMPLE, MIN_ATTEMPTS_PER_ROUND)
ATTEMPTS_PER_SAMPLE = 50
MIN_ATTEMPTS_PER_ROUND = 10_000

# Bounding box growth after an exhausted round
MAX_EXPANSIONS = 4
EXPANSION_FACTOR = 1.5

# Candidates drawn per vectorized rejection batch
REJECTION_BATCH_SIZE = 65_536

# Shape parameter of the 1s radial distribution r² exp(-2r/a) ~ Gamma(3, a/2)
GROUND_STATE_GAMMA_SHAPE = 3.0

# ============================================================================
# Hydrogenic Model Parameters
# ============================================================================

# Grid sizes for the separable max-density search; both grids include
# r = 0 and the poles, where s and m = 0 states peak
MAX_DENSITY_RADIAL_RESOLUTION = 4097
MAX_DENSITY_ANGULAR_RESOLUTION = 181

# Headroom applied to searched maxima
MAX_DENSITY_HEADROOM = 1.05

# ============================================================================
# Nucleus Parameters
# ============================================================================

# Empirical nuclear radius r = r0 * A^(1/3) (femtometers)
NUCLEAR_RADIUS_R0 = 1.2

# Scale from femtometers into visualization units
NUCLEAR_VISUAL_SCALE = 0.01

# Protons sit on an inner shell of this fraction of the base radius
PROTON_SHELL_FRACTION = 0.6

GOLDEN_ANGLE = np.pi * (3.0 - np.sqrt(5.0))

# ============================================================================
# Utility Functions
# ============================================================================

def get_orbital_name(n, l, m=None):
    """
    Get human-readable name for orbital.

    Args:
        n: Principal quantum number
        l: Azimuthal quantum number
        m: Magnetic quantum number (optional)

    Returns:
        str: Orbital name (e.g., "1s", "2px", "3dz²")
    """
    letter = ORBITAL_LETTERS.get(l, f'l{l}')

    if m is None:
        return f"{n}{letter}"

    # Real-form labels for p and d orbitals
    if l == 1:
        suffix = {1: 'x', -1: 'y', 0: 'z'}.get(m, f'm{m}')
    elif l == 2:
        suffix = {0: 'z²', 1: 'xz', -1: 'yz', 2: 'xy', -2: 'x²-y²'}.get(m, f'm{m}')
    else:
        suffix = f'm{m}' if m != 0 else ''

    return f"{n}{letter}{suffix}"


def effective_bohr_radius(atomic_number):
    """
    Effective Bohr radius a = a0 / max(Z, 1), in Angstroms.

    Shrinking the length scale with Z stands in for nuclear charge
    screening of a single electron.
    """
    z = np.float32(max(atomic_number, 1))
    return np.float32(BOHR_RADIUS_ANGSTROM) / z
