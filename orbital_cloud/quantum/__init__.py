"""
Quantum Orbital Models

Element catalog, orbital quantum numbers, and the probability-density
models (approximate and exact hydrogenic) that feed the cloud sampler.
"""

from .quantum_constants import *
from .elements import *
from .orbitals import *
from .hydrogen_wavefunctions import *

__all__ = [
    'quantum_constants',
    'elements',
    'orbitals',
    'hydrogen_wavefunctions',
]
