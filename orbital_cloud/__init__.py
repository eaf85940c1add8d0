"""
Orbital Cloud

Monte Carlo point clouds for hydrogen-like atomic orbitals. Samples the
probability density |ψ|² of an element's active orbital into weighted
points ready for a point-sprite renderer.
"""

import logging

from .quantum import *
from .generators import *
from .atom import Atom
from .simulation import ControlState, Simulation

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'quantum',
    'generators',
    'atom',
    'simulation',
    'Atom',
    'ControlState',
    'Simulation',
]

__version__ = '1.0.0'
