"""
Cloud Generator Package

Point-cloud sampling, nucleus placement and vertex packing for the
renderer.
"""

from .nucleus_builder import *
from .monte_carlo_sampler import *
from .cloud_vertices import *

__all__ = ['nucleus_builder', 'monte_carlo_sampler', 'cloud_vertices']
