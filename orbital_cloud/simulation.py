"""
Simulation Controller

Headless glue between a control surface (UI sliders, CLI flags) and the
sampler. The controls hold what the user asked for; apply_controls()
reconciles them with the atom and sampling settings and resamples when
anything changed. Finished clouds are pushed to an optional renderer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

import numpy as np

from .atom import Atom
from .generators.cloud_vertices import pack_cloud_vertices
from .generators.monte_carlo_sampler import CloudSamples, MonteCarloSampler, SampleConfig
from .quantum.elements import by_atomic_number
from .quantum.orbitals import Orbital
from .quantum.quantum_constants import (
    DEFAULT_SAMPLE_COUNT,
    DEFAULT_SEED,
    MAX_PRINCIPAL_QUANTUM_NUMBER,
)

logger = logging.getLogger(__name__)


class CloudRenderer(Protocol):
    """Anything that accepts a full replacement vertex buffer."""

    def update_cloud(self, vertices: np.ndarray) -> None: ...


# ============================================================================
# Control State
# ============================================================================

@dataclass
class ControlState:
    """
    Values edited by the control surface.

    Quantum numbers here may be temporarily inconsistent (e.g. l raised
    above n-1 by a slider); sync_quantum_numbers() clamps them before an
    Orbital is built.
    """

    selected_atomic_number: int
    principal_n: int = 1
    angular_l: int = 0
    magnetic_m: int = 0
    sample_count: int = DEFAULT_SAMPLE_COUNT
    _resample_requested: bool = field(default=False, repr=False)

    @classmethod
    def from_atom(cls, atom: Atom, sample_count: int) -> ControlState:
        orbital = atom.active_orbital
        return cls(
            selected_atomic_number=atom.element.atomic_number,
            principal_n=orbital.n,
            angular_l=orbital.l,
            magnetic_m=orbital.m,
            sample_count=sample_count,
        )

    def sync_quantum_numbers(self) -> None:
        """Clamp n, l, m and the sample count into valid ranges."""
        self.principal_n = min(max(self.principal_n, 1), MAX_PRINCIPAL_QUANTUM_NUMBER)
        self.angular_l = min(max(self.angular_l, 0), self.principal_n - 1)
        self.magnetic_m = min(max(self.magnetic_m, -self.angular_l), self.angular_l)
        self.sample_count = max(self.sample_count, 0)

    def current_orbital(self) -> Orbital:
        self.sync_quantum_numbers()
        return Orbital(self.principal_n, self.angular_l, self.magnetic_m)

    def request_resample(self) -> None:
        self._resample_requested = True

    def take_resample_request(self) -> bool:
        requested = self._resample_requested
        self._resample_requested = False
        return requested


# ============================================================================
# Simulation
# ============================================================================

class Simulation:
    """
    Owns the atom, sampler, sampling settings and current cloud.

    Args:
        renderer: Optional CloudRenderer receiving every new vertex buffer
        atomic_number: Initial element (must be cataloged)
        sample_count: Initial number of cloud samples
        seed: Sampler seed
        density_model: 'approximate' or 'hydrogenic'
    """

    def __init__(
        self,
        renderer: Optional[CloudRenderer] = None,
        atomic_number: int = 1,
        sample_count: int = DEFAULT_SAMPLE_COUNT,
        seed: int = DEFAULT_SEED,
        density_model: str = 'approximate',
    ):
        element = by_atomic_number(atomic_number)
        if element is None:
            raise ValueError(f"No cataloged element with atomic number {atomic_number}")

        self.renderer = renderer
        self.atom = Atom(element)
        self.sampler = MonteCarloSampler(seed=seed, density_model=density_model)
        self.sample_config = SampleConfig(sample_count)
        self.controls = ControlState.from_atom(self.atom, sample_count)
        self.samples = CloudSamples.empty()
        self.cloud_vertices = pack_cloud_vertices(self.samples)

        self.resample()

    def resample(self) -> np.ndarray:
        """Draw a fresh cloud, hand it to the renderer, and return its vertices."""
        self.samples = self.sampler.sample_orbital(
            self.atom.element, self.atom.active_orbital, self.sample_config
        )
        self.cloud_vertices = pack_cloud_vertices(self.samples)

        if self.renderer is not None:
            self.renderer.update_cloud(self.cloud_vertices)

        logger.debug(
            "Resampled %s %s with %d points",
            self.atom.element.symbol, self.atom.active_orbital.name, len(self.samples),
        )
        return self.cloud_vertices

    def apply_controls(self) -> bool:
        """
        Bring the atom and settings in line with the controls.

        Returns:
            bool: True if a resample happened
        """
        controls = self.controls
        controls.sync_quantum_numbers()
        resample_needed = False

        desired_z = controls.selected_atomic_number
        if desired_z != self.atom.element.atomic_number:
            element = by_atomic_number(desired_z)
            if element is not None:
                logger.info("Switching element to %s", element.label)
                self.atom = Atom(element)
                resample_needed = True
            else:
                logger.warning("Unknown atomic number %s; keeping %s", desired_z, self.atom.element.label)
                controls.selected_atomic_number = self.atom.element.atomic_number

        if controls.sample_count != self.sample_config.samples:
            self.sample_config = SampleConfig(controls.sample_count)
            resample_needed = True

        desired_orbital = controls.current_orbital()
        if desired_orbital != self.atom.active_orbital:
            self.atom.set_active_orbital(desired_orbital)
            resample_needed = True

        if controls.take_resample_request() or resample_needed:
            self.resample()
            return True
        return False

    # Convenience setters for callers without a UI

    def select_element(self, atomic_number: int) -> bool:
        """Select an element by atomic number. Returns False if uncataloged."""
        self.controls.selected_atomic_number = atomic_number
        self.apply_controls()
        return self.atom.element.atomic_number == atomic_number

    def set_orbital(self, n: int, l: int, m: int) -> Orbital:
        """Select an orbital, resampling if it changed. Raises ValueError past the control range."""
        orbital = Orbital(n, l, m)
        if orbital.n > MAX_PRINCIPAL_QUANTUM_NUMBER:
            raise ValueError(
                f"n={orbital.n} exceeds the control range 1..{MAX_PRINCIPAL_QUANTUM_NUMBER}"
            )
        self.controls.principal_n, self.controls.angular_l, self.controls.magnetic_m = orbital.as_tuple()
        self.apply_controls()
        return self.atom.active_orbital

    def set_sample_count(self, count: int) -> None:
        self.controls.sample_count = SampleConfig(count).samples
        self.apply_controls()
