"""
Atom Model

An element, its nucleus, and the electrons of the visualized orbital.
All electrons share the active orbital; occupation of separate shells is
not modeled.
"""

import logging
from typing import Optional, Tuple

from .generators.nucleus_builder import Nucleus, NucleusBuilder
from .quantum.elements import Element
from .quantum.orbitals import Electron, Orbital

logger = logging.getLogger(__name__)


class Atom:
    """
    Simulation state for one atom.

    Construction builds the nucleus and puts every electron in the ground
    state. Changing the element means building a new Atom.

    Args:
        element: Cataloged Element
        neutron_count: Optional override of the element's default
    """

    def __init__(self, element: Element, neutron_count: Optional[int] = None):
        if neutron_count is None:
            neutron_count = element.default_neutron_count

        self._element = element
        self._nucleus = NucleusBuilder(element.atomic_number, neutron_count).build()
        self._active_orbital = Orbital.ground_state()
        self._electrons = [Electron(self._active_orbital) for _ in range(element.atomic_number)]

        logger.debug(
            "Built %s with %d protons, %d neutrons",
            element.symbol, self._nucleus.proton_count, self._nucleus.neutron_count,
        )

    @property
    def element(self) -> Element:
        return self._element

    @property
    def nucleus(self) -> Nucleus:
        return self._nucleus

    @property
    def electrons(self) -> Tuple[Electron, ...]:
        return tuple(self._electrons)

    @property
    def electron_count(self) -> int:
        return len(self._electrons)

    @property
    def active_orbital(self) -> Orbital:
        return self._active_orbital

    def set_active_orbital(self, orbital: Orbital) -> None:
        """Move every electron into ``orbital``."""
        if not isinstance(orbital, Orbital):
            raise TypeError(f"Expected Orbital, got {type(orbital).__name__}")

        self._active_orbital = orbital
        self._electrons = [Electron(orbital) for _ in self._electrons]

    def __repr__(self):
        return f"Atom({self._element.symbol}, orbital={self._active_orbital.name})"
