"""
Element Catalog

Static, read-only table of the elements the visualizer knows about.
Built once at import time and shared by reference.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional, Tuple


@dataclass(frozen=True)
class Element:
    """
    Basic metadata describing a chemical element.

    Attributes:
        atomic_number (int): Proton count Z, unique within the catalog
        symbol (str): Chemical symbol, e.g. "He"
        name (str): English element name
        standard_atomic_weight (float): Standard atomic weight (amu)
        default_neutron_count (int): Neutron count of the most common isotope
    """

    atomic_number: int
    symbol: str
    name: str
    standard_atomic_weight: float
    default_neutron_count: int

    @property
    def label(self) -> str:
        """Display label, e.g. "Hydrogen (H)"."""
        return f"{self.name} ({self.symbol})"


# ============================================================================
# Catalog
# ============================================================================

_ELEMENTS: Tuple[Element, ...] = (
    Element(1, "H", "Hydrogen", 1.008, 0),
    Element(2, "He", "Helium", 4.0026, 2),
    Element(3, "Li", "Lithium", 6.94, 4),
    Element(4, "Be", "Beryllium", 9.0122, 5),
    Element(5, "B", "Boron", 10.81, 6),
    Element(6, "C", "Carbon", 12.011, 6),
    Element(7, "N", "Nitrogen", 14.007, 7),
    Element(8, "O", "Oxygen", 15.999, 8),
    Element(9, "F", "Fluorine", 18.998, 10),
    Element(10, "Ne", "Neon", 20.180, 10),
)

_BY_ATOMIC_NUMBER = MappingProxyType({element.atomic_number: element for element in _ELEMENTS})


def by_atomic_number(z: int) -> Optional[Element]:
    """Return the cataloged element with atomic number ``z``, or None."""
    return _BY_ATOMIC_NUMBER.get(z)


def all_elements() -> Tuple[Element, ...]:
    """All cataloged elements in ascending atomic number."""
    return _ELEMENTS


def hydrogen() -> Element:
    return _BY_ATOMIC_NUMBER[1]


def helium() -> Element:
    return _BY_ATOMIC_NUMBER[2]
