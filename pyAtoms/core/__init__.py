"""
Core module for atomistic systems.

This module provides the fundamental classes:
- AbstractSystem: Interface every system representation implements
- Atom: A single species with fixed fields and extra properties
- FlexibleSystem: System stored as an array of species
- FastSystem / AtomView: System stored as a struct of arrays
- DEFAULT_UNITS: Units of positions, velocities and masses
- ElementRegistry: Database of chemical element properties
"""

from .atom import FIXED_FIELDS, Atom, BaseSpecies
from .element_registry import ElementData, ElementRegistry, element, elements
from .fast_system import AtomView, FastSystem
from .flexible_system import FlexibleSystem
from .system import (
    AbstractSystem,
    atomic_mass,
    atomic_number,
    atomic_symbol,
    atomkeys,
    boundary_conditions,
    bounding_box,
    hasatomkey,
    isinfinite,
    n_dimensions,
    periodicity,
    position,
    species_type,
    validate_geometry,
    velocity,
)
from .units import DEFAULT_UNITS, UNKNOWN_MASS, UnitSystem, zero_velocity

__all__ = [
    # Classes
    "AbstractSystem",
    "Atom",
    "AtomView",
    "BaseSpecies",
    "FastSystem",
    "FlexibleSystem",
    "UnitSystem",
    "ElementData",
    "ElementRegistry",
    # Singleton instance and lookup
    "elements",
    "element",
    # Accessors
    "atomic_mass",
    "atomic_number",
    "atomic_symbol",
    "atomkeys",
    "boundary_conditions",
    "bounding_box",
    "hasatomkey",
    "isinfinite",
    "n_dimensions",
    "periodicity",
    "position",
    "species_type",
    "velocity",
    "validate_geometry",
    "DEFAULT_UNITS",
    "FIXED_FIELDS",
    "UNKNOWN_MASS",
    "zero_velocity",
]
