"""
pyAtoms - Generic interface for atomistic systems.

A Python library describing particle systems (atoms, molecules, solids)
embedded in a D-dimensional space with per-axis boundary conditions.
Downstream numerical or I/O code consumes any system through one small
interface; concrete storage backends only implement a handful of
primitives.

Main features:
- AbstractSystem interface with derived accessors shared by all backends
- Per-axis boundary conditions (Periodic, DirichletZero) and infinite boxes
- Atom values mixing fixed physical fields with extra named properties
- FlexibleSystem (array of atoms) and FastSystem (struct of arrays)
- atomic_system / isolated_system / periodic_system constructors
- Fluent SystemBuilder
"""

from pyAtoms.boundary import (
    BoundaryCondition,
    DirichletZero,
    Periodic,
    infinite_box,
)
from pyAtoms.builder import (
    SystemBuilder,
    atomic_system,
    isolated_system,
    periodic_system,
)
from pyAtoms.core import (
    AbstractSystem,
    Atom,
    AtomView,
    FastSystem,
    FlexibleSystem,
    atomic_mass,
    atomic_number,
    atomic_symbol,
    atomkeys,
    boundary_conditions,
    bounding_box,
    element,
    hasatomkey,
    isinfinite,
    n_dimensions,
    periodicity,
    position,
    species_type,
    velocity,
)

__version__ = "0.1.0"
__author__ = "pyAtoms Team"

__all__ = [
    "AbstractSystem",
    "Atom",
    "AtomView",
    "BoundaryCondition",
    "DirichletZero",
    "FastSystem",
    "FlexibleSystem",
    "Periodic",
    "SystemBuilder",
    "atomic_mass",
    "atomic_number",
    "atomic_symbol",
    "atomic_system",
    "atomkeys",
    "boundary_conditions",
    "bounding_box",
    "element",
    "hasatomkey",
    "infinite_box",
    "isinfinite",
    "isolated_system",
    "n_dimensions",
    "periodic_system",
    "periodicity",
    "position",
    "species_type",
    "velocity",
]
