"""
Boundary condition module for atomistic systems.

One boundary condition is attached to each axis of a system:
- Periodic: wrap-around edge (bulk, solids)
- DirichletZero: vacuum edge (molecules, clusters)

infinite_box(D) is the bounding box used for systems in vacuum.
"""

from .boundary_condition import (
    BoundaryCondition,
    DirichletZero,
    Periodic,
    infinite_box,
)

__all__ = [
    "BoundaryCondition",
    "DirichletZero",
    "Periodic",
    "infinite_box",
]
