"""
Per-axis boundary conditions.

This module provides the BoundaryCondition ABC and its two built-in
variants, DirichletZero and Periodic. A system carries one boundary
condition per spatial axis.
"""
from abc import ABC, abstractmethod
from numbers import Integral

import numpy as np
from numpy.typing import NDArray

from pyAtoms.exceptions import UnsupportedDimensionError


class BoundaryCondition(ABC):
    """
    Abstract base for the boundary condition along one axis.

    Boundary conditions are stateless tags: two instances of the same
    class compare equal and hash alike. New variants subclass this
    class and implement ``get_name``; they count as periodic only if
    they override ``is_periodic``.

    Example:
        >>> from pyAtoms.boundary import DirichletZero, Periodic
        >>> bcs = [Periodic(), Periodic(), DirichletZero()]
        >>> [bc.is_periodic for bc in bcs]
        [True, True, False]
    """

    @property
    def is_periodic(self) -> bool:
        """Whether the axis wraps around."""
        return False

    @abstractmethod
    def get_name(self) -> str:
        """
        Get human-readable name of this boundary condition.

        Returns:
            Name string (e.g., "Periodic", "DirichletZero").
        """
        pass

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{self.get_name()}()"


class DirichletZero(BoundaryCondition):
    """Dirichlet zero boundary, i.e. vacuum (molecular context)."""

    def get_name(self) -> str:
        """Return 'DirichletZero' as the boundary condition name."""
        return "DirichletZero"


class Periodic(BoundaryCondition):
    """Periodic boundary: the axis wraps around."""

    @property
    def is_periodic(self) -> bool:
        return True

    def get_name(self) -> str:
        """Return 'Periodic' as the boundary condition name."""
        return "Periodic"


def infinite_box(n_dimensions: int) -> NDArray[np.floating]:
    """
    Bounding box of a system embedded in infinite vacuum.

    The box vectors are the rows of a ``(D, D)`` array with ``inf`` on
    the diagonal and zeros elsewhere.

    Args:
        n_dimensions: Number of dimensions D, one of 1, 2, 3.

    Returns:
        Read-only ``(D, D)`` array.

    Raises:
        UnsupportedDimensionError: If D is not 1, 2 or 3.

    Example:
        >>> infinite_box(2)
        array([[inf,  0.],
               [ 0., inf]])
    """
    if (
        not isinstance(n_dimensions, Integral)
        or isinstance(n_dimensions, bool)
        or n_dimensions not in (1, 2, 3)
    ):
        raise UnsupportedDimensionError(n_dimensions)
    n_dimensions = int(n_dimensions)
    box = np.zeros((n_dimensions, n_dimensions), dtype=np.float64)
    np.fill_diagonal(box, np.inf)
    box.setflags(write=False)
    return box
