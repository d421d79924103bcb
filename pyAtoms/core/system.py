"""
AbstractSystem interface for atomistic systems.

A concrete system implements a handful of primitives (bounding box,
boundary conditions, species type, length, species and property
lookup). Everything else is derived here once for all implementations.

The module also provides free functions mirroring the accessors, which
accept either a system (optionally with an index) or a single species.
"""
from abc import ABC, abstractmethod
from numbers import Integral
from typing import Any, Iterator, Optional, Sequence, Tuple, Type, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyAtoms.boundary import BoundaryCondition, infinite_box
from pyAtoms.exceptions import DimensionMismatchError

from .atom import BaseSpecies
from .properties import readonly_array

Index = Optional[int]


class AbstractSystem(ABC):
    """
    A D-dimensional system of species (Template Method pattern).

    Subclasses implement the primitives:

    - ``bounding_box``: ``(D, D)`` array whose rows are the box vectors
    - ``boundary_conditions``: tuple of D BoundaryCondition objects
    - ``species_type``: the type of the contained species
    - ``__len__``: number of species
    - ``get_species(i)``: the species at a valid, non-negative index
    - ``keys()`` / ``get_property(key)``: system-level properties

    Indexing follows Python conventions: ``system[0]`` is the first
    species, negative indices count from the end, slices return lists and
    ``system["key"]`` looks up a system property.

    Example:
        >>> from pyAtoms import isolated_system
        >>> h2 = isolated_system([("H", [0, 0, 1.0]), ("H", [0, 0, 3.0])])
        >>> h2.atomic_symbol()
        ['H', 'H']
        >>> h2.position(0)
        array([0., 0., 1.])
        >>> h2.is_infinite
        True
    """

    # ------------------------------------------------------------------ #
    #  Primitives
    # ------------------------------------------------------------------ #

    @property
    @abstractmethod
    def bounding_box(self) -> NDArray[np.floating]:
        """Box vectors as the rows of a ``(D, D)`` array."""
        pass

    @property
    @abstractmethod
    def boundary_conditions(self) -> Tuple[BoundaryCondition, ...]:
        """One boundary condition per box vector."""
        pass

    @property
    @abstractmethod
    def species_type(self) -> Type[BaseSpecies]:
        """Type used to represent a species of this system."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def get_species(self, index: int) -> BaseSpecies:
        """
        Return the species at ``index``.

        Args:
            index: Index in ``[0, len(self))``, already bounds-checked.
        """
        pass

    @abstractmethod
    def keys(self) -> Tuple[str, ...]:
        """Names of the system-level properties."""
        pass

    @abstractmethod
    def get_property(self, key: str) -> Any:
        """
        Return the system-level property ``key``.

        Raises:
            UnknownKeyError: If the system has no such property.
        """
        pass

    # ------------------------------------------------------------------ #
    #  Derived behaviour
    # ------------------------------------------------------------------ #

    @property
    def n_dimensions(self) -> int:
        """Number of spatial dimensions D."""
        return len(self.bounding_box)

    @property
    def periodicity(self) -> Tuple[bool, ...]:
        """For each axis, whether its boundary condition is periodic."""
        return tuple(bc.is_periodic for bc in self.boundary_conditions)

    @property
    def is_infinite(self) -> bool:
        """
        Whether the bounding box is exactly ``infinite_box(D)``.

        Large but finite boxes are not infinite, and neither is any box
        outside 1 to 3 dimensions.
        """
        if self.n_dimensions not in (1, 2, 3):
            return False
        return bool(np.array_equal(self.bounding_box, infinite_box(self.n_dimensions)))

    @property
    def size(self) -> Tuple[int]:
        return (len(self),)

    def __getitem__(self, key: Union[int, slice, str]) -> Any:
        if isinstance(key, str):
            return self.get_property(key)
        if isinstance(key, slice):
            return [self.get_species(i) for i in range(*key.indices(len(self)))]
        if isinstance(key, Integral) and not isinstance(key, bool):
            n = len(self)
            index = int(key)
            if index < 0:
                index += n
            if not 0 <= index < n:
                raise IndexError(f"Species index {key} out of range for {n} species")
            return self.get_species(index)
        raise TypeError(
            f"System indices must be int, slice or str, got {type(key).__name__}"
        )

    def __iter__(self) -> Iterator[BaseSpecies]:
        return (self.get_species(i) for i in range(len(self)))

    def haskey(self, key: str) -> bool:
        return key in self.keys()

    def get(self, key: str, default: Any = None) -> Any:
        """System property ``key``, or ``default`` if it does not exist."""
        return self.get_property(key) if self.haskey(key) else default

    def pairs(self) -> Iterator[Tuple[str, Any]]:
        """Iterate over the system-level ``(key, value)`` pairs."""
        return ((key, self.get_property(key)) for key in self.keys())

    def _species_field(self, name: str, index: Index) -> Any:
        if index is None:
            return [getattr(species, name) for species in self]
        return getattr(self[index], name)

    def position(self, index: Index = None):
        """Cartesian positions of all species, or of the species at ``index``."""
        return self._species_field("position", index)

    def velocity(self, index: Index = None):
        """Cartesian velocities of all species, or of the species at ``index``."""
        return self._species_field("velocity", index)

    def atomic_mass(self, index: Index = None):
        return self._species_field("atomic_mass", index)

    def atomic_symbol(self, index: Index = None):
        """
        Atomic symbols of all species, or of the species at ``index``.

        ``atomic_number`` identifies the element, whereas the symbol may be
        more specific: a deuterium atom has symbol "D" and number 1.
        """
        return self._species_field("atomic_symbol", index)

    def atomic_number(self, index: Index = None):
        return self._species_field("atomic_number", index)

    def atomkeys(self) -> Tuple[str, ...]:
        """Species property keys present on every species of the system."""
        if len(self) == 0:
            return ()
        return tuple(key for key in self.get_species(0).keys() if self.hasatomkey(key))

    def hasatomkey(self, key: str) -> bool:
        """Whether every species of the system has the property ``key``."""
        return all(species.haskey(key) for species in self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n_atoms={len(self)}, "
            f"n_dimensions={self.n_dimensions}, "
            f"periodicity={list(self.periodicity)})"
        )


def validate_geometry(
    box: ArrayLike,
    conditions: Sequence[BoundaryCondition],
) -> Tuple[NDArray[np.floating], Tuple[BoundaryCondition, ...]]:
    """
    Check a bounding box and its boundary conditions.

    Returns:
        The box as a read-only ``(D, D)`` array and the conditions as a tuple.

    Raises:
        DimensionMismatchError: If the box is not square or the number of
            boundary conditions differs from D.
        TypeError: If a condition is not a BoundaryCondition.
    """
    box = readonly_array(box)
    if box.ndim != 2 or box.shape[0] != box.shape[1] or box.shape[0] == 0:
        raise DimensionMismatchError(
            f"Bounding box must hold D vectors of length D, got shape {box.shape}"
        )
    conditions = tuple(conditions)
    for bc in conditions:
        if not isinstance(bc, BoundaryCondition):
            raise TypeError(
                f"Expected BoundaryCondition instances, got {type(bc).__name__}"
            )
    if len(conditions) != len(box):
        raise DimensionMismatchError(
            f"Got {len(conditions)} boundary conditions for a "
            f"{len(box)}-dimensional bounding box",
            expected=len(box),
            got=len(conditions),
        )
    return box, conditions


# ---------------------------------------------------------------------- #
#  Free functions
# ---------------------------------------------------------------------- #


def bounding_box(system: AbstractSystem) -> NDArray[np.floating]:
    return system.bounding_box


def boundary_conditions(system: AbstractSystem) -> Tuple[BoundaryCondition, ...]:
    return system.boundary_conditions


def species_type(system: AbstractSystem) -> Type[BaseSpecies]:
    return system.species_type


def n_dimensions(obj: Union[AbstractSystem, BaseSpecies]) -> int:
    """Number of dimensions of a system or a species."""
    return obj.n_dimensions


def periodicity(system: AbstractSystem) -> Tuple[bool, ...]:
    return system.periodicity


def isinfinite(system: AbstractSystem) -> bool:
    return system.is_infinite


def _field(obj: Union[AbstractSystem, BaseSpecies], name: str, index: Index) -> Any:
    if isinstance(obj, AbstractSystem):
        return obj._species_field(name, index)
    if index is not None:
        raise TypeError("An index is only accepted together with a system")
    return getattr(obj, name)


def position(obj: Union[AbstractSystem, BaseSpecies], index: Index = None):
    """
    Position of a species, of the species at ``index`` in a system, or the
    list of positions of every species in a system.
    """
    return _field(obj, "position", index)


def velocity(obj: Union[AbstractSystem, BaseSpecies], index: Index = None):
    """Velocity of a species or of the species of a system (may be None)."""
    return _field(obj, "velocity", index)


def atomic_mass(obj: Union[AbstractSystem, BaseSpecies], index: Index = None):
    return _field(obj, "atomic_mass", index)


def atomic_symbol(obj: Union[AbstractSystem, BaseSpecies], index: Index = None):
    return _field(obj, "atomic_symbol", index)


def atomic_number(obj: Union[AbstractSystem, BaseSpecies], index: Index = None):
    return _field(obj, "atomic_number", index)


def atomkeys(system: AbstractSystem) -> Tuple[str, ...]:
    return system.atomkeys()


def hasatomkey(system: AbstractSystem, key: str) -> bool:
    return system.hasatomkey(key)
