"""
FastSystem: a system stored as a struct of arrays.

Positions, symbols, numbers and masses live in one array each; indexing
returns lightweight AtomView objects. FastSystem has no velocities and no
extra properties.
"""
import logging
from typing import Any, Sequence, Tuple, Type

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyAtoms.boundary import BoundaryCondition
from pyAtoms.exceptions import DimensionMismatchError, UnknownKeyError

from .atom import BaseSpecies
from .properties import readonly_array
from .system import AbstractSystem, validate_geometry

logger = logging.getLogger(__name__)


class AtomView(BaseSpecies):
    """
    View of one species of a FastSystem.

    Exposes the same per-species protocol as Atom. The velocity is always
    None and there are no extra properties.
    """

    __slots__ = ("_system", "_index")

    def __init__(self, system: "FastSystem", index: int) -> None:
        self._system = system
        self._index = index

    @property
    def position(self) -> NDArray[np.floating]:
        return self._system._positions[self._index]

    @property
    def velocity(self) -> None:
        return None

    @property
    def atomic_symbol(self) -> str:
        return self._system._atomic_symbols[self._index]

    @property
    def atomic_number(self) -> int:
        return int(self._system._atomic_numbers[self._index])

    @property
    def atomic_mass(self) -> float:
        return float(self._system._atomic_masses[self._index])

    def __repr__(self) -> str:
        return (
            f"AtomView({self.atomic_symbol!r}, position={self.position.tolist()}, "
            f"index={self._index})"
        )


class FastSystem(AbstractSystem):
    """
    System holding per-field arrays (struct-of-arrays storage).

    Args:
        bounding_box: D box vectors of length D (the rows of the box).
        boundary_conditions: D BoundaryCondition objects.
        positions: (N, D) array of Cartesian positions.
        atomic_symbols: N atomic symbols.
        atomic_numbers: N atomic numbers.
        atomic_masses: N atomic masses.

    Raises:
        DimensionMismatchError: If the geometry is inconsistent or the
            positions are not (N, D).
        ValueError: If the per-species arrays differ in length.

    Example:
        >>> from pyAtoms import FastSystem, DirichletZero, infinite_box
        >>> system = FastSystem(infinite_box(3), [DirichletZero()] * 3,
        ...                     [[0, 0, 1.0], [0, 0, 3.0]], ["H", "H"], [1, 1],
        ...                     [1.008, 1.008])
        >>> system[1].position
        array([0., 0., 3.])
    """

    def __init__(
        self,
        bounding_box: ArrayLike,
        boundary_conditions: Sequence[BoundaryCondition],
        positions: ArrayLike,
        atomic_symbols: Sequence[str],
        atomic_numbers: Sequence[int],
        atomic_masses: Sequence[float],
    ) -> None:
        box, conditions = validate_geometry(bounding_box, boundary_conditions)
        n_dimensions = len(box)

        positions = np.array(positions, dtype=np.float64)
        if positions.size == 0:
            positions = positions.reshape(0, n_dimensions)
        if positions.ndim != 2 or positions.shape[1] != n_dimensions:
            raise DimensionMismatchError(
                f"Positions must be (N, {n_dimensions}) array, got shape {positions.shape}",
                expected=n_dimensions,
            )
        positions.setflags(write=False)

        atomic_symbols = tuple(str(symbol) for symbol in atomic_symbols)
        atomic_numbers = np.array(atomic_numbers, dtype=np.int64).reshape(-1)
        atomic_numbers.setflags(write=False)
        atomic_masses = readonly_array(atomic_masses).reshape(-1)
        n_atoms = len(positions)
        for name, values in [
            ("atomic_symbols", atomic_symbols),
            ("atomic_numbers", atomic_numbers),
            ("atomic_masses", atomic_masses),
        ]:
            if len(values) != n_atoms:
                raise ValueError(
                    f"Got {len(values)} {name} for {n_atoms} positions"
                )

        self._bounding_box = box
        self._boundary_conditions = conditions
        self._positions = positions
        self._atomic_symbols = atomic_symbols
        self._atomic_numbers = atomic_numbers
        self._atomic_masses = atomic_masses
        logger.debug(
            "Built FastSystem with %d particles in %d dimensions", n_atoms, n_dimensions
        )

    @classmethod
    def from_system(cls, system: AbstractSystem) -> "FastSystem":
        """Copy positions and species data of any system into a FastSystem."""
        positions = system.position()
        if not positions:
            positions = np.zeros((0, system.n_dimensions))
        return cls(
            system.bounding_box,
            system.boundary_conditions,
            positions,
            system.atomic_symbol(),
            system.atomic_number(),
            system.atomic_mass(),
        )

    @property
    def bounding_box(self) -> NDArray[np.floating]:
        return self._bounding_box

    @property
    def boundary_conditions(self) -> Tuple[BoundaryCondition, ...]:
        return self._boundary_conditions

    @property
    def species_type(self) -> Type[BaseSpecies]:
        return AtomView

    def __len__(self) -> int:
        return len(self._positions)

    def get_species(self, index: int) -> AtomView:
        return AtomView(self, index)

    def keys(self) -> Tuple[str, ...]:
        return ("bounding_box", "boundary_conditions")

    def get_property(self, key: str) -> Any:
        if key == "bounding_box":
            return self._bounding_box
        if key == "boundary_conditions":
            return self._boundary_conditions
        raise UnknownKeyError(key, owner=type(self).__name__)
