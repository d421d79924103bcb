"""
High-level constructors for atomistic systems.

Provides atomic_system, isolated_system and periodic_system, which apply
the standard setups (explicit geometry, vacuum, periodic solid) and
delegate to FlexibleSystem, plus the fluent SystemBuilder.
"""
import logging
from typing import Any, Iterable, List, Optional, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyAtoms.boundary import (
    BoundaryCondition,
    DirichletZero,
    Periodic,
    infinite_box,
)
from pyAtoms.core import Atom, BaseSpecies, FlexibleSystem
from pyAtoms.core.element_registry import Identifier
from pyAtoms.exceptions import DimensionMismatchError, EmptySystemError

logger = logging.getLogger(__name__)

# An Atom (or other species), or an (identifier, position) pair.
AtomLike = Union[BaseSpecies, Sequence]


def fractional_to_cartesian(
    bounding_box: ArrayLike,
    fractional: ArrayLike,
) -> NDArray[np.floating]:
    """
    Map fractional coordinates to Cartesian ones.

    ``cartesian = lattice @ fractional`` where the lattice matrix has the
    box vectors as its columns.

    Raises:
        DimensionMismatchError: If the coordinates do not have D entries.
    """
    lattice = np.asarray(bounding_box, dtype=np.float64).T
    fractional = np.asarray(fractional, dtype=np.float64)
    if fractional.shape != (len(lattice),):
        raise DimensionMismatchError(
            f"Fractional coordinates of shape {fractional.shape} do not match "
            f"a {len(lattice)}-dimensional box",
            expected=len(lattice),
        )
    return lattice @ fractional


def atomic_system(
    atoms: Iterable[AtomLike],
    bounding_box: ArrayLike,
    boundary_conditions: Sequence[BoundaryCondition],
    **properties: Any,
) -> FlexibleSystem:
    """
    Construct a FlexibleSystem from atoms, a bounding box and boundary conditions.

    Raw ``(identifier, position)`` pairs are converted to atoms. Extra
    keyword arguments are stored as system properties.

    Raises:
        DimensionMismatchError: If an atom's dimension or the number of
            boundary conditions differs from the box dimension.

    Example:
        >>> box = [[10.0, 0, 0], [0, 10.0, 0], [0, 0, 10.0]]
        >>> bcs = [Periodic(), Periodic(), DirichletZero()]
        >>> hydrogen = atomic_system([("H", [0, 0, 1.0]), ("H", [0, 0, 3.0])], box, bcs)
    """
    particles = [Atom.convert(atom) for atom in atoms]
    logger.debug("Building atomic system with %d atoms", len(particles))
    return FlexibleSystem(particles, bounding_box, boundary_conditions, **properties)


def isolated_system(atoms: Iterable[AtomLike], **properties: Any) -> FlexibleSystem:
    """
    Place atoms into an infinite vacuum (standard setup for molecules).

    The dimension is taken from the first atom; the box is
    ``infinite_box(D)`` with DirichletZero conditions on every axis.

    Raises:
        EmptySystemError: If no atoms are given.

    Example:
        >>> hydrogen = isolated_system([("H", [0, 0, 1.0]), ("H", [0, 0, 3.0])])
        >>> hydrogen.is_infinite
        True
    """
    particles = [Atom.convert(atom) for atom in atoms]
    if not particles:
        raise EmptySystemError(
            "Cannot infer the number of dimensions of an isolated system without atoms"
        )
    n_dimensions = particles[0].n_dimensions
    return atomic_system(
        particles,
        infinite_box(n_dimensions),
        [DirichletZero()] * n_dimensions,
        **properties,
    )


def periodic_system(
    atoms: Iterable[AtomLike],
    bounding_box: ArrayLike,
    fractional: bool = False,
    **properties: Any,
) -> FlexibleSystem:
    """
    Construct a system periodic along every box vector (standard setup for solids).

    If ``fractional`` is true, the positions of ``(identifier, position)``
    pairs are fractional coordinates of the box. Atoms passed as Atom
    objects are always Cartesian and kept unchanged.

    Example:
        >>> box = 10.26 / 2 * np.array([[0, 0, 1], [1, 0, 1], [1, 1, 0]])
        >>> silicon = periodic_system([("Si", np.ones(3) / 8), ("Si", -np.ones(3) / 8)],
        ...                           box, fractional=True)
    """
    box = np.asarray(bounding_box, dtype=np.float64)
    conditions = [Periodic()] * len(box)
    if not fractional:
        return atomic_system(atoms, box, conditions, **properties)

    def parse_fractional(atom: AtomLike) -> Atom:
        if isinstance(atom, BaseSpecies):
            return Atom.convert(atom)
        identifier, position = atom
        return Atom(identifier, fractional_to_cartesian(box, position))

    return atomic_system(
        [parse_fractional(atom) for atom in atoms], box, conditions, **properties
    )


class SystemBuilder:
    """
    Builder for constructing systems.

    Fluent interface collecting atoms, geometry and properties:
    - no box: isolated system in vacuum
    - box only: periodic system (positions may be fractional)
    - box and boundary conditions: atomic system

    Example:
        >>> system = (SystemBuilder()
        ...     .atom("Si", [0.125, 0.125, 0.125])
        ...     .atom("Si", [-0.125, -0.125, -0.125])
        ...     .box([[0, 0, 5.13], [5.13, 0, 5.13], [5.13, 5.13, 0]])
        ...     .fractional()
        ...     .system_property("name", "silicon")
        ...     .build())
    """

    def __init__(self) -> None:
        """Initialize builder with default values."""
        self._atoms: List[AtomLike] = []
        self._box: Optional[NDArray] = None
        self._bcs: Optional[List[BoundaryCondition]] = None
        self._fractional: bool = False
        self._properties: dict = {}

    def atom(
        self,
        identifier: Identifier,
        position: ArrayLike,
        **kwargs: Any,
    ) -> "SystemBuilder":
        """
        Add an atom.

        Without keyword arguments the atom is kept as an
        ``(identifier, position)`` pair, so its position may be fractional.
        Keyword arguments (velocity, atomic_mass, extra properties) build a
        Cartesian Atom right away.

        Returns:
            Self for chaining.
        """
        if kwargs:
            self._atoms.append(Atom(identifier, position, **kwargs))
        else:
            self._atoms.append((identifier, position))
        return self

    def atoms(self, atoms: Iterable[AtomLike]) -> "SystemBuilder":
        """
        Add Atom objects or ``(identifier, position)`` pairs.

        Returns:
            Self for chaining.
        """
        self._atoms.extend(atoms)
        return self

    def box(self, bounding_box: ArrayLike) -> "SystemBuilder":
        """
        Set the bounding box (box vectors as rows).

        Returns:
            Self for chaining.
        """
        self._box = np.asarray(bounding_box, dtype=np.float64)
        return self

    def boundary_conditions(
        self, conditions: Sequence[BoundaryCondition]
    ) -> "SystemBuilder":
        """
        Set one boundary condition per box vector.

        Returns:
            Self for chaining.
        """
        self._bcs = list(conditions)
        return self

    def periodic_boundary(self) -> "SystemBuilder":
        """Use periodic boundary conditions along every box vector."""
        self._bcs = None
        return self

    def fractional(self, enabled: bool = True) -> "SystemBuilder":
        """Interpret pair positions as fractional coordinates of the box."""
        self._fractional = enabled
        return self

    def system_property(self, name: str, value: Any) -> "SystemBuilder":
        """
        Set a system property.

        Returns:
            Self for chaining.
        """
        self._properties[name] = value
        return self

    def properties(self, **properties: Any) -> "SystemBuilder":
        """Set several system properties."""
        self._properties.update(properties)
        return self

    def build(self) -> FlexibleSystem:
        """
        Build and return the system.

        Raises:
            EmptySystemError: If no atoms were added.
            ValueError: If the configuration is inconsistent.
        """
        if not self._atoms:
            raise EmptySystemError("No atoms defined.")
        if self._box is None:
            if self._bcs is not None or self._fractional:
                raise ValueError("Box dimensions not set.")
            return isolated_system(self._atoms, **self._properties)
        if self._bcs is None:
            return periodic_system(
                self._atoms, self._box, fractional=self._fractional, **self._properties
            )
        if self._fractional:
            raise ValueError(
                "Fractional coordinates require periodic boundary conditions"
            )
        return atomic_system(self._atoms, self._box, self._bcs, **self._properties)
