"""
FlexibleSystem: a system stored as an array of species.

This module provides the concrete AbstractSystem used by the high-level
constructors (atomic_system, isolated_system, periodic_system).
"""
import logging
from typing import Any, Iterable, Sequence, Tuple, Type

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyAtoms.boundary import BoundaryCondition
from pyAtoms.exceptions import DimensionMismatchError, UnknownKeyError

from .atom import Atom, BaseSpecies
from .properties import coerce_properties
from .system import AbstractSystem, validate_geometry

logger = logging.getLogger(__name__)


class FlexibleSystem(AbstractSystem):
    """
    System holding a tuple of species (array-of-structs storage).

    Any species type can be stored, typically :class:`Atom`. Extra keyword
    arguments become system-level properties, listed by ``keys()`` after
    the two geometry keys ``bounding_box`` and ``boundary_conditions``.

    Args:
        particles: Species of the system, each with D dimensions.
        bounding_box: D box vectors of length D (the rows of the box).
        boundary_conditions: D BoundaryCondition objects.
        **properties: Extra system properties.

    Raises:
        DimensionMismatchError: If the box is not D x D, the number of
            boundary conditions is not D, or a species is not D-dimensional.
        TypeError: If a particle is not a species or a property value has
            an unsupported type.
        ValueError: If a property is named ``particles``, ``bounding_box``
            or ``boundary_conditions``.

    Example:
        >>> from pyAtoms import Atom, FlexibleSystem, Periodic
        >>> box = [[10.0, 0, 0], [0, 10.0, 0], [0, 0, 10.0]]
        >>> system = FlexibleSystem([Atom("H", [0, 0, 1.0])], box, [Periodic()] * 3,
        ...                         name="hydrogen")
        >>> system["name"]
        'hydrogen'
    """

    GEOMETRY_KEYS: Tuple[str, ...] = ("bounding_box", "boundary_conditions")
    RESERVED_KEYS: Tuple[str, ...] = ("particles",) + GEOMETRY_KEYS

    def __init__(
        self,
        particles: Iterable[BaseSpecies],
        bounding_box: ArrayLike,
        boundary_conditions: Sequence[BoundaryCondition],
        /,
        **properties: Any,
    ) -> None:
        box, conditions = validate_geometry(bounding_box, boundary_conditions)
        particles = tuple(particles)
        n_dimensions = len(box)
        for i, species in enumerate(particles):
            if not isinstance(species, BaseSpecies):
                raise TypeError(
                    f"Particle {i} is a {type(species).__name__}, expected a species"
                )
            if species.n_dimensions != n_dimensions:
                raise DimensionMismatchError(
                    f"Particle {i} has {species.n_dimensions} dimensions, "
                    f"the system has {n_dimensions}",
                    expected=n_dimensions,
                    got=species.n_dimensions,
                )

        self._particles = particles
        self._bounding_box = box
        self._boundary_conditions = conditions
        self._data = coerce_properties(properties, reserved=self.RESERVED_KEYS)
        logger.debug(
            "Built FlexibleSystem with %d particles in %d dimensions",
            len(particles),
            n_dimensions,
        )

    @classmethod
    def from_system(cls, system: AbstractSystem, **overrides: Any) -> "FlexibleSystem":
        """
        Update constructor.

        Build a FlexibleSystem from any system, taking its species,
        geometry and properties as defaults and applying ``overrides``
        (``particles``, ``bounding_box``, ``boundary_conditions`` or
        property names) on top.
        """
        if "particles" in overrides:
            particles = overrides.pop("particles")
        else:
            particles = [Atom.convert(species) for species in system]
        bounding_box = overrides.pop("bounding_box", system.bounding_box)
        boundary_conditions = overrides.pop(
            "boundary_conditions", system.boundary_conditions
        )
        properties = {
            key: value for key, value in system.pairs() if key not in cls.GEOMETRY_KEYS
        }
        properties.update(overrides)
        return cls(particles, bounding_box, boundary_conditions, **properties)

    @property
    def particles(self) -> Tuple[BaseSpecies, ...]:
        return self._particles

    @property
    def bounding_box(self) -> NDArray[np.floating]:
        return self._bounding_box

    @property
    def boundary_conditions(self) -> Tuple[BoundaryCondition, ...]:
        return self._boundary_conditions

    @property
    def species_type(self) -> Type[BaseSpecies]:
        types = {type(species) for species in self._particles}
        if not types:
            return Atom
        if len(types) == 1:
            return types.pop()
        return BaseSpecies

    def __len__(self) -> int:
        return len(self._particles)

    def get_species(self, index: int) -> BaseSpecies:
        return self._particles[index]

    def keys(self) -> Tuple[str, ...]:
        return self.GEOMETRY_KEYS + tuple(self._data)

    def get_property(self, key: str) -> Any:
        if key == "bounding_box":
            return self._bounding_box
        if key == "boundary_conditions":
            return self._boundary_conditions
        if key in self._data:
            return self._data[key]
        raise UnknownKeyError(key, owner=type(self).__name__)

    def __repr__(self) -> str:
        symbols = sorted(set(self.atomic_symbol()))
        return (
            f"FlexibleSystem(n_atoms={len(self)}, species={symbols}, "
            f"periodicity={list(self.periodicity)}, "
            f"properties={list(self._data)})"
        )
