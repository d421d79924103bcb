"""
Atom class for atomistic systems.

This module provides the per-species key/value protocol (BaseSpecies)
and Atom, an immutable value combining the fixed physical fields of a
particle with an open map of extra named properties.
"""
import logging
from numbers import Integral
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyAtoms.exceptions import (
    DimensionMismatchError,
    MissingIdentifierError,
    UnknownKeyError,
)

from .element_registry import Identifier, element
from .properties import as_vector, coerce_properties, pairs_equal
from .units import UNKNOWN_MASS, zero_velocity

logger = logging.getLogger(__name__)

# Names of the fixed fields, in key order. Reserved in extra property maps.
FIXED_FIELDS: Tuple[str, ...] = (
    "position",
    "velocity",
    "atomic_symbol",
    "atomic_number",
    "atomic_mass",
)

# Fallback species data when an identifier is not a known element.
UNKNOWN_SYMBOL = "?"
UNKNOWN_NUMBER = 0


class BaseSpecies:
    """
    Key/value protocol shared by all species types.

    The fixed fields (see ``FIXED_FIELDS``) and the extra properties of a
    species form one flat key space. Subclasses provide the fixed fields
    as attributes and their extra properties through ``_extra``.
    """

    __slots__ = ()

    position: NDArray[np.floating]
    velocity: Optional[NDArray[np.floating]]
    atomic_symbol: str
    atomic_number: int
    atomic_mass: float

    def _extra(self) -> Mapping[str, Any]:
        return {}

    @property
    def n_dimensions(self) -> int:
        """Number of spatial dimensions of the position."""
        return len(self.position)

    def keys(self) -> Tuple[str, ...]:
        """Fixed field names followed by extra property names."""
        return FIXED_FIELDS + tuple(self._extra())

    def haskey(self, key: str) -> bool:
        return key in FIXED_FIELDS or key in self._extra()

    def __contains__(self, key: str) -> bool:
        return self.haskey(key)

    def __getitem__(self, key: str) -> Any:
        if key in FIXED_FIELDS:
            return getattr(self, key)
        extra = self._extra()
        if key in extra:
            return extra[key]
        raise UnknownKeyError(key, owner=type(self).__name__)

    def get(self, key: str, default: Any = None) -> Any:
        """Value of ``key``, or ``default`` if the species has no such key."""
        if key in FIXED_FIELDS:
            return getattr(self, key)
        return self._extra().get(key, default)

    def pairs(self) -> Iterator[Tuple[str, Any]]:
        """Iterate over ``(key, value)`` pairs in key order."""
        return ((key, self[key]) for key in self.keys())


class Atom(BaseSpecies):
    """
    A single atomic species located at a Cartesian position.

    An Atom is an immutable value: changing a field means building a new
    Atom, e.g. with :meth:`replace`. Besides the fixed fields it carries
    extra named properties (charge, multiplicity, user data, ...).

    Species data not given explicitly is resolved in this order:

    1. Explicit keyword argument (``atomic_symbol``, ``atomic_number``,
       ``atomic_mass``).
    2. The identifier itself: a ``str`` identifier is the atomic symbol,
       an ``int`` identifier is the atomic number. An element name
       (e.g. "iron") takes the symbol of the matching element instead.
    3. The element registry, if the identifier is a known element.
    4. Fallbacks: symbol ``"?"``, number ``0``, mass ``NaN``.

    The velocity defaults to the zero vector. Numbers are in
    ``DEFAULT_UNITS`` (bohr, bohr/s, u).

    Args:
        identifier: Element symbol or name (str) or atomic number (int),
            positional only. May be omitted if ``atomic_number`` or
            ``atomic_symbol`` is given.
        position: Cartesian position, a vector of D lengths.
        velocity: Cartesian velocity, a vector of D velocities.
        atomic_symbol: Symbol, may be more specific than the element
            (e.g. "D" for deuterium).
        atomic_number: Atomic number identifying the element.
        atomic_mass: Atomic mass.
        **properties: Extra named properties.

    Raises:
        MissingIdentifierError: If no identifier, atomic_number or
            atomic_symbol is given.
        DimensionMismatchError: If position and velocity differ in length.
        TypeError: If the identifier or a property value has an
            unsupported type.

    Example:
        >>> hydrogen = Atom("H", [0.0, 0.0, 1.0])
        >>> hydrogen.atomic_number
        1
        >>> ion = hydrogen.replace(charge=-1.0)
        >>> ion["charge"]
        -1.0
    """

    __slots__ = (
        "_position",
        "_velocity",
        "_atomic_symbol",
        "_atomic_number",
        "_atomic_mass",
        "_data",
    )

    def __init__(
        self,
        identifier: Optional[Identifier] = None,
        /,
        position: Optional[ArrayLike] = None,
        velocity: Optional[ArrayLike] = None,
        *,
        atomic_symbol: Optional[str] = None,
        atomic_number: Optional[int] = None,
        atomic_mass: Optional[float] = None,
        **properties: Any,
    ) -> None:
        if identifier is None:
            if atomic_number is not None:
                identifier = atomic_number
            elif atomic_symbol is not None:
                identifier = atomic_symbol
            else:
                raise MissingIdentifierError()
        if position is None:
            raise ValueError("Atom requires a position")
        if not _is_identifier(identifier):
            raise TypeError(
                f"Identifier must be str or int, got {type(identifier).__name__}"
            )

        if atomic_symbol is None or atomic_number is None or atomic_mass is None:
            el = element(identifier)
            if el is None:
                logger.debug("No element data for %r, using fallback defaults", identifier)
            if atomic_symbol is None:
                # Element names resolve to the record's symbol
                if isinstance(identifier, str) and (el is None or el.symbol == identifier):
                    atomic_symbol = identifier
                else:
                    atomic_symbol = UNKNOWN_SYMBOL if el is None else el.symbol
            if atomic_number is None:
                if isinstance(identifier, Integral):
                    atomic_number = identifier
                else:
                    atomic_number = UNKNOWN_NUMBER if el is None else el.atomic_number
            if atomic_mass is None:
                atomic_mass = UNKNOWN_MASS if el is None else el.atomic_mass

        position = as_vector(position, "position")
        if velocity is None:
            velocity = zero_velocity(len(position))
        else:
            velocity = as_vector(velocity, "velocity")
        if velocity.shape != position.shape:
            raise DimensionMismatchError(
                f"Velocity has {len(velocity)} dimensions, "
                f"position has {len(position)}",
                expected=len(position),
                got=len(velocity),
            )

        object.__setattr__(self, "_position", position)
        object.__setattr__(self, "_velocity", velocity)
        object.__setattr__(self, "_atomic_symbol", str(atomic_symbol))
        object.__setattr__(self, "_atomic_number", int(atomic_number))
        object.__setattr__(self, "_atomic_mass", float(atomic_mass))
        object.__setattr__(
            self,
            "_data",
            MappingProxyType(coerce_properties(properties, reserved=FIXED_FIELDS)),
        )

    @classmethod
    def from_atom(cls, species: BaseSpecies, **overrides: Any) -> "Atom":
        """
        Update constructor.

        Build a new Atom taking all key/value pairs of ``species`` as
        defaults and applying ``overrides`` on top. The source is left
        untouched.

        Example:
            >>> heavy = Atom.from_atom(hydrogen, atomic_mass=2.014, atomic_symbol="D")
        """
        kwargs = dict(species.pairs())
        kwargs.update(overrides)
        return cls(**kwargs)

    @classmethod
    def convert(cls, value: Union["Atom", BaseSpecies, Sequence]) -> "Atom":
        """
        Convert an Atom, another species, or an ``(identifier, position)``
        pair into an Atom.

        Atoms are returned as is. Pairs become atoms with zero velocity and
        default species data.

        Raises:
            TypeError: If the value cannot be converted.
        """
        if isinstance(value, Atom):
            return value
        if isinstance(value, BaseSpecies):
            return cls.from_atom(value)
        if isinstance(value, (tuple, list)) and len(value) == 2 and _is_identifier(value[0]):
            identifier, position = value
            return cls(identifier, position)
        raise TypeError(
            f"Cannot convert {type(value).__name__} to Atom, expected an Atom "
            "or an (identifier, position) pair"
        )

    def replace(self, **overrides: Any) -> "Atom":
        """Return a copy of this atom with ``overrides`` applied."""
        return type(self).from_atom(self, **overrides)

    @property
    def position(self) -> NDArray[np.floating]:
        return self._position

    @property
    def velocity(self) -> NDArray[np.floating]:
        return self._velocity

    @property
    def atomic_symbol(self) -> str:
        return self._atomic_symbol

    @property
    def atomic_number(self) -> int:
        return self._atomic_number

    @property
    def atomic_mass(self) -> float:
        return self._atomic_mass

    @property
    def data(self) -> Mapping[str, Any]:
        """Read-only view of the extra properties."""
        return self._data

    def _extra(self) -> Mapping[str, Any]:
        return self._data

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable, use replace()")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Atom):
            return NotImplemented
        return pairs_equal(self.pairs(), other.pairs())

    __hash__ = None

    def __repr__(self) -> str:
        extra = "".join(f", {key}={value!r}" for key, value in self._data.items())
        return (
            f"Atom({self.atomic_symbol!r}, position={self.position.tolist()}, "
            f"velocity={self.velocity.tolist()}, atomic_number={self.atomic_number}, "
            f"atomic_mass={self.atomic_mass}{extra})"
        )


def _is_identifier(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (str, Integral))
