"""
Value kinds allowed in extra property maps, and array helpers.

Extra properties of atoms and systems are restricted to a closed set of
kinds: booleans, numbers, strings, boundary conditions and numeric
arrays. Lists and tuples of numbers are stored as read-only numpy arrays.
"""
import math
from numbers import Number
from typing import Any, Dict, Iterable, Mapping, Tuple, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyAtoms.boundary import BoundaryCondition

PropertyValue = Union[bool, int, float, complex, str, BoundaryCondition, np.ndarray]


def readonly_array(values: ArrayLike) -> NDArray[np.floating]:
    """Return a read-only float64 copy of ``values``."""
    array = np.array(values, dtype=np.float64)
    array.setflags(write=False)
    return array


def as_vector(values: ArrayLike, name: str) -> NDArray[np.floating]:
    """
    Convert ``values`` to a read-only 1-D float64 vector.

    Raises:
        ValueError: If the values are not one-dimensional or empty.
    """
    vector = readonly_array(values)
    if vector.ndim != 1 or vector.size == 0:
        raise ValueError(
            f"{name} must be a non-empty 1-D vector, got shape {vector.shape}"
        )
    return vector


def coerce_property(name: str, value: Any) -> PropertyValue:
    """
    Validate an extra property value and normalise its storage.

    Args:
        name: Property name, used in error messages.
        value: The value to store.

    Returns:
        The value, with sequences and arrays converted to read-only arrays.

    Raises:
        TypeError: If the value kind is not supported.
    """
    if isinstance(value, (bool, np.bool_, str, BoundaryCondition)):
        return value
    if isinstance(value, (Number, np.number)):
        return value
    if isinstance(value, (list, tuple, np.ndarray)):
        array = np.array(value)
        if array.dtype.kind not in "biufc":
            raise TypeError(
                f"Property '{name}' must hold numeric values, got dtype {array.dtype}"
            )
        array.setflags(write=False)
        return array
    raise TypeError(
        f"Unsupported value type for property '{name}': {type(value).__name__}"
    )


def coerce_properties(
    properties: Mapping[str, Any],
    reserved: Iterable[str] = (),
) -> Dict[str, PropertyValue]:
    """
    Validate a whole property map.

    Raises:
        ValueError: If a name is reserved for a fixed field.
        TypeError: If a value kind is not supported.
    """
    reserved = frozenset(reserved)
    coerced = {}
    for name, value in properties.items():
        if name in reserved:
            raise ValueError(
                f"Property name '{name}' is reserved and cannot be set as extra data"
            )
        coerced[name] = coerce_property(name, value)
    return coerced


def values_equal(a: Any, b: Any) -> bool:
    """Array-aware equality where NaN equals NaN."""
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        a, b = np.asarray(a), np.asarray(b)
        if a.shape != b.shape:
            return False
        if a.dtype.kind in "fc" or b.dtype.kind in "fc":
            return bool(np.array_equal(a, b, equal_nan=True))
        return bool(np.array_equal(a, b))
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return bool(a == b)


def pairs_equal(a: Iterable[Tuple[str, Any]], b: Iterable[Tuple[str, Any]]) -> bool:
    """Compare two ordered key/value sequences with :func:`values_equal`."""
    a, b = list(a), list(b)
    if [k for k, _ in a] != [k for k, _ in b]:
        return False
    return all(values_equal(va, vb) for (_, va), (_, vb) in zip(a, b))
