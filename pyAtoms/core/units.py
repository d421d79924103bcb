"""
Default units of atomistic quantities.

Positions, velocities and masses are stored as plain floats. Their
meaning comes from ``DEFAULT_UNITS`` (atomic units: bohr, bohr/s, u).
The values used for quantities that are not given when building an
atom are defined here in those units.
"""
from dataclasses import dataclass
from typing import Final

import numpy as np
from numpy.typing import NDArray

from .properties import readonly_array


@dataclass(frozen=True)
class UnitSystem:
    """
    Names of the units in which numbers are expressed.

    Attributes:
        name: Name of the unit system.
        length_unit: Unit of positions and box vectors.
        velocity_unit: Unit of velocities.
        mass_unit: Unit of atomic masses.

    Example:
        >>> from pyAtoms.core import DEFAULT_UNITS
        >>> print(DEFAULT_UNITS.length_unit)
        bohr
    """
    name: str
    length_unit: str
    velocity_unit: str
    mass_unit: str


DEFAULT_UNITS: Final[UnitSystem] = UnitSystem(
    name="atomic",
    length_unit="bohr",
    velocity_unit="bohr/s",
    mass_unit="u",
)

# Mass of a species unknown to the element registry.
UNKNOWN_MASS: Final[float] = float("nan")


def zero_velocity(n_dimensions: int) -> NDArray[np.floating]:
    """Read-only zero velocity vector, the velocity of an atom built without one."""
    return readonly_array(np.zeros(n_dimensions))
