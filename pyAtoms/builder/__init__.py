"""
Builder module for atomistic systems.

- atomic_system / isolated_system / periodic_system: standard setups
- SystemBuilder: fluent construction
"""

from .system_builder import (
    SystemBuilder,
    atomic_system,
    fractional_to_cartesian,
    isolated_system,
    periodic_system,
)

__all__ = [
    "SystemBuilder",
    "atomic_system",
    "fractional_to_cartesian",
    "isolated_system",
    "periodic_system",
]
