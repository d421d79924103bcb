#!/usr/bin/env python3
"""
Example 1: Molecules and Solids

Builds a hydrogen molecule in vacuum, a silicon crystal from fractional
coordinates and a slab with mixed boundary conditions, then walks the
common system interface.

Usage:
    python examples/01_molecules_and_solids.py
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
from pyAtoms import (
    Atom,
    DirichletZero,
    FastSystem,
    Periodic,
    atomic_system,
    isolated_system,
    periodic_system,
)


def describe(title, system):
    print(f"\n{title}")
    print("-" * len(title))
    print(f"  {system!r}")
    print(f"  infinite box: {system.is_infinite}")
    for atom in system:
        print(f"  {atom.atomic_symbol:>2s} Z={atom.atomic_number:<3d} "
              f"m={atom.atomic_mass:8.3f} u  r={np.round(atom.position, 4)}")
    print(f"  atom keys: {system.atomkeys()}")


def main():
    # H2 in vacuum (bohr)
    h2 = isolated_system([("H", [0.0, 0.0, 0.0]), ("H", [0.0, 0.0, 1.4])],
                         name="hydrogen")
    describe("Hydrogen molecule", h2)

    # Diamond silicon, primitive FCC cell
    box = 10.26 / 2 * np.array([[0, 1, 1], [1, 0, 1], [1, 1, 0]])
    silicon = periodic_system([("Si", np.ones(3) / 8), ("Si", -np.ones(3) / 8)],
                              box, fractional=True)
    describe("Silicon crystal", silicon)

    # Slab: periodic in-plane, vacuum along z. The adsorbate carries a charge.
    slab = atomic_system(
        [Atom("Cu", [0.0, 0.0, 0.0]),
         Atom("O", [0.0, 0.0, 3.5], charge=-0.4)],
        np.diag([4.8, 4.8, 30.0]),
        [Periodic(), Periodic(), DirichletZero()],
    )
    describe("Copper slab with oxygen", slab)
    print(f"  periodicity: {slab.periodicity}")
    print(f"  all atoms carry a charge: {slab.hasatomkey('charge')}")

    # Same data, struct-of-arrays storage
    fast = FastSystem.from_system(silicon)
    print(f"\nFastSystem copy: {fast!r}, species type {fast.species_type.__name__}")


if __name__ == "__main__":
    main()
