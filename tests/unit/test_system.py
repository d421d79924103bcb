"""
Unit tests for the system interface.

Tests for the derived AbstractSystem behaviour, FlexibleSystem, FastSystem
and the free accessor functions.
"""
from typing import Any, Tuple, Type

import numpy as np
import pytest

import pyAtoms
from pyAtoms.boundary import BoundaryCondition, DirichletZero, Periodic, infinite_box
from pyAtoms.core import (
    FIXED_FIELDS,
    AbstractSystem,
    Atom,
    AtomView,
    BaseSpecies,
    FastSystem,
    FlexibleSystem,
)
from pyAtoms.exceptions import DimensionMismatchError, UnknownKeyError


@pytest.fixture
def box() -> np.ndarray:
    """Create a cubic 10 bohr box."""
    return 10.0 * np.eye(3)


@pytest.fixture
def bcs() -> list:
    """Periodic in x and y, vacuum along z."""
    return [Periodic(), Periodic(), DirichletZero()]


@pytest.fixture
def h2(box: np.ndarray, bcs: list) -> FlexibleSystem:
    """Create a hydrogen molecule in a slab geometry."""
    atoms = [Atom("H", [0.0, 0.0, 1.0]), Atom("H", [0.0, 0.0, 3.0])]
    return FlexibleSystem(atoms, box, bcs, name="hydrogen", energy=-1.17)


@pytest.fixture
def fast_h2() -> FastSystem:
    """Create an isolated hydrogen molecule stored as arrays."""
    return FastSystem(
        infinite_box(3),
        [DirichletZero()] * 3,
        [[0.0, 0.0, 1.0], [0.0, 0.0, 3.0]],
        ["H", "H"],
        [1, 1],
        [1.008, 1.008],
    )


class ChainSystem(AbstractSystem):
    """Lazily generated 1D chain, implementing only the primitives."""

    def __init__(self, n_atoms: int, spacing: float) -> None:
        self.n_atoms = n_atoms
        self.spacing = spacing

    @property
    def bounding_box(self) -> np.ndarray:
        return np.array([[self.n_atoms * self.spacing]])

    @property
    def boundary_conditions(self) -> Tuple[BoundaryCondition, ...]:
        return (Periodic(),)

    @property
    def species_type(self) -> Type[BaseSpecies]:
        return Atom

    def __len__(self) -> int:
        return self.n_atoms

    def get_species(self, index: int) -> Atom:
        return Atom("C", [index * self.spacing])

    def keys(self) -> Tuple[str, ...]:
        return ("spacing",)

    def get_property(self, key: str) -> Any:
        if key == "spacing":
            return self.spacing
        raise UnknownKeyError(key, owner="ChainSystem")


class TestAbstractSystem:
    """Tests for behaviour derived from the primitives."""

    def test_abstract_cannot_be_instantiated(self) -> None:
        """AbstractSystem requires the primitives."""
        with pytest.raises(TypeError):
            AbstractSystem()

    def test_derived_geometry(self) -> None:
        """Dimension and periodicity come from box and conditions."""
        chain = ChainSystem(4, 1.5)
        assert chain.n_dimensions == 1
        assert chain.periodicity == (True,)
        assert not chain.is_infinite
        assert chain.size == (4,)

    def test_derived_accessors(self) -> None:
        """Per-species accessors map over the generated species."""
        chain = ChainSystem(3, 2.0)
        assert chain.atomic_symbol() == ["C", "C", "C"]
        assert chain.atomic_number(2) == 6
        np.testing.assert_array_almost_equal(chain.position(-1), [4.0])

    def test_derived_property_protocol(self) -> None:
        """get, haskey and pairs use keys and get_property."""
        chain = ChainSystem(2, 1.0)
        assert chain["spacing"] == 1.0
        assert chain.haskey("spacing")
        assert chain.get("name", "chain") == "chain"
        assert dict(chain.pairs()) == {"spacing": 1.0}

    def test_derived_atomkeys(self) -> None:
        """All generated atoms share the fixed keys."""
        assert ChainSystem(2, 1.0).atomkeys() == FIXED_FIELDS


class TestIndexing:
    """Tests for indexing and iteration."""

    def test_length_and_size(self, h2: FlexibleSystem) -> None:
        """Test system length."""
        assert len(h2) == 2
        assert h2.size == (2,)

    def test_zero_based_index(self, h2: FlexibleSystem) -> None:
        """Index 0 is the first species."""
        np.testing.assert_array_equal(h2[0].position, [0.0, 0.0, 1.0])

    def test_negative_index(self, h2: FlexibleSystem) -> None:
        """Negative indices count from the end."""
        np.testing.assert_array_equal(h2[-1].position, [0.0, 0.0, 3.0])

    @pytest.mark.parametrize("index", [2, -3])
    def test_index_out_of_range(self, h2: FlexibleSystem, index: int) -> None:
        """Out-of-range indices raise IndexError."""
        with pytest.raises(IndexError, match="out of range"):
            h2[index]

    def test_slice(self, h2: FlexibleSystem) -> None:
        """Slices return a list of species."""
        species = h2[0:1]
        assert isinstance(species, list)
        assert len(species) == 1

    def test_invalid_index_type(self, h2: FlexibleSystem) -> None:
        """Floats are not indices."""
        with pytest.raises(TypeError, match="System indices"):
            h2[1.0]

    def test_iteration_restartable(self, h2: FlexibleSystem) -> None:
        """Each iteration starts from the first species."""
        first = [atom.atomic_symbol for atom in h2]
        second = [atom.atomic_symbol for atom in h2]
        assert first == second == ["H", "H"]


class TestSystemProperties:
    """Tests for system-level key/value access."""

    def test_keys(self, h2: FlexibleSystem) -> None:
        """Geometry keys come first, then extra properties."""
        assert h2.keys() == ("bounding_box", "boundary_conditions", "name", "energy")

    def test_getitem(self, h2: FlexibleSystem, box: np.ndarray) -> None:
        """String keys look up system properties."""
        assert h2["name"] == "hydrogen"
        np.testing.assert_array_equal(h2["bounding_box"], box)

    def test_unknown_key(self, h2: FlexibleSystem) -> None:
        """Strict lookup of a missing key raises."""
        with pytest.raises(UnknownKeyError, match="Unknown key 'charge'"):
            h2["charge"]

    def test_get_default(self, h2: FlexibleSystem) -> None:
        """get falls back to the default."""
        assert h2.get("charge") is None
        assert h2.get("charge", 0.0) == 0.0
        assert h2.get("energy") == pytest.approx(-1.17)

    def test_haskey(self, h2: FlexibleSystem) -> None:
        """haskey covers geometry and extra keys."""
        assert h2.haskey("boundary_conditions")
        assert h2.haskey("name")
        assert not h2.haskey("charge")

    def test_pairs(self, h2: FlexibleSystem) -> None:
        """pairs enumerates all system keys."""
        pairs = dict(h2.pairs())
        assert list(pairs) == list(h2.keys())
        assert pairs["name"] == "hydrogen"


class TestGeometry:
    """Tests for periodicity and infinite boxes."""

    def test_periodicity(self, h2: FlexibleSystem) -> None:
        """One flag per axis, true only for Periodic."""
        assert h2.periodicity == (True, True, False)
        assert len(h2.periodicity) == h2.n_dimensions

    def test_finite_box_not_infinite(self, h2: FlexibleSystem) -> None:
        """A finite box is never infinite."""
        assert not h2.is_infinite

    def test_large_box_not_infinite(self) -> None:
        """Very large but finite extents are not infinite."""
        system = FlexibleSystem(
            [Atom("H", [0.0, 0.0])], 1e300 * np.eye(2), [DirichletZero()] * 2
        )
        assert not system.is_infinite

    def test_infinite_box(self, fast_h2: FastSystem) -> None:
        """A system built on infinite_box is infinite."""
        assert fast_h2.is_infinite

    def test_four_dimensional_not_infinite(self) -> None:
        """Systems outside 1 to 3 dimensions have no infinite box."""
        system = FlexibleSystem(
            [Atom("H", [0.0] * 4)], 10.0 * np.eye(4), [Periodic()] * 4
        )
        assert system.n_dimensions == 4
        assert not system.is_infinite
        assert not pyAtoms.isinfinite(system)
        inf_box = np.diag([np.inf] * 4)
        assert not FlexibleSystem([], inf_box, [DirichletZero()] * 4).is_infinite

    def test_box_read_only(self, h2: FlexibleSystem) -> None:
        """The stored box cannot be modified in place."""
        with pytest.raises(ValueError):
            h2.bounding_box[0, 0] = 1.0


class TestSpeciesAccessors:
    """Tests for per-species accessors over the whole system."""

    def test_positions(self, h2: FlexibleSystem) -> None:
        """Positions of all species, in order."""
        positions = h2.position()
        assert len(positions) == 2
        np.testing.assert_array_equal(positions[1], [0.0, 0.0, 3.0])

    def test_indexed_position(self, h2: FlexibleSystem) -> None:
        """An index selects a single species."""
        np.testing.assert_array_equal(h2.position(0), [0.0, 0.0, 1.0])

    def test_velocities(self, h2: FlexibleSystem) -> None:
        """Atoms default to zero velocity."""
        for v in h2.velocity():
            np.testing.assert_array_equal(v, np.zeros(3))

    def test_species_data(self, h2: FlexibleSystem) -> None:
        """Symbols, numbers and masses are mapped over the species."""
        assert h2.atomic_symbol() == ["H", "H"]
        assert h2.atomic_number() == [1, 1]
        assert h2.atomic_mass() == [pytest.approx(1.008)] * 2
        assert h2.atomic_symbol(1) == "H"

    def test_atomkeys_common(self, box: np.ndarray, bcs: list) -> None:
        """Keys present on every species are listed."""
        atoms = [
            Atom("H", [0.0, 0.0, 1.0], tag=1),
            Atom("H", [0.0, 0.0, 3.0], tag=2),
        ]
        system = FlexibleSystem(atoms, box, bcs)
        assert system.atomkeys() == FIXED_FIELDS + ("tag",)
        assert system.hasatomkey("tag")

    def test_atomkeys_partial(self, box: np.ndarray, bcs: list) -> None:
        """A key missing on one species is excluded."""
        atoms = [
            Atom("H", [0.0, 0.0, 1.0], tag=1),
            Atom("H", [0.0, 0.0, 3.0]),
        ]
        system = FlexibleSystem(atoms, box, bcs)
        assert "tag" not in system.atomkeys()
        assert not system.hasatomkey("tag")
        assert system.hasatomkey("atomic_mass")


class TestFlexibleSystem:
    """Tests for FlexibleSystem construction."""

    def test_species_type(self, h2: FlexibleSystem) -> None:
        """Homogeneous systems report the common species type."""
        assert h2.species_type is Atom

    def test_mixed_species_type(
        self, h2: FlexibleSystem, fast_h2: FastSystem, box: np.ndarray, bcs: list
    ) -> None:
        """Mixed species report the common base type."""
        system = FlexibleSystem([h2[0], fast_h2[0]], box, bcs)
        assert system.species_type is BaseSpecies

    def test_empty_system(self) -> None:
        """An empty system has no atom keys."""
        system = FlexibleSystem([], infinite_box(3), [DirichletZero()] * 3)
        assert len(system) == 0
        assert system.atomkeys() == ()
        assert system.position() == []
        assert system.species_type is Atom

    def test_boundary_condition_count(self, box: np.ndarray) -> None:
        """One boundary condition per box vector."""
        with pytest.raises(DimensionMismatchError, match="2 boundary conditions"):
            FlexibleSystem([Atom("H", [0.0, 0.0, 0.0])], box, [Periodic()] * 2)

    def test_atom_dimension_mismatch(self, box: np.ndarray, bcs: list) -> None:
        """Species must match the system dimension."""
        with pytest.raises(DimensionMismatchError, match="Particle 0 has 2 dimensions"):
            FlexibleSystem([Atom("H", [0.0, 0.0])], box, bcs)

    def test_non_square_box(self, bcs: list) -> None:
        """The box must hold D vectors of length D."""
        with pytest.raises(DimensionMismatchError, match="Bounding box"):
            FlexibleSystem([], np.ones((3, 2)), bcs)

    def test_invalid_boundary_condition(self, box: np.ndarray) -> None:
        """Conditions must be BoundaryCondition instances."""
        with pytest.raises(TypeError, match="BoundaryCondition"):
            FlexibleSystem([], box, ["periodic"] * 3)

    def test_invalid_particle(self, box: np.ndarray, bcs: list) -> None:
        """Particles must be species."""
        with pytest.raises(TypeError, match="expected a species"):
            FlexibleSystem([("H", [0.0, 0.0, 0.0])], box, bcs)

    def test_invalid_property(self, box: np.ndarray, bcs: list) -> None:
        """System properties follow the same value kinds as atoms."""
        with pytest.raises(TypeError):
            FlexibleSystem([], box, bcs, metadata={"a": 1})

    def test_reserved_property_names(self, box: np.ndarray, bcs: list) -> None:
        """Constructor argument names cannot be stored as properties."""
        for name in ("particles", "bounding_box", "boundary_conditions"):
            with pytest.raises(ValueError, match="reserved"):
                FlexibleSystem([], box, bcs, **{name: 1.0})

    def test_from_system_particles_override(self, h2: FlexibleSystem) -> None:
        """The update constructor replaces the particles."""
        ion = h2[0].replace(charge=1.0)
        updated = FlexibleSystem.from_system(h2, particles=[ion])
        assert len(updated) == 1
        assert updated[0]["charge"] == 1.0
        assert updated["name"] == "hydrogen"
        assert len(h2) == 2

    def test_from_system_overrides(self, h2: FlexibleSystem) -> None:
        """The update constructor keeps everything not overridden."""
        updated = FlexibleSystem.from_system(h2, name="H2")
        assert updated["name"] == "H2"
        assert updated["energy"] == pytest.approx(-1.17)
        assert updated.periodicity == h2.periodicity
        assert h2["name"] == "hydrogen"

    def test_from_system_new_conditions(self, h2: FlexibleSystem) -> None:
        """Geometry can be overridden as well."""
        updated = FlexibleSystem.from_system(h2, boundary_conditions=[Periodic()] * 3)
        assert updated.periodicity == (True, True, True)

    def test_from_fast_system(self, fast_h2: FastSystem) -> None:
        """Array-backed species are converted to atoms."""
        system = FlexibleSystem.from_system(fast_h2)
        assert system.species_type is Atom
        assert system.atomic_symbol() == ["H", "H"]
        np.testing.assert_array_equal(system.velocity(0), np.zeros(3))

    def test_repr(self, h2: FlexibleSystem) -> None:
        """repr summarises the system on one line."""
        text = repr(h2)
        assert text.startswith("FlexibleSystem(n_atoms=2")
        assert "'name'" in text


class TestFastSystem:
    """Tests for FastSystem and AtomView."""

    def test_indexing_returns_view(self, fast_h2: FastSystem) -> None:
        """Indexing yields AtomView species."""
        view = fast_h2[1]
        assert isinstance(view, AtomView)
        np.testing.assert_array_equal(view.position, [0.0, 0.0, 3.0])
        assert fast_h2.species_type is AtomView

    def test_view_protocol(self, fast_h2: FastSystem) -> None:
        """Views expose the fixed keys of the species protocol."""
        view = fast_h2[0]
        assert view.keys() == FIXED_FIELDS
        assert view["atomic_number"] == 1
        assert view.atomic_mass == pytest.approx(1.008)
        assert view.velocity is None
        assert view.get("charge", 0.0) == 0.0

    def test_no_velocities(self, fast_h2: FastSystem) -> None:
        """FastSystem stores no velocities."""
        assert fast_h2.velocity() == [None, None]

    def test_keys(self, fast_h2: FastSystem) -> None:
        """Only the geometry keys exist."""
        assert fast_h2.keys() == ("bounding_box", "boundary_conditions")
        with pytest.raises(UnknownKeyError):
            fast_h2["name"]

    def test_positions_shape(self) -> None:
        """Positions must be (N, D)."""
        with pytest.raises(DimensionMismatchError, match="Positions must be"):
            FastSystem(
                infinite_box(3), [DirichletZero()] * 3, [[0.0, 0.0]], ["H"], [1], [1.008]
            )

    def test_length_mismatch(self) -> None:
        """Per-species arrays must match the number of positions."""
        with pytest.raises(ValueError, match="Got 1 atomic_symbols for 2 positions"):
            FastSystem(
                infinite_box(1), [DirichletZero()], [[0.0], [1.0]], ["H"], [1, 1],
                [1.008, 1.008],
            )

    def test_empty(self) -> None:
        """A FastSystem may hold no species."""
        system = FastSystem(infinite_box(2), [DirichletZero()] * 2, [], [], [], [])
        assert len(system) == 0
        assert system.n_dimensions == 2

    def test_from_system(self, h2: FlexibleSystem) -> None:
        """Any system converts to struct-of-arrays storage."""
        fast = FastSystem.from_system(h2)
        assert len(fast) == 2
        assert fast.atomic_symbol() == h2.atomic_symbol()
        np.testing.assert_array_equal(fast.position(1), h2.position(1))
        assert fast.periodicity == h2.periodicity


class TestFreeFunctions:
    """Tests for the module-level accessor functions."""

    def test_geometry_functions(self, h2: FlexibleSystem, box: np.ndarray) -> None:
        """Free functions mirror the system properties."""
        np.testing.assert_array_equal(pyAtoms.bounding_box(h2), box)
        assert pyAtoms.boundary_conditions(h2) == h2.boundary_conditions
        assert pyAtoms.species_type(h2) is Atom
        assert pyAtoms.n_dimensions(h2) == 3
        assert pyAtoms.periodicity(h2) == (True, True, False)
        assert not pyAtoms.isinfinite(h2)

    def test_species_functions_on_system(self, h2: FlexibleSystem) -> None:
        """Accessors accept a system with an optional index."""
        assert pyAtoms.atomic_symbol(h2) == ["H", "H"]
        assert pyAtoms.atomic_number(h2, 0) == 1
        np.testing.assert_array_equal(pyAtoms.position(h2, 1), [0.0, 0.0, 3.0])

    def test_species_functions_on_atom(self) -> None:
        """Accessors accept a single species."""
        atom = Atom("O", [1.0, 2.0])
        assert pyAtoms.atomic_symbol(atom) == "O"
        assert pyAtoms.n_dimensions(atom) == 2
        np.testing.assert_array_equal(pyAtoms.velocity(atom), [0.0, 0.0])
        assert pyAtoms.atomic_mass(atom) == pytest.approx(15.999)

    def test_index_requires_system(self) -> None:
        """An index cannot be combined with a single species."""
        with pytest.raises(TypeError, match="only accepted together with a system"):
            pyAtoms.position(Atom("O", [0.0]), 0)

    def test_atomkeys_functions(self, h2: FlexibleSystem) -> None:
        """atomkeys and hasatomkey mirror the methods."""
        assert pyAtoms.atomkeys(h2) == FIXED_FIELDS
        assert pyAtoms.hasatomkey(h2, "position")
        assert not pyAtoms.hasatomkey(h2, "charge")
