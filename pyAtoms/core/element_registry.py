"""
Element registry for chemical element properties.

This module provides the species lookup service: a registry of chemical
elements (symbol, name, atomic number, atomic mass) using a Singleton
pattern, and the ``element`` function resolving an identifier to its
record or ``None``.
"""
from dataclasses import dataclass
from numbers import Integral
from typing import Dict, List, Optional, Union

Identifier = Union[str, int]


@dataclass(frozen=True)
class ElementData:
    """
    Immutable data for a chemical element.

    Attributes:
        symbol: Chemical symbol (e.g., "Cu", "Ar", "H").
        name: Full element name (e.g., "Copper", "Argon").
        atomic_number: Atomic number Z (1 for H, 29 for Cu, etc.).
        atomic_mass: Standard atomic mass in u.

    Example:
        >>> from pyAtoms.core.element_registry import ElementData
        >>> cu = ElementData("Cu", "Copper", 29, 63.546)
    """
    symbol: str
    name: str
    atomic_number: int
    atomic_mass: float


# (symbol, name, atomic mass) ordered by atomic number.
# Atomic masses: IUPAC standard atomic weights (conventional values),
# mass number of the most stable isotope for elements without one.
_PERIODIC_TABLE = [
    ("H", "Hydrogen", 1.008),
    ("He", "Helium", 4.0026),
    ("Li", "Lithium", 6.94),
    ("Be", "Beryllium", 9.0122),
    ("B", "Boron", 10.81),
    ("C", "Carbon", 12.011),
    ("N", "Nitrogen", 14.007),
    ("O", "Oxygen", 15.999),
    ("F", "Fluorine", 18.998),
    ("Ne", "Neon", 20.180),
    ("Na", "Sodium", 22.990),
    ("Mg", "Magnesium", 24.305),
    ("Al", "Aluminium", 26.982),
    ("Si", "Silicon", 28.085),
    ("P", "Phosphorus", 30.974),
    ("S", "Sulfur", 32.06),
    ("Cl", "Chlorine", 35.45),
    ("Ar", "Argon", 39.948),
    ("K", "Potassium", 39.098),
    ("Ca", "Calcium", 40.078),
    ("Sc", "Scandium", 44.956),
    ("Ti", "Titanium", 47.867),
    ("V", "Vanadium", 50.942),
    ("Cr", "Chromium", 51.996),
    ("Mn", "Manganese", 54.938),
    ("Fe", "Iron", 55.845),
    ("Co", "Cobalt", 58.933),
    ("Ni", "Nickel", 58.693),
    ("Cu", "Copper", 63.546),
    ("Zn", "Zinc", 65.38),
    ("Ga", "Gallium", 69.723),
    ("Ge", "Germanium", 72.630),
    ("As", "Arsenic", 74.922),
    ("Se", "Selenium", 78.971),
    ("Br", "Bromine", 79.904),
    ("Kr", "Krypton", 83.798),
    ("Rb", "Rubidium", 85.468),
    ("Sr", "Strontium", 87.62),
    ("Y", "Yttrium", 88.906),
    ("Zr", "Zirconium", 91.224),
    ("Nb", "Niobium", 92.906),
    ("Mo", "Molybdenum", 95.95),
    ("Tc", "Technetium", 98.0),
    ("Ru", "Ruthenium", 101.07),
    ("Rh", "Rhodium", 102.91),
    ("Pd", "Palladium", 106.42),
    ("Ag", "Silver", 107.87),
    ("Cd", "Cadmium", 112.41),
    ("In", "Indium", 114.82),
    ("Sn", "Tin", 118.71),
    ("Sb", "Antimony", 121.76),
    ("Te", "Tellurium", 127.60),
    ("I", "Iodine", 126.90),
    ("Xe", "Xenon", 131.29),
    ("Cs", "Caesium", 132.91),
    ("Ba", "Barium", 137.33),
    ("La", "Lanthanum", 138.91),
    ("Ce", "Cerium", 140.12),
    ("Pr", "Praseodymium", 140.91),
    ("Nd", "Neodymium", 144.24),
    ("Pm", "Promethium", 145.0),
    ("Sm", "Samarium", 150.36),
    ("Eu", "Europium", 151.96),
    ("Gd", "Gadolinium", 157.25),
    ("Tb", "Terbium", 158.93),
    ("Dy", "Dysprosium", 162.50),
    ("Ho", "Holmium", 164.93),
    ("Er", "Erbium", 167.26),
    ("Tm", "Thulium", 168.93),
    ("Yb", "Ytterbium", 173.05),
    ("Lu", "Lutetium", 174.97),
    ("Hf", "Hafnium", 178.49),
    ("Ta", "Tantalum", 180.95),
    ("W", "Tungsten", 183.84),
    ("Re", "Rhenium", 186.21),
    ("Os", "Osmium", 190.23),
    ("Ir", "Iridium", 192.22),
    ("Pt", "Platinum", 195.08),
    ("Au", "Gold", 196.97),
    ("Hg", "Mercury", 200.59),
    ("Tl", "Thallium", 204.38),
    ("Pb", "Lead", 207.2),
    ("Bi", "Bismuth", 208.98),
    ("Po", "Polonium", 209.0),
    ("At", "Astatine", 210.0),
    ("Rn", "Radon", 222.0),
    ("Fr", "Francium", 223.0),
    ("Ra", "Radium", 226.0),
    ("Ac", "Actinium", 227.0),
    ("Th", "Thorium", 232.04),
    ("Pa", "Protactinium", 231.04),
    ("U", "Uranium", 238.03),
    ("Np", "Neptunium", 237.0),
    ("Pu", "Plutonium", 244.0),
]


class ElementRegistry:
    """
    Registry for chemical element properties (Singleton pattern).

    Elements can be looked up by symbol, by name or by atomic number.
    Unknown identifiers resolve to ``None`` through :meth:`get_element`,
    which is the "not found" sentinel used when building atoms.

    Example:
        >>> from pyAtoms.core import elements
        >>> elements.get_mass('Cu')
        63.546
        >>> elements.get_element(14).symbol
        'Si'
        >>> 'Fe' in elements
        True
    """

    _instance: Optional["ElementRegistry"] = None
    _initialized: bool = False

    def __new__(cls) -> "ElementRegistry":
        """Singleton: Only one registry instance exists."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize periodic table data (only once)."""
        if not ElementRegistry._initialized:
            self._elements_by_symbol: Dict[str, ElementData] = {}
            self._elements_by_number: Dict[int, ElementData] = {}
            self._elements_by_name: Dict[str, ElementData] = {}
            self._initialize_periodic_table()
            ElementRegistry._initialized = True

    def _initialize_periodic_table(self) -> None:
        for number, (symbol, name, mass) in enumerate(_PERIODIC_TABLE, start=1):
            self._register(ElementData(symbol, name, number, mass))

    def _register(self, element: ElementData) -> None:
        self._elements_by_symbol[element.symbol] = element
        # Names and numbers already indexed keep resolving to the first entry
        self._elements_by_name.setdefault(element.name.lower(), element)
        if element.atomic_number > 0:
            self._elements_by_number.setdefault(element.atomic_number, element)

    def get_element(self, identifier: Identifier) -> Optional[ElementData]:
        """
        Get element data by symbol, name or atomic number.

        Symbols are matched exactly, names case-insensitively.

        Args:
            identifier: Element symbol or name (str, e.g., 'Cu', 'copper')
                or atomic number (int, e.g., 29).

        Returns:
            ElementData if found, None otherwise.

        Raises:
            TypeError: If identifier is neither str nor int.
        """
        if isinstance(identifier, str):
            found = self._elements_by_symbol.get(identifier)
            if found is None:
                found = self._elements_by_name.get(identifier.lower())
            return found
        elif isinstance(identifier, Integral) and not isinstance(identifier, bool):
            return self._elements_by_number.get(int(identifier))
        else:
            raise TypeError(
                f"Identifier must be str or int, got {type(identifier).__name__}"
            )

    def get_mass(self, identifier: Identifier) -> float:
        """
        Get atomic mass in u.

        Raises:
            KeyError: If element not found in registry.
        """
        return self[identifier].atomic_mass

    def has_element(self, identifier: Identifier) -> bool:
        """Check if element exists in registry."""
        return self.get_element(identifier) is not None

    def list_elements(self) -> List[str]:
        """Return sorted list of all available element symbols."""
        return sorted(self._elements_by_symbol.keys())

    def add_custom_element(self, element: ElementData) -> None:
        """
        Add custom element or pseudoatom to registry.

        The entry is found by its symbol. Its name and atomic number only
        resolve to it if no other element uses them, so registering an
        isotope (e.g. "D" with atomic number 1) leaves number 1 resolving
        to hydrogen.

        Args:
            element: ElementData for the custom element.

        Raises:
            ValueError: If element symbol already exists.

        Example:
            >>> from pyAtoms.core import elements, ElementData
            >>> elements.add_custom_element(ElementData("CH3", "Methyl", 0, 15.035))
        """
        if element.symbol in self._elements_by_symbol:
            raise ValueError(f"Element '{element.symbol}' already exists")
        self._register(element)

    def __contains__(self, identifier: Identifier) -> bool:
        """Support 'in' operator."""
        return self.has_element(identifier)

    def __getitem__(self, identifier: Identifier) -> ElementData:
        """
        Support indexing: registry['Cu'] or registry[29].

        Raises:
            KeyError: If element not found.
        """
        element = self.get_element(identifier)
        if element is None:
            raise KeyError(f"Element '{identifier}' not found")
        return element

    def __len__(self) -> int:
        """Return number of elements in registry."""
        return len(self._elements_by_symbol)


# Module-level convenience instance (Singleton)
elements = ElementRegistry()


def element(identifier: Identifier) -> Optional[ElementData]:
    """The element corresponding to an identifier, or None if unknown."""
    return elements.get_element(identifier)
