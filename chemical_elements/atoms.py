"""
Tools for working with Isotopes and Elements.

Objects
-------
- Element
- Isotope
- PeriodicTable

Functions
---------
- default_table: the process-wide periodic table.
- load_periodic_table: build a periodic table from JSON files.

"""

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

import numpy as np

from . import _constants as c
from .config import get_configuration
from .exceptions import DataIntegrityError, ElementNotFound

logger = logging.getLogger(__file__)


class Isotope:
    """
    Representation of an Isotope.

    Two isotopes are equal if their masses and abundances match within a
    tolerance of 1e-3 and their neutron fields are identical.

    Attributes
    ----------
    mass : float
        Exact mass.
    abundance : float
        Natural abundance of the isotope.
    neutrons : int
        Number of nucleons. Used as the isotope key in the element catalog.
    neutron_shift : int
        Difference in nucleons with respect to the most abundant isotope.

    """

    __slots__ = ("mass", "abundance", "neutrons", "neutron_shift")

    def __init__(self, mass: float, abundance: float, neutrons: int, neutron_shift: int = 0):
        self.mass = mass
        self.abundance = abundance
        self.neutrons = neutrons
        self.neutron_shift = neutron_shift

    def __repr__(self):
        return "Isotope({}, {}, {}, {})".format(
            self.mass, self.abundance, self.neutrons, self.neutron_shift
        )

    def __eq__(self, other):
        if not isinstance(other, Isotope):
            return NotImplemented
        return (
            abs(self.mass - other.mass) <= c.MASS_TOLERANCE
            and abs(self.abundance - other.abundance) <= c.ABUNDANCE_TOLERANCE
            and self.neutrons == other.neutrons
            and self.neutron_shift == other.neutron_shift
        )

    def __hash__(self):
        return hash(self.neutrons)

    def __lt__(self, other: "Isotope"):
        if not isinstance(other, Isotope):
            return NotImplemented
        return self.mass < other.mass


class Element:
    """
    Representation of a chemical element.

    Attributes
    ----------
    symbol : str
        Element symbol
    name : str
        Element name.
    isotopes : Dict[int, Isotope]
        Mapping from number of nucleons to an isotope.
    most_abundant_isotope : int
        Key of the most abundant isotope in `isotopes`.
    most_abundant_mass : float
        Exact mass of the most abundant isotope.
    min_neutron_shift : int
        Smallest neutron shift in the isotope catalog. Set by
        :py:meth:`index_isotopes`.
    max_neutron_shift : int
        Largest neutron shift in the isotope catalog. Set by
        :py:meth:`index_isotopes`.
    element_number : int
        Atomic number.

    """

    def __init__(
        self,
        symbol: str,
        isotopes: Dict[int, Isotope],
        most_abundant_isotope: Optional[int] = None,
        element_number: int = 0,
        name: Optional[str] = None,
    ):
        self.symbol = symbol
        self.name = symbol if name is None else name
        self.isotopes = isotopes
        if most_abundant_isotope is None:
            if not isotopes:
                msg = "Element {} has no isotopes.".format(symbol)
                raise DataIntegrityError(msg)
            most_abundant_isotope = self.get_monoisotope().neutrons
        self.most_abundant_isotope = most_abundant_isotope
        monoisotope = isotopes.get(most_abundant_isotope)
        self.most_abundant_mass = 0.0 if monoisotope is None else monoisotope.mass
        self.min_neutron_shift = 0
        self.max_neutron_shift = 0
        self.element_number = element_number

    def __repr__(self):
        return "Element({}, {})".format(self.symbol, len(self.isotopes))

    def __str__(self):  # pragma: no cover
        return self.symbol

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        return (self.symbol == other.symbol) and (
            self.most_abundant_isotope == other.most_abundant_isotope
        )

    def __hash__(self):
        return hash(self.symbol)

    def mass(self) -> float:
        """
        Returns the exact mass of the most abundant isotope.

        Raises
        ------
        DataIntegrityError
            If the most abundant isotope is not in the isotope catalog.

        """
        return self.isotope_mass(self.most_abundant_isotope)

    def isotope_mass(self, isotope: int) -> float:
        """
        Returns the exact mass of an isotope.

        Parameters
        ----------
        isotope : int
            Number of nucleons of the isotope. ``0`` is used for the most
            abundant isotope.

        Raises
        ------
        DataIntegrityError
            If the isotope is not in the isotope catalog.

        """
        if isotope == 0:
            isotope = self.most_abundant_isotope
        try:
            return self.isotopes[isotope].mass
        except KeyError as e:
            msg = "Isotope {} not found for element {}.".format(isotope, self.symbol)
            raise DataIntegrityError(msg) from e

    def index_isotopes(self):
        """
        Compute the minimum and maximum neutron shift from the isotope catalog.

        This method must be called once the catalog is complete. It does nothing
        if any of the shift bounds was already set to a non-zero value.

        """
        if self.min_neutron_shift or self.max_neutron_shift:
            return
        shifts = [x.neutron_shift for x in self.isotopes.values()]
        if shifts:
            self.min_neutron_shift = min(shifts)
            self.max_neutron_shift = max(shifts)

    def check_integrity(self):
        """
        Check that the most abundant isotope is in the isotope catalog.

        Raises
        ------
        DataIntegrityError

        """
        if self.most_abundant_isotope not in self.isotopes:
            msg = "Most abundant isotope {} of {} is not in its isotope catalog."
            msg = msg.format(self.most_abundant_isotope, self.symbol)
            raise DataIntegrityError(msg)

    def get_abundances(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Returns the number of nucleons, exact mass and abundance of each Isotope.

        Returns
        -------
        n: array[int]
            Number of nucleons of each isotope.
        M: array[float]
            Exact mass of each isotope.
        p: array[float]
            Abundance of each isotope.

        """
        isotopes = sorted(self.isotopes.values(), key=lambda x: x.neutrons)
        n = np.array([x.neutrons for x in isotopes], dtype=int)
        M = np.array([x.mass for x in isotopes])
        p = np.array([x.abundance for x in isotopes])
        return n, M, p

    def get_mmi(self) -> Isotope:
        """
        Returns the isotope with the lowest number of nucleons.

        """
        return min(self.isotopes.values(), key=lambda x: x.neutrons)

    def get_monoisotope(self) -> Isotope:
        """
        Returns the most abundant isotope.

        """
        return max(self.isotopes.values(), key=lambda x: x.abundance)


class PeriodicTable:
    """
    Periodic Table representation. Maps element symbols to Element objects.

    A table is filled once and treated as read-only afterwards. Elements
    are shared by reference with every ElementSpecification created from the
    table, so the table must outlive them.

    Methods
    -------
    add
    lookup
    get_element

    Examples
    --------
    >>> import chemical_elements as ce
    >>> ptable = ce.default_table()
    >>> c = ptable.lookup("C")
    >>> fe = ptable.get_element(26)

    """

    def __init__(self, elements: Optional[Iterable[Element]] = None):
        self.elements: Dict[str, Element] = dict()
        self._z_to_element: Dict[int, Element] = dict()
        if elements is not None:
            for element in elements:
                self.add(element)

    def __repr__(self):
        return "PeriodicTable({})".format(len(self.elements))

    def __getitem__(self, symbol: str) -> Element:
        return self.lookup(symbol)

    def __contains__(self, symbol) -> bool:
        return symbol in self.elements

    def __iter__(self):
        return iter(self.elements)

    def __len__(self):
        return len(self.elements)

    def add(self, element: Element):
        """
        Add an element to the table. An existing element with the same
        symbol is replaced.

        """
        if element.symbol in self.elements:
            logger.debug("Replacing element %s in periodic table.", element.symbol)
        self.elements[element.symbol] = element
        if element.element_number:
            self._z_to_element[element.element_number] = element

    def lookup(self, symbol: str) -> Element:
        """
        Returns an Element using its symbol.

        Raises
        ------
        ElementNotFound
            If `symbol` is not in the table.

        """
        try:
            return self.elements[symbol]
        except KeyError as e:
            msg = "Element {!r} not found in the periodic table.".format(symbol)
            raise ElementNotFound(msg) from e

    def get_element(self, element: Union[str, int]) -> Element:
        """
        Returns an Element object using its symbol or atomic number.

        Parameters
        ----------
        element : str or int
            element symbol or atomic number.

        Returns
        -------
        Element

        Raises
        ------
        ElementNotFound

        """
        if isinstance(element, int):
            try:
                return self._z_to_element[element]
            except KeyError as e:
                msg = "Element with atomic number {} not found in the periodic table.".format(element)
                raise ElementNotFound(msg) from e
        return self.lookup(element)


def load_periodic_table(
    elements_path: Union[str, Path], isotopes_path: Union[str, Path]
) -> PeriodicTable:
    """
    Create a PeriodicTable from element and isotope data files.

    Parameters
    ----------
    elements_path : str or Path
        JSON file that maps element symbols to element names.
    isotopes_path : str or Path
        JSON file that maps element symbols to a list of isotope records. Each
        record has the atomic number `z`, the number of nucleons `a`, the exact
        mass `m` and the natural `abundance`.

    Returns
    -------
    PeriodicTable

    Raises
    ------
    DataIntegrityError
        If an element has no isotopes.
    KeyError
        If an isotope record misses a field.

    """
    with open(elements_path, "r") as fin:
        element_data = json.load(fin)

    with open(isotopes_path, "r") as fin:
        isotope_data = json.load(fin)

    ptable = PeriodicTable()
    for symbol, records in isotope_data.items():
        if not records:
            msg = "Element {} has no isotopes.".format(symbol)
            raise DataIntegrityError(msg)
        element = _make_element(symbol, element_data.get(symbol), records)
        ptable.add(element)
    logger.info("Loaded %d elements from %s.", len(ptable), isotopes_path)
    return ptable


def _make_element(symbol: str, name: Optional[str], records) -> Element:
    monoisotope = max(records, key=lambda x: x["abundance"])
    isotopes = {
        x["a"]: Isotope(x["m"], x["abundance"], x["a"], x["a"] - monoisotope["a"])
        for x in records
    }
    element = Element(symbol, isotopes, monoisotope["a"], monoisotope["z"], name)
    element.index_isotopes()
    element.check_integrity()
    return element


_default_table: Optional[PeriodicTable] = None
_default_table_lock = threading.Lock()


def default_table() -> PeriodicTable:
    """
    Reference the process-wide PeriodicTable.

    The table is loaded from the configured data files on the first call.
    Loading is guarded by a lock, so concurrent first callers all receive
    the same, fully built table.

    Examples
    --------
    >>> import chemical_elements as ce
    >>> ptable = ce.default_table()

    """
    global _default_table
    table = _default_table
    if table is None:
        with _default_table_lock:
            if _default_table is None:
                config = get_configuration()
                _default_table = load_periodic_table(config.elements_path, config.isotopes_path)
            table = _default_table
    return table
