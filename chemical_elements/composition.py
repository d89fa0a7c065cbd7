"""
Tools for working with chemical compositions.

Objects
-------

- ChemicalComposition

"""

import numbers
from collections.abc import Mapping
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .config import get_configuration
from . import _constants as c
from .exceptions import ElementNotFound, ParseError
from .formula import composition_to_string, parse_formula
from .specification import ElementSpecification
from .storage import get_backend

ElementKey = Union[ElementSpecification, str]


class ChemicalComposition:
    """
    Represents a chemical composition as a mapping from element specifications
    to integer counts.

    Counts may be negative, e.g. to represent a neutral loss, and may be
    explicitly set to zero. A zero entry is different from a missing entry:
    both return ``0`` from :py:meth:`get`, but only the former is compared in
    equality and listed by :py:meth:`items`. Counts are 32 bit signed
    integers; operations that would leave a count out of that range raise
    ValueError and leave the composition unchanged.

    The mass is cached by :py:meth:`fmass` and the cache is cleared by every
    operation that modifies the counts.

    Attributes
    ----------
    backend : str
        Name of the storage backend.
    mass_cache : float or None
        Cached mass. ``None`` if the mass has not been stored since the last
        modification.

    Methods
    -------
    get(key)
    set(key, count)
    inc(key, delta)
    mass()
    fmass()
    calc_mass()
    to_string()

    Examples
    --------
    >>> ChemicalComposition("H2O")
    ChemicalComposition("H2O1")
    >>> ChemicalComposition({"C[13]": 1, "O": 2})
    ChemicalComposition("C[13]1O2")
    >>> ChemicalComposition([("H", 1), ("H", 1), ("O", 1)]) == ChemicalComposition("H2O")
    True

    """

    def __init__(self, formula=None, backend: Optional[str] = None):
        if backend is None:
            backend = get_configuration().default_backend
        self.backend = backend
        self._storage = get_backend(backend)()
        self.mass_cache: Optional[float] = None

        if formula is None:
            return
        elif isinstance(formula, ChemicalComposition):
            for key, count in formula.items():
                self._storage.set(key, count)
            self.mass_cache = formula.mass_cache
            return
        elif isinstance(formula, str):
            pairs = parse_formula(formula)
        elif isinstance(formula, Mapping):
            pairs = formula.items()
        else:
            pairs = formula

        for key, count in pairs:
            self.inc(key, count)

    @classmethod
    def parse(cls, formula: str, backend: Optional[str] = None) -> "ChemicalComposition":
        """
        Create a composition from a formula string.

        Raises
        ------
        ParseError
            If the formula string is malformed.
        ElementNotFound
            If a symbol is not in the periodic table.

        """
        if not isinstance(formula, str):
            msg = "formula must be a string, got {!r}".format(formula)
            raise TypeError(msg)
        return cls(formula, backend=backend)

    @classmethod
    def from_pairs(
        cls, pairs: Iterable[Tuple[ElementKey, int]], backend: Optional[str] = None
    ) -> "ChemicalComposition":
        """Create a composition from (key, count) pairs. Counts of repeated keys are summed."""
        return cls(list(pairs), backend=backend)

    def get(self, key: ElementKey) -> int:
        """Retrieve the count of an element. Returns ``0`` if it is not present."""
        return self._storage.get(_as_specification(key))

    def set(self, key: ElementKey, count: int):
        """Set the count of an element."""
        self._set(_as_specification(key), _as_count(count))

    def inc(self, key: ElementKey, delta: int):
        """Add `delta` to the count of an element."""
        key = _as_specification(key)
        delta = _as_count(delta)
        self._set(key, _check_range(self._storage.get(key) + delta))

    def _set(self, key: ElementSpecification, count: int):
        # every modification of the counts goes through here
        self._storage.set(key, count)
        self.mass_cache = None

    def calc_mass(self) -> float:
        """
        Computes the mass of the composition.

        Natural elements use the mass of their most abundant isotope.

        Raises
        ------
        DataIntegrityError
            If an isotope is not in the isotope catalog of its element.

        """
        total = 0.0
        for key, count in self._storage.items():
            total += key.element.isotope_mass(key.isotope) * count
        return total

    def mass(self) -> float:
        """Returns the cached mass if available. Otherwise, computes it without storing it."""
        if self.mass_cache is None:
            return self.calc_mass()
        return self.mass_cache

    def fmass(self) -> float:
        """
        Returns the mass, computing and storing it if necessary.

        Examples
        --------
        >>> f = ChemicalComposition("H2O")
        >>> f.fmass()
        18.01056468403

        """
        if self.mass_cache is None:
            self.mass_cache = self.calc_mass()
        return self.mass_cache

    def to_string(self) -> str:
        return composition_to_string(self._storage.items())

    def copy(self) -> "ChemicalComposition":
        """Create an independent copy of the composition, including the cached mass."""
        other = ChemicalComposition.__new__(self.__class__)
        other.backend = self.backend
        other._storage = self._storage.copy()
        other.mass_cache = self.mass_cache
        return other

    def keys(self) -> List[ElementSpecification]:
        return [k for k, _ in self._storage.items()]

    def values(self) -> List[int]:
        return [v for _, v in self._storage.items()]

    def items(self) -> List[Tuple[ElementSpecification, int]]:
        return self._storage.items()

    def _update(self, updates: List[Tuple[ElementSpecification, int]]):
        # all counts are checked before any of them is stored
        updates = [(key, _check_range(count)) for key, count in updates]
        for key, count in updates:
            self._set(key, count)

    def _add_from(self, other: "ChemicalComposition"):
        self._update([(k, self._storage.get(k) + v) for k, v in other.items()])

    def _sub_from(self, other: "ChemicalComposition"):
        self._update([(k, self._storage.get(k) - v) for k, v in other.items()])

    def _mul_by(self, scaler: int):
        self._update([(k, v * scaler) for k, v in self._storage.items()])

    def __add__(self, other: "ChemicalComposition") -> "ChemicalComposition":
        if not isinstance(other, ChemicalComposition):
            return NotImplemented
        result = self.copy()
        result._add_from(other)
        return result

    def __iadd__(self, other: "ChemicalComposition") -> "ChemicalComposition":
        if not isinstance(other, ChemicalComposition):
            return NotImplemented
        self._add_from(other)
        return self

    def __sub__(self, other: "ChemicalComposition") -> "ChemicalComposition":
        if not isinstance(other, ChemicalComposition):
            return NotImplemented
        result = self.copy()
        result._sub_from(other)
        return result

    def __isub__(self, other: "ChemicalComposition") -> "ChemicalComposition":
        if not isinstance(other, ChemicalComposition):
            return NotImplemented
        self._sub_from(other)
        return self

    def __mul__(self, scaler: int) -> "ChemicalComposition":
        if not _is_integer(scaler):
            return NotImplemented
        result = self.copy()
        result._mul_by(int(scaler))
        return result

    __rmul__ = __mul__

    def __imul__(self, scaler: int) -> "ChemicalComposition":
        if not _is_integer(scaler):
            return NotImplemented
        self._mul_by(int(scaler))
        return self

    def __eq__(self, other):
        if not isinstance(other, ChemicalComposition):
            return NotImplemented
        return self._storage.to_dict() == other._storage.to_dict()

    __hash__ = None

    def __getitem__(self, key: ElementKey) -> int:
        return self.get(key)

    def __setitem__(self, key: ElementKey, count: int):
        self.set(key, count)

    def __contains__(self, key) -> bool:
        if not isinstance(key, (str, ElementSpecification)):
            return False
        try:
            key = _as_specification(key)
        except (ElementNotFound, ParseError):
            return False
        return key in self._storage

    def __iter__(self) -> Iterator[ElementSpecification]:
        return iter(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def __repr__(self):
        return 'ChemicalComposition("{}")'.format(str(self))

    def __str__(self):
        return self.to_string()


def _as_specification(key: ElementKey) -> ElementSpecification:
    if isinstance(key, ElementSpecification):
        return key
    elif isinstance(key, str):
        return ElementSpecification.parse(key)
    msg = "Composition keys must be an ElementSpecification or its string representation, got {!r}"
    raise TypeError(msg.format(key))


def _is_integer(x) -> bool:
    return isinstance(x, numbers.Integral) and not isinstance(x, bool)


def _as_count(count) -> int:
    if not _is_integer(count):
        msg = "Composition counts must be integers, got {!r}".format(count)
        raise TypeError(msg)
    return _check_range(int(count))


def _check_range(count: int) -> int:
    if not (c.MIN_COUNT <= count <= c.MAX_COUNT):
        msg = "Composition counts must be between {} and {}, got {}".format(c.MIN_COUNT, c.MAX_COUNT, count)
        raise ValueError(msg)
    return count
