"""
Identity key of an element in a chemical composition.

Objects
-------
- ElementSpecification

"""

import string
from typing import Optional, Union

from . import _constants as c
from .atoms import Element, PeriodicTable, default_table
from .exceptions import ParseError


class ElementSpecification:
    """
    An element together with a specific isotope.

    Specifications are immutable and are used as keys of a composition. Two
    specifications are equal if they refer to the same element and isotope.

    Attributes
    ----------
    element : Element
        Element from a periodic table.
    isotope : int
        Number of nucleons of the isotope. ``0`` refers to the element in its
        natural form, where the most abundant isotope is used for the mass.

    Examples
    --------
    >>> from chemical_elements import ElementSpecification
    >>> ElementSpecification.parse("C[13]")
    ElementSpecification(C, 13)
    >>> str(ElementSpecification("O"))
    'O'

    """

    __slots__ = ("_element", "_isotope")

    def __init__(self, element: Union[Element, str], isotope: int = 0):
        if isinstance(element, str):
            element = default_table().lookup(element)
        elif not isinstance(element, Element):
            msg = "element must be an Element or an element symbol, got {!r}".format(element)
            raise TypeError(msg)

        valid_type = isinstance(isotope, int) and not isinstance(isotope, bool)
        if not valid_type or not (0 <= isotope <= c.MAX_ISOTOPE):
            msg = "isotope must be an integer between 0 and {}, got {!r}"
            raise ValueError(msg.format(c.MAX_ISOTOPE, isotope))
        self._element = element
        self._isotope = isotope

    @property
    def element(self) -> Element:
        return self._element

    @property
    def isotope(self) -> int:
        return self._isotope

    @property
    def symbol(self) -> str:
        return self._element.symbol

    def mass(self) -> float:
        """Exact mass of the specified isotope."""
        return self._element.isotope_mass(self._isotope)

    @classmethod
    def parse(cls, text: str, table: Optional[PeriodicTable] = None) -> "ElementSpecification":
        """
        Create an ElementSpecification from its string representation.

        Parameters
        ----------
        text : str
            An element symbol, optionally followed by the isotope number in
            brackets, e.g. ``"Fe"`` or ``"C[13]"``.
        table : PeriodicTable or None, default=None
            Table used to look up the symbol. If ``None``, the default table
            is used.

        Returns
        -------
        ElementSpecification

        Raises
        ------
        ParseError
            If the text is malformed.
        ElementNotFound
            If the symbol is not in the periodic table.

        """
        symbol, isotope = _split_specification(text)
        if table is None:
            table = default_table()
        return cls(table.lookup(symbol), isotope)

    def to_string(self) -> str:
        if self._isotope == 0:
            return self._element.symbol
        return "{}[{}]".format(self._element.symbol, self._isotope)

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return "ElementSpecification({}, {})".format(self._element.symbol, self._isotope)

    def __eq__(self, other):
        if not isinstance(other, ElementSpecification):
            return NotImplemented
        return (self._element == other._element) and (self._isotope == other._isotope)

    def __hash__(self):
        return hash((self._element.symbol, self._isotope))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        # elements are owned by the periodic table and never copied
        return self


def _split_specification(text: str):
    """
    Split an element specification string into symbol and isotope number.

    Returns
    -------
    symbol : str
    isotope : int

    """
    bracket = text.find("[")
    if bracket == -1:
        symbol, isotope = text, 0
    else:
        symbol = text[:bracket]
        close = text.find("]", bracket + 1)
        if close == -1:
            msg = "Unclosed [ in element specification {!r}.".format(text)
            raise ParseError(msg)
        isotope_str = text[bracket + 1 : close]
        if not isotope_str or any(x not in string.digits for x in isotope_str):
            msg = "Invalid isotope number {!r} in element specification {!r}."
            raise ParseError(msg.format(isotope_str, text))
        if close != len(text) - 1:
            msg = "Unexpected characters after ] in element specification {!r}.".format(text)
            raise ParseError(msg)
        isotope = int(isotope_str)
        if isotope > c.MAX_ISOTOPE:
            msg = "Isotope number {} in element specification {!r} is too large."
            raise ParseError(msg.format(isotope, text))

    if not symbol:
        msg = "Missing element symbol in element specification {!r}.".format(text)
        raise ParseError(msg)
    return symbol, isotope
