"""
Tools for converting between formula strings and element counts.

A formula string is a concatenation of element tokens. Each token is an
element specification (``C``, ``C[13]``) followed by an optional count, that
defaults to one and may be negative (``H-2``).

Functions
---------
- parse_formula
- composition_to_string

"""

import string
from typing import Iterable, List, Optional, Tuple

from . import _constants as c
from .atoms import PeriodicTable, default_table
from .exceptions import ParseError
from .specification import ElementSpecification

_priority = {symbol: k for k, symbol in enumerate(c.PRIORITY_SYMBOLS)}


def parse_formula(
    formula: str, table: Optional[PeriodicTable] = None
) -> List[Tuple[ElementSpecification, int]]:
    """
    Parse a formula string into a list of (element specification, count) pairs.

    Repeated elements produce repeated pairs, which are summed when loaded
    into a composition.

    Parameters
    ----------
    formula : str
    table : PeriodicTable or None, default=None
        Table used to look up element symbols. If ``None``, the default table
        is used.

    Returns
    -------
    List[Tuple[ElementSpecification, int]]

    Raises
    ------
    ParseError
        If the formula string is malformed.
    ElementNotFound
        If a symbol is not in the periodic table.

    Examples
    --------
    >>> parse_formula("C[13]6H12O6")
    [(ElementSpecification(C, 13), 6), (ElementSpecification(H, 0), 12), (ElementSpecification(O, 0), 6)]

    """
    if table is None:
        table = default_table()
    ind = 0
    n = len(formula)
    tokens = list()
    while ind < n:
        token, ind = _tokenize_element(formula, ind, table)
        tokens.append(token)
    return tokens


def _tokenize_element(formula: str, ind: int, table: PeriodicTable):
    """
    Convert an element substring starting at `ind` index into a token.

    Returns
    -------
    token, new_ind

    """
    length = len(formula)
    if formula[ind] not in string.ascii_uppercase:
        msg = "Unexpected character {!r} at position {} in formula {!r}."
        raise ParseError(msg.format(formula[ind], ind, formula))

    end = ind + 1
    while (end < length) and (formula[end] in string.ascii_lowercase):
        end += 1
    if (end < length) and (formula[end] == "["):
        end = _find_closing_bracket(formula, end) + 1
    specification = ElementSpecification.parse(formula[ind:end], table)
    coefficient, end = _get_coefficient(formula, end)
    return (specification, coefficient), end


def _find_closing_bracket(formula: str, ind: int) -> int:
    match_ind = formula.find("]", ind + 1)
    if match_ind == -1:
        msg = "Unclosed [ in formula {!r}.".format(formula)
        raise ParseError(msg)
    return match_ind


def _get_coefficient(formula: str, ind: int):
    """
    traverses a formula string to compute a coefficient. ind is a position
    after an element.

    Returns
    -------
    coefficient : int
    new_ind : int, new index to continue parsing the formula
    """
    length = len(formula)
    start = ind
    if (ind < length) and (formula[ind] == "-"):
        ind += 1
        if (ind >= length) or (formula[ind] not in string.digits):
            msg = "Missing count after - at position {} in formula {!r}."
            raise ParseError(msg.format(start, formula))

    if (ind >= length) or (formula[ind] not in string.digits):
        coefficient = 1
        new_ind = ind
    else:
        end = ind + 1
        while (end < length) and (formula[end] in string.digits):
            end += 1
        coefficient = int(formula[start:end])
        new_ind = end
    return coefficient, new_ind


def composition_to_string(items: Iterable[Tuple[ElementSpecification, int]]) -> str:
    """
    Create a formula string from (element specification, count) pairs.

    Carbon goes first, then hydrogen, then the remaining elements sorted by
    decreasing monoisotopic mass. Isotopes of the same element are sorted
    by isotope number, with the natural element first. Every count is written
    explicitly, including ones, zeros and negative counts.

    Examples
    --------
    >>> composition_to_string(parse_formula("H2O"))
    'H2O1'

    """
    return "".join(_spec_coeff_to_str(k, v) for k, v in sorted(items, key=_sort_key))


def _sort_key(item: Tuple[ElementSpecification, int]):
    specification = item[0]
    rank = _priority.get(specification.symbol, len(_priority))
    return rank, -specification.element.most_abundant_mass, specification.symbol, specification.isotope


def _spec_coeff_to_str(specification: ElementSpecification, coeff: int) -> str:
    return "{}{}".format(specification, coeff)
