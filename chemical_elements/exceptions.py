"""chemical_elements custom exceptions."""


class ChemicalElementsError(Exception):
    """Base class for all the exceptions raised by the package."""


class ParseError(ChemicalElementsError, ValueError):
    """Exception raised when element or formula text is malformed."""


class ElementNotFound(ChemicalElementsError, KeyError):
    """Exception raised when a symbol is not present in a periodic table."""

    def __str__(self):
        # KeyError quotes its argument, use the plain message instead
        return str(self.args[0]) if self.args else ""


class DataIntegrityError(ChemicalElementsError, RuntimeError):
    """Exception raised when element data is inconsistent, e.g. a missing isotope."""


class BackendNotRegistered(ChemicalElementsError, ValueError):
    """Exception raised when trying to fetch a non-registered storage backend."""
