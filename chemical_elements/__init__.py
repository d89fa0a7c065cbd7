"""
chemical_elements
=================

Elemental compositions and their masses, for mass spectrometry tools.

Provides:

1. A PeriodicTable with element and isotope information.
2. An ElementSpecification to refer to an element or to one of its isotopes.
3. A ChemicalComposition object that maps element specifications to counts,
   supports arithmetic and computes exact masses.

Objects
-------
- ChemicalComposition
- Element
- ElementSpecification
- Isotope
- PeriodicTable

Constants
---------
- EM : electron mass
- PROTON : proton mass

"""

__version__ = "0.1.0"

from ._constants import EM, PROTON
from .atoms import Element, Isotope, PeriodicTable, default_table, load_periodic_table
from .composition import ChemicalComposition
from .config import PackageConfiguration, get_configuration
from .exceptions import (
    BackendNotRegistered,
    ChemicalElementsError,
    DataIntegrityError,
    ElementNotFound,
    ParseError,
)
from .formula import composition_to_string, parse_formula
from .specification import ElementSpecification
from .storage import CompositionStorage, MappingStorage, VectorStorage, list_backends, register_backend

__all__ = [
    "EM",
    "PROTON",
    "BackendNotRegistered",
    "ChemicalComposition",
    "ChemicalElementsError",
    "CompositionStorage",
    "DataIntegrityError",
    "Element",
    "ElementNotFound",
    "ElementSpecification",
    "Isotope",
    "MappingStorage",
    "PackageConfiguration",
    "ParseError",
    "PeriodicTable",
    "VectorStorage",
    "composition_to_string",
    "default_table",
    "get_configuration",
    "list_backends",
    "load_periodic_table",
    "parse_formula",
    "register_backend",
]
