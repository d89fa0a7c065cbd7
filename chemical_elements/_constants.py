from typing import Final, List

# physical constants
EM: Final[float] = 0.00054858  # electron mass
PROTON: Final[float] = 1.00727646677

# isotope equality tolerances
MASS_TOLERANCE: Final[float] = 1e-3
ABUNDANCE_TOLERANCE: Final[float] = 1e-3

# largest isotope number accepted by the bracket grammar
MAX_ISOTOPE: Final[int] = 65535

# compositions store 32 bit signed counts
MIN_COUNT: Final[int] = -(2 ** 31)
MAX_COUNT: Final[int] = 2 ** 31 - 1

# periodic table data
DATA_DIR: Final[str] = "data"
ELEMENTS_FILENAME: Final[str] = "elements.json"
ISOTOPES_FILENAME: Final[str] = "isotopes.json"

# environment variables read by the configuration
DATA_DIR_ENV: Final[str] = "CHEMICAL_ELEMENTS_DATA_DIR"
BACKEND_ENV: Final[str] = "CHEMICAL_ELEMENTS_BACKEND"

# storage backends
MAPPING: Final[str] = "mapping"
VECTOR: Final[str] = "vector"
DEFAULT_BACKEND: Final[str] = MAPPING

# elements placed first in formula strings, in order
PRIORITY_SYMBOLS: Final[List[str]] = ["C", "H"]
