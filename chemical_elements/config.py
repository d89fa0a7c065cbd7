"""Package configuration.

PackageConfiguration :
    Location of the periodic table data and default storage backend.
get_configuration :
    Build the process-wide configuration from environment variables.

"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

import pydantic
from pydantic.functional_validators import AfterValidator
from typing_extensions import Annotated

from . import _constants as c

logger = logging.getLogger(__file__)

_PACKAGE_DATA_DIR = Path(__file__).parent / c.DATA_DIR


def is_file(p: Path) -> Path:
    """Check if a file exists."""
    assert p.is_file(), f"{p} is not a valid file."
    return p


class PackageConfiguration(pydantic.BaseModel):
    """
    Store the package configuration.

    Attributes
    ----------
    elements_path : Path
        JSON file mapping element symbols to element names.
    isotopes_path : Path
        JSON file mapping element symbols to a list of isotope records.
    default_backend : str, default="mapping"
        Name of the storage backend used by new compositions.

    """

    model_config = pydantic.ConfigDict(frozen=True)

    elements_path: Annotated[Path, AfterValidator(is_file)] = _PACKAGE_DATA_DIR / c.ELEMENTS_FILENAME
    isotopes_path: Annotated[Path, AfterValidator(is_file)] = _PACKAGE_DATA_DIR / c.ISOTOPES_FILENAME
    default_backend: str = c.DEFAULT_BACKEND

    @classmethod
    def from_data_dir(cls, data_dir: Path | str, **kwargs) -> PackageConfiguration:
        """Create a configuration using the element and isotope files in `data_dir`."""
        data_dir = Path(data_dir)
        return cls(
            elements_path=data_dir / c.ELEMENTS_FILENAME,
            isotopes_path=data_dir / c.ISOTOPES_FILENAME,
            **kwargs,
        )


@lru_cache(maxsize=1)
def get_configuration() -> PackageConfiguration:
    """
    Build the package configuration.

    The configuration is created once per process. The environment variables
    ``CHEMICAL_ELEMENTS_DATA_DIR`` and ``CHEMICAL_ELEMENTS_BACKEND`` override
    the data directory and the default backend respectively.

    Returns
    -------
    PackageConfiguration

    Raises
    ------
    pydantic.ValidationError
        If the data directory does not contain the periodic table files.

    """
    kwargs = dict()
    backend = os.environ.get(c.BACKEND_ENV)
    if backend:
        kwargs["default_backend"] = backend

    data_dir = os.environ.get(c.DATA_DIR_ENV)
    if data_dir:
        config = PackageConfiguration.from_data_dir(data_dir, **kwargs)
    else:
        config = PackageConfiguration(**kwargs)
    logger.debug("Using configuration %s.", config)
    return config
