import json

import pytest

from chemical_elements import atoms, storage
from chemical_elements.composition import ChemicalComposition
from chemical_elements.config import get_configuration


@pytest.fixture
def ptable():
    return atoms.default_table()


@pytest.fixture(params=storage.list_backends())
def backend(request):
    return request.param


@pytest.fixture
def glucose(backend):
    return ChemicalComposition("C6H12O6", backend=backend)


@pytest.fixture
def water(backend):
    return ChemicalComposition("H2O", backend=backend)


@pytest.fixture
def data_dir(tmp_path):
    # a two element table with made up values
    elements = {"Xa": "Element A", "Xb": "Element B"}
    isotopes = {
        "Xa": [
            {"z": 1, "a": 10, "m": 10.01, "abundance": 0.8},
            {"z": 1, "a": 11, "m": 11.01, "abundance": 0.2},
        ],
        "Xb": [
            {"z": 2, "a": 20, "m": 19.99, "abundance": 0.1},
            {"z": 2, "a": 21, "m": 20.99, "abundance": 0.9},
        ],
    }
    with open(tmp_path / "elements.json", "w") as fout:
        json.dump(elements, fout)
    with open(tmp_path / "isotopes.json", "w") as fout:
        json.dump(isotopes, fout)
    return tmp_path


@pytest.fixture
def clean_configuration():
    get_configuration.cache_clear()
    yield
    get_configuration.cache_clear()
