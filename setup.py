PACKAGE_NAME = "chemical_elements"
VERSION = "0.1.0"
LICENSE = 'BSD (3-clause)'
AUTHOR = "chemical_elements developers"
DESCRIPTION = "Elemental compositions and exact masses for mass spectrometry"

with open("README.md") as fin:
    LONG_DESCRIPTION = fin.read()
LONG_DESCRIPTION_CONTENT_TYPE = "text/markdown"

CLASSIFIERS = [
    "License :: OSI Approved :: BSD License",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
    "Topic :: Scientific/Engineering :: Chemistry",
]

PYTHON_REQUIRES = ">=3.9"

INSTALL_REQUIRES = [
    "numpy>=1.22",
    "pydantic>=2.0",
    "typing_extensions>=4.0",
]

EXTRAS_REQUIRE = {
    "test": ["pytest>=7.0"],
}

PACKAGE_DATA = {
    "chemical_elements": ["data/*.json"],
}

if __name__ == "__main__":
    from setuptools import setup, find_packages
    from sys import version_info

    if version_info[:2] < (3, 9):
        msg = "chemical_elements requires Python >= 3.9."
        raise RuntimeError(msg)

    setup(name=PACKAGE_NAME,
          version=VERSION,
          author=AUTHOR,
          license=LICENSE,
          description=DESCRIPTION,
          long_description=LONG_DESCRIPTION,
          long_description_content_type=LONG_DESCRIPTION_CONTENT_TYPE,
          classifiers=CLASSIFIERS,
          packages=find_packages(include=["chemical_elements", "chemical_elements.*"]),
          python_requires=PYTHON_REQUIRES,
          install_requires=INSTALL_REQUIRES,
          extras_require=EXTRAS_REQUIRE,
          package_data=PACKAGE_DATA,
          include_package_data=True,
          )
