"""
Version information for the simcall SDK.

The installed distribution's metadata wins; a source checkout reads the
version from ``pyproject.toml`` instead.
"""
import importlib.metadata
import pathlib

import tomli

DISTRIBUTION_NAME = "simcall-sdk"
UNKNOWN_VERSION = "0.0.0+unknown"


def _pyproject_version() -> str:
    pyproject = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"
    try:
        with open(pyproject, "rb") as f:
            return tomli.load(f)["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        return UNKNOWN_VERSION


try:
    __version__ = importlib.metadata.version(DISTRIBUTION_NAME)
except importlib.metadata.PackageNotFoundError:
    __version__ = _pyproject_version()
