"""
Tests for version information.
"""
import importlib
import importlib.metadata
from unittest.mock import patch

import simcall_sdk
import simcall_sdk.version


def test_version_is_exported():
    assert isinstance(simcall_sdk.__version__, str)
    assert simcall_sdk.__version__


def test_version_falls_back_to_pyproject():
    with patch("importlib.metadata.version", side_effect=importlib.metadata.PackageNotFoundError):
        module = importlib.reload(simcall_sdk.version)
        assert module.__version__ == "0.1.0"
    importlib.reload(simcall_sdk.version)


def test_version_without_pyproject(tmp_path):
    with patch("importlib.metadata.version", side_effect=importlib.metadata.PackageNotFoundError), \
         patch("pathlib.Path.resolve", return_value=tmp_path / "simcall_sdk" / "version.py"):
        module = importlib.reload(simcall_sdk.version)
        assert module.__version__ == module.UNKNOWN_VERSION
    importlib.reload(simcall_sdk.version)
