"""
Pytest configuration and shared fixtures for udfreg tests.
"""

import json
import tempfile
from pathlib import Path
from typing import Any

import pytest

from udfreg.engine.reconciler import RegistrationReconciler
from udfreg.registry.loaders import LibraryLoader
from udfreg.registry.memory import InMemoryFunctionRegistry


class FakeLibraryLoader(LibraryLoader):
    """
    Loader that simulates libraries without touching the filesystem.

    ``behaviours`` maps a library path to a callable run with the registry
    when that library is "loaded"; an exception raised by it is surfaced the
    way a real loader would.
    """

    library_extension = ".so"
    default_entrypoint = "registerExtensions"

    def __init__(self, registry, behaviours: dict[str, Any] | None = None):
        super().__init__(registry)
        self.behaviours = behaviours or {}
        self.calls: list[tuple[str, str | None]] = []

    def load(self, path: str, entrypoint: str | None = None) -> None:
        self.calls.append((path, entrypoint))
        behaviour = self.behaviours.get(path)
        if behaviour is not None:
            behaviour(self.registry)


@pytest.fixture
def temp_plugin_dir():
    """Create a temporary plugin directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def registry():
    """Create an empty in-memory registry."""
    return InMemoryFunctionRegistry()


@pytest.fixture
def fake_loader(registry):
    """Create a fake loader bound to the registry."""
    return FakeLibraryLoader(registry)


@pytest.fixture
def reconciler(registry, fake_loader, temp_plugin_dir):
    """Create a reconciler over the in-memory registry and fake loader."""
    return RegistrationReconciler(registry, fake_loader, temp_plugin_dir)


@pytest.fixture
def make_library(temp_plugin_dir):
    """Factory creating an (empty) library file under the plugin directory."""

    def _make(sub_directory: str, file_name: str) -> Path:
        directory = temp_plugin_dir / sub_directory
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / file_name
        path.write_text("a")
        return path

    return _make


@pytest.fixture
def write_json(temp_plugin_dir):
    """Factory writing a JSON document to a file and returning its path."""

    def _write(name: str, document: dict[str, Any]) -> Path:
        path = temp_plugin_dir / name
        path.write_text(json.dumps(document))
        return path

    return _write
