"""
Tests for LoaderConfig and reconciler construction.
"""

from pathlib import Path

import pytest

from udfreg.adapters.duckdb import DuckDBFunctionRegistry
from udfreg.engine import build_reconciler
from udfreg.engine.config import LoaderConfig
from udfreg.registry.loaders import PythonModuleLoader, SharedLibraryLoader
from udfreg.registry.memory import InMemoryFunctionRegistry


class TestLoaderConfig:
    """Tests for LoaderConfig.from_dict."""

    def test_defaults_and_path_resolution(self, tmp_path):
        """Test that relative paths resolve against the project folder."""
        config = LoaderConfig.from_dict(
            {"plugin_dir": "plugins", "config_files": ["udfs.json", "more/udfs.yaml"]}, tmp_path
        )
        base = Path(tmp_path).resolve()
        assert config.plugin_dir == base / "plugins"
        assert config.config_files == [base / "udfs.json", base / "more" / "udfs.yaml"]
        assert config.loader == "python"
        assert config.registry == "memory"
        assert config.default_namespace_prefix == "presto.default."
        assert config.max_workers is None

    def test_explicit_values(self, tmp_path):
        """Test that optional settings are read."""
        config = LoaderConfig.from_dict(
            {
                "plugin_dir": "plugins",
                "config_files": [],
                "loader": "Shared",
                "registry": "duckdb",
                "default_namespace_prefix": "native.",
                "max_workers": 2,
            },
            tmp_path,
        )
        assert config.loader == "shared"
        assert config.registry == "duckdb"
        assert config.default_namespace_prefix == "native."
        assert config.max_workers == 2

    @pytest.mark.parametrize(
        "config_dict,message",
        [
            ({"config_files": []}, "Missing required fields"),
            ({"plugin_dir": "plugins"}, "Missing required fields"),
            ({"plugin_dir": 1, "config_files": []}, "plugin_dir must be a string"),
            ({"plugin_dir": "p", "config_files": "udfs.json"}, "config_files must be a list"),
            ({"plugin_dir": "p", "config_files": [], "loader": "jvm"}, "Unsupported loader"),
            ({"plugin_dir": "p", "config_files": [], "registry": "redis"}, "Unsupported registry"),
            ({"plugin_dir": "p", "config_files": [], "max_workers": 0}, "must be positive"),
            ({"plugin_dir": "p", "config_files": [], "max_workers": "4"}, "must be an integer"),
        ],
    )
    def test_invalid_config(self, tmp_path, config_dict, message):
        """Test validation errors."""
        with pytest.raises(ValueError, match=message):
            LoaderConfig.from_dict(config_dict, tmp_path)


class TestBuildReconciler:
    """Tests for build_reconciler."""

    def test_memory_registry_python_loader(self, tmp_path):
        """Test the default combination."""
        config = LoaderConfig.from_dict({"plugin_dir": "plugins", "config_files": []}, tmp_path)
        reconciler = build_reconciler(config)
        assert isinstance(reconciler.registry, InMemoryFunctionRegistry)
        assert isinstance(reconciler.loader, PythonModuleLoader)
        assert reconciler.loader.registry is reconciler.registry
        assert reconciler.base_directory == config.plugin_dir

    def test_duckdb_registry_shared_loader(self, tmp_path):
        """Test selecting the DuckDB registry and shared loader."""
        config = LoaderConfig.from_dict(
            {
                "plugin_dir": "plugins",
                "config_files": [],
                "loader": "shared",
                "registry": "duckdb",
                "default_namespace_prefix": "native.",
            },
            tmp_path,
        )
        reconciler = build_reconciler(config)
        try:
            assert isinstance(reconciler.registry, DuckDBFunctionRegistry)
            assert isinstance(reconciler.loader, SharedLibraryLoader)
            assert reconciler.default_prefix == "native."
        finally:
            reconciler.registry.close()
