"""
Tests for the DuckDB-backed function registry.
"""

import pytest

from udfreg.adapters import get_registry, is_registry_supported, list_available_registries
from udfreg.adapters.duckdb import DuckDBFunctionRegistry, TypeConversionError, to_duckdb_type
from udfreg.parser.type_parser import parse_type
from udfreg.registry.memory import InMemoryFunctionRegistry


@pytest.fixture
def duckdb_registry():
    """DuckDB registry on an in-memory database."""
    registry = DuckDBFunctionRegistry()
    yield registry
    registry.close()


class TestTypeConversion:
    """Tests for to_duckdb_type."""

    def test_scalar_types(self):
        """Test converting scalar types."""
        assert to_duckdb_type(parse_type("bigint")) == "BIGINT"
        assert to_duckdb_type(parse_type("double")) == "DOUBLE"
        assert to_duckdb_type(parse_type("boolean")) == "BOOLEAN"

    def test_array_type(self):
        """Test converting an array type."""
        assert to_duckdb_type(parse_type("array(bigint)")) == "BIGINT[]"

    def test_unknown_type(self):
        """Test that TypeConversionError is a ValueError."""
        assert issubclass(TypeConversionError, ValueError)


class TestDuckDBFunctionRegistry:
    """Tests for DuckDBFunctionRegistry."""

    def test_sql_name(self):
        """Test the SQL name derived from a qualified name."""
        assert DuckDBFunctionRegistry.sql_name("presto.default.custom_add") == (
            "presto_default_custom_add"
        )

    def test_function_callable_from_sql(self, duckdb_registry):
        """Test that a registered implementation can be called from SQL."""
        duckdb_registry.register_function(
            "custom_add", ("bigint", ["bigint", "bigint"]), lambda a, b: a + b
        )
        result = duckdb_registry.connection.execute(
            "SELECT presto_default_custom_add(1, 2)"
        ).fetchone()
        assert result[0] == 3
        assert duckdb_registry.sql_function_names() == ["presto_default_custom_add"]

    def test_signature_only_registration(self, duckdb_registry):
        """Test that registrations without an implementation are only recorded."""
        duckdb_registry.register_function("f", ("bigint", []))
        assert "presto.default.f" in duckdb_registry.current_function_signatures()
        assert duckdb_registry.sql_function_names() == []

    def test_second_overload_recorded_not_exposed(self, duckdb_registry):
        """Test that an overload DuckDB cannot hold stays in the registry."""
        duckdb_registry.register_function("f", ("bigint", ["bigint"]), lambda a: a)
        duckdb_registry.register_function("f", ("double", ["double"]), lambda a: a)
        assert len(duckdb_registry.get_function_signatures("presto.default.f")) == 2
        assert duckdb_registry.sql_function_names() == ["presto_default_f"]

    def test_overwrite_replaces_sql_function(self, duckdb_registry):
        """Test that re-registering an overload replaces the SQL function."""
        duckdb_registry.register_function("f", ("bigint", ["bigint"]), lambda a: a)
        duckdb_registry.register_function("f", ("bigint", ["bigint"]), lambda a: a * 10)
        result = duckdb_registry.connection.execute("SELECT presto_default_f(2)").fetchone()
        assert result[0] == 20

    def test_clear(self, duckdb_registry):
        """Test that clearing drops the SQL functions."""
        duckdb_registry.register_function("f", ("bigint", ["bigint"]), lambda a: a)
        duckdb_registry.clear()
        assert duckdb_registry.sql_function_names() == []
        assert duckdb_registry.current_function_signatures() == {}


class TestRegistryFactory:
    """Tests for the registry factory."""

    def test_get_registry(self):
        """Test creating registries by name."""
        assert isinstance(get_registry("memory"), InMemoryFunctionRegistry)
        registry = get_registry("DuckDB", "native.")
        try:
            assert isinstance(registry, DuckDBFunctionRegistry)
            assert registry.default_namespace_prefix == "native."
        finally:
            registry.close()

    def test_unsupported_registry(self):
        """Test that an unknown registry type raises ValueError."""
        with pytest.raises(ValueError, match="Unsupported registry type"):
            get_registry("redis")
        assert not is_registry_supported("redis")
        assert list_available_registries() == ["memory", "duckdb"]
