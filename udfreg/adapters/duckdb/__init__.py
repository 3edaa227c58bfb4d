"""
DuckDB-backed function registry.
"""

from .registry import DuckDBFunctionRegistry
from .types import TypeConversionError, to_duckdb_type

__all__ = ["DuckDBFunctionRegistry", "TypeConversionError", "to_duckdb_type"]
