"""Function registry backed by a DuckDB connection."""

from collections.abc import Callable
from typing import Any

import duckdb

from udfreg.registry.core import DEFAULT_NAMESPACE_PREFIX
from udfreg.registry.memory import InMemoryFunctionRegistry
from udfreg.typing.signature import FunctionSignature

from .types import to_duckdb_type


class DuckDBFunctionRegistry(InMemoryFunctionRegistry):
    """
    In-memory registry that also exposes implementations as DuckDB functions.

    Overloads registered with an implementation become scalar functions on
    the connection, named after the qualified name with dots replaced by
    underscores (``presto.default.custom_add`` -> ``presto_default_custom_add``).
    DuckDB Python UDFs cannot be overloaded, so only the first overload of a
    name is callable from SQL; the others are still recorded in the registry.
    """

    def __init__(
        self,
        connection: duckdb.DuckDBPyConnection | None = None,
        path: str = ":memory:",
        default_namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX,
    ) -> None:
        super().__init__(default_namespace_prefix)
        self._owns_connection = connection is None
        self.connection = connection if connection is not None else duckdb.connect(path)
        self._sql_functions: dict[str, FunctionSignature] = {}

    @staticmethod
    def sql_name(qualified_name: str) -> str:
        """SQL identifier a qualified function name is exposed under."""
        return qualified_name.replace(".", "_")

    def _on_register(
        self,
        qualified_name: str,
        signature: FunctionSignature,
        implementation: Callable[..., Any] | None,
    ) -> None:
        if implementation is None:
            return
        if self.connection is None:
            raise RuntimeError("Not connected to database.")

        sql_name = self.sql_name(qualified_name)
        existing = self._sql_functions.get(sql_name)
        if existing is not None and existing != signature:
            self.logger.warning(
                f"DuckDB cannot overload Python functions: {qualified_name} {signature} "
                f"is registered but not exposed to SQL ({sql_name} already takes {existing})"
            )
            return

        parameters = [to_duckdb_type(arg) for arg in signature.argument_types]
        return_type = to_duckdb_type(signature.return_type)

        if existing is not None:
            self.connection.remove_function(sql_name)
        self.connection.create_function(
            sql_name,
            implementation,
            [self.connection.sqltype(parameter) for parameter in parameters],
            self.connection.sqltype(return_type),
        )
        self._sql_functions[sql_name] = signature
        self.logger.debug(
            f"Created DuckDB function {sql_name}({', '.join(parameters)}) -> {return_type}"
        )

    def sql_function_names(self) -> list[str]:
        """Names of the functions callable from SQL."""
        with self._lock:
            return list(self._sql_functions.keys())

    def clear(self) -> None:
        with self._lock:
            if self.connection is not None:
                for sql_name in self._sql_functions:
                    self.connection.remove_function(sql_name)
            self._sql_functions.clear()
            super().clear()

    def close(self) -> None:
        """Close the connection if this registry opened it."""
        if self.connection is not None and self._owns_connection:
            self.connection.close()
        self.connection = None
