"""Type conversion from type signatures to DuckDB types."""

import sqlglot
from sqlglot import exp

from udfreg.typing.signature import TypeSignature

SOURCE_DIALECT = "presto"


class TypeConversionError(ValueError):
    """Raised when a type signature has no DuckDB equivalent."""

    pass


def to_duckdb_type(signature: TypeSignature) -> str:
    """
    Convert a TypeSignature to a DuckDB type string.

    The signature is rendered in its Presto textual form and transpiled with
    SQLglot, e.g. ``array(varchar)`` -> ``TEXT[]``.

    Args:
        signature: Type to convert

    Returns:
        DuckDB type name

    Raises:
        TypeConversionError: If SQLglot cannot parse or render the type
    """
    try:
        data_type = exp.DataType.build(str(signature), dialect=SOURCE_DIALECT)
        return data_type.sql(dialect="duckdb")
    except (sqlglot.errors.ParseError, ValueError) as e:
        raise TypeConversionError(f"Cannot convert type '{signature}' to DuckDB: {e}") from e
