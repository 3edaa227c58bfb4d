"""
Function registry backends.

Maps the registry names used in project configuration to registry classes:
``memory`` keeps registrations in process, ``duckdb`` additionally exposes
them as SQL functions on a DuckDB connection.
"""

from udfreg.registry.core import DEFAULT_NAMESPACE_PREFIX, FunctionRegistry
from udfreg.registry.memory import InMemoryFunctionRegistry

from .duckdb import DuckDBFunctionRegistry

_REGISTRY_TYPES: dict[str, type[InMemoryFunctionRegistry]] = {
    "memory": InMemoryFunctionRegistry,
    "duckdb": DuckDBFunctionRegistry,
}


def get_registry(
    registry_type: str, default_namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX
) -> FunctionRegistry:
    """
    Create a function registry by name.

    Raises:
        ValueError: If the registry type is not supported
    """
    registry_class = _REGISTRY_TYPES.get(registry_type.lower())
    if registry_class is None:
        raise ValueError(
            f"Unsupported registry type: {registry_type}. "
            f"Supported types: {list(_REGISTRY_TYPES.keys())}"
        )
    return registry_class(default_namespace_prefix=default_namespace_prefix)


def list_available_registries() -> list[str]:
    """List all available registry types."""
    return list(_REGISTRY_TYPES.keys())


def is_registry_supported(registry_type: str) -> bool:
    """Check if a registry type is supported."""
    return registry_type.lower() in _REGISTRY_TYPES


__all__ = [
    "DuckDBFunctionRegistry",
    "get_registry",
    "list_available_registries",
    "is_registry_supported",
]
