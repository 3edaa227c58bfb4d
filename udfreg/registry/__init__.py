"""
Function registries and library loaders.

The registry holds what is currently registered; loaders open libraries and
run their entry points, which register functions into a registry.
"""

from .core import DEFAULT_NAMESPACE_PREFIX, FunctionRegistry, coerce_signature
from .exceptions import FunctionConflictError, LibraryLoadError, RegistryError
from .loader_registry import (
    LoaderRegistry,
    get_loader,
    is_loader_supported,
    list_available_loaders,
    register_loader,
)
from .loaders import (
    PLATFORM_LIBRARY_EXTENSION,
    LibraryLoader,
    PythonModuleLoader,
    SharedLibraryLoader,
)
from .memory import InMemoryFunctionRegistry

__all__ = [
    # Registries
    "FunctionRegistry",
    "InMemoryFunctionRegistry",
    "DEFAULT_NAMESPACE_PREFIX",
    "coerce_signature",
    # Loaders
    "LibraryLoader",
    "PythonModuleLoader",
    "SharedLibraryLoader",
    "PLATFORM_LIBRARY_EXTENSION",
    "LoaderRegistry",
    "get_loader",
    "register_loader",
    "list_available_loaders",
    "is_loader_supported",
    # Exceptions
    "RegistryError",
    "FunctionConflictError",
    "LibraryLoadError",
]
