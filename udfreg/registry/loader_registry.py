"""
Loader registry for managing library loaders.

Maps loader names used in project configuration (``python``, ``shared``) to
loader classes, with factory helpers.
"""

import logging

from .core import FunctionRegistry
from .loaders import LibraryLoader, PythonModuleLoader, SharedLibraryLoader


class LoaderRegistry:
    """Registry for managing library loaders."""

    def __init__(self):
        self._loaders: dict[str, type[LibraryLoader]] = {}
        self.logger = logging.getLogger(self.__class__.__name__)

    def register(self, loader_type: str, loader_class: type[LibraryLoader]) -> None:
        """
        Register a library loader.

        Args:
            loader_type: Loader identifier (e.g., 'python', 'shared')
            loader_class: Class that implements LibraryLoader
        """
        self._loaders[loader_type.lower()] = loader_class
        self.logger.debug(f"Registered loader: {loader_type} -> {loader_class.__name__}")

    def get_loader_class(self, loader_type: str) -> type[LibraryLoader] | None:
        """Get the loader class for an identifier, or None if not found."""
        return self._loaders.get(loader_type.lower())

    def create_loader(self, loader_type: str, registry: FunctionRegistry) -> LibraryLoader:
        """
        Create a loader instance bound to a function registry.

        Raises:
            ValueError: If the loader type is not supported
        """
        loader_class = self.get_loader_class(loader_type)
        if not loader_class:
            supported_types = list(self._loaders.keys())
            raise ValueError(
                f"Unsupported loader type: {loader_type}. Supported types: {supported_types}"
            )
        return loader_class(registry)

    def list_loaders(self) -> list[str]:
        """Get list of registered loader types."""
        return list(self._loaders.keys())

    def is_supported(self, loader_type: str) -> bool:
        """Check if a loader type is supported."""
        return loader_type.lower() in self._loaders


# Global registry instance
_registry = LoaderRegistry()
_registry.register("python", PythonModuleLoader)
_registry.register("shared", SharedLibraryLoader)


def register_loader(loader_type: str, loader_class: type[LibraryLoader]) -> None:
    """Register a loader with the global registry."""
    _registry.register(loader_type, loader_class)


def get_loader(loader_type: str, registry: FunctionRegistry) -> LibraryLoader:
    """Create a loader instance from the global registry."""
    return _registry.create_loader(loader_type, registry)


def list_available_loaders() -> list[str]:
    """List all available loader types."""
    return _registry.list_loaders()


def is_loader_supported(loader_type: str) -> bool:
    """Check if a loader type is supported."""
    return _registry.is_supported(loader_type)
