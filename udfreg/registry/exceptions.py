"""
Custom exceptions for the function registry and library loaders.
"""


class RegistryError(Exception):
    """Base exception for all registry-related errors."""

    pass


class FunctionConflictError(RegistryError):
    """Raised when an overload is registered twice and overwriting is disabled."""

    pass


class LibraryLoadError(RegistryError):
    """Raised when a library cannot be loaded or its entry point fails."""

    pass
