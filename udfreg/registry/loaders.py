"""
Library loaders.

A loader resolves a library file plus an entry-point name and invokes it.
Invoking the entry point is what registers the library's functions; the
loader itself does not touch the registry's contents.
"""

import ctypes
import hashlib
import importlib.util
import logging
import sys
from abc import ABC, abstractmethod
from pathlib import Path

from .core import FunctionRegistry
from .exceptions import LibraryLoadError

logger = logging.getLogger(__name__)


def _platform_library_extension() -> str:
    if sys.platform == "darwin":
        return ".dylib"
    if sys.platform in ("win32", "cygwin"):
        return ".dll"
    return ".so"


PLATFORM_LIBRARY_EXTENSION = _platform_library_extension()


class LibraryLoader(ABC):
    """Abstract base class for library loaders."""

    # Override in subclasses
    library_extension: str = ""
    default_entrypoint: str = ""

    def __init__(self, registry: FunctionRegistry) -> None:
        """
        Initialize the loader.

        Args:
            registry: Registry the loaded libraries register into
        """
        self.registry = registry
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def load(self, path: str, entrypoint: str | None = None) -> None:
        """
        Load a library and invoke its entry point.

        Args:
            path: Absolute path of the library file
            entrypoint: Entry-point name; ``default_entrypoint`` when empty

        Raises:
            LibraryLoadError: If the library cannot be loaded or the entry point fails
        """
        pass


class PythonModuleLoader(LibraryLoader):
    """
    Loads ``.py`` plugin files.

    The entry point is a module-level callable that receives the registry:

        def register_extensions(registry):
            registry.register_function("custom_add", ("bigint", ["bigint", "bigint"]), add)
    """

    library_extension = ".py"
    default_entrypoint = "register_extensions"

    def load(self, path: str, entrypoint: str | None = None) -> None:
        entrypoint = entrypoint or self.default_entrypoint
        file_path = Path(path)
        digest = hashlib.sha256(str(file_path.absolute()).encode("utf-8")).hexdigest()[:12]
        module_name = f"udfreg_plugin_{file_path.stem}_{digest}"

        self.logger.info(f"Loading library {path} with entrypoint {entrypoint}")
        try:
            spec = importlib.util.spec_from_file_location(module_name, file_path)
            if spec is None or spec.loader is None:
                raise LibraryLoadError(f"Could not load module from {path}")

            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            spec.loader.exec_module(module)
        except LibraryLoadError:
            raise
        except Exception as e:
            sys.modules.pop(module_name, None)
            raise LibraryLoadError(f"Error importing library {path}: {e}") from e

        register = getattr(module, entrypoint, None)
        if register is None or not callable(register):
            raise LibraryLoadError(f"Entrypoint '{entrypoint}' not found in library {path}")

        try:
            register(self.registry)
        except Exception as e:
            raise LibraryLoadError(
                f"Entrypoint '{entrypoint}' of library {path} failed: {e}"
            ) from e


class SharedLibraryLoader(LibraryLoader):
    """
    Loads native shared libraries with ctypes.

    The entry point is a zero-argument C function (declared ``extern "C"``)
    that performs the registration itself.
    """

    library_extension = PLATFORM_LIBRARY_EXTENSION
    default_entrypoint = "registerExtensions"

    def load(self, path: str, entrypoint: str | None = None) -> None:
        entrypoint = entrypoint or self.default_entrypoint
        self.logger.info(f"Loading library {path} with entrypoint {entrypoint}")
        try:
            library = ctypes.CDLL(path)
        except OSError as e:
            raise LibraryLoadError(f"Error opening shared library {path}: {e}") from e

        try:
            register = getattr(library, entrypoint)
        except AttributeError as e:
            raise LibraryLoadError(f"Entrypoint '{entrypoint}' not found in library {path}") from e

        register.restype = None
        register.argtypes = []
        register()
