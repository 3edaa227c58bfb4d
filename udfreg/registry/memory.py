"""In-memory function registry."""

import logging
import threading
from collections.abc import Callable
from typing import Any

from udfreg.typing.signature import FunctionSignature, FunctionSignatureMap

from .core import DEFAULT_NAMESPACE_PREFIX, FunctionRegistry, SignatureLike, coerce_signature
from .exceptions import FunctionConflictError


class InMemoryFunctionRegistry(FunctionRegistry):
    """Thread-safe registry that keeps signatures and implementations in a dict."""

    def __init__(self, default_namespace_prefix: str = DEFAULT_NAMESPACE_PREFIX) -> None:
        self._default_namespace_prefix = default_namespace_prefix
        self._functions: dict[str, dict[FunctionSignature, Callable[..., Any] | None]] = {}
        self._lock = threading.RLock()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def default_namespace_prefix(self) -> str:
        return self._default_namespace_prefix

    def current_function_signatures(self) -> FunctionSignatureMap:
        with self._lock:
            return {name: set(overloads) for name, overloads in self._functions.items()}

    def register_function(
        self,
        name: str,
        signature: SignatureLike,
        implementation: Callable[..., Any] | None = None,
        namespace: str = "",
        overwrite: bool = True,
    ) -> str:
        if not name:
            raise ValueError("Function name must be a non-empty string")

        function_signature = coerce_signature(signature)
        qualified_name = self.qualify_name(name, namespace)

        with self._lock:
            overloads = self._functions.setdefault(qualified_name, {})
            if function_signature in overloads and not overwrite:
                raise FunctionConflictError(
                    f"Function {qualified_name} with signature {function_signature} "
                    f"is already registered"
                )
            self._on_register(qualified_name, function_signature, implementation)
            overloads[function_signature] = implementation

        self.logger.info(f"registering function: {qualified_name} {function_signature}")
        return qualified_name

    def _on_register(
        self,
        qualified_name: str,
        signature: FunctionSignature,
        implementation: Callable[..., Any] | None,
    ) -> None:
        """Hook for subclasses that expose registrations elsewhere."""
        pass

    def get_implementation(
        self, qualified_name: str, signature: SignatureLike
    ) -> Callable[..., Any] | None:
        with self._lock:
            return self._functions.get(qualified_name, {}).get(coerce_signature(signature))

    def list_functions(self) -> list[str]:
        """List all registered qualified function names."""
        with self._lock:
            return list(self._functions.keys())

    def clear(self) -> None:
        with self._lock:
            self._functions.clear()
