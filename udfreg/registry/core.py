"""
Function registry base class.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

from udfreg.parser.type_parser import parse_type
from udfreg.typing.signature import FunctionSignature, FunctionSignatureMap

DEFAULT_NAMESPACE_PREFIX = "presto.default."

# A signature can be given as a FunctionSignature or as
# (return type, [argument types]) in type-expression text.
SignatureLike = FunctionSignature | tuple[str, Sequence[str]]


def coerce_signature(signature: SignatureLike) -> FunctionSignature:
    """Convert a (return_type, [arg_types]) pair into a FunctionSignature."""
    if isinstance(signature, FunctionSignature):
        return signature
    return_type, argument_types = signature
    return FunctionSignature(
        return_type=parse_type(return_type),
        argument_types=tuple(parse_type(arg) for arg in argument_types),
    )


class FunctionRegistry(ABC):
    """
    Abstract base class for function registries.

    A registry maps qualified function names to the set of signatures
    registered under them. Libraries register their functions into it when
    their entry point runs; the reconciler only reads snapshots.
    """

    @property
    @abstractmethod
    def default_namespace_prefix(self) -> str:
        """Prefix used to qualify functions registered without a namespace."""
        pass

    @abstractmethod
    def current_function_signatures(self) -> FunctionSignatureMap:
        """Return a point-in-time copy of all registered signatures."""
        pass

    @abstractmethod
    def register_function(
        self,
        name: str,
        signature: SignatureLike,
        implementation: Callable[..., Any] | None = None,
        namespace: str = "",
        overwrite: bool = True,
    ) -> str:
        """
        Register one overload of a function.

        Args:
            name: Base function name
            signature: Overload signature
            implementation: Optional callable implementing the function
            namespace: Namespace; the default prefix is used when empty
            overwrite: Replace an existing identical overload instead of failing

        Returns:
            Qualified function name the overload was registered under
        """
        pass

    @abstractmethod
    def get_implementation(
        self, qualified_name: str, signature: SignatureLike
    ) -> Callable[..., Any] | None:
        """Return the callable registered for an overload, if any."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all registrations (mainly for testing)."""
        pass

    def qualify_name(self, name: str, namespace: str = "") -> str:
        """
        Build the qualified name a library registration ends up under.

        Args:
            name: Base function name
            namespace: Namespace, e.g. ``"test.namespace"``

        Returns:
            ``namespace.name``, or ``<default prefix>name`` when namespace is empty
        """
        prefix = namespace or self.default_namespace_prefix
        if prefix and not prefix.endswith("."):
            prefix += "."
        return f"{prefix}{name}"

    def get_function_signatures(self, qualified_name: str) -> set[FunctionSignature]:
        """Return the registered signatures of one function (empty if unknown)."""
        return set(self.current_function_signatures().get(qualified_name, set()))
