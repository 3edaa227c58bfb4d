"""
Type definitions for function signatures.

Signatures are immutable trees compared structurally, so two signatures parsed
from different documents are equal (and hash equally) when they describe the
same types.
"""

from dataclasses import dataclass, field
from typing import Any

# Compound type constructors and the number of parameters they take.
# None means "one or more".
COMPOUND_TYPE_ARITY: dict[str, int | None] = {
    "array": 1,
    "map": 2,
    "row": None,
}


@dataclass(frozen=True)
class TypeSignature:
    """A (possibly nested) type such as ``bigint`` or ``map(varchar,array(double))``."""

    base_name: str
    parameters: tuple["TypeSignature", ...] = ()

    def is_scalar(self) -> bool:
        """Return True when the type has no parameters."""
        return not self.parameters

    def depth(self) -> int:
        """Return the nesting depth (1 for scalars)."""
        deepest = 0
        pending: list[tuple[TypeSignature, int]] = [(self, 1)]
        while pending:
            node, level = pending.pop()
            deepest = max(deepest, level)
            pending.extend((param, level + 1) for param in node.parameters)
        return deepest

    def __str__(self) -> str:
        # Walked with an explicit stack so very deep types render too
        parts: list[str] = []
        pending: list[TypeSignature | str] = [self]
        while pending:
            node = pending.pop()
            if isinstance(node, str):
                parts.append(node)
            elif not node.parameters:
                parts.append(node.base_name)
            else:
                parts.append(f"{node.base_name}(")
                pending.append(")")
                for position, param in enumerate(reversed(node.parameters)):
                    if position:
                        pending.append(",")
                    pending.append(param)
        return "".join(parts)


@dataclass(frozen=True)
class FunctionSignature:
    """Return type plus ordered argument types of one function overload."""

    return_type: TypeSignature
    argument_types: tuple[TypeSignature, ...] = ()

    def __str__(self) -> str:
        args = ",".join(str(arg) for arg in self.argument_types)
        return f"({args}) -> {self.return_type}"


@dataclass(frozen=True)
class FunctionSignatureItem:
    """
    One declared overload read from a signature document.

    The dynamic-library fields (``entrypoint``, ``file_name``, ``sub_directory``)
    are only populated for documents parsed in dynamic-library scope.
    """

    signature: FunctionSignature
    schema: str | None = None
    namespace: str | None = None
    entrypoint: str | None = None
    file_name: str | None = None
    sub_directory: str | None = None
    doc_string: str | None = None
    routine_characteristics: dict[str, Any] | None = field(
        default=None, compare=False, hash=False
    )

    def to_dict(self) -> dict[str, Any]:
        """Serializable view used by the CLI output formats."""
        result: dict[str, Any] = {
            "outputType": str(self.signature.return_type),
            "paramTypes": [str(arg) for arg in self.signature.argument_types],
        }
        optional = {
            "schema": self.schema,
            "nameSpace": self.namespace,
            "entrypoint": self.entrypoint,
            "fileName": self.file_name,
            "subDirectory": self.sub_directory,
            "docString": self.doc_string,
            "routineCharacteristics": self.routine_characteristics,
        }
        result.update({key: value for key, value in optional.items() if value is not None})
        return result


# Parsed signature documents: function base name -> overloads in document order
SignatureMap = dict[str, list[FunctionSignatureItem]]

# Registry snapshots: qualified function name -> registered overloads
FunctionSignatureMap = dict[str, set[FunctionSignature]]
