"""
Signature document parser.

Builds FunctionSignatureItem lists from a generic JSON value. Two document
shapes are supported, selected by SignatureScope:

Remote UDFs::

    {
      "udfSignatureMap": {
        "my_function": [
          {
            "outputType": "varchar",
            "paramTypes": ["varchar"],
            "schema": "my_schema",
            "routineCharacteristics": {...}
          }
        ]
      }
    }

Dynamic libraries (one extra level keyed by sub-directory)::

    {
      "dynamicLibrariesUdfMap": {
        "sub_dir_name": {
          "my_function": [
            {
              "outputType": "integer",
              "paramTypes": ["integer"],
              "entrypoint": "nameOfRegistryFnCall",
              "fileName": "nameOfFile",
              "nameSpace": "presto.default"
            }
          ]
        }
      }
    }

Only scalar signatures are supported: no variadic arguments, type variables
or constant arguments.
"""

import json
import logging
from enum import Enum
from typing import Any, Iterator

from udfreg.parser.shared.constants import (
    DOC_STRING_FIELD,
    DYNAMIC_LIBRARIES_UDF_KEYS,
    ENTRYPOINT_FIELD,
    FILE_NAME_FIELD,
    NAMESPACE_FIELD,
    OUTPUT_TYPE_FIELD,
    PARAM_TYPES_FIELD,
    REMOTE_UDF_KEY,
    ROUTINE_CHARACTERISTICS_FIELD,
    SCHEMA_FIELD,
)
from udfreg.parser.shared.exceptions import DocumentShapeError, GrammarError
from udfreg.parser.type_parser import is_known_type, parse_type
from udfreg.typing.signature import FunctionSignature, FunctionSignatureItem, SignatureMap

logger = logging.getLogger(__name__)


class SignatureScope(Enum):
    """
    Document shape selector.

    Each member carries the accepted top-level keys (first match wins) and
    whether functions are grouped under a sub-directory level.
    """

    REMOTE_UDF = ("remote", (REMOTE_UDF_KEY,), False)
    DYNAMIC_LIBRARIES_UDF = ("dynamic", DYNAMIC_LIBRARIES_UDF_KEYS, True)

    def __init__(self, label: str, top_level_keys: tuple[str, ...], nested_by_directory: bool):
        self.label = label
        self.top_level_keys = top_level_keys
        self.nested_by_directory = nested_by_directory

    @classmethod
    def from_label(cls, label: str) -> "SignatureScope":
        """Look up a scope by its CLI label ("remote" or "dynamic")."""
        for scope in cls:
            if scope.label == label.lower():
                return scope
        available = ", ".join(scope.label for scope in cls)
        raise ValueError(f"Unknown signature scope '{label}'. Supported: {available}")


def parse_signatures(
    value: Any, scope: SignatureScope = SignatureScope.REMOTE_UDF
) -> SignatureMap:
    """
    Parse a generic JSON value into a signature map.

    Args:
        value: Already-decoded JSON document
        scope: Which document shape to expect

    Returns:
        Dictionary mapping function names to their overloads in document order

    Raises:
        DocumentShapeError: If the document structure is invalid. No partial
            result is returned.
    """
    if not isinstance(value, dict):
        raise DocumentShapeError(f"Unable to find top level '{scope.top_level_keys[0]}' key.")

    top_key = next((key for key in scope.top_level_keys if key in value), None)
    if top_key is None:
        raise DocumentShapeError(f"Unable to find top level '{scope.top_level_keys[0]}' key.")

    signatures = value[top_key]
    if not isinstance(signatures, dict):
        raise DocumentShapeError("Input signatures should be an object.")

    result: SignatureMap = {}
    if scope.nested_by_directory:
        for sub_directory, functions in signatures.items():
            if not isinstance(sub_directory, str):
                raise DocumentShapeError("The key for a sub-directory should be a string.")
            if not isinstance(functions, dict):
                raise DocumentShapeError(
                    f"Sub-directory '{sub_directory}' signatures should be an object."
                )
            _parse_functions(functions, scope, result, sub_directory=sub_directory)
    else:
        _parse_functions(signatures, scope, result)

    logger.debug(
        f"Parsed {sum(len(items) for items in result.values())} signatures "
        f"for {len(result)} functions ({scope.label} scope)"
    )
    return result


def _parse_functions(
    functions: dict[str, Any],
    scope: SignatureScope,
    result: SignatureMap,
    sub_directory: str | None = None,
) -> None:
    """Parse one ``{function_name: [signature, ...]}`` object into ``result``."""
    for function_name, signature_list in functions.items():
        if not isinstance(function_name, str) or not function_name:
            raise DocumentShapeError("The key for a function item should be a non-empty string.")
        if not isinstance(signature_list, list):
            raise DocumentShapeError(f"Function signatures for '{function_name}' should be a list.")

        items = result.setdefault(function_name, [])
        for index, signature in enumerate(signature_list):
            items.append(_parse_item(function_name, index, signature, scope, sub_directory))


def _parse_item(
    function_name: str,
    index: int,
    signature: Any,
    scope: SignatureScope,
    sub_directory: str | None,
) -> FunctionSignatureItem:
    if not isinstance(signature, dict):
        raise DocumentShapeError("Function signature should be an object.")
    if OUTPUT_TYPE_FIELD not in signature or PARAM_TYPES_FIELD not in signature:
        raise DocumentShapeError("`outputType` and `paramTypes` are mandatory in a signature")

    param_types = signature[PARAM_TYPES_FIELD]
    if not isinstance(param_types, list):
        raise DocumentShapeError("`paramTypes` should be a list.")

    return_type = _parse_type_field(function_name, index, OUTPUT_TYPE_FIELD, signature[OUTPUT_TYPE_FIELD])
    argument_types = tuple(
        _parse_type_field(function_name, index, f"{PARAM_TYPES_FIELD}[{position}]", param)
        for position, param in enumerate(param_types)
    )

    dynamic = scope.nested_by_directory
    return FunctionSignatureItem(
        signature=FunctionSignature(return_type=return_type, argument_types=argument_types),
        schema=_optional_string(signature, SCHEMA_FIELD),
        namespace=_optional_string(signature, NAMESPACE_FIELD) if dynamic else None,
        entrypoint=_optional_string(signature, ENTRYPOINT_FIELD) if dynamic else None,
        file_name=_optional_string(signature, FILE_NAME_FIELD) if dynamic else None,
        sub_directory=sub_directory if dynamic else None,
        doc_string=_optional_string(signature, DOC_STRING_FIELD),
        routine_characteristics=signature.get(ROUTINE_CHARACTERISTICS_FIELD),
    )


def _parse_type_field(function_name: str, index: int, field_name: str, type_name: Any):
    if not isinstance(type_name, str):
        raise DocumentShapeError("Function type name should be a string.")
    try:
        type_signature = parse_type(type_name)
    except GrammarError as e:
        raise DocumentShapeError(
            f"Invalid type in function '{function_name}' signature #{index} field '{field_name}': {e}"
        ) from e
    if not is_known_type(type_signature):
        logger.debug(
            f"Function '{function_name}' signature #{index} field '{field_name}' "
            f"uses unknown type '{type_signature}'"
        )
    return type_signature


def _optional_string(signature: dict[str, Any], field_name: str) -> str | None:
    value = signature.get(field_name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DocumentShapeError(f"`{field_name}` should be a string.")
    return value


class JsonSignatureParser:
    """
    Iterable view over a parsed signature document.

    Accepts either JSON text or an already-decoded value:

        for function_name, items in JsonSignatureParser(text):
            ...
    """

    def __init__(self, document: str | dict[str, Any], scope: SignatureScope = SignatureScope.REMOTE_UDF):
        self.scope = scope
        if isinstance(document, str):
            try:
                document = json.loads(document)
            except json.JSONDecodeError as e:
                raise DocumentShapeError(f"Unable to parse function signature JSON file: {e}") from e
        self._signatures = parse_signatures(document, scope)

    @property
    def signatures(self) -> SignatureMap:
        """Copy of the parsed signature map."""
        return {name: list(items) for name, items in self._signatures.items()}

    def items(self):
        return self._signatures.items()

    def __len__(self) -> int:
        return len(self._signatures)

    def __iter__(self) -> Iterator[tuple[str, list[FunctionSignatureItem]]]:
        return iter(self._signatures.items())

    def __contains__(self, function_name: object) -> bool:
        return function_name in self._signatures

    def __getitem__(self, function_name: str) -> list[FunctionSignatureItem]:
        return self._signatures[function_name]
