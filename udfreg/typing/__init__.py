"""
Type definitions for the udfreg project.
"""

from .signature import (
    COMPOUND_TYPE_ARITY,
    FunctionSignature,
    FunctionSignatureItem,
    FunctionSignatureMap,
    SignatureMap,
    TypeSignature,
)

__all__ = [
    "COMPOUND_TYPE_ARITY",
    "TypeSignature",
    "FunctionSignature",
    "FunctionSignatureItem",
    "SignatureMap",
    "FunctionSignatureMap",
]
