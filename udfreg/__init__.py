"""
udfreg Module

Loads user-defined function libraries and verifies that they register the
function signatures declared in their configuration documents.
"""

from .cli.main import main as cli_main
from .engine import LoaderConfig, RegistrationReconciler, build_reconciler
from .parser import JsonSignatureParser, SignatureScope, parse_signatures, parse_type
from .registry import InMemoryFunctionRegistry, PythonModuleLoader, SharedLibraryLoader
from .typing import FunctionSignature, FunctionSignatureItem, TypeSignature

__all__ = [
    "parse_type",
    "parse_signatures",
    "JsonSignatureParser",
    "SignatureScope",
    "TypeSignature",
    "FunctionSignature",
    "FunctionSignatureItem",
    "InMemoryFunctionRegistry",
    "PythonModuleLoader",
    "SharedLibraryLoader",
    "RegistrationReconciler",
    "LoaderConfig",
    "build_reconciler",
    "cli_main",
]
