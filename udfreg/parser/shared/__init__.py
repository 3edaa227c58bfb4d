"""
Shared utilities and common types for the parser module.
"""

from .constants import *
from .exceptions import *

__all__ = [
    # Exceptions
    "ParserError",
    "GrammarError",
    "DocumentShapeError",
    "SignatureFileError",
    # Constants
    "REMOTE_UDF_KEY",
    "DYNAMIC_LIBRARIES_UDF_KEYS",
    "SCALAR_TYPE_NAMES",
    "SUPPORTED_JSON_EXTENSIONS",
    "SUPPORTED_YAML_EXTENSIONS",
]
