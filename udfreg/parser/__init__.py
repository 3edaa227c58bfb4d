"""
Parser module for type expressions and signature documents.
"""

from .input import read_document, read_signature_file
from .shared.exceptions import DocumentShapeError, GrammarError, ParserError, SignatureFileError
from .signature_parser import JsonSignatureParser, SignatureScope, parse_signatures
from .type_parser import format_type, is_known_type, parse_type

__all__ = [
    "parse_type",
    "format_type",
    "is_known_type",
    "parse_signatures",
    "JsonSignatureParser",
    "SignatureScope",
    "read_document",
    "read_signature_file",
    "ParserError",
    "GrammarError",
    "DocumentShapeError",
    "SignatureFileError",
]
