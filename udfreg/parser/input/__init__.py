"""
Input readers for signature documents.
"""

from .document_reader import read_document, read_signature_file

__all__ = ["read_document", "read_signature_file"]
