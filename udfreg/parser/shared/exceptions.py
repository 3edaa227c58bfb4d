"""
Custom exceptions for the parser module.
"""


class ParserError(Exception):
    """Base exception for all parser-related errors."""

    pass


class GrammarError(ParserError):
    """Raised when a type expression is not well formed."""

    def __init__(self, message: str, text: str | None = None, position: int | None = None):
        self.text = text
        self.position = position
        if text is not None and position is not None:
            message = f"{message} (at position {position} in '{text}')"
        elif text is not None:
            message = f"{message} (in '{text}')"
        super().__init__(message)


class DocumentShapeError(ParserError):
    """Raised when a signature document does not have the expected structure."""

    pass


class SignatureFileError(DocumentShapeError):
    """Raised when a signature file cannot be read or decoded."""

    pass
