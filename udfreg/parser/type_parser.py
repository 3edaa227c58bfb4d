"""
Type expression parser.

Parses textual type descriptions such as ``array(array(bigint))`` or
``map(varchar, row(integer, real))`` into ``TypeSignature`` trees.

Grammar::

    Type       := Identifier ( '(' Type ( ',' Type )* ')' )?
    Identifier := Word ( Whitespace Word )*

Identifiers are case-insensitive and normalized to lower case. Multi-word
identifiers (``timestamp with time zone``) are collapsed to single spaces.
The parser only checks syntax; unknown type names are passed through as
opaque base names.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache

from udfreg.parser.shared.constants import SCALAR_TYPE_NAMES
from udfreg.parser.shared.exceptions import GrammarError
from udfreg.typing.signature import COMPOUND_TYPE_ARITY, TypeSignature

logger = logging.getLogger(__name__)

_WORD = r"[A-Za-z_][A-Za-z0-9_]*"
_TOKEN_PATTERN = re.compile(
    rf"\s*(?:(?P<lparen>\()|(?P<rparen>\))|(?P<comma>,)|(?P<ident>{_WORD}(?:\s+{_WORD})*))"
)
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class _Token:
    kind: str  # "lparen", "rparen", "comma", "ident"
    value: str
    position: int


def _tokenize(text: str) -> list[_Token]:
    """Split a type expression into tokens, rejecting unsupported characters."""
    tokens: list[_Token] = []
    position = 0
    length = len(text)
    while position < length:
        if text[position:].strip() == "":
            break
        match = _TOKEN_PATTERN.match(text, position)
        if not match:
            # Skip leading whitespace so the reported position points at the culprit
            offending = position + (len(text[position:]) - len(text[position:].lstrip()))
            raise GrammarError(
                f"Unexpected character '{text[offending]}'", text=text, position=offending
            )
        kind = match.lastgroup
        tokens.append(_Token(kind=kind, value=match.group(kind), position=match.start(kind)))
        position = match.end()
    return tokens


@dataclass
class _Frame:
    """A compound type whose parameter list is still open."""

    base_name: str
    token: _Token
    opening: _Token
    parameters: list[TypeSignature] = field(default_factory=list)


class _TypeParser:
    """
    Descent parser over the token list of a single expression.

    Open parameter lists are kept on an explicit stack, so nesting depth is
    bounded by memory rather than by the interpreter's recursion limit.
    """

    def __init__(self, text: str, tokens: list[_Token]):
        self.text = text
        self.tokens = tokens
        self.index = 0

    def _peek(self) -> _Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _advance(self) -> _Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _error(self, message: str, token: _Token | None = None) -> GrammarError:
        position = token.position if token is not None else len(self.text)
        return GrammarError(message, text=self.text, position=position)

    def parse(self) -> TypeSignature:
        stack: list[_Frame] = []
        while True:
            token = self._peek()
            if token is None:
                raise self._error("Expected a type name but reached end of input")
            if token.kind != "ident":
                raise self._error(f"Expected a type name but found '{token.value}'", token)
            self._advance()
            base_name = _WHITESPACE.sub(" ", token.value).lower()

            opening = self._peek()
            if opening is not None and opening.kind == "lparen":
                self._advance()
                following = self._peek()
                if following is not None and following.kind == "rparen":
                    raise self._error(f"Empty parameter list for '{base_name}'", following)
                stack.append(_Frame(base_name, token, opening))
                continue

            node = self._build(base_name, [], token)

            # Close every parameter list this type completes
            while True:
                if not stack:
                    self._check_trailing()
                    return node
                frame = stack[-1]
                frame.parameters.append(node)
                separator = self._peek()
                if separator is None:
                    raise self._error("Unmatched '('", frame.opening)
                if separator.kind == "comma":
                    self._advance()
                    break
                if separator.kind != "rparen":
                    raise self._error(f"Expected ',' or ')' but found '{separator.value}'", separator)
                self._advance()
                stack.pop()
                node = self._build(frame.base_name, frame.parameters, frame.token)

    def _check_trailing(self) -> None:
        trailing = self._peek()
        if trailing is None:
            return
        if trailing.kind == "rparen":
            raise self._error("Unmatched ')'", trailing)
        raise self._error(f"Unexpected trailing input '{trailing.value}'", trailing)

    def _build(self, base_name: str, parameters: list[TypeSignature], token: _Token) -> TypeSignature:
        self._check_arity(base_name, parameters, token)
        return TypeSignature(base_name=base_name, parameters=tuple(parameters))

    def _check_arity(self, base_name: str, parameters: list[TypeSignature], token: _Token) -> None:
        if base_name not in COMPOUND_TYPE_ARITY:
            return
        if not parameters:
            raise self._error(f"'{base_name}' requires a parameter list", token)
        expected = COMPOUND_TYPE_ARITY[base_name]
        if expected is not None and len(parameters) != expected:
            raise self._error(
                f"'{base_name}' takes {expected} type parameter(s), got {len(parameters)}",
                token,
            )


@lru_cache(maxsize=1024)
def parse_type(text: str) -> TypeSignature:
    """
    Parse a type expression into a TypeSignature tree.

    Args:
        text: Type expression, e.g. ``"map(varchar, array(bigint))"``

    Returns:
        Parsed TypeSignature

    Raises:
        GrammarError: If the expression is empty or not well formed
    """
    if not isinstance(text, str):
        raise GrammarError(f"Type expression should be a string, got {type(text).__name__}")
    if not text.strip():
        raise GrammarError("Type expression is empty", text=text)

    return _TypeParser(text, _tokenize(text)).parse()


def format_type(signature: TypeSignature) -> str:
    """Render a TypeSignature back to its canonical textual form."""
    return str(signature)


def is_known_type(signature: TypeSignature) -> bool:
    """
    Check whether every node of a signature uses a known type name.

    Unknown names are valid for the parser; this is a convenience for callers
    that want to warn about them.
    """
    pending = [signature]
    while pending:
        node = pending.pop()
        if node.base_name not in SCALAR_TYPE_NAMES and node.base_name not in COMPOUND_TYPE_ARITY:
            return False
        pending.extend(node.parameters)
    return True
