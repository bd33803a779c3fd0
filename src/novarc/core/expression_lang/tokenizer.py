"""
Tokenizer for the Novarc expression language.

Converts a source line into a sequence of typed tokens, each carrying the
half-open span it was read from. Lexical errors do not stop the scan: every
bad character or malformed literal on the line is reported together.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

from novarc.core.errors import DiagnosticError, SyntaxDiagnostic


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals
    INT = auto()

    # Identifiers and keywords
    IDENT = auto()
    LET = auto()
    FN = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()
    EQUALS = auto()
    SEMICOLON = auto()

    # End of input
    EOF = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos", "end")

    def __init__(self, kind: TokenKind, value: str, pos: int, end: int | None = None) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos
        self.end = pos + len(value) if end is None else end

    @property
    def span(self) -> tuple[int, int]:
        return (self.pos, self.end)

    def describe(self) -> str:
        """Short form for error messages."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        return f"`{self.value}`"

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


KEYWORDS: dict[str, TokenKind] = {
    "let": TokenKind.LET,
    "fn": TokenKind.FN,
}

_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    "=": TokenKind.EQUALS,
    ";": TokenKind.SEMICOLON,
}

# Decimal integer: a single 0, or digits without a leading zero
_INT_RE = re.compile(r"0|[1-9][0-9]*")
# Run of characters that could belong to a (possibly malformed) number
_NUMBER_RUN_RE = re.compile(r"[0-9][0-9A-Za-z_.]*")
# Identifier: letter or underscore followed by alphanumerics/underscores
_IDENT_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")


class ExpressionTokenError(DiagnosticError):
    """Error during expression tokenization."""


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens ending with EOF.

    Raises:
        ExpressionTokenError: With one diagnostic per lexical error found.
    """
    tokens: list[Token] = []
    errors: list[SyntaxDiagnostic] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        # Skip whitespace
        if c.isspace():
            i += 1
            continue

        # Numbers
        if c.isdigit() and c.isascii():
            run = _NUMBER_RUN_RE.match(source, i)
            assert run is not None
            m = _INT_RE.match(source, i)
            assert m is not None
            if m.end() != run.end():
                errors.append(
                    SyntaxDiagnostic(
                        f"Malformed numeric literal `{run.group(0)}`",
                        (i, run.end()),
                    )
                )
            else:
                tokens.append(Token(TokenKind.INT, m.group(0), i))
            i = run.end()
            continue

        # Identifiers and keywords
        m = _IDENT_RE.match(source, i)
        if m:
            word = m.group(0)
            kind = KEYWORDS.get(word, TokenKind.IDENT)
            tokens.append(Token(kind, word, i))
            i = m.end()
            continue

        if c in _SINGLE_CHAR:
            tokens.append(Token(_SINGLE_CHAR[c], c, i))
            i += 1
            continue

        errors.append(SyntaxDiagnostic(f"Unexpected character {c!r}", (i, i + 1)))
        i += 1

    if errors:
        raise ExpressionTokenError(errors)

    tokens.append(Token(TokenKind.EOF, "", n))
    return tokens
