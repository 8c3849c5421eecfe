"""
Lexical types for the template engine.

Defines token types, the token record and the lexer/parser error taxonomy.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from ..errors import ScaffoldUserError


class TokenType(enum.Enum):
    """Token types produced by the template lexer."""

    # Plain text between tags
    TEXT = "TEXT"

    # {{ name }}
    INTERP = "INTERP"

    # {% if ... %} / {% else %} / {% endif %}
    IF = "IF"
    ELSE = "ELSE"
    ENDIF = "ENDIF"

    # {% ... %} with an unrecognized keyword
    DIRECTIVE = "DIRECTIVE"

    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Token with position information for precise error diagnostics.

    For tag tokens `content` holds the inner expression with delimiters,
    trim markers and the keyword removed; `value` is the raw source slice.
    """
    type: TokenType
    value: str
    position: int        # Offset in the source text
    line: int            # Line number (1-based)
    column: int          # Column number (1-based)
    content: str = ""
    trim_left: bool = False    # '-' right after the opening delimiter
    trim_right: bool = False   # '-' right before the closing delimiter

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class LexerError(ScaffoldUserError):
    """Lexical analysis error (unterminated tag)."""

    def __init__(self, message: str, line: int, column: int, position: int):
        super().__init__(f"{message} at {line}:{column}")
        self.line = line
        self.column = column
        self.position = position


class ParserError(ScaffoldUserError):
    """Structural error in the template."""

    def __init__(self, message: str, token: Token):
        super().__init__(f"{message} at {token.line}:{token.column}")
        self.token = token
        self.line = token.line
        self.column = token.column


class UnmatchedIfError(ParserError):
    """An `if` block was never closed with `endif`."""


class UnexpectedElseError(ParserError):
    """`else` outside of an open `if`, or a second `else` in one block."""


class UnexpectedEndIfError(ParserError):
    """`endif` without an open `if`."""


class UnsupportedExpressionError(ParserError):
    """Tag content outside the supported grammar."""


__all__ = [
    "TokenType",
    "Token",
    "LexerError",
    "ParserError",
    "UnmatchedIfError",
    "UnexpectedElseError",
    "UnexpectedEndIfError",
    "UnsupportedExpressionError",
]
