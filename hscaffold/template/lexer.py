"""
Lexical analyzer for scaffold templates.

Splits template source into plain text spans and tag tokens:
- {{ name }}               interpolation
- {% if cond %}            conditional opening
- {% else %}               else branch
- {% endif %}              conditional closing

A '-' right inside a delimiter ({%- ... -%}, {{- ... -}}) is a trim marker.
Tag recognition is greedy and non-nested: a tag ends at the first matching
closing delimiter. Nesting of blocks is the parser's concern.
"""

from __future__ import annotations

import logging
import re
from typing import List

from .tokens import LexerError, Token, TokenType

logger = logging.getLogger(__name__)


class TemplateLexer:
    """
    Lexer for scaffold templates.

    Tracks line and column numbers so that every token (and every error)
    can point back to its place in the source.
    """

    # Opening delimiter -> closing delimiter
    DELIMITERS = {
        "{{": "}}",
        "{%": "%}",
    }

    TAG_OPEN_PATTERN = re.compile(r"\{\{|\{%")

    # keyword + optional arguments
    DIRECTIVE_PATTERN = re.compile(r"([A-Za-z_]\w*)(?:\s+(.*))?\Z", re.DOTALL)

    KEYWORDS = {
        "if": TokenType.IF,
        "else": TokenType.ELSE,
        "endif": TokenType.ENDIF,
    }

    def __init__(self, text: str):
        """
        Args:
            text: Template source text
        """
        self.text = text
        self.length = len(text)
        self.position = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> List[Token]:
        """
        Splits the source into tokens.

        Returns:
            List of tokens, always terminated by an EOF token

        Raises:
            LexerError: When an opening delimiter has no closing delimiter
        """
        tokens: List[Token] = []

        while self.position < self.length:
            match = self.TAG_OPEN_PATTERN.search(self.text, self.position)
            if match is None:
                tokens.append(self._read_text(self.length))
                break

            if match.start() > self.position:
                tokens.append(self._read_text(match.start()))

            tokens.append(self._read_tag(match.group(0)))

        tokens.append(Token(TokenType.EOF, "", self.position, self.line, self.column))

        logger.debug(f"Tokenized template into {len(tokens)} tokens")
        return tokens

    def _read_text(self, end: int) -> Token:
        """Consumes plain text up to `end` (exclusive)."""
        start_position, start_line, start_column = self.position, self.line, self.column
        value = self.text[self.position:end]
        self._advance_to(end)
        return Token(TokenType.TEXT, value, start_position, start_line, start_column)

    def _read_tag(self, opener: str) -> Token:
        """Consumes one tag starting at the current position."""
        start_position, start_line, start_column = self.position, self.line, self.column
        closer = self.DELIMITERS[opener]

        close_at = self.text.find(closer, start_position + len(opener))
        if close_at == -1:
            raise LexerError(f"Unterminated tag '{opener}'", start_line, start_column, start_position)

        end = close_at + len(closer)
        inner = self.text[start_position + len(opener):close_at]

        trim_left = inner.startswith("-")
        if trim_left:
            inner = inner[1:]
        trim_right = inner.endswith("-")
        if trim_right:
            inner = inner[:-1]

        inner = inner.strip()
        value = self.text[start_position:end]
        self._advance_to(end)

        if opener == "{{":
            token_type, content = TokenType.INTERP, inner
        else:
            token_type, content = self._classify_directive(inner)

        token = Token(
            token_type,
            value,
            start_position,
            start_line,
            start_column,
            content=content,
            trim_left=trim_left,
            trim_right=trim_right,
        )
        logger.debug(f"Matched tag {token_type.name}: {value!r} at {start_line}:{start_column}")
        return token

    def _classify_directive(self, inner: str) -> tuple[TokenType, str]:
        """
        Determines the directive type of a {% ... %} tag.

        For known keywords the returned content is everything after the
        keyword; for unknown ones it is the whole tag body.
        """
        match = self.DIRECTIVE_PATTERN.match(inner)
        if match is None:
            return TokenType.DIRECTIVE, inner

        keyword = match.group(1)
        token_type = self.KEYWORDS.get(keyword)
        if token_type is None:
            return TokenType.DIRECTIVE, inner

        return token_type, (match.group(2) or "").strip()

    def _advance_to(self, new_position: int) -> None:
        """Moves to `new_position`, keeping line and column numbers in sync."""
        chunk = self.text[self.position:new_position]
        newlines = chunk.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(chunk) - chunk.rfind("\n")
        else:
            self.column += len(chunk)
        self.position = new_position


def tokenize_template(text: str) -> List[Token]:
    """
    Convenience function for template tokenization.

    Args:
        text: Template source text

    Returns:
        List of tokens
    """
    lexer = TemplateLexer(text)
    return lexer.tokenize()


__all__ = ["TemplateLexer", "tokenize_template"]
