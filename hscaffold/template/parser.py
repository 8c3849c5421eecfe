"""
Parser for scaffold templates.

Turns the lexer token stream into an immutable Template. Conditional blocks
are tracked with an explicit stack of open frames, so nesting depth is not
limited by the interpreter recursion limit.

Trim markers are resolved here: the adjacent Literal texts are cut once and
the renderer emits them as is.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from .lexer import tokenize_template
from .nodes import (
    Conditional,
    Interpolation,
    Literal,
    Template,
    TemplateNode,
    VariableRef,
)
from .tokens import (
    Token,
    TokenType,
    UnexpectedElseError,
    UnexpectedEndIfError,
    UnmatchedIfError,
    UnsupportedExpressionError,
)

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")

# Whitespace removed by a trim marker before reaching the line boundary
_HSPACE = " \t\r"

_NEGATION = "not"


@dataclass
class _BlockFrame:
    """Open {% if %} block while its body is being collected."""
    condition: VariableRef
    opened_by: Token
    then_nodes: List[TemplateNode] = field(default_factory=list)
    else_nodes: Optional[List[TemplateNode]] = None

    @property
    def in_else(self) -> bool:
        return self.else_nodes is not None

    @property
    def current(self) -> List[TemplateNode]:
        return self.else_nodes if self.else_nodes is not None else self.then_nodes

    def build(self) -> Conditional:
        return Conditional(
            condition=self.condition,
            then_branch=tuple(self.then_nodes),
            else_branch=tuple(self.else_nodes) if self.else_nodes is not None else None,
        )


def trim_leading(text: str) -> str:
    """Strips leading horizontal whitespace and at most one newline."""
    stripped = text.lstrip(_HSPACE)
    if stripped.startswith("\n"):
        stripped = stripped[1:]
    return stripped


def trim_trailing(text: str) -> str:
    """Strips trailing horizontal whitespace and at most one newline (with its \\r)."""
    stripped = text.rstrip(_HSPACE)
    if stripped.endswith("\n"):
        stripped = stripped[:-1]
        if stripped.endswith("\r"):
            stripped = stripped[:-1]
    return stripped


class TemplateParser:
    """
    Builds a Template from a token list.

    Grammar:
        template     := (TEXT | INTERP | conditional)*
        conditional  := IF template (ELSE template)? ENDIF
        condition    := identifier | 'not' identifier
        interpolation:= identifier
    """

    def __init__(self, tokens: List[Token], name: Optional[str] = None):
        """
        Args:
            tokens: Tokens produced by TemplateLexer
            name: Template identity for diagnostics
        """
        self.tokens = tokens
        self.name = name

        self._root: List[TemplateNode] = []
        self._stack: List[_BlockFrame] = []

    def parse(self) -> Template:
        """
        Parses the tokens into a Template.

        Raises:
            ParserError: On any structural violation
        """
        self._root = []
        self._stack = []
        pending_trim = False

        for token in self.tokens:
            if token.type == TokenType.TEXT:
                self._append_text(token.value, pending_trim)
                pending_trim = False
                continue

            if token.type == TokenType.EOF:
                break

            if token.trim_left:
                self._trim_tail(self._current_nodes())
            pending_trim = token.trim_right

            if token.type == TokenType.INTERP:
                self._current_nodes().append(Interpolation(self._parse_interpolation(token)))
            elif token.type == TokenType.IF:
                self._stack.append(_BlockFrame(self._parse_condition(token), token))
            elif token.type == TokenType.ELSE:
                self._open_else(token)
            elif token.type == TokenType.ENDIF:
                self._close_block(token)
            else:
                raise UnsupportedExpressionError(f"Unsupported tag '{token.content}'", token)

        if self._stack:
            # Report the innermost unclosed block
            raise UnmatchedIfError("Unclosed 'if' block (missing 'endif')", self._stack[-1].opened_by)

        template = Template(nodes=tuple(self._root), name=self.name)
        logger.debug(f"Parsed template {self.name or '<inline>'} into {len(template.nodes)} top-level nodes")
        return template

    def _current_nodes(self) -> List[TemplateNode]:
        """Node list currently being filled."""
        if self._stack:
            return self._stack[-1].current
        return self._root

    def _append_text(self, text: str, trim_start: bool) -> None:
        if trim_start:
            text = trim_leading(text)
        if text:
            self._current_nodes().append(Literal(text))

    @staticmethod
    def _trim_tail(nodes: List[TemplateNode]) -> None:
        """Applies a left trim marker to the literal preceding the tag."""
        if not nodes or not isinstance(nodes[-1], Literal):
            return
        text = trim_trailing(nodes[-1].text)
        if text:
            nodes[-1] = Literal(text)
        else:
            nodes.pop()

    def _open_else(self, token: Token) -> None:
        if token.content:
            raise UnsupportedExpressionError(f"'else' takes no arguments, got '{token.content}'", token)
        if not self._stack:
            raise UnexpectedElseError("'else' outside of an 'if' block", token)
        frame = self._stack[-1]
        if frame.in_else:
            raise UnexpectedElseError("Duplicate 'else' in one 'if' block", token)
        frame.else_nodes = []

    def _close_block(self, token: Token) -> None:
        if token.content:
            raise UnsupportedExpressionError(f"'endif' takes no arguments, got '{token.content}'", token)
        if not self._stack:
            raise UnexpectedEndIfError("'endif' without an open 'if' block", token)
        frame = self._stack.pop()
        self._current_nodes().append(frame.build())

    @staticmethod
    def _parse_condition(token: Token) -> VariableRef:
        parts = token.content.split()
        if not parts:
            raise UnsupportedExpressionError("Missing condition in 'if'", token)

        negated = parts[0] == _NEGATION
        if negated:
            parts = parts[1:]

        if len(parts) != 1 or not _is_variable_name(parts[0]):
            raise UnsupportedExpressionError(
                f"Unsupported condition '{token.content}' "
                f"(expected 'name' or 'not name')",
                token,
            )

        return VariableRef(parts[0], negated=negated, line=token.line, column=token.column)

    @staticmethod
    def _parse_interpolation(token: Token) -> VariableRef:
        if not _is_variable_name(token.content):
            raise UnsupportedExpressionError(
                f"Unsupported interpolation '{token.content}' (expected a variable name)",
                token,
            )
        return VariableRef(token.content, line=token.line, column=token.column)


def _is_variable_name(text: str) -> bool:
    return bool(_IDENTIFIER.match(text)) and text != _NEGATION


def parse_template(text: str, name: Optional[str] = None) -> Template:
    """
    Convenience function: tokenizes and parses template source.

    Args:
        text: Template source text
        name: Template identity for diagnostics

    Returns:
        Parsed Template

    Raises:
        LexerError: On an unterminated tag
        ParserError: On a structural violation
    """
    tokens = tokenize_template(text)
    return TemplateParser(tokens, name).parse()


__all__ = ["TemplateParser", "parse_template", "trim_leading", "trim_trailing"]
