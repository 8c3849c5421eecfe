"""
Template engine for scaffold files.

Supports literal text, {{ name }} interpolation and
{% if name %} / {% else %} / {% endif %} blocks with '-' trim markers.
"""

from .cache import TemplateCache
from .context import Context, Value, value_to_text
from .lexer import TemplateLexer, tokenize_template
from .nodes import (
    Conditional,
    Interpolation,
    Literal,
    Template,
    TemplateNode,
    VariableRef,
    format_ast_tree,
    referenced_variables,
)
from .parser import TemplateParser, parse_template
from .renderer import (
    ConditionTypeError,
    RenderError,
    TemplateRenderer,
    UndefinedVariableError,
    render,
)
from .tokens import (
    LexerError,
    ParserError,
    Token,
    TokenType,
    UnexpectedElseError,
    UnexpectedEndIfError,
    UnmatchedIfError,
    UnsupportedExpressionError,
)

__all__ = [
    # Main entry points
    "parse_template",
    "render",
    "Context",
    "Template",

    # Engine components
    "TemplateLexer",
    "TemplateParser",
    "TemplateRenderer",
    "TemplateCache",
    "tokenize_template",

    # Model
    "Token",
    "TokenType",
    "TemplateNode",
    "Literal",
    "Interpolation",
    "Conditional",
    "VariableRef",
    "Value",
    "value_to_text",
    "referenced_variables",
    "format_ast_tree",

    # Errors
    "LexerError",
    "ParserError",
    "UnmatchedIfError",
    "UnexpectedElseError",
    "UnexpectedEndIfError",
    "UnsupportedExpressionError",
    "RenderError",
    "UndefinedVariableError",
    "ConditionTypeError",
]
