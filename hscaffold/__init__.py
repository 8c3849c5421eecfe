"""
hashira-scaffold: template rendering core of the project scaffolder.
"""

from .errors import ScaffoldUserError
from .template import (
    Context,
    LexerError,
    ParserError,
    RenderError,
    Template,
    UndefinedVariableError,
    parse_template,
    render,
)
from .variants import ConfigError, UnknownBackendError, VariantSelector, build_context_for_variant

__all__ = [
    "parse_template",
    "render",
    "build_context_for_variant",
    "Context",
    "Template",
    "VariantSelector",
    "ScaffoldUserError",
    "LexerError",
    "ParserError",
    "RenderError",
    "UndefinedVariableError",
    "ConfigError",
    "UnknownBackendError",
]
