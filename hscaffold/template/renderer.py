"""
Renderer for parsed scaffold templates.

Walks the Template against a Context and produces the final text. Only the
branch selected by a condition is visited: variables referenced solely in
the branch not taken are never looked up.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from .context import Context, Value, value_to_text
from .nodes import Conditional, Interpolation, Literal, Template, TemplateNode, VariableRef
from ..errors import ScaffoldUserError

logger = logging.getLogger(__name__)


class RenderError(ScaffoldUserError):
    """Template rendering error."""

    def __init__(self, message: str, variable: VariableRef, template_name: Optional[str] = None):
        location = f"{template_name or '<inline>'}:{variable.line}:{variable.column}"
        super().__init__(f"{message} ({location})")
        self.variable_name = variable.name
        self.template_name = template_name
        self.line = variable.line
        self.column = variable.column


class UndefinedVariableError(RenderError):
    """A referenced variable is absent from the context."""

    def __init__(self, variable: VariableRef, template_name: Optional[str] = None):
        super().__init__(f"Undefined variable '{variable.name}'", variable, template_name)
        self.name = variable.name


class ConditionTypeError(RenderError):
    """A condition refers to a non-boolean context value."""

    def __init__(self, variable: VariableRef, value: Value, template_name: Optional[str] = None):
        super().__init__(
            f"Condition variable '{variable.name}' must be a boolean, got {type(value).__name__}",
            variable,
            template_name,
        )
        self.value = value


class TemplateRenderer:
    """
    Renders templates against one Context.

    Stateless between calls; the same renderer may render any number of
    templates, concurrently if needed.
    """

    def __init__(self, context: Context):
        """
        Args:
            context: Values available to the templates
        """
        self.context = context

    def render(self, template: Template) -> str:
        """
        Renders a template.

        Args:
            template: Parsed template

        Returns:
            Final text

        Raises:
            UndefinedVariableError: A variable on the taken path is missing
            ConditionTypeError: A condition variable is not a boolean
        """
        parts: List[str] = []
        stack: List[Iterator[TemplateNode]] = [iter(template.nodes)]

        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                continue

            if isinstance(node, Literal):
                parts.append(node.text)
            elif isinstance(node, Interpolation):
                parts.append(value_to_text(self._lookup(node.variable, template)))
            elif isinstance(node, Conditional):
                branch = node.then_branch if self._evaluate(node.condition, template) else node.else_branch
                if branch:
                    stack.append(iter(branch))
            else:
                raise TypeError(f"Unknown node type: {type(node).__name__}")

        result = "".join(parts)
        logger.debug(f"Rendered template {template.name or '<inline>'}: {len(result)} chars")
        return result

    def _lookup(self, variable: VariableRef, template: Template) -> Value:
        try:
            return self.context[variable.name]
        except KeyError:
            raise UndefinedVariableError(variable, template.name) from None

    def _evaluate(self, condition: VariableRef, template: Template) -> bool:
        value = self._lookup(condition, template)
        if not isinstance(value, bool):
            raise ConditionTypeError(condition, value, template.name)
        return not value if condition.negated else value


def render(template: Template, context: Context) -> str:
    """
    Convenience function for rendering a template.

    Args:
        template: Parsed template
        context: Values for this render pass

    Returns:
        Final text
    """
    return TemplateRenderer(context).render(template)


__all__ = [
    "TemplateRenderer",
    "RenderError",
    "UndefinedVariableError",
    "ConditionTypeError",
    "render",
]
