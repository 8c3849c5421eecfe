"""
Static analysis of parsed templates against a known context.
"""

from __future__ import annotations

from typing import Iterator, List, Mapping, Set

from .context import Value
from .nodes import Conditional, Interpolation, Template, TemplateNode


def reachable_variables(template: Template, known: Mapping[str, Value]) -> Set[str]:
    """
    Variable names the renderer would look up for the given values.

    A condition whose variable is a known boolean prunes the branch not
    taken, exactly as rendering does. An unknown or non-boolean condition
    variable is reported itself and both branches are explored.
    """
    names: Set[str] = set()
    stack: List[Iterator[TemplateNode]] = [iter(template.nodes)]

    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            continue

        if isinstance(node, Interpolation):
            names.add(node.variable.name)
        elif isinstance(node, Conditional):
            names.add(node.condition.name)
            value = known.get(node.condition.name)
            if isinstance(value, bool):
                taken = value != node.condition.negated
                branch = node.then_branch if taken else node.else_branch
                if branch:
                    stack.append(iter(branch))
            else:
                if node.else_branch:
                    stack.append(iter(node.else_branch))
                stack.append(iter(node.then_branch))

    return names


__all__ = ["reachable_variables"]
