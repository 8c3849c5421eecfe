"""
AST nodes for scaffold templates.

Defines the immutable node hierarchy produced by the parser and walked
by the renderer. Whitespace trimming is already applied to Literal texts
by the time a Template exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Set, Tuple


@dataclass(frozen=True)
class VariableRef:
    """
    Reference to a context variable.

    `negated` is only ever set on conditions (`{% if not name %}`).
    Source coordinates do not take part in equality.
    """
    name: str
    negated: bool = False
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"not {self.name}" if self.negated else self.name


@dataclass(frozen=True)
class TemplateNode:
    """Base class for all template AST nodes."""
    pass


@dataclass(frozen=True)
class Literal(TemplateNode):
    """Static text emitted as is."""
    text: str


@dataclass(frozen=True)
class Interpolation(TemplateNode):
    """{{ name }}: replaced by the string form of a context value."""
    variable: VariableRef


@dataclass(frozen=True)
class Conditional(TemplateNode):
    """
    {% if cond %} ... {% else %} ... {% endif %}.

    `else_branch` is None when the block has no `else`; an empty tuple
    means an `else` with nothing (left) in it.
    """
    condition: VariableRef
    then_branch: Tuple[TemplateNode, ...]
    else_branch: Optional[Tuple[TemplateNode, ...]] = None


@dataclass(frozen=True)
class Template:
    """
    Parsed template: an immutable sequence of nodes.

    `name` is the template identity (e.g. 'with-axum/Cargo.toml') used in
    diagnostics and as the cache key; it does not take part in equality.
    """
    nodes: Tuple[TemplateNode, ...]
    name: Optional[str] = field(default=None, compare=False)

    def __iter__(self) -> Iterator[TemplateNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)


def iter_nodes(nodes: Tuple[TemplateNode, ...]) -> Iterator[TemplateNode]:
    """Iterates over all nodes depth-first, both branches included."""
    stack = [iter(nodes)]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            continue
        yield node
        if isinstance(node, Conditional):
            if node.else_branch:
                stack.append(iter(node.else_branch))
            stack.append(iter(node.then_branch))


def referenced_variables(template: Template) -> Set[str]:
    """Returns every variable name the template references on any path."""
    names: Set[str] = set()
    for node in iter_nodes(template.nodes):
        if isinstance(node, Interpolation):
            names.add(node.variable.name)
        elif isinstance(node, Conditional):
            names.add(node.condition.name)
    return names


def format_ast_tree(nodes: Tuple[TemplateNode, ...], indent: int = 0) -> str:
    """Formats the AST as a tree for debugging."""
    lines = []
    prefix = "  " * indent

    for node in nodes:
        if isinstance(node, Literal):
            # Only a preview of the text for readability
            text_preview = repr(node.text[:40] + "..." if len(node.text) > 40 else node.text)
            lines.append(f"{prefix}Literal({text_preview})")
        elif isinstance(node, Interpolation):
            lines.append(f"{prefix}Interpolation({node.variable})")
        elif isinstance(node, Conditional):
            lines.append(f"{prefix}Conditional(condition='{node.condition}')")
            if node.then_branch:
                lines.append(f"{prefix}  then:")
                lines.append(format_ast_tree(node.then_branch, indent + 2))
            if node.else_branch is not None:
                lines.append(f"{prefix}  else:")
                if node.else_branch:
                    lines.append(format_ast_tree(node.else_branch, indent + 2))
        else:
            lines.append(f"{prefix}{type(node).__name__}")

    return "\n".join(lines)


__all__ = [
    "VariableRef",
    "TemplateNode",
    "Literal",
    "Interpolation",
    "Conditional",
    "Template",
    "iter_nodes",
    "referenced_variables",
    "format_ast_tree",
]
