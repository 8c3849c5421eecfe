"""
Render context for the template engine.

A Context is an immutable mapping from variable name to a scalar value.
Only two value kinds exist: booleans (for conditions) and strings (for
interpolation).
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union

Value = Union[bool, str]

_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


def value_to_text(value: Value) -> str:
    """String form of a context value: booleans become 'true'/'false'."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class Context(Mapping[str, Value]):
    """
    Immutable set of named values for one render pass.

    Validates names and value kinds on construction; any other value type
    is a programming error and raises TypeError.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        merged = dict(values or {})
        merged.update(kwargs)

        for name, value in merged.items():
            if not isinstance(name, str) or not _NAME_PATTERN.match(name):
                raise TypeError(f"Invalid context variable name: {name!r}")
            if not isinstance(value, (bool, str)):
                raise TypeError(
                    f"Context value for '{name}' must be bool or str, got {type(value).__name__}"
                )

        self._values = MappingProxyType(merged)

    def __getitem__(self, name: str) -> Value:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Context({dict(self._values)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Context):
            return dict(self._values) == dict(other._values)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def with_values(self, **values: Value) -> Context:
        """Returns a new Context with the given values added or replaced."""
        merged = dict(self._values)
        merged.update(values)
        return Context(merged)


__all__ = ["Context", "Value", "value_to_text"]
