"""
Configuration errors of the variant layer.

Raised while resolving backends, validating user inputs and loading
template sources.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..errors import ScaffoldUserError


class ConfigError(ScaffoldUserError):
    """Base class for variant configuration errors."""
    pass


@dataclass
class UnknownBackendError(ConfigError):
    """Backend identifier outside of the configured set."""
    backend_id: str
    known: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        known = ", ".join(self.known) or "none"
        return f"Unknown backend '{self.backend_id}'. Available backends: {known}"


@dataclass
class InvalidInputError(ConfigError):
    """User-supplied value rejected before rendering."""
    field_name: str
    reason: str

    def __str__(self) -> str:
        return f"Invalid {self.field_name}: {self.reason}"


class BackendConfigError(ConfigError):
    """Malformed backend catalogue."""
    pass


class TemplateNotFoundError(ConfigError):
    """Raised when a template cannot be found by the loader."""
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Template not found: {path}")


__all__ = [
    "ConfigError",
    "UnknownBackendError",
    "InvalidInputError",
    "BackendConfigError",
    "TemplateNotFoundError",
]
