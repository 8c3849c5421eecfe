"""
Data models of the backend catalogue.

A backend (variant) owns a directory of templates and declares which
variables its templates expect.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .errors import BackendConfigError


@dataclass(frozen=True)
class BackendSpec:
    """
    One selectable backend.

    `include`/`exclude` are git-wildmatch patterns relative to
    `template_dir`.
    """
    id: str
    title: str
    template_dir: str
    include: List[str] = field(default_factory=lambda: ["**"])
    exclude: List[str] = field(default_factory=list)
    variables: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, backend_id: str, data: Dict[str, Any]) -> "BackendSpec":
        """Builds an instance from a YAML mapping."""
        if not isinstance(data, dict):
            raise BackendConfigError(f"Backend '{backend_id}' must be a mapping")

        template_dir = str(data.get("template_dir", "")).strip("/")
        if not template_dir:
            raise BackendConfigError(f"Backend '{backend_id}' has no 'template_dir'")

        return cls(
            id=backend_id,
            title=str(data.get("title", backend_id)),
            template_dir=template_dir,
            include=_str_list(data.get("include", ["**"]), backend_id, "include"),
            exclude=_str_list(data.get("exclude", []), backend_id, "exclude"),
            variables=_str_list(data.get("variables", []), backend_id, "variables"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serializes to a JSON/YAML friendly mapping."""
        return {
            "id": self.id,
            "title": self.title,
            "template_dir": self.template_dir,
            "include": list(self.include),
            "exclude": list(self.exclude),
            "variables": list(self.variables),
        }


@dataclass(frozen=True)
class BackendsConfig:
    """The whole backend catalogue, in declaration order."""
    backends: Dict[str, BackendSpec] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BackendsConfig":
        raw = data.get("backends", {})
        if not isinstance(raw, dict):
            raise BackendConfigError("'backends' must be a mapping of backend id to settings")
        return cls(backends={
            str(backend_id): BackendSpec.from_dict(str(backend_id), spec)
            for backend_id, spec in raw.items()
        })

    def ids(self) -> List[str]:
        return list(self.backends)


def _str_list(value: Any, backend_id: str, key: str) -> List[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise BackendConfigError(f"Backend '{backend_id}': '{key}' must be a list of strings")
    return list(value)


__all__ = ["BackendSpec", "BackendsConfig"]
