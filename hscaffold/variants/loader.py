"""
Template sources.

The engine never reads files by itself: template text is obtained through
a loader. Template identities are POSIX paths relative to the loader root,
e.g. 'with-axum/Cargo.toml'.
"""

from __future__ import annotations

import logging
from importlib import resources
from typing import Dict, Iterator, List, Mapping, Optional, Protocol, Tuple

from .errors import TemplateNotFoundError

logger = logging.getLogger(__name__)

# Resources live under the package hscaffold/_templates/<template_dir>/...
_TEMPLATES_PKG = "hscaffold._templates"


class TemplateLoader(Protocol):
    """Source of template texts."""

    def list_templates(self) -> List[str]:
        """All template identities available from this source."""
        ...

    def load(self, path: str) -> str:
        """Template source text; raises TemplateNotFoundError if absent."""
        ...


def _iter_all_files(node, prefix: str = "") -> Iterator[Tuple[str, object]]:
    """Recursive walk over Traversable resources (works for .whl/zip too)."""
    for entry in node.iterdir():
        name = entry.name
        if name.startswith(".") or name == "__pycache__" or name.endswith((".py", ".pyc")):
            continue
        rel = f"{prefix}{name}"
        if entry.is_dir():
            yield from _iter_all_files(entry, rel + "/")
        elif entry.is_file():
            yield rel, entry


class PackageTemplateLoader:
    """Templates bundled with the package under hscaffold/_templates/."""

    def __init__(self, package: str = _TEMPLATES_PKG):
        self.package = package
        self._index: Optional[Dict[str, object]] = None

    def _entries(self) -> Dict[str, object]:
        if self._index is None:
            base = resources.files(self.package)
            self._index = dict(sorted(_iter_all_files(base)))
            logger.debug(f"Indexed {len(self._index)} packaged templates")
        return self._index

    def list_templates(self) -> List[str]:
        return list(self._entries())

    def load(self, path: str) -> str:
        entry = self._entries().get(path)
        if entry is None:
            raise TemplateNotFoundError(path)
        return entry.read_text(encoding="utf-8")


class MemoryTemplateLoader:
    """Templates held in memory: {identity: source}."""

    def __init__(self, templates: Mapping[str, str]):
        self._templates = dict(templates)

    def list_templates(self) -> List[str]:
        return sorted(self._templates)

    def load(self, path: str) -> str:
        try:
            return self._templates[path]
        except KeyError:
            raise TemplateNotFoundError(path) from None


__all__ = ["TemplateLoader", "PackageTemplateLoader", "MemoryTemplateLoader"]
