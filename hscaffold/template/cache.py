"""
Read-only cache of parsed templates keyed by template identity.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict

from .nodes import Template
from .parser import parse_template

logger = logging.getLogger(__name__)


class TemplateCache:
    """
    Parses each template once and hands out the same immutable Template.

    Failed parses are not stored: the error is raised again on the next
    access.
    """

    def __init__(self, load: Callable[[str], str]):
        """
        Args:
            load: Returns template source text for a template identity
        """
        self._load = load
        self._templates: Dict[str, Template] = {}
        self._lock = threading.Lock()

    def get(self, name: str) -> Template:
        with self._lock:
            cached = self._templates.get(name)
        if cached is not None:
            return cached

        template = parse_template(self._load(name), name)

        with self._lock:
            # Another thread may have parsed it meanwhile; keep the first one
            template = self._templates.setdefault(name, template)
        logger.debug(f"Cached template {name}")
        return template

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def clear(self) -> None:
        with self._lock:
            self._templates.clear()


__all__ = ["TemplateCache"]
