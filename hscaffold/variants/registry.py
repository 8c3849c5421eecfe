"""
Loader of the backend catalogue.

The default catalogue ships with the package (hscaffold/backends.yaml);
callers may point to their own YAML file instead.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import BackendConfigError
from .model import BackendsConfig

logger = logging.getLogger(__name__)

_PACKAGE = "hscaffold"
_CATALOGUE = "backends.yaml"

_yaml = YAML(typ="safe")


def _read_yaml_map(text: str, origin: str) -> dict:
    """Parses YAML text and checks that it is a mapping."""
    try:
        raw = _yaml.load(text) or {}
    except YAMLError as e:
        raise BackendConfigError(f"Invalid YAML in {origin}: {e}") from e
    if not isinstance(raw, dict):
        raise BackendConfigError(f"YAML must be a mapping: {origin}")
    return raw


def load_backends(path: Optional[Path] = None) -> BackendsConfig:
    """
    Loads the backend catalogue.

    Args:
        path: YAML file to read; the packaged catalogue when omitted

    Returns:
        Parsed catalogue
    """
    if path is None:
        return default_backends()

    if not path.is_file():
        raise BackendConfigError(f"Backend catalogue not found: {path}")
    config = BackendsConfig.from_dict(_read_yaml_map(path.read_text(encoding="utf-8"), str(path)))
    logger.debug(f"Loaded {len(config.backends)} backends from {path}")
    return config


@lru_cache(maxsize=1)
def default_backends() -> BackendsConfig:
    """The packaged catalogue, read once per process."""
    text = (resources.files(_PACKAGE) / _CATALOGUE).read_text(encoding="utf-8")
    config = BackendsConfig.from_dict(_read_yaml_map(text, f"{_PACKAGE}/{_CATALOGUE}"))
    logger.debug(f"Loaded {len(config.backends)} packaged backends")
    return config


__all__ = ["load_backends", "default_backends"]
