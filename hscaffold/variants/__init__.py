"""
Backend variants: catalogue, template sources and the variant selector.
"""

from .errors import (
    BackendConfigError,
    ConfigError,
    InvalidInputError,
    TemplateNotFoundError,
    UnknownBackendError,
)
from .loader import MemoryTemplateLoader, PackageTemplateLoader, TemplateLoader
from .model import BackendsConfig, BackendSpec
from .registry import default_backends, load_backends
from .selector import ScaffoldInputs, VariantSelector, build_context_for_variant, default_selector

__all__ = [
    "VariantSelector",
    "ScaffoldInputs",
    "build_context_for_variant",
    "default_selector",
    "BackendsConfig",
    "BackendSpec",
    "load_backends",
    "default_backends",
    "TemplateLoader",
    "PackageTemplateLoader",
    "MemoryTemplateLoader",
    "ConfigError",
    "UnknownBackendError",
    "InvalidInputError",
    "BackendConfigError",
    "TemplateNotFoundError",
]
