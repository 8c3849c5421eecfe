"""
Variant selector.

Maps a backend identifier to the templates that belong to it and builds
the render Context from user inputs. Also checks, per backend, that a
Context covers every variable its templates reach.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional

import pathspec

from .errors import InvalidInputError, UnknownBackendError
from .loader import PackageTemplateLoader, TemplateLoader
from .model import BackendsConfig, BackendSpec
from .registry import default_backends
from ..template.analysis import reachable_variables
from ..template.cache import TemplateCache
from ..template.context import Context
from ..template.renderer import TemplateRenderer

logger = logging.getLogger(__name__)

# Rust library target names: identifiers only (no hyphens)
_CRATE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


@dataclass(frozen=True)
class ScaffoldInputs:
    """Values collected from the user for one generated project."""
    crate_name: str
    authors: str
    use_local: bool = False


class _CompiledBackend:
    """Backend with ready PathSpec objects."""
    __slots__ = ("spec", "include_ps", "exclude_ps", "prefix")

    def __init__(self, spec: BackendSpec):
        self.spec = spec
        self.prefix = spec.template_dir + "/"
        self.include_ps = pathspec.PathSpec.from_lines("gitwildmatch", spec.include)
        self.exclude_ps = (
            pathspec.PathSpec.from_lines("gitwildmatch", spec.exclude)
            if spec.exclude else None
        )

    def owns(self, path: str) -> bool:
        if not path.startswith(self.prefix):
            return False
        rel = path[len(self.prefix):]
        if not self.include_ps.match_file(rel):
            return False
        return not (self.exclude_ps and self.exclude_ps.match_file(rel))


class VariantSelector:
    """
    Resolves backends to template sets and render contexts.

    Parsed templates are cached per selector, so repeated renders of the
    same backend do not parse again.
    """

    def __init__(self, config: Optional[BackendsConfig] = None, loader: Optional[TemplateLoader] = None):
        """
        Args:
            config: Backend catalogue (packaged one by default)
            loader: Template source (packaged templates by default)
        """
        self.config = config or default_backends()
        self.loader = loader or PackageTemplateLoader()
        self.cache = TemplateCache(self.loader.load)
        self._compiled: Dict[str, _CompiledBackend] = {}

    # ------------------------------------------------------------ #
    # Backends
    # ------------------------------------------------------------ #
    def backend_ids(self) -> List[str]:
        return self.config.ids()

    def backend(self, backend_id: str) -> BackendSpec:
        """
        Raises:
            UnknownBackendError: The identifier is not in the catalogue
        """
        spec = self.config.backends.get(backend_id)
        if spec is None:
            raise UnknownBackendError(backend_id, self.backend_ids())
        return spec

    def _compiled_backend(self, backend_id: str) -> _CompiledBackend:
        compiled = self._compiled.get(backend_id)
        if compiled is None:
            compiled = _CompiledBackend(self.backend(backend_id))
            self._compiled[backend_id] = compiled
        return compiled

    def select_variant(self, backend_id: str) -> FrozenSet[str]:
        """
        Template identities that belong to the backend.

        Returns:
            Loader paths such as 'with-axum/Cargo.toml'
        """
        compiled = self._compiled_backend(backend_id)
        selected = frozenset(p for p in self.loader.list_templates() if compiled.owns(p))
        if not selected:
            logger.warning(f"Backend '{backend_id}' selects no templates under '{compiled.prefix}'")
        logger.debug(f"Backend '{backend_id}' selected {len(selected)} templates")
        return selected

    def output_path(self, backend_id: str, template_path: str) -> str:
        """Path of a rendered template inside the generated project."""
        prefix = self._compiled_backend(backend_id).prefix
        return template_path[len(prefix):] if template_path.startswith(prefix) else template_path

    # ------------------------------------------------------------ #
    # Contexts
    # ------------------------------------------------------------ #
    @staticmethod
    def build_context(inputs: ScaffoldInputs) -> Context:
        """
        Validates user inputs and turns them into a Context.

        Raises:
            InvalidInputError: For an unusable crate name or authors string
        """
        crate_name = inputs.crate_name.strip()
        if not crate_name:
            raise InvalidInputError("crate_name", "must not be empty")
        if not _CRATE_NAME.match(crate_name):
            raise InvalidInputError(
                "crate_name",
                f"'{crate_name}' must start with a letter or '_' and contain only letters, digits and '_'",
            )

        authors = inputs.authors.strip()
        if not authors:
            raise InvalidInputError("authors", "must not be empty")
        if '"' in authors or "\n" in authors:
            raise InvalidInputError("authors", "must be a single line without double quotes")

        return Context(
            crate_name=crate_name,
            authors=authors,
            use_local=bool(inputs.use_local),
        )

    def build_context_for_variant(
        self,
        backend_id: str,
        crate_name: str,
        authors: str,
        use_local: bool,
    ) -> Context:
        """
        Builds the Context for one backend.

        Raises:
            UnknownBackendError: The identifier is not in the catalogue
            InvalidInputError: For unusable user inputs
        """
        spec = self.backend(backend_id)
        context = self.build_context(ScaffoldInputs(crate_name, authors, use_local))

        undeclared = [name for name in spec.variables if name not in context]
        if undeclared:
            logger.warning(f"Backend '{backend_id}' declares variables with no value: {', '.join(undeclared)}")
        return context

    def validate_context(self, backend_id: str, context: Context) -> Dict[str, List[str]]:
        """
        Finds variables the backend templates reach but the context lacks.

        Returns:
            {template path: sorted missing names}; empty when complete
        """
        missing: Dict[str, List[str]] = {}
        for path in sorted(self.select_variant(backend_id)):
            template = self.cache.get(path)
            absent = sorted(name for name in reachable_variables(template, context) if name not in context)
            if absent:
                missing[path] = absent
        return missing

    # ------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------ #
    def render_variant(self, backend_id: str, context: Context) -> Dict[str, str]:
        """
        Renders every template of the backend.

        Nothing is returned unless all templates render.

        Returns:
            {project-relative path: rendered text}
        """
        renderer = TemplateRenderer(context)
        rendered: Dict[str, str] = {}
        for path in sorted(self.select_variant(backend_id)):
            rendered[self.output_path(backend_id, path)] = renderer.render(self.cache.get(path))
        logger.debug(f"Rendered {len(rendered)} templates for backend '{backend_id}'")
        return rendered


_default_selector: Optional[VariantSelector] = None


def default_selector() -> VariantSelector:
    """Selector over the packaged catalogue and templates."""
    global _default_selector
    if _default_selector is None:
        _default_selector = VariantSelector()
    return _default_selector


def build_context_for_variant(backend_id: str, crate_name: str, authors: str, use_local: bool) -> Context:
    """Convenience wrapper over the packaged catalogue."""
    return default_selector().build_context_for_variant(backend_id, crate_name, authors, use_local)


__all__ = [
    "ScaffoldInputs",
    "VariantSelector",
    "default_selector",
    "build_context_for_variant",
]
