"""
Tests for VariantSelector over in-memory backends and over the packaged
templates.
"""

import pytest

from hscaffold import build_context_for_variant
from hscaffold.errors import ScaffoldUserError
from hscaffold.template import Context
from hscaffold.variants import (
    ConfigError,
    InvalidInputError,
    ScaffoldInputs,
    UnknownBackendError,
    VariantSelector,
)


class TestSelectVariant:

    def test_include_all_minus_exclude(self, memory_selector):
        assert memory_selector.select_variant("alpha") == frozenset({
            "alpha/Cargo.toml",
            "alpha/src/main.rs",
        })

    def test_include_subset(self, memory_selector):
        assert memory_selector.select_variant("beta") == frozenset({"beta/Cargo.toml"})

    def test_backends_do_not_share_templates(self, memory_selector):
        assert not memory_selector.select_variant("alpha") & memory_selector.select_variant("beta")

    def test_output_path_strips_template_dir(self, memory_selector):
        assert memory_selector.output_path("alpha", "alpha/src/main.rs") == "src/main.rs"

    def test_unknown_backend(self, memory_selector):
        with pytest.raises(UnknownBackendError) as exc_info:
            memory_selector.select_variant("rocket")
        message = str(exc_info.value)
        assert "Unknown backend 'rocket'" in message
        assert "alpha, beta" in message

    def test_unknown_backend_hierarchy(self):
        assert issubclass(UnknownBackendError, ConfigError)
        assert issubclass(ConfigError, ScaffoldUserError)


class TestBuildContext:

    def test_builds_three_values(self, memory_selector):
        context = memory_selector.build_context_for_variant("alpha", "my_app", "Jane Doe", True)
        assert context == Context(crate_name="my_app", authors="Jane Doe", use_local=True)

    def test_inputs_are_stripped(self):
        context = VariantSelector.build_context(ScaffoldInputs("  my_app ", " Jane ", False))
        assert context["crate_name"] == "my_app"
        assert context["authors"] == "Jane"
        assert context["use_local"] is False

    def test_unknown_backend_is_rejected_first(self, memory_selector):
        with pytest.raises(UnknownBackendError):
            memory_selector.build_context_for_variant("rocket", "", "", False)

    @pytest.mark.parametrize("crate_name", ["", "   ", "my-app", "1app", "my app", "a.b"])
    def test_invalid_crate_name(self, memory_selector, crate_name):
        with pytest.raises(InvalidInputError) as exc_info:
            memory_selector.build_context_for_variant("alpha", crate_name, "Jane", False)
        assert exc_info.value.field_name == "crate_name"

    @pytest.mark.parametrize("authors", ["", "  ", 'Jane "JD" Doe', "Jane\nDoe"])
    def test_invalid_authors(self, memory_selector, authors):
        with pytest.raises(InvalidInputError) as exc_info:
            memory_selector.build_context_for_variant("alpha", "my_app", authors, False)
        assert exc_info.value.field_name == "authors"
        assert str(exc_info.value).startswith("Invalid authors:")


class TestValidateAndRender:

    def test_complete_context_has_no_gaps(self, memory_selector, ctx_local):
        assert memory_selector.validate_context("alpha", ctx_local) == {}

    def test_missing_values_are_reported_per_template(self, memory_selector):
        gaps = memory_selector.validate_context("alpha", Context(crate_name="x"))
        assert gaps == {"alpha/Cargo.toml": ["authors", "use_local"]}

    def test_excluded_templates_are_not_checked(self, memory_selector, ctx_local):
        # alpha/old.bak and beta/README.md reference unknown variables
        assert memory_selector.validate_context("alpha", ctx_local) == {}
        assert memory_selector.validate_context("beta", ctx_local) == {}

    def test_render_variant_keys_are_project_relative(self, memory_selector, ctx_remote):
        rendered = memory_selector.render_variant("alpha", ctx_remote)
        assert sorted(rendered) == ["Cargo.toml", "src/main.rs"]
        assert rendered["src/main.rs"] == "fn main() {}\n"
        assert 'hashira = { version = "0.0.2-alpha" }\n' in rendered["Cargo.toml"]

    def test_render_variant_parses_each_template_once(self, memory_selector, ctx_local, ctx_remote):
        memory_selector.render_variant("alpha", ctx_local)
        first = memory_selector.cache.get("alpha/Cargo.toml")
        memory_selector.render_variant("alpha", ctx_remote)
        assert memory_selector.cache.get("alpha/Cargo.toml") is first
        assert len(memory_selector.cache) == 2


class TestPackagedBackends:

    @pytest.fixture
    def selector(self):
        return VariantSelector()

    def test_every_backend_has_a_manifest(self, selector):
        for backend_id in ("axum", "actix-web", "tide", "wasm-target"):
            rendered = selector.render_variant(
                backend_id, selector.build_context_for_variant(backend_id, "my_app", "Jane Doe", False)
            )
            assert "Cargo.toml" in rendered

    @pytest.mark.parametrize("backend_id", ["axum", "actix-web", "tide", "wasm-target"])
    @pytest.mark.parametrize("use_local", [True, False])
    def test_contexts_cover_all_templates(self, selector, backend_id, use_local):
        context = selector.build_context_for_variant(backend_id, "my_app", "Jane Doe", use_local)
        assert selector.validate_context(backend_id, context) == {}

        for text in selector.render_variant(backend_id, context).values():
            assert "{{" not in text
            assert "{%" not in text

    def test_axum_local_dependencies(self, selector):
        context = build_context_for_variant("axum", "my_app", "Jane Doe", True)
        manifest = selector.render_variant("axum", context)["Cargo.toml"]

        assert 'name = "my_app_server"' in manifest
        assert 'authors = [ "Jane Doe" ]' in manifest
        assert (
            '[target.\'cfg(not(target_arch = "wasm32"))\'.dependencies]\n'
            'hashira-axum = { path = "../../adapters/hashira-axum" }\n'
            'env_logger = "0.10.0"\n'
        ) in manifest
        assert "0.0.2-alpha" not in manifest

    def test_axum_registry_dependencies(self, selector):
        context = build_context_for_variant("axum", "my_app", "Jane Doe", False)
        manifest = selector.render_variant("axum", context)["Cargo.toml"]

        assert (
            "[dependencies]\n"
            'hashira = { version = "0.0.2-alpha", optional = true }\n'
            'yew = "0.20"\n'
        ) in manifest
        assert "../../" not in manifest

    def test_wasm_target_uses_deno_templates(self, selector):
        paths = selector.select_variant("wasm-target")
        assert paths and all(p.startswith("with-deno/") for p in paths)
