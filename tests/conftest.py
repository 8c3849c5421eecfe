import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from hscaffold.template import Context
from hscaffold.variants import BackendsConfig, MemoryTemplateLoader, VariantSelector

PROJECT_ROOT = Path(__file__).resolve().parents[1]


# Trimmed-down manifest in the shape of the real backend templates
MINI_MANIFEST = textwrap.dedent("""\
    [package]
    name = "{{crate_name}}_server"
    authors = [ "{{authors}}" ]

    [dependencies]
    {% if use_local -%}
    hashira = { path = "../../packages/hashira" }
    {% else -%}
    hashira = { version = "0.0.2-alpha" }
    {% endif -%}
    yew = "0.20"
    """)


@pytest.fixture
def ctx_local() -> Context:
    return Context(crate_name="my_app", authors="Jane Doe", use_local=True)


@pytest.fixture
def ctx_remote() -> Context:
    return Context(crate_name="my_app", authors="Jane Doe", use_local=False)


@pytest.fixture
def memory_selector() -> VariantSelector:
    """Selector over two in-memory backends."""
    config = BackendsConfig.from_dict({
        "backends": {
            "alpha": {
                "title": "Alpha",
                "template_dir": "alpha",
                "include": ["**"],
                "exclude": ["*.bak"],
                "variables": ["crate_name", "authors", "use_local"],
            },
            "beta": {
                "title": "Beta",
                "template_dir": "beta",
                "include": ["Cargo.toml"],
                "variables": ["crate_name", "authors", "use_local"],
            },
        }
    })
    loader = MemoryTemplateLoader({
        "alpha/Cargo.toml": MINI_MANIFEST,
        "alpha/src/main.rs": "fn main() {}\n",
        "alpha/old.bak": "{{ nothing }}",
        "beta/Cargo.toml": "name = \"{{ crate_name }}\"\n",
        "beta/README.md": "{{ readme_only }}\n",
    })
    return VariantSelector(config, loader)


def _run_cli(*args: str) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    return subprocess.run(
        [sys.executable, "-m", "hscaffold.cli", *args],
        cwd=PROJECT_ROOT, env=env, capture_output=True, text=True, encoding="utf-8"
    )


@pytest.fixture
def run_cli():
    """Runs `python -m hscaffold.cli` in the project root."""
    return _run_cli


@pytest.fixture
def mini_manifest() -> str:
    return MINI_MANIFEST
