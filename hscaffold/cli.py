from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .errors import ScaffoldUserError
from .variants.selector import VariantSelector
from .version import tool_version


def _jdumps(obj: Any) -> str:
    # Compact JSON for CLI answers
    return json.dumps(obj, ensure_ascii=False)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hscaffold",
        description="hashira project template renderer",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity (stderr)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list", help="available backends (JSON)")

    sp_render = sub.add_parser("render", help="render the templates of one backend")
    sp_render.add_argument("backend", help="backend id (see 'hscaffold list')")
    sp_render.add_argument("--name", required=True, dest="crate_name", help="crate name of the new project")
    sp_render.add_argument("--authors", required=True, help="authors string for Cargo.toml")
    sp_render.add_argument(
        "--local",
        action="store_true",
        dest="use_local",
        help="depend on hashira packages by local path instead of the registry version",
    )
    sp_render.add_argument(
        "--file",
        metavar="PATH",
        help="print only this project-relative file (plain text, not JSON)",
    )

    sub.add_parser("check", help="verify that every backend can be rendered (JSON)")

    return p


def _cmd_list(selector: VariantSelector) -> int:
    data = {"backends": [spec.to_dict() for spec in selector.config.backends.values()]}
    sys.stdout.write(_jdumps(data))
    return 0


def _cmd_render(selector: VariantSelector, ns: argparse.Namespace) -> int:
    context = selector.build_context_for_variant(ns.backend, ns.crate_name, ns.authors, ns.use_local)
    rendered = selector.render_variant(ns.backend, context)

    if ns.file:
        if ns.file not in rendered:
            sys.stderr.write(f"Error: backend '{ns.backend}' has no file '{ns.file}'\n")
            return 2
        sys.stdout.write(rendered[ns.file])
        return 0

    sys.stdout.write(_jdumps({"backend": ns.backend, "files": rendered}))
    return 0


def _cmd_check(selector: VariantSelector) -> int:
    """Renders every backend with both dependency modes on sample inputs."""
    report: Dict[str, Any] = {}
    ok = True
    for backend_id in selector.backend_ids():
        problems: List[str] = []
        try:
            if not selector.select_variant(backend_id):
                problems.append("no templates selected")
            for use_local in (False, True):
                context = selector.build_context_for_variant(backend_id, "sample_app", "Sample Author", use_local)
                for path, names in selector.validate_context(backend_id, context).items():
                    problems.append(f"{path} (use_local={str(use_local).lower()}): missing {', '.join(names)}")
                selector.render_variant(backend_id, context)
        except ScaffoldUserError as e:
            problems.append(str(e))
        ok = ok and not problems
        report[backend_id] = {"ok": not problems, "problems": problems}

    sys.stdout.write(_jdumps({"ok": ok, "backends": report}))
    return 0 if ok else 2


def main(argv: Optional[List[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, ns.log_level), format="[%(levelname)s] %(name)s: %(message)s")

    try:
        selector = VariantSelector()

        if ns.cmd == "list":
            return _cmd_list(selector)

        if ns.cmd == "render":
            return _cmd_render(selector, ns)

        if ns.cmd == "check":
            return _cmd_check(selector)

    except ScaffoldUserError as e:
        sys.stderr.write(f"Error: {str(e).rstrip()}\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
