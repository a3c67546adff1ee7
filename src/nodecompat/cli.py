from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from .config import get_config
from .errors import CompatConfigError
from .imports import get_node_imports
from .specifiers import SUPPORTED_MODULES, NodeEsmResolver


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the inspection CLI."""

    parser = argparse.ArgumentParser(
        prog="nodecompat",
        description="Inspect Node compat shim locations.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of plain text",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("config", help="Show the compat base and derived URLs")
    resolve = commands.add_parser("resolve", help="Resolve built-in module names")
    resolve.add_argument("names", nargs="+", metavar="NAME")
    commands.add_parser("imports", help="Show implicit compat imports")
    commands.add_parser("modules", help="List supported built-in modules")
    return parser


def _config_payload() -> dict[str, Any]:
    config = get_config()
    return {
        "base_url": config.base_url,
        "global_url": config.global_url,
        "module_url": config.module_url,
        "default": config.is_default,
    }


def _emit(payload: Any, lines: list[str], as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, indent=2))
    else:
        for line in lines:
            print(line)


def run_command(args: argparse.Namespace) -> int:
    """Execute the selected sub-command and return the exit status."""

    if args.command == "config":
        payload = _config_payload()
        lines = [f"{key}: {value}" for key, value in payload.items()]
        _emit(payload, lines, args.json)
        return 0

    if args.command == "resolve":
        resolver = NodeEsmResolver()
        resolved = {name: resolver.resolve(name) for name in args.names}
        lines = [
            f"{name} -> {url if url is not None else '(not a builtin)'}"
            for name, url in resolved.items()
        ]
        _emit(resolved, lines, args.json)
        return 0 if all(url is not None for url in resolved.values()) else 1

    if args.command == "imports":
        imports = get_node_imports()
        payload = [
            {"specifier": specifier, "imports": urls} for specifier, urls in imports
        ]
        lines = [f"{specifier}: {', '.join(urls)}" for specifier, urls in imports]
        _emit(payload, lines, args.json)
        return 0

    modules = list(SUPPORTED_MODULES)
    _emit(modules, modules, args.json)
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point used by the ``nodecompat`` console script."""

    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return run_command(args)
    except CompatConfigError as exc:
        print(f"nodecompat: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
