# rulesetcfg/cli/main.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List

from ..errors import format_error
from . import migrate, show, validate
from ._exit import INTERNAL, OK
from ._io import set_quiet


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rulesetcfg",
        description="Ruleset configuration lifecycle tools",
        allow_abbrev=False,
    )
    try:
        from rulesetcfg import __version__ as _VER
    except Exception:
        _VER = "unknown"
    parser.add_argument("--version", action="version", version=f"rulesetcfg {_VER}")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level to stderr")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress stderr messages")
    parser.add_argument("-c", "--config", dest="config", help="Host settings YAML file")
    subparsers = parser.add_subparsers(dest="command")

    validate.register(subparsers)
    migrate.register(subparsers)
    show.register(subparsers)

    return parser


def main(argv: List[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    ns = parser.parse_args(argv)

    set_quiet(ns.quiet)
    logging.basicConfig(
        level=logging.DEBUG if ns.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    func = getattr(ns, "func", None)
    if func is None:
        parser.print_help()
        return OK
    try:
        return int(func(ns))
    except Exception as e:  # noqa: BLE001
        print(format_error(e), file=sys.stderr)
        return INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
