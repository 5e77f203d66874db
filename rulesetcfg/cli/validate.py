"""CLI subcommand `validate`: check a stored configuration blob."""

from __future__ import annotations

import argparse
import json

from configs.migrate import migration_path
from configs.validate import validate_config_verbose

from ..errors import format_error
from ._exit import IO_ERR, OK, USER_ERR
from ._io import eprint, print_json, read_json_file


def register(subparsers: argparse._SubParsersAction) -> None:
    sp = subparsers.add_parser(
        "validate",
        help="Check a stored configuration JSON file",
        description="Exit 0 when FILE holds a loadable configuration, 2 when it does not.",
    )
    sp.add_argument("file", help="JSON file holding one stored configuration object")
    sp.add_argument("--json", action="store_true", help="Print a JSON report on stdout")
    sp.set_defaults(command="validate", func=_run)


def _run(ns: argparse.Namespace) -> int:
    try:
        candidate = read_json_file(ns.file)
    except (OSError, json.JSONDecodeError) as e:
        eprint(format_error(e))
        return IO_ERR

    ok, errs = validate_config_verbose(candidate)
    if ns.json:
        print_json(
            {
                "ok": ok,
                "errors": errs,
                "migration": migration_path(candidate) if ok else None,
            }
        )
    elif ok:
        print(f"OK ({migration_path(candidate)})")
    else:
        for msg in errs:
            eprint(f"invalid: {msg}")
    return OK if ok else USER_ERR
