"""CLI subcommand `migrate`: bring a stored blob to the current schema version."""

from __future__ import annotations

import argparse
import json

from configs.migrate import migrate_config, migration_path
from configs.validate import default_config, validate_config

from ..errors import format_error
from ..io.atomic import atomic_write_json
from ._exit import IO_ERR, OK, USER_ERR
from ._io import eprint, print_json, read_json_file


def register(subparsers: argparse._SubParsersAction) -> None:
    sp = subparsers.add_parser(
        "migrate",
        help="Migrate a stored configuration JSON file to the current version",
        description="Print the migrated configuration; --write replaces FILE atomically.",
    )
    sp.add_argument("file", help="JSON file holding one stored configuration object")
    sp.add_argument("--flavor", default=None, help="Host flavor used for defaults")
    sp.add_argument("--write", action="store_true", help="Write the result back to FILE")
    sp.set_defaults(command="migrate", func=_run)


def _run(ns: argparse.Namespace) -> int:
    try:
        old = read_json_file(ns.file)
    except (OSError, json.JSONDecodeError) as e:
        eprint(format_error(e))
        return IO_ERR

    # Same gate as load(): an invalid blob is never migrated.
    if not validate_config(old):
        eprint("invalid: refusing to migrate; run `validate` for details")
        return USER_ERR

    eprint(f"migration: {migration_path(old)}")
    migrated = migrate_config(old, default_config(ns.flavor))
    if ns.write:
        try:
            atomic_write_json(ns.file, migrated, indent=2)
        except OSError as e:
            eprint(format_error(e))
            return IO_ERR
    print_json(migrated, pretty=True)
    return OK
