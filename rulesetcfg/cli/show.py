"""CLI subcommand `show`: load the configuration the way the host would and print it."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import replace

from ..bootstrap import build_engine
from ..errors import ConfigError, format_error
from ..io.config import discover_settings_path, load_settings
from ._exit import OK, USER_ERR
from ._io import eprint, print_json


def register(subparsers: argparse._SubParsersAction) -> None:
    sp = subparsers.add_parser(
        "show",
        help="Run load() against the local tier and print config and process flags",
        description="Session tier is a fresh in-memory area, so the local tier is the source.",
    )
    sp.add_argument("--local-dir", default=None, help="Override the local tier directory")
    sp.set_defaults(command="show", func=_run)


def _run(ns: argparse.Namespace) -> int:
    path, source = discover_settings_path(getattr(ns, "config", None))
    if source == "explicit-missing":
        eprint(f"settings file not found: {path}")
        return USER_ERR
    try:
        settings = load_settings(path)
    except ConfigError as e:
        eprint(format_error(e))
        return USER_ERR
    if ns.local_dir:
        settings = replace(settings, local_dir=ns.local_dir)

    engine = build_engine(settings)
    asyncio.run(engine.load())
    print_json({"config": engine.config, "flags": engine.flags.to_dict()}, pretty=True)
    return OK
