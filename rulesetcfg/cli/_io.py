from __future__ import annotations

import json
import sys
from typing import Any

# Verbosity gates
QUIET = False


def set_quiet(quiet: bool = False) -> None:
    global QUIET
    QUIET = bool(quiet)


def eprint(msg: str) -> None:
    if not QUIET:
        print(msg, file=sys.stderr)


def print_json(obj: Any, *, pretty: bool = False) -> None:
    """Dump obj with stable key order; compact unless `pretty`."""
    if pretty:
        text = json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False)
    else:
        text = json.dumps(obj, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
    sys.stdout.write(text + "\n")


def read_json_file(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
