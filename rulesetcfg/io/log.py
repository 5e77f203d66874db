from __future__ import annotations

import json
import os
import time

from . import paths

LIFECYCLE_LOG = "lifecycle.jsonl"


def append_jsonl(filename: str, record: dict, *, feature_guard: bool | None = None) -> None:
    """Append one JSON record to `filename` under the logs directory.

    Callers pass `feature_guard=False` to suppress the write when event
    logging is disabled. Records are written in binary append mode and always
    terminated by a single LF, so lines stay intact across platforms.
    """
    if feature_guard is False:
        return
    base = paths.logs_dir()
    path = os.path.join(base, os.path.basename(filename))
    rec = dict(record)
    rec.setdefault("ts", round(time.time(), 3))
    line = (json.dumps(rec, ensure_ascii=False, sort_keys=True) + "\n").encode("utf-8")
    with open(path, "ab") as f:
        f.write(line)
