from __future__ import annotations

import errno
import json
import os
import random
import tempfile
import time
from pathlib import Path
from typing import Any, Optional

__all__ = [
    "atomic_write_bytes",
    "atomic_write_json",
    "atomic_replace",
]

# Conservative default on POSIX; harmless on Windows.
_DEFAULT_PERMS = 0o644
_RETRYABLE = {errno.EACCES, errno.EPERM, errno.EBUSY}


def _fsync_dir(path: Path) -> None:
    """Best-effort directory fsync; unsupported on some platforms."""
    try:
        fd = os.open(str(path), os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError:
        pass
    finally:
        os.close(fd)


def atomic_replace(tmp_path: Path, final_path: Path, *, retries: int = 40, backoff_ms: int = 10) -> None:
    """Move *tmp_path* over *final_path*, retrying sharing violations.

    Readers observe either the old file or the new one, never a partial
    write. The temp file is removed when every attempt fails and the last
    error is re-raised.
    """
    final_path.parent.mkdir(parents=True, exist_ok=True)
    last_err: Optional[BaseException] = None
    delay = backoff_ms / 1000.0

    for _ in range(retries):
        try:
            os.replace(str(tmp_path), str(final_path))
            _fsync_dir(final_path.parent)
            return
        except PermissionError as e:
            last_err = e
        except OSError as e:
            last_err = e
            if e.errno not in _RETRYABLE:
                break
        time.sleep(delay + random.uniform(0, delay * 0.25))
        delay = min(delay * 1.5, 0.25)

    try:
        if tmp_path.exists():
            tmp_path.unlink()
    finally:
        if last_err:
            raise last_err


def _make_tmp(final_path: Path) -> Path:
    final_path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        prefix=final_path.name + ".",
        dir=str(final_path.parent),
        delete=False,
    ) as tf:
        return Path(tf.name)


def atomic_write_bytes(final_path: Path | str, data: bytes) -> None:
    """Write to a sibling temp file, fsync, then atomically replace *final_path*."""
    final = Path(final_path)
    tmp = _make_tmp(final)
    try:
        with open(tmp, "wb", buffering=0) as f:
            f.write(data)
            os.fsync(f.fileno())
        try:
            os.chmod(tmp, final.stat().st_mode if final.exists() else _DEFAULT_PERMS)
        except OSError:
            pass
        atomic_replace(tmp, final)
    except Exception:
        try:
            if tmp.exists():
                tmp.unlink()
        finally:
            raise


def atomic_write_json(
    final_path: Path | str,
    obj: Any,
    *,
    sort_keys: bool = True,
    indent: Optional[int] = None,
) -> None:
    """Atomically write *obj* as UTF-8 JSON terminated by a single LF."""
    separators = (",", ":") if indent is None else (",", ": ")
    payload = json.dumps(obj, sort_keys=sort_keys, indent=indent, separators=separators, ensure_ascii=False)
    atomic_write_bytes(final_path, (payload + "\n").encode("utf-8"))
