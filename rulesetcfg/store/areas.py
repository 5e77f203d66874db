"""Key-value areas backing the two storage tiers.

An area stores one structured (JSON-shaped) value per string key. `get`
returns None for an absent key; any other failure raises.
"""

from __future__ import annotations

import asyncio
import copy
import json
import re
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from ..io.atomic import atomic_write_json

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


@runtime_checkable
class KeyValueArea(Protocol):
    """Asynchronous read/write of one value per key."""

    async def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None when the key is absent."""

    async def set(self, key: str, value: Any) -> None:
        """Store `value` under `key`, replacing any previous value."""


class MemoryArea:
    """Process-lifetime area; the natural session tier.

    Values are deep-copied on the way in and out, so nothing outside the
    area can alias what is stored.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, key: str) -> Optional[Any]:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileArea:
    """Durable area: one `<key>.json` file per key inside `directory`.

    Writes go through the atomic writer; both directions run in a worker
    thread so a slow disk never blocks the event loop.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"unsupported storage key: {key!r}")
        return self.directory / f"{key}.json"

    def _read(self, key: str) -> Optional[Any]:
        p = self.path_for(key)
        if not p.is_file():
            return None
        return json.loads(p.read_text(encoding="utf-8"))

    def _write(self, key: str, value: Any) -> None:
        atomic_write_json(self.path_for(key), value, indent=2)

    async def get(self, key: str) -> Optional[Any]:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._write, key, value)
