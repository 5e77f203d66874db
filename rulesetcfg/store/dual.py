"""Dual-tier store adapter: a session area and a local area behind one handle.

Pure key/value I/O. Absent keys read as None; every other failure from an
area surfaces as StorageReadError or StorageWriteError with the original
exception chained.
"""

from __future__ import annotations

from typing import Any, Optional

from ..errors import StorageReadError, StorageWriteError
from .areas import KeyValueArea

SESSION = "session"
LOCAL = "local"


class DualTierStore:
    def __init__(self, session: KeyValueArea, local: KeyValueArea):
        self.session = session
        self.local = local

    async def _read(self, area: KeyValueArea, tier: str, key: str) -> Optional[Any]:
        try:
            return await area.get(key)
        except Exception as e:
            raise StorageReadError(
                f"{tier} read of {key!r} failed: {type(e).__name__}: {e}", tier=tier, key=key
            ) from e

    async def _write(self, area: KeyValueArea, tier: str, key: str, value: Any) -> None:
        try:
            await area.set(key, value)
        except Exception as e:
            raise StorageWriteError(
                f"{tier} write of {key!r} failed: {type(e).__name__}: {e}", tier=tier, key=key
            ) from e

    async def read_session(self, key: str) -> Optional[Any]:
        return await self._read(self.session, SESSION, key)

    async def write_session(self, key: str, value: Any) -> None:
        await self._write(self.session, SESSION, key, value)

    async def read_local(self, key: str) -> Optional[Any]:
        return await self._read(self.local, LOCAL, key)

    async def write_local(self, key: str, value: Any) -> None:
        await self._write(self.local, LOCAL, key, value)

    async def write_both(self, key: str, value: Any) -> None:
        """Write the same value to session then local; stops at the first failure."""
        await self.write_session(key, value)
        await self.write_local(key, value)
