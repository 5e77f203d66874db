"""Wire a ConfigLifecycle from host settings with the bundled storage areas."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .engine import ConfigLifecycle
from .io import paths
from .io.config import HostSettings
from .store import DualTierStore, JsonFileArea, KeyValueArea, MemoryArea


def build_engine(settings: HostSettings, *, session: Optional[KeyValueArea] = None) -> ConfigLifecycle:
    """
    Session tier: `session` if given, else a fresh MemoryArea (process lifetime).
    Local tier: JsonFileArea under settings.local_dir, else paths.store_dir().
    """
    local_dir = Path(settings.local_dir) if settings.local_dir else paths.store_dir()
    store = DualTierStore(session if session is not None else MemoryArea(), JsonFileArea(local_dir))
    return ConfigLifecycle(
        store,
        flavor=settings.flavor,
        key=settings.storage_key,
        event_log=settings.event_log,
    )
