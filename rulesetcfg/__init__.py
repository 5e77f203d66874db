"""rulesetcfg: versioned ruleset configuration with dual-tier persistence.

Public import roots are `rulesetcfg`, `rulesetcfg.errors` and the `configs`
schema package. This module also resolves `__version__` across installs.
"""
from __future__ import annotations

from typing import Any as _Any
from . import errors as errors  # re-export; noqa: F401

from importlib.metadata import version as _pkg_version, PackageNotFoundError


def _version_from_metadata() -> str | None:
    try:
        return _pkg_version("rulesetcfg")
    except PackageNotFoundError:
        return None


__version__ = _version_from_metadata() or "0+unknown"


def __getattr__(name: str) -> _Any:  # PEP 562 lazy exports to avoid import-time cycles
    if name in ("validate_config", "validate_config_verbose", "default_config", "CONFIG_VERSION"):
        # `configs` is a top-level package, not `rulesetcfg.configs`
        from configs import validate as _v

        globals()[name] = getattr(_v, name)
        return globals()[name]
    if name == "migrate_config":
        from configs.migrate import migrate_config as _m

        globals()[name] = _m
        return _m
    if name in ("ConfigLifecycle", "ProcessFlags", "CoalescingGate"):
        from . import engine as _engine

        globals()[name] = getattr(_engine, name)
        return globals()[name]
    if name in ("DualTierStore", "MemoryArea", "JsonFileArea", "KeyValueArea"):
        from . import store as _store

        globals()[name] = getattr(_store, name)
        return globals()[name]
    if name == "build_engine":
        from .bootstrap import build_engine as _b

        globals()[name] = _b
        return _b
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return list(__all__)


# Star-export surface (deterministic ordering).
__all__ = [
    "CONFIG_VERSION",
    "CoalescingGate",
    "ConfigLifecycle",
    "DualTierStore",
    "JsonFileArea",
    "KeyValueArea",
    "MemoryArea",
    "ProcessFlags",
    "__version__",
    "build_engine",
    "default_config",
    "errors",
    "migrate_config",
    "validate_config",
    "validate_config_verbose",
]
