"""
Version migration for stored ruleset configurations.

Every stored object is moved straight to CONFIG_VERSION by one transition
looked up in MIGRATIONS by its `version` string. Unknown versions take the
fallback transition. Adding a schema version means adding one entry here and
bumping CONFIG_VERSION in configs/validate.py.
"""
from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from .validate import CONFIG_VERSION, LEGACY_VERSION, UNVERSIONED, default_config

__all__ = ["MIGRATIONS", "migrate_config", "migration_path", "source_version"]

logger = logging.getLogger(__name__)

Transition = Callable[[Mapping[str, Any], Dict[str, Any]], Dict[str, Any]]


def _rulesets(old: Mapping[str, Any]) -> list:
    v = old.get("enabledRulesets")
    if isinstance(v, (list, tuple)):
        return [copy.deepcopy(x) for x in v]
    return []


# ------------------------------
# Transitions (old, defaults_clone) -> cfg
# ------------------------------

def _from_unversioned(old: Mapping[str, Any], cfg: Dict[str, Any]) -> Dict[str, Any]:
    # Nothing worth preserving.
    return cfg


def _from_legacy(old: Mapping[str, Any], cfg: Dict[str, Any]) -> Dict[str, Any]:
    cfg["enabledRulesets"] = _rulesets(old)
    for key in (
        "autoReload",
        "showBlockedCount",
        "strictBlockMode",
        "developerMode",
        "hasBroadHostPermissions",
    ):
        cfg[key] = bool(old.get(key))
    return cfg


def _from_current(old: Mapping[str, Any], cfg: Dict[str, Any]) -> Dict[str, Any]:
    # Shallow on purpose: a stored nested record replaces the default record whole.
    merged = dict(cfg)
    merged.update(copy.deepcopy(dict(old)))
    return merged


def _fallback(old: Mapping[str, Any], cfg: Dict[str, Any]) -> Dict[str, Any]:
    cfg["enabledRulesets"] = _rulesets(old)
    return cfg


MIGRATIONS: Dict[str, Transition] = {
    UNVERSIONED: _from_unversioned,
    LEGACY_VERSION: _from_legacy,
    CONFIG_VERSION: _from_current,
}

_PATH_NAMES = {
    UNVERSIONED: "unversioned",
    LEGACY_VERSION: "legacy",
    CONFIG_VERSION: "current",
}


# ------------------------------
# Public API
# ------------------------------

def source_version(old: Any) -> str:
    if isinstance(old, Mapping) and isinstance(old.get("version"), str):
        return old["version"]
    return UNVERSIONED


def migration_path(old: Any) -> str:
    """Name of the transition `old` would take: unversioned|legacy|current|fallback."""
    return _PATH_NAMES.get(source_version(old), "fallback")


def migrate_config(old: Any, defaults: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Return a CONFIG_VERSION object built from `old`.

    `defaults` is the template to start from (deep-copied, never mutated);
    when omitted the default flavor's template is used. Never raises: any
    failure inside a transition degrades to the fallback, and a failing
    fallback degrades to plain defaults.
    """
    base = copy.deepcopy(dict(defaults)) if defaults is not None else default_config()
    frm = source_version(old)
    src: Mapping[str, Any] = old if isinstance(old, Mapping) else {}

    transition = MIGRATIONS.get(frm)
    if transition is None:
        logger.warning(
            "unknown config version %r; keeping enabledRulesets only", frm
        )
        transition = _fallback

    try:
        cfg = transition(src, copy.deepcopy(base))
    except Exception:
        logger.exception("migration from version %r failed; using fallback", frm)
        try:
            cfg = _fallback(src, copy.deepcopy(base))
        except Exception:
            cfg = copy.deepcopy(base)

    cfg["version"] = CONFIG_VERSION
    return cfg
