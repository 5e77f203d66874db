"""
Schema knowledge for the ruleset configuration.

Public API:
    validate_config(candidate) -> bool
    validate_config_verbose(candidate) -> (ok, errors)
    default_config(flavor=None) -> dict

- Never raises; a False result means "do not migrate or persist this object".
- Checks only the load-bearing subset of the schema, so forward-compatible
  extra fields (and the whole `siteOverrides` tree) pass through untouched.
- The default template is private; callers always get a deep copy.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional, Tuple

__all__ = [
    "CONFIG_VERSION",
    "LEGACY_VERSION",
    "UNVERSIONED",
    "DEFAULT_FLAVOR",
    "RELAXED_FLAVORS",
    "default_config",
    "strict_block_mode_for",
    "validate_config",
    "validate_config_verbose",
]


# ------------------------------
# Versions
# ------------------------------

# Bump whenever the stored shape changes, then add a transition in configs/migrate.py.
CONFIG_VERSION = "26"
# The only older shape with a dedicated transition.
LEGACY_VERSION = "1"
# Stand-in for objects that carry no string version at all.
UNVERSIONED = "0"

DEFAULT_FLAVOR = "chromium"
# Host flavors that default to non-strict blocking.
RELAXED_FLAVORS = frozenset({"lite"})


# ------------------------------
# Defaults
# ------------------------------

_YOUTUBE_SITE_OVERRIDE: Dict[str, Any] = {
    "enabled": True,
    "fadeThreshold": 300,
    "minDurationMs": 600,
    "throttleMs": 0.0,             # no throttling, skip every detected ad
    "MidrollAdSkip": True,
    "showAdsOnVideos": False,
    "PremiumClientSharedConfig__enable_att_context_processor": True,
    "PremiumClientSharedConfig__enable_att_for_get_download_action_on_web_client": True,
    "PremiumClientSharedConfig__enable_att_for_get_premium_on_web_client": True,
    "ab_det_apb_b": False,
    "ab_det_el_h": False,
    "ab_det_pp_ov": False,
    "ab_det_ubo_a": False,
    "L1_DRM": False,
    "L3_DRM": False,
    "AdDetection": False,
    "ABtesting": False,
}

_TEMPLATE: Dict[str, Any] = {
    "version": CONFIG_VERSION,
    "enabledRulesets": ["default"],
    "autoReload": True,
    "showBlockedCount": True,
    "enabled": True,
    "strictBlockMode": True,       # replaced per flavor in default_config()
    # Release builds are expected to flip this through host logic.
    "developerMode": True,
    "hasBroadHostPermissions": True,
    "features": {
        "youtubeFadeSkip": {
            "enabled": True,
            "fadeThreshold": 10,
            "minDurationMs": 300,  # fade must last at least this long
            "debounceMs": 1,       # ignore repeat detections inside this window
            "maxSkipPerVideo": 1000,
        },
    },
    "siteOverrides": {
        "www.youtube.com": {
            "youtubeFadeSkip": _YOUTUBE_SITE_OVERRIDE,
        },
    },
}


def strict_block_mode_for(flavor: Optional[str]) -> bool:
    """The single flavor-dependent default."""
    return (flavor or DEFAULT_FLAVOR) not in RELAXED_FLAVORS


def default_config(flavor: Optional[str] = None) -> Dict[str, Any]:
    """Return an independent deep copy of the default configuration."""
    cfg = copy.deepcopy(_TEMPLATE)
    cfg["strictBlockMode"] = strict_block_mode_for(flavor)
    return cfg


# ------------------------------
# Type predicates
# ------------------------------

def _is_obj(x: Any) -> bool:
    return isinstance(x, dict)


def _is_num(x: Any) -> bool:
    # bool is an int subclass; stored toggles must not count as numbers
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _err(errors: List[str], path: str, msg: str) -> None:
    errors.append(f"{path} {msg}")


# ------------------------------
# Main validator
# ------------------------------

def _first_error(candidate: Any) -> Optional[str]:
    errors: List[str] = []

    if not _is_obj(candidate):
        _err(errors, "<root>", "must be an object")
        return errors[0]
    if not isinstance(candidate.get("version"), str):
        _err(errors, "version", "must be a string")
    elif not isinstance(candidate.get("enabledRulesets"), list):
        _err(errors, "enabledRulesets", "must be a list")
    elif not isinstance(candidate.get("autoReload"), bool):
        _err(errors, "autoReload", "must be a bool")
    elif not isinstance(candidate.get("showBlockedCount"), bool):
        _err(errors, "showBlockedCount", "must be a bool")
    elif not _is_obj(candidate.get("features")):
        _err(errors, "features", "must be an object")
    if errors:
        return errors[0]

    yf = candidate["features"].get("youtubeFadeSkip")
    if not _is_obj(yf):
        _err(errors, "features.youtubeFadeSkip", "must be an object")
    elif not isinstance(yf.get("enabled"), bool):
        _err(errors, "features.youtubeFadeSkip.enabled", "must be a bool")
    else:
        for name in ("fadeThreshold", "minDurationMs", "debounceMs"):
            if not _is_num(yf.get(name)):
                _err(errors, f"features.youtubeFadeSkip.{name}", "must be a number")
                break
    return errors[0] if errors else None


def validate_config_verbose(candidate: Any) -> Tuple[bool, List[str]]:
    """
    Validate `candidate`, returning (ok, errors).

    Checks short-circuit on the first failure, so `errors` holds at most one
    "<field path> <constraint>" message.
    """
    try:
        msg = _first_error(candidate)
    except Exception as e:  # noqa: BLE001 - exotic dict subclasses
        msg = f"<root> unreadable ({type(e).__name__})"
    if msg is None:
        return True, []
    return False, [msg]


def validate_config(candidate: Any) -> bool:
    ok, _ = validate_config_verbose(candidate)
    return ok
