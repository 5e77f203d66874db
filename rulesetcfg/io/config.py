from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from ..errors import ConfigError

# Relative default searched under the current working directory
DEFAULT_REL = Path("configs") / "rulesetcfg.yaml"


@dataclass(frozen=True)
class HostSettings:
    """How the host wires the lifecycle engine (not the ruleset config itself)."""

    flavor: Optional[str] = None
    storage_key: str = "rulesetConfig"
    local_dir: Optional[str] = None
    event_log: bool = False


_TYPES: Dict[str, Tuple[type, ...]] = {
    "flavor": (str, type(None)),
    "storage_key": (str,),
    "local_dir": (str, type(None)),
    "event_log": (bool,),
}


# ---- small helpers --------------------------------------------------------

def _parse_bool_env(v: str) -> bool:
    return str(v).strip().lower() in {"1", "true", "yes", "on"}


def _apply_env_overrides(settings: HostSettings, env: Mapping[str, str]) -> HostSettings:
    """
    Env wins over the file:
      - RULESETCFG_FLAVOR      -> flavor
      - RULESETCFG_LOCAL_DIR   -> local_dir
      - RULESETCFG_EVENT_LOG   -> event_log (1/true/yes/on)
    """
    changes: Dict[str, Any] = {}
    if env.get("RULESETCFG_FLAVOR"):
        changes["flavor"] = env["RULESETCFG_FLAVOR"].strip()
    if env.get("RULESETCFG_LOCAL_DIR"):
        changes["local_dir"] = env["RULESETCFG_LOCAL_DIR"]
    if env.get("RULESETCFG_EVENT_LOG") is not None:
        changes["event_log"] = _parse_bool_env(env["RULESETCFG_EVENT_LOG"])
    return replace(settings, **changes) if changes else settings


def _from_mapping(data: Mapping[str, Any], source: str) -> HostSettings:
    known = {f.name for f in fields(HostSettings)}
    unknown = sorted(k for k in data if k not in known)
    if unknown:
        raise ConfigError(f"{source}: unknown key(s): {', '.join(unknown)}")
    for k, v in data.items():
        if not isinstance(v, _TYPES[k]):
            raise ConfigError(f"{source}: {k} has wrong type {type(v).__name__}")
    if "storage_key" in data and not data["storage_key"].strip():
        raise ConfigError(f"{source}: storage_key must be non-empty")
    return HostSettings(**dict(data))


# ---- discovery ------------------------------------------------------------

def discover_settings_path(
    explicit: Optional[str],
    cwd: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Tuple[Optional[Path], str]:
    """Deterministic settings discovery.

    Order: explicit path, $RULESETCFG_CONFIG, ./configs/rulesetcfg.yaml.
    Returns (path or None, source tag). Tags: 'explicit', 'explicit-missing',
    'env:RULESETCFG_CONFIG', 'cwd:configs/rulesetcfg.yaml', 'none'.
    """
    cwd = cwd or Path.cwd()
    env = os.environ if env is None else env

    if explicit:
        p = Path(os.path.expandvars(explicit)).expanduser()
        return (p.resolve(), "explicit") if p.is_file() else (p, "explicit-missing")

    cenv = env.get("RULESETCFG_CONFIG")
    if cenv:
        p = Path(os.path.expandvars(cenv)).expanduser()
        if p.is_file():
            return p.resolve(), "env:RULESETCFG_CONFIG"

    p = cwd / DEFAULT_REL
    if p.is_file():
        return p.resolve(), "cwd:configs/rulesetcfg.yaml"
    return None, "none"


# ---- loader ---------------------------------------------------------------

def load_settings(path: str | Path | None = None, env: Optional[Mapping[str, str]] = None) -> HostSettings:
    """
    Load host settings from YAML; a missing path or file yields defaults.
    Env overrides are applied last. Raises ConfigError on malformed files.
    """
    env = os.environ if env is None else env
    settings = HostSettings()
    if path:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            data = {}
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: invalid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: top level must be a mapping")
        settings = _from_mapping(data, str(path))
    return _apply_env_overrides(settings, env)
