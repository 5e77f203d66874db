from __future__ import annotations

import copy
import logging

import pytest

from configs import migrate as M
from configs.migrate import MIGRATIONS, migrate_config, migration_path
from configs.validate import (
    CONFIG_VERSION,
    LEGACY_VERSION,
    UNVERSIONED,
    default_config,
    validate_config,
)
from tests.helpers.configs import make_legacy_cfg


def _without(cfg: dict, *keys: str) -> dict:
    return {k: v for k, v in cfg.items() if k not in keys}


def test_transition_table_covers_known_versions():
    assert set(MIGRATIONS) == {UNVERSIONED, LEGACY_VERSION, CONFIG_VERSION}


@pytest.mark.parametrize("old", [None, [], "26", 7, {}, {"version": 26}, {"enabledRulesets": ["x"]}])
def test_unversioned_inputs_become_defaults(old):
    assert migration_path(old) == "unversioned"
    assert migrate_config(old) == default_config()


def test_legacy_copies_known_fields_with_coercion():
    old = make_legacy_cfg()
    out = migrate_config(old)

    assert migration_path(old) == "legacy"
    assert out["version"] == CONFIG_VERSION
    assert out["enabledRulesets"] == ["default", "annoyances"]
    assert out["autoReload"] is False
    assert out["showBlockedCount"] is False
    assert out["strictBlockMode"] is False
    assert out["developerMode"] is False
    assert out["hasBroadHostPermissions"] is True
    # not carried forward from the legacy shape
    assert out["features"] == default_config()["features"]
    assert out["siteOverrides"] == default_config()["siteOverrides"]
    assert validate_config(out)


def test_legacy_missing_rulesets_become_empty():
    old = make_legacy_cfg()
    del old["enabledRulesets"]
    assert migrate_config(old)["enabledRulesets"] == []


def test_current_version_shallow_merges_over_defaults():
    old = {
        "version": CONFIG_VERSION,
        "enabledRulesets": ["custom"],
        "autoReload": False,
        "showBlockedCount": True,
        "features": {
            "youtubeFadeSkip": {"enabled": False, "fadeThreshold": 3, "minDurationMs": 4, "debounceMs": 5}
        },
        "extraFromNewerBuild": {"keep": True},
    }
    out = migrate_config(old)
    expected = dict(default_config())
    expected.update(copy.deepcopy(old))
    assert out == expected
    # nested records are replaced whole, not merged
    assert "maxSkipPerVideo" not in out["features"]["youtubeFadeSkip"]
    # fields absent from old come from defaults
    assert out["hasBroadHostPermissions"] is True
    assert out["extraFromNewerBuild"] == {"keep": True}


@pytest.mark.parametrize("version", ["2", "25", "27", "v26", ""])
def test_unknown_version_keeps_only_rulesets(version, caplog):
    old = default_config()
    old.update(version=version, enabledRulesets=["a", "b"], autoReload=False, enabled=False)
    with caplog.at_level(logging.WARNING, logger="configs.migrate"):
        out = migrate_config(old)

    assert migration_path(old) == "fallback"
    assert out["enabledRulesets"] == ["a", "b"]
    assert _without(out, "enabledRulesets") == _without(default_config(), "enabledRulesets")
    assert "unknown config version" in caplog.text


def test_unknown_version_without_rulesets_gets_empty_list():
    out = migrate_config({"version": "9"})
    assert out["enabledRulesets"] == []
    assert out["version"] == CONFIG_VERSION


@pytest.mark.parametrize(
    "x",
    [
        None,
        make_legacy_cfg(),
        {"version": "999", "enabledRulesets": ["z"]},
        dict(default_config(), autoReload=False, enabledRulesets=[]),
        {"version": CONFIG_VERSION, "onlyThis": 1},
    ],
)
def test_migrate_is_idempotent(x):
    once = migrate_config(x)
    assert migrate_config(once) == once
    assert once["version"] == CONFIG_VERSION


def test_result_shares_no_state_with_inputs():
    old = dict(default_config(), enabledRulesets=["mine"])
    old_before = copy.deepcopy(old)
    defaults = default_config()
    defaults_before = copy.deepcopy(defaults)

    out = migrate_config(old, defaults)
    out["enabledRulesets"].append("leak?")
    out["features"]["youtubeFadeSkip"]["fadeThreshold"] = -1
    out["siteOverrides"]["www.youtube.com"]["youtubeFadeSkip"]["enabled"] = False

    assert old == old_before
    assert defaults == defaults_before


def test_explicit_defaults_template_is_used():
    relaxed = default_config("lite")
    assert migrate_config(None, relaxed)["strictBlockMode"] is False
    assert migrate_config({"version": "404"}, relaxed)["strictBlockMode"] is False


def test_failing_transition_degrades_to_fallback(monkeypatch, caplog):
    def boom(old, cfg):
        raise RuntimeError("bad transition")

    monkeypatch.setitem(M.MIGRATIONS, LEGACY_VERSION, boom)
    with caplog.at_level(logging.ERROR, logger="configs.migrate"):
        out = migrate_config(make_legacy_cfg())

    assert out["enabledRulesets"] == ["default", "annoyances"]
    assert out["autoReload"] is True
    assert out["version"] == CONFIG_VERSION
    assert "failed" in caplog.text
