# tests/conftest.py
from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_dirs(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """
    Keep every test off the working tree: logs, the local store and temp files
    resolve under tmp_path, and host env overrides start unset.
    """
    monkeypatch.setenv("RULESETCFG_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("RULESETCFG_STORE_DIR", str(tmp_path / "store"))
    monkeypatch.setenv("RULESETCFG_TMP", str(tmp_path / "tmp"))
    for name in ("RULESETCFG_FLAVOR", "RULESETCFG_LOCAL_DIR", "RULESETCFG_EVENT_LOG", "RULESETCFG_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    yield
