from __future__ import annotations

from pathlib import Path

from rulesetcfg.io import paths


def test_logs_dir_prefers_env(monkeypatch, tmp_path):
    target = tmp_path / "custom-logs"
    monkeypatch.setenv("RULESETCFG_LOG_DIR", str(target))

    resolved = Path(paths.logs_dir())

    assert resolved == target.resolve()
    assert target.exists()


def test_logs_dir_defaults_to_cwd(monkeypatch, tmp_path):
    monkeypatch.delenv("RULESETCFG_LOG_DIR", raising=False)
    monkeypatch.chdir(tmp_path)

    assert paths.logs_dir() == (tmp_path / ".logs").resolve()


def test_store_dir_prefers_env(monkeypatch, tmp_path):
    target = tmp_path / "durable"
    monkeypatch.setenv("RULESETCFG_STORE_DIR", str(target))
    assert paths.store_dir() == target.resolve()
    assert target.is_dir()


def test_store_dir_defaults_to_cwd_data(monkeypatch, tmp_path):
    monkeypatch.delenv("RULESETCFG_STORE_DIR", raising=False)
    monkeypatch.chdir(tmp_path)
    assert paths.store_dir() == (tmp_path / ".data" / "store").resolve()


def test_temp_root_override(monkeypatch, tmp_path):
    monkeypatch.setenv("RULESETCFG_TMP", str(tmp_path))
    assert paths.temp_root() == tmp_path
