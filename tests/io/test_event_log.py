from __future__ import annotations

import json

from rulesetcfg.io.log import LIFECYCLE_LOG, append_jsonl


def test_append_jsonl_writes_one_line_per_record(tmp_path):
    append_jsonl(LIFECYCLE_LOG, {"event": "save", "ok": True})
    append_jsonl(LIFECYCLE_LOG, {"event": "load", "source": None})

    raw = (tmp_path / "logs" / LIFECYCLE_LOG).read_bytes()
    assert b"\r\n" not in raw
    lines = raw.decode("utf-8").splitlines()
    assert [json.loads(x)["event"] for x in lines] == ["save", "load"]
    assert all("ts" in json.loads(x) for x in lines)


def test_feature_guard_false_suppresses(tmp_path):
    append_jsonl(LIFECYCLE_LOG, {"event": "save"}, feature_guard=False)
    assert not (tmp_path / "logs" / LIFECYCLE_LOG).exists()


def test_filename_cannot_escape_logs_dir(tmp_path):
    append_jsonl("../outside.jsonl", {"event": "x"})
    assert (tmp_path / "logs" / "outside.jsonl").exists()
    assert not (tmp_path / "outside.jsonl").exists()
