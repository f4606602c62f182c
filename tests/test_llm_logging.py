from __future__ import annotations

import json

from utils.llm_logger import log_call, usage_for_run


def test_llm_trace_writes_jsonl(tmp_path, monkeypatch):
    log_file = tmp_path / "llm_calls.jsonl"
    monkeypatch.setenv("LLM_TRACE", "true")
    monkeypatch.setenv("LLM_LOG_PATH", str(log_file))
    monkeypatch.setenv("RUN_ID", "test-run-123")

    log_call(
        caller="unit.test",
        provider="openai",
        model="gpt-x",
        operation="friend_extraction",
        prompt_name="demo",
        prompt_hash="abc",
        duration_ms=42,
        status="ok",
        usage={"total_tokens": 10},
        extras={"records": 3},
    )
    log_call(caller="unit.test", provider="openai", model="gpt-x", operation="friend_extraction", usage={"total_tokens": 5})

    lines = log_file.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    rec = json.loads(lines[0])
    assert rec["caller"] == "unit.test"
    assert rec["operation"] == "friend_extraction"
    assert rec["run_id"] == "test-run-123"
    assert rec["extras"] == {"records": 3}
    assert usage_for_run("test-run-123") == {"openai": {"calls": 2, "tokens": 15}}


def test_trace_disabled_writes_nothing(tmp_path, monkeypatch):
    log_file = tmp_path / "llm_calls.jsonl"
    monkeypatch.setenv("LLM_TRACE", "false")
    monkeypatch.setenv("LLM_LOG_PATH", str(log_file))
    log_call(caller="unit.test", provider="openai", model=None, operation="friend_extraction")
    assert not log_file.exists()
