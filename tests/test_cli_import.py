from __future__ import annotations

import json
import sqlite3
import sys
from typing import Any, List

import pytest


def _run_cli_with_args(args_list: List[str]) -> None:
    """Run cli.py main() with provided argv in-process (no subprocess)."""
    argv_backup = sys.argv[:]
    try:
        sys.argv = ["cli.py"] + args_list
        # Import fresh to ensure clean parser each time
        if "cli" in sys.modules:
            del sys.modules["cli"]
        import cli  # type: ignore
        try:
            cli.main()  # type: ignore[attr-defined]
        except SystemExit as e:
            code = int(getattr(e, "code", 0) or 0)
            if code not in (0, None):
                raise
    finally:
        sys.argv = argv_backup


@pytest.fixture(autouse=True)
def _fixed_run_id(monkeypatch):
    # main() only generates RUN_ID when unset; monkeypatch removes it afterwards
    monkeypatch.setenv("RUN_ID", "cli-test-run")


@pytest.fixture
def stub_service(monkeypatch):
    """Point the LLM client at a canned reply; no network."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("LLM_TRACE", "false")
    import services.llm_client as llm

    replies: List[Any] = []

    def _fake(self, **kwargs):
        return replies.pop(0)

    monkeypatch.setattr(llm.LLMClient, "generate_structured", _fake)
    return replies


def test_cli_sample_import_writes_db(tmp_path, stub_service, capsys):
    stub_service.append({"friends": [
        {"name": "张总", "gender": "女", "birth_date": "1994-01-01", "company": "腾讯", "title": "技术总监", "phone": "13800138000", "wechat": "zhangzong2024"},
        {"name": "李工", "gender": "男", "birth_date": "1998-01-01", "company": "阿里云", "title": "架构师", "phone": "15900159000", "wechat": "lee_arch"},
        {"name": "陈经理", "gender": "女", "birth_date": "1991-01-01", "company": "美团", "title": "产品经理", "phone": "18800188000", "wechat": "chenpm2024"},
    ]})
    db_path = tmp_path / "cli.db"
    _run_cli_with_args(["--db", str(db_path), "import", "--sample", "--json"])

    out = capsys.readouterr().out
    result = json.loads(out.strip().splitlines()[-1])
    assert result["count"] == 3
    assert result["insertIds"] == [1, 2, 3]

    conn = sqlite3.connect(str(db_path))
    try:
        cur = conn.cursor()
        cur.execute("SELECT name, gender, wechat FROM friends ORDER BY id")
        assert cur.fetchall() == [
            ("张总", "female", "zhangzong2024"),
            ("李工", "male", "lee_arch"),
            ("陈经理", "female", "chenpm2024"),
        ]
    finally:
        conn.close()

    _run_cli_with_args(["--db", str(db_path), "show", "--ids", "2"])
    shown = json.loads(capsys.readouterr().out)
    assert [r["name"] for r in shown] == ["李工"]


def test_cli_dry_run_writes_nothing(tmp_path, stub_service, capsys):
    stub_service.append([{"name": "张三", "gender": "male", "birth_date": "1996-01-01"}])
    db_path = tmp_path / "dry.db"
    _run_cli_with_args(["--db", str(db_path), "import", "--text", "张三，男，30岁", "--dry-run"])
    assert "Dry run" in capsys.readouterr().out
    assert not db_path.exists()


def test_cli_schema_violation_exits_nonzero(tmp_path, stub_service, capsys):
    stub_service.append([{"gender": "male", "birth_date": "1996-01-01"}])
    db_path = tmp_path / "bad.db"
    with pytest.raises(SystemExit) as exc:
        _run_cli_with_args(["--db", str(db_path), "import", "--text", "someone"])
    assert exc.value.code == 1
    assert "Offending payload" in capsys.readouterr().out
    conn = sqlite3.connect(str(db_path))
    try:
        assert conn.execute("SELECT COUNT(*) FROM friends").fetchone()[0] == 0
    finally:
        conn.close()


def test_cli_missing_api_key_exits_nonzero(tmp_path, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    db_path = tmp_path / "nokey.db"
    with pytest.raises(SystemExit) as exc:
        _run_cli_with_args(["--db", str(db_path), "import", "--text", ""])
    assert exc.value.code == 1
    assert not db_path.exists()


def test_cli_missing_input_file_exits_nonzero(tmp_path, stub_service):
    with pytest.raises(SystemExit) as exc:
        _run_cli_with_args(["--db", str(tmp_path / "x.db"), "import", "--file", str(tmp_path / "absent.txt")])
    assert exc.value.code == 1


def test_cli_keeps_existing_run_id(tmp_path, stub_service):
    import os

    stub_service.append([])
    _run_cli_with_args(["--db", str(tmp_path / "r.db"), "import", "--text", "nobody here"])
    assert os.environ["RUN_ID"] == "cli-test-run"
