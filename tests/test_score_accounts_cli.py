"""
Tests for the score_accounts command-line tool.
"""

from __future__ import annotations

import json

from backend_fakecheck.tools.score_accounts import main

CSV_TEXT = (
    "username,email,email_verified,phone_verified,created_at\n"
    "alice_w,alice@gmail.com,true,true,2020-01-01\n"
    "bot42,x@mailinator.com,false,false,2020-01-01\n"
)


def test_cli_prints_summary_and_writes_csv(tmp_path, capsys):
    src = tmp_path / "accounts.csv"
    src.write_text(CSV_TEXT, encoding="utf-8")
    out = tmp_path / "flagged.csv"

    assert main([str(src), "--flagged-csv", str(out)]) == 0

    printed = capsys.readouterr().out
    assert "2 accounts processed, 1 flagged (50.00%)" in printed
    assert "[HIGH] bot42" in printed
    assert out.read_text(encoding="utf-8").splitlines()[1].startswith('"bot42"')


def test_cli_json_output(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_FORMAT", "json")
    src = tmp_path / "accounts.json"
    src.write_text(json.dumps([{"username": "alice_w", "email": "a@gmail.com"}]), encoding="utf-8")

    assert main([str(src), "--json"]) == 0

    captured = capsys.readouterr()
    data = json.loads(captured.out)
    assert data["total"] == 1
    assert data["flagged"] == []
    assert data["clean"][0]["username"] == "alice_w"
    assert "batch_scored" in captured.err


def test_cli_unreadable_input(tmp_path, capsys):
    assert main([str(tmp_path / "missing.csv")]) == 1
    assert main([str(tmp_path / "notes.txt")]) == 1
    assert "error:" in capsys.readouterr().err
