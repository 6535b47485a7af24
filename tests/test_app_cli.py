from __future__ import annotations

import io
import json
import sys

import pytest

import app
import settings
from core.models import FilterResult

RULES = [
    {"pattern": "flagme", "action": "flag"},
    {"pattern": "badword", "action": "block"},
    {"pattern": "(", "action": "replace", "replacement": "#"},
]


@pytest.fixture(autouse=True)
def _config(monkeypatch) -> None:
    monkeypatch.setattr(settings, "FILTER_SETTINGS", {"enabled": True, "max_message_length": 80})
    monkeypatch.setattr(settings, "RULES_CONFIG", RULES)
    monkeypatch.setattr(settings, "LOGGING", {})
    monkeypatch.setenv("COLUMNS", "200")


def test_check_prints_result_json(capsys) -> None:
    exit_code = app.main(["check", "a(b(c"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == {
        "ok": True,
        "text": "a#b#c",
        "blocked": False,
        "flagged": False,
    }


def test_check_exits_non_zero_when_blocked(capsys) -> None:
    assert app.main(["check", "flagme badword"]) == 1
    assert '"blocked": true' in capsys.readouterr().out


def test_scan_reports_verdict_codes(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("hello\nflagme\nbadword\n   \n"))

    assert app.main(["scan"]) == 1

    out = capsys.readouterr().out
    for code in ("OK", "FLAGGED", "MESSAGE_BLOCKED", "EMPTY_AFTER_FILTER"):
        assert code in out


def test_rules_lists_match_modes(capsys) -> None:
    assert app.main(["rules", "--test", "flagme"]) == 0

    out = capsys.readouterr().out
    assert "regex" in out
    assert "literal" in out


def test_verdict_code_mapping() -> None:
    assert app.verdict_code(FilterResult(ok=False, text="", blocked=True, flagged=True)) == "MESSAGE_BLOCKED"
    assert app.verdict_code(FilterResult(ok=True, text="***", blocked=False, flagged=False)) == "OK"
    assert app.verdict_code(FilterResult(ok=True, text=" ", blocked=False, flagged=False)) == "EMPTY_AFTER_FILTER"
    assert app.verdict_code(FilterResult(ok=True, text="hi", blocked=False, flagged=True)) == "FLAGGED"


def test_log_file_handler_resolves_relative_path(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(settings, "PROJECT_ROOT", str(tmp_path))

    handler = app._log_file_handler({"path": "logs/filter.log", "max_bytes": 1024, "backup_count": 2})
    try:
        assert handler.baseFilename == str(tmp_path / "logs" / "filter.log")
        assert handler.maxBytes == 1024
        assert handler.backupCount == 2
        assert (tmp_path / "logs" / "filter.log").exists()
    finally:
        handler.close()
