"""Tests for text, JSON and rich table rendering."""

import json
from pathlib import Path

from rich.console import Console

from chancheck.findings.models import Issue, Location, Severity
from chancheck.reporting.console import print_issues
from chancheck.reporting.render import filter_by_severity, render_json, render_text


def _issue(path: str, line: int, severity: Severity, rule_id: str = "channel-send-without-select") -> Issue:
    return Issue(
        rule_id=rule_id,
        message="channel send without select statement may block indefinitely",
        location=Location(path=Path(path), line=line, column=2, end_line=line, end_column=9),
        severity=severity,
    )


ISSUES = [
    _issue("a.go", 5, Severity.WARNING),
    _issue("a.go", 4, Severity.INFO, rule_id="unbuffered-channel"),
    _issue("b.go", 7, Severity.WARNING),
]


def test_render_text_no_issues():
    assert render_text([]) == "No issues found!"


def test_render_text_lists_issues_in_order():
    text = render_text(ISSUES)
    lines = text.splitlines()
    assert lines[0] == "Found 3 potential issues:"
    assert lines[1] == ""
    assert lines[2] == "[WARNING] a.go:5:2-9: channel send without select statement may block indefinitely"
    assert lines[3].startswith("[INFO] a.go:4:2-9: ")
    assert lines[4].startswith("[WARNING] b.go:7:2-9: ")


def test_render_json_shape():
    data = json.loads(render_json(ISSUES))
    assert data["total"] == 3
    first = data["issues"][0]
    assert first["severity"] == "WARNING"
    assert first["rule_id"] == "channel-send-without-select"
    assert first["position"] == {
        "filename": "a.go",
        "start_line": 5,
        "start_column": 2,
        "end_line": 5,
        "end_column": 9,
    }


def test_render_json_empty():
    assert json.loads(render_json([])) == {"issues": [], "total": 0}


def test_filter_by_severity_keeps_order():
    kept = filter_by_severity(ISSUES, Severity.WARNING)
    assert [i.location.line for i in kept] == [5, 7]
    assert filter_by_severity(ISSUES, Severity.INFO) == ISSUES


def test_print_issues_table():
    console = Console(record=True, width=160)
    print_issues(ISSUES, analyzed_files=[Path("a.go"), Path("b.go"), Path("c.go")], verbose=True, console=console)
    out = console.export_text()
    assert "a.go" in out
    assert "WARNING" in out
    assert "[unbuffered-channel]" in out
    assert "Files Summary" in out
    assert "Summary" in out
    assert "3 issues" in out
    assert "[Fix]" in out


def test_fix_hints_keep_rule_id():
    console = Console(record=True, width=200)
    print_issues(ISSUES, verbose=True, console=console)
    fix_lines = [line.strip() for line in console.export_text().splitlines() if "[Fix]" in line]
    assert any(line.startswith("[Fix] [unbuffered-channel] Pass a capacity") for line in fix_lines)
    assert any(line.startswith("[Fix] [channel-send-without-select] Wrap the send") for line in fix_lines)


def test_file_header_shows_bracketed_path():
    console = Console(record=True, width=160)
    print_issues([_issue("[gen]/a.go", 3, Severity.WARNING)], console=console)
    assert "[gen]/a.go" in console.export_text()


def test_print_issues_none():
    console = Console(record=True, width=120)
    print_issues([], console=console)
    assert "No issues found!" in console.export_text()
