# Plain text and JSON rendering of issues, plus severity filtering.

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Sequence

from pydantic import BaseModel

from chancheck.findings.models import Issue, Severity


class OutputFormat(str, Enum):
    TEXT = "txt"
    JSON = "json"
    TABLE = "table"


class JSONPosition(BaseModel):
    filename: str
    start_line: int
    start_column: int
    end_line: int
    end_column: int


class JSONIssue(BaseModel):
    severity: Severity
    message: str
    rule_id: str
    position: JSONPosition


class JSONOutput(BaseModel):
    issues: List[JSONIssue]
    total: int


def filter_by_severity(issues: Iterable[Issue], minimum: Severity) -> list[Issue]:
    """Keep issues at or above minimum, preserving order."""
    return [issue for issue in issues if issue.severity.at_least(minimum)]


def render_text(issues: Sequence[Issue]) -> str:
    """
    Render issues one per line: "[SEVERITY] file:line:col-endcol: message".
    """
    if not issues:
        return "No issues found!"
    lines = [f"Found {len(issues)} potential issues:", ""]
    for issue in issues:
        lines.append(f"[{issue.severity.value}] {issue.location}: {issue.message}")
    return "\n".join(lines)


def _json_issue(issue: Issue) -> JSONIssue:
    loc = issue.location
    return JSONIssue(
        severity=issue.severity,
        message=issue.message,
        rule_id=issue.rule_id,
        position=JSONPosition(
            filename=str(loc.path),
            start_line=loc.line,
            start_column=loc.column,
            end_line=loc.end_line if loc.end_line is not None else loc.line,
            end_column=loc.end_column if loc.end_column is not None else loc.column,
        ),
    )


def render_json(issues: Sequence[Issue]) -> str:
    """Render issues as an indented JSON document with a total count."""
    output = JSONOutput(issues=[_json_issue(i) for i in issues], total=len(issues))
    return output.model_dump_json(indent=2)
