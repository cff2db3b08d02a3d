# Append-only issue collector owned by a single traversal session.

from __future__ import annotations

from typing import Iterable, Iterator

from chancheck.findings.models import Issue


class IssueCollector:
    """
    Ordered sequence of issues in the order the engine discovered them.

    No deduplication, sorting or filtering happens here; that is up to the
    reporting layer.
    """

    def __init__(self) -> None:
        self._issues: list[Issue] = []

    def add(self, issue: Issue) -> None:
        self._issues.append(issue)

    def extend(self, issues: Iterable[Issue]) -> None:
        for issue in issues:
            self.add(issue)

    @property
    def issues(self) -> tuple[Issue, ...]:
        return tuple(self._issues)

    def __iter__(self) -> Iterator[Issue]:
        return iter(self._issues)

    def __len__(self) -> int:
        return len(self._issues)

    def __repr__(self) -> str:
        return f"IssueCollector({len(self._issues)} issue(s))"
