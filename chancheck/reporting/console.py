# Rich console output: issue tables grouped by file for terminal display.

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from chancheck.findings.models import Issue, Severity


# Remediation hints per rule (shown with --verbose)
RULE_REMEDIATIONS: dict[str, str] = {
    "channel-send-without-select": (
        "Wrap the send in a select with a default case or a ctx.Done() case: "
        "select { case ch <- v: case <-ctx.Done(): return ctx.Err() }."
    ),
    "unbuffered-channel": (
        "Pass a capacity when the sender must not wait for the receiver: "
        "make(chan T, n). Keep it unbuffered only when a handoff is intended."
    ),
}

SEVERITY_STYLE = {
    Severity.WARNING: "bold yellow",
    Severity.INFO: "bold blue",
}

DEFAULT_SEVERITY_STYLE = "bold white"


def _severity_style(severity: Severity) -> str:
    return SEVERITY_STYLE.get(severity, DEFAULT_SEVERITY_STYLE)


def print_issues(
    issues: Sequence[Issue],
    analyzed_files: Optional[Sequence[Path]] = None,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> None:
    """
    Print issues grouped by file, one table per file, colored by severity.
    If verbose, shows remediation hints. If analyzed_files is provided, also
    shows a per-file summary table (clean vs flagged).
    """
    if console is None:
        console = Console()

    if not issues:
        if analyzed_files:
            _print_file_summary_table([], analyzed_files, console)
        console.print(
            Panel(
                "[green]No issues found![/green]",
                title="chancheck",
                border_style="green",
                box=box.ROUNDED,
            )
        )
        return

    # Group by file path, keeping discovery order within each file
    by_file: dict[str, list[Issue]] = {}
    for issue in issues:
        by_file.setdefault(str(issue.location.path), []).append(issue)

    for path in sorted(by_file):
        console.print()
        console.print(Panel(
            f"[bold cyan]{escape(path)}[/bold cyan]",
            box=box.SIMPLE_HEAD,
            border_style="blue",
            padding=(0, 1),
        ))

        table = Table(
            show_header=True,
            header_style="bold magenta",
            box=box.SIMPLE,
            padding=(0, 1),
            expand=False,
        )
        table.add_column("Line", justify="right", style="dim", width=5)
        table.add_column("Col", justify="right", style="dim", width=4)
        table.add_column("Severity", width=9)
        table.add_column("Rule", width=29)
        table.add_column("Message", style="white")

        for issue in by_file[path]:
            loc = issue.location
            table.add_row(
                str(loc.line),
                str(loc.column),
                Text(issue.severity.value, style=_severity_style(issue.severity)),
                Text(f"[{issue.rule_id}]", style="dim"),
                issue.message,
            )
        console.print(table)

        if verbose:
            seen_rules: set[str] = set()
            for issue in by_file[path]:
                if issue.rule_id in seen_rules:
                    continue
                seen_rules.add(issue.rule_id)
                hint = RULE_REMEDIATIONS.get(issue.rule_id)
                if hint:
                    tag = escape(f"[{issue.rule_id}]")
                    console.print(f"  [dim][Fix][/dim] {tag} {hint}")
            console.print()

    if analyzed_files:
        _print_file_summary_table(issues, analyzed_files, console)

    _print_summary(issues, console)


def _print_file_summary_table(
    issues: Sequence[Issue],
    analyzed_files: Sequence[Path],
    console: Console,
) -> None:
    by_path: dict[str, int] = {}
    for issue in issues:
        key = str(issue.location.path)
        by_path[key] = by_path.get(key, 0) + 1

    table = Table(
        title="Files Summary",
        show_header=True,
        header_style="bold cyan",
        box=box.ROUNDED,
        padding=(0, 1),
    )
    table.add_column("File", style="white")
    table.add_column("Status", width=8)
    table.add_column("Issues", justify="right", width=6)

    for p in sorted(analyzed_files, key=lambda p: (str(p) not in by_path, str(p))):
        count = by_path.get(str(p), 0)
        status = Text("FLAGGED", style="bold yellow") if count else Text("OK", style="bold green")
        table.add_row(str(p), status, str(count))

    console.print()
    console.print(Panel(table, border_style="cyan", box=box.ROUNDED))


def _print_summary(issues: Sequence[Issue], console: Console) -> None:
    by_severity: dict[Severity, int] = {}
    for issue in issues:
        by_severity[issue.severity] = by_severity.get(issue.severity, 0) + 1

    total = len(issues)
    parts = [f"[bold]{total} issue{'s' if total != 1 else ''}[/bold]"]
    for sev in sorted(by_severity, key=lambda s: s.rank, reverse=True):
        parts.append(f"[{_severity_style(sev)}]{by_severity[sev]} {sev.value.lower()}[/]")

    console.print()
    console.print(
        Panel(
            " | ".join(parts),
            title="Summary",
            border_style="yellow" if total > 0 else "green",
            box=box.ROUNDED,
        )
    )
