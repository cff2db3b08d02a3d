from __future__ import annotations

"""
Typer CLI entry point and orchestration of the analysis pipeline.

The CLI:
- Accepts a .go file or a directory (default: current directory)
- Finds .go files (using traversal.find_go_files for directories)
- Runs the enabled rules over each file through scan.scan_files
- Renders issues as plain text, JSON, or a rich table
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from chancheck.config import Config, get_default_config, get_enabled_rules
from chancheck.errors import ChancheckError
from chancheck.findings.models import Severity
from chancheck.reporting.console import print_issues
from chancheck.reporting.render import OutputFormat, filter_by_severity, render_json, render_text
from chancheck.scan import scan_files
from chancheck.traversal import find_go_files, is_go_file

logger = logging.getLogger(__name__)

app = typer.Typer(help="chancheck - find blocking channel sends and unbuffered channels in Go code.")


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _collect_go_files(target: Path, config: Config) -> List[Path]:
    """
    Resolve a target path into a list of .go files to analyze.

    - If target is a .go file, return [target]
    - If target is a directory, use traversal.find_go_files() and express
      the results relative to target
    - Otherwise, raise BadParameter.
    """
    if target.is_file():
        if not is_go_file(target):
            raise typer.BadParameter(f"Target file must have .go extension, got: {target}")
        return [target]

    if target.is_dir():
        files = find_go_files(
            target,
            include_tests=config.include_tests,
            ignore_dirs=config.ignore_dirs,
        )
        if not files:
            logger.warning("No .go files found under %s", target)
        # report paths as spelled on the command line, not resolved
        root = target.resolve()
        return [target / f.relative_to(root) for f in files]

    raise typer.BadParameter(f"Target path is neither a file nor a directory: {target}")


@app.command()
def analyze(
    target: Path = typer.Argument(
        Path("."),
        exists=True,
        readable=True,
        help="Go file or directory to analyze.",
    ),
    output: OutputFormat = typer.Option(
        OutputFormat.TEXT, "--output", "-o", help="Output format."
    ),
    min_severity: Severity = typer.Option(
        Severity.INFO,
        "--min-severity",
        case_sensitive=False,
        help="Only report issues at or above this severity.",
    ),
    disable: Optional[List[str]] = typer.Option(
        None, "--disable", help="Rule id to turn off (repeatable)."
    ),
    tests: bool = typer.Option(True, "--tests/--no-tests", help="Analyze *_test.go files."),
    keep_going: bool = typer.Option(
        False, "--keep-going", help="Report unreadable or unparsable files and continue."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress and show fix hints."),
    debug: bool = typer.Option(False, "--debug", help="Log traversal details."),
) -> None:
    """
    Analyze a single Go file or all .go files under a directory.
    """
    _configure_logging(verbose, debug)

    config: Config = get_default_config()
    try:
        config.rules = list(get_enabled_rules(config, disabled=disable or ()))
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--disable")
    config.include_tests = tests
    config.fail_fast = not keep_going

    if not config.rules:
        typer.echo("No rules are enabled in the current configuration.", err=True)
        raise typer.Exit(code=1)

    files = _collect_go_files(target, config)

    try:
        result = scan_files(files, config)
    except ChancheckError as exc:
        typer.echo(f"Error: error analyzing path: {exc}", err=True)
        raise typer.Exit(code=1)

    issues = filter_by_severity(result.issues, min_severity)

    if output is OutputFormat.JSON:
        typer.echo(render_json(issues))
    elif output is OutputFormat.TABLE:
        print_issues(issues, analyzed_files=result.files, verbose=verbose)
    else:
        typer.echo(render_text(issues))

    if result.failures:
        for failure in result.failures:
            typer.echo(f"Error: {failure}", err=True)
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for `python -m chancheck.main` and the chancheck script."""
    app()


if __name__ == "__main__":
    main()
