# Scan driver: run the traversal engine over many files, one fresh session
# (ancestor context + issue collector) per file, and apply the failure policy.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from tree_sitter import Parser

from chancheck.config import Config, get_enabled_rules
from chancheck.context import FileContext, create_context
from chancheck.engine import TraversalEngine
from chancheck.errors import ChancheckError
from chancheck.findings.models import Issue
from chancheck.parser import create_parser
from chancheck.rules.base import Rule

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Outcome of a scan: issues in file order, files analyzed, per-file failures."""

    issues: List[Issue] = field(default_factory=list)
    files: List[Path] = field(default_factory=list)
    failures: List[ChancheckError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def analyze_context(context: FileContext, engine: TraversalEngine) -> list[Issue]:
    """Walk an already parsed file in a fresh session of engine."""
    return list(engine.walk(context.root_node, context))


def analyze_file(
    path: Path,
    rules: Sequence[Rule],
    parser: Optional[Parser] = None,
) -> list[Issue]:
    """
    Read, parse and analyze one Go file.

    Raises:
        SourceReadError / SourceParseError: see chancheck.context.create_context.
    """
    ctx = create_context(path, parser=parser)
    return analyze_context(ctx, TraversalEngine(rules))


def scan_files(
    paths: Iterable[Path],
    config: Config,
    parser: Optional[Parser] = None,
) -> ScanResult:
    """
    Analyze each path independently and concatenate the issues in path order.

    With config.fail_fast the first ChancheckError propagates and nothing is
    returned; otherwise the failure is logged, recorded in the result, and the
    scan moves on to the next file.
    """
    if parser is None:
        parser = create_parser()
    engine = TraversalEngine(get_enabled_rules(config))

    result = ScanResult()
    for path in paths:
        try:
            ctx = create_context(path, parser=parser)
        except ChancheckError as exc:
            if config.fail_fast:
                raise
            logger.error("Skipping %s: %s", path, exc.message)
            result.failures.append(exc)
            continue
        result.issues.extend(analyze_context(ctx, engine))
        result.files.append(path)
    return result
