# Per-file analysis context: file path, source bytes, syntax tree and helpers
# to turn tree-sitter nodes into source spans and issue locations.

import logging
from pathlib import Path
from typing import Optional

from tree_sitter import Node as TSNode
from tree_sitter import Parser, Tree

from chancheck.errors import SourceParseError, SourceReadError
from chancheck.findings.models import Location
from chancheck.parser import create_parser, parse_bytes

logger = logging.getLogger(__name__)

_FUNCTION_TYPES = frozenset({"function_declaration", "method_declaration"})


def _count_nodes(node: TSNode) -> int:
    count = 0
    pending = [node]
    while pending:
        current = pending.pop()
        count += 1
        pending.extend(current.children)
    return count


def _count_functions(root: TSNode) -> int:
    count = 0
    pending = [root]
    while pending:
        current = pending.pop()
        if current.type in _FUNCTION_TYPES:
            count += 1
        pending.extend(current.children)
    return count


def count_tree_stats(root: TSNode) -> tuple[int, int]:
    """Return (total node count, function/method declaration count) for the tree."""
    return _count_nodes(root), _count_functions(root)


def _first_error_node(root: TSNode) -> Optional[TSNode]:
    """Return the first ERROR or MISSING node in document order, if any."""
    pending = [root]
    while pending:
        current = pending.pop()
        if current.is_error or current.is_missing:
            return current
        if current.has_error:
            pending.extend(reversed(current.children))
    return None


class FileContext:
    """
    Per-file state for analysis: path, raw source bytes, and syntax tree.

    Rules use context.path and context.source together with
    get_source_span(context, node) and node_location(context, node).
    """

    def __init__(self, path: Path, source: bytes, tree: Tree) -> None:
        self.path = path
        self.source = source
        self.tree = tree

    @property
    def root_node(self) -> TSNode:
        return self.tree.root_node


def get_source_span(context: FileContext, node: TSNode) -> str:
    """
    Return the substring of context.source for the given node's byte range.

    Decodes with errors="replace" so bad UTF-8 does not crash.
    """
    return context.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def get_line_col(node: TSNode, one_based: bool = True) -> tuple[int, int]:
    """
    Return (line, column) for the node's start position.

    Tree-sitter uses 0-based (row, byte column). If one_based=True (default),
    returns 1-based line and column, as Go tooling prints them.
    """
    row, col = node.start_point
    if one_based:
        return row + 1, col + 1
    return row, col


def get_end_line_col(node: TSNode, one_based: bool = True) -> tuple[int, int]:
    """Return (line, column) of the position just past the node's last byte."""
    row, col = node.end_point
    if one_based:
        return row + 1, col + 1
    return row, col


def node_location(context: FileContext, node: TSNode) -> Location:
    """Build the Location (start/end range and snippet) covering node."""
    line, col = get_line_col(node)
    end_line, end_col = get_end_line_col(node)
    return Location(
        path=context.path,
        line=line,
        column=col,
        end_line=end_line,
        end_column=end_col,
        snippet=get_source_span(context, node),
    )


def create_context(
    path: Path,
    parser: Optional[Parser] = None,
) -> FileContext:
    """
    Read a Go file and parse it into a FileContext (path, source, tree).

    Raises:
        SourceReadError: the file could not be read.
        SourceParseError: the file has syntax errors; carries the position
            of the first ERROR/MISSING node.
    """
    if parser is None:
        parser = create_parser()

    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        raise SourceReadError(path, str(e)) from e

    tree = parse_bytes(source, parser=parser)
    if tree.root_node.has_error:
        bad = _first_error_node(tree.root_node) or tree.root_node
        line, col = get_line_col(bad)
        what = f"missing {bad.type}" if bad.is_missing else "syntax error"
        raise SourceParseError(path, what, line, col)

    node_count, func_count = count_tree_stats(tree.root_node)
    logger.info("Parsed %s: %d nodes, %d function(s)", path, node_count, func_count)

    return FileContext(path=path, source=source, tree=tree)
