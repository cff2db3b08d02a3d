# Tree-sitter setup and AST parsing: parse Go source code into syntax trees.

import logging
from typing import Optional

import tree_sitter
from tree_sitter import Language
from tree_sitter_go import language as _go_language_capsule

logger = logging.getLogger(__name__)

# Go grammar: wrap the tree-sitter-go capsule for use with tree_sitter.Parser
_GO_LANGUAGE = Language(_go_language_capsule())


def get_go_language() -> Language:
    """Return the Tree-sitter Language object for Go."""
    return _GO_LANGUAGE


def create_parser() -> tree_sitter.Parser:
    """Create and return a Tree-sitter Parser configured for Go."""
    return tree_sitter.Parser(_GO_LANGUAGE)


def parse_bytes(
    source: bytes,
    parser: Optional[tree_sitter.Parser] = None,
) -> tree_sitter.Tree:
    """
    Parse Go source bytes into a syntax tree.

    Args:
        source: UTF-8 encoded Go source code.
        parser: Optional parser instance; if None, a new one is created.

    Returns:
        The parse tree. Tree-sitter always produces a tree; check
        tree.root_node.has_error for ERROR/MISSING nodes.
    """
    if parser is None:
        parser = create_parser()
    tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.warning(
            "Parse completed with errors: root=%s",
            tree.root_node.type,
        )
    else:
        logger.debug(
            "Parse succeeded: root=%s",
            tree.root_node.type,
        )
    return tree
