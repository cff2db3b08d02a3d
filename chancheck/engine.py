"""
Traversal engine: depth-first walk of one syntax tree with rule dispatch.

The engine enters nodes in pre-order and exits them in post-order. On entry a
node is offered to every rule registered for its type, together with the
ancestor context (root .. parent); the node is then pushed so that its
children see it. On exit the node is popped again, so once a walk finishes
the ancestor context is back to the state it started in.

Typical usage:
    from chancheck.context import create_context
    from chancheck.engine import TraversalEngine
    from chancheck.config import get_enabled_rules

    ctx = create_context(Path("main.go"))
    issues = TraversalEngine(get_enabled_rules()).walk(ctx.root_node, ctx)
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Sequence

from tree_sitter import Node as TSNode

from chancheck.ancestry import AncestorContext
from chancheck.context import FileContext
from chancheck.findings.collector import IssueCollector
from chancheck.rules.base import Rule

logger = logging.getLogger(__name__)


class TraversalEngine:
    """Walks syntax trees and dispatches nodes to rules by node type."""

    def __init__(self, rules: Sequence[Rule]) -> None:
        self.rules = tuple(rules)
        dispatch: dict[str, list[Rule]] = {}
        for rule in self.rules:
            for node_type in sorted(rule.node_types):
                dispatch.setdefault(node_type, []).append(rule)
        self._dispatch = {kind: tuple(rules) for kind, rules in dispatch.items()}

    def rules_for(self, node_type: str) -> tuple[Rule, ...]:
        return self._dispatch.get(node_type, ())

    def walk(
        self,
        root: Optional[TSNode],
        context: FileContext,
        ancestors: Optional[AncestorContext] = None,
    ) -> IssueCollector:
        """
        Visit every node under root once and collect the issues rules emit.

        Args:
            root: Tree root; None is a valid, silent no-op.
            context: The file the tree belongs to.
            ancestors: Context to maintain during the walk. A fresh one is
                used when omitted; callers may pass their own to inspect it
                afterwards.

        Returns:
            A new IssueCollector holding issues in visit order.
        """
        collector = IssueCollector()
        if root is None:
            return collector
        if ancestors is None:
            ancestors = AncestorContext()

        visited = 1
        self._enter(root, ancestors, context, collector)
        frames: list[Iterator[TSNode]] = [iter(root.children)]
        while frames:
            child = next(frames[-1], None)
            if child is None:
                # all children done: leave the node that owns this frame
                frames.pop()
                ancestors.pop()
                continue
            visited += 1
            self._enter(child, ancestors, context, collector)
            frames.append(iter(child.children))

        logger.debug(
            "Walked %s: %d node(s) visited, %d issue(s)",
            context.path,
            visited,
            len(collector),
        )
        return collector

    def _enter(
        self,
        node: TSNode,
        ancestors: AncestorContext,
        context: FileContext,
        collector: IssueCollector,
    ) -> None:
        for rule in self.rules_for(node.type):
            collector.extend(rule.inspect(node, ancestors, context))
        ancestors.push(node)
