# Rule interface (abstract base class): defines the contract all rules implement.
# Concrete rules subclass Rule, declare the node types they react to, and
# implement inspect(); the traversal engine calls inspect() for each match.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, FrozenSet

from tree_sitter import Node as TSNode

from chancheck.ancestry import AncestorContext
from chancheck.context import FileContext, node_location
from chancheck.findings.models import Issue, Severity

if TYPE_CHECKING:
    from chancheck.findings.collector import IssueCollector


class Rule(ABC):
    """
    Abstract base class for all channel rules.

    Subclasses must define:
    - id: str: unique rule identifier (e.g. "unbuffered-channel")
    - name: str: human-readable rule name
    - severity: Severity reported by the rule
    - node_types: node kinds the engine should offer to inspect()
    - inspect(node, ancestors, context) -> list[Issue]

    Rules keep no state between calls; everything they need about the
    enclosing code comes from the ancestor context.
    """

    id: ClassVar[str]
    name: ClassVar[str]
    severity: ClassVar[Severity]
    node_types: ClassVar[FrozenSet[str]]

    @abstractmethod
    def inspect(
        self,
        node: TSNode,
        ancestors: AncestorContext,
        context: FileContext,
    ) -> list[Issue]:
        """
        Check one node and return the issues it triggers (possibly none).

        Args:
            node: A node whose type is in self.node_types.
            ancestors: Path from the tree root to node's parent. Read-only.
            context: The file being analyzed (path and source bytes).
        """
        ...

    def issue(self, context: FileContext, node: TSNode, message: str) -> Issue:
        """Build an Issue for this rule located at node's source range."""
        return Issue(
            rule_id=self.id,
            message=message,
            location=node_location(context, node),
            severity=self.severity,
        )

    def run(self, context: FileContext) -> IssueCollector:
        """Walk the whole file with only this rule enabled."""
        from chancheck.engine import TraversalEngine

        return TraversalEngine([self]).walk(context.root_node, context)
