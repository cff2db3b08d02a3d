# Channel send without select: flags `ch <- v` statements that are not nested
# under any select statement and may therefore block forever.

from __future__ import annotations

from tree_sitter import Node as TSNode

from chancheck.ancestry import AncestorContext
from chancheck.context import FileContext
from chancheck.findings.models import Issue, Severity
from chancheck.rules.base import Rule

SEND_WITHOUT_SELECT_MESSAGE = "channel send without select statement may block indefinitely"


class ChannelSendWithoutSelectRule(Rule):
    """
    Reports send statements with no select statement among their ancestors.

    Purely syntactic: any enclosing select exempts the send, whether or not
    the send is one of its cases and whether or not it has a default case.
    """

    id = "channel-send-without-select"
    name = "Channel send without select"
    severity = Severity.WARNING
    node_types = frozenset({"send_statement"})

    def inspect(
        self,
        node: TSNode,
        ancestors: AncestorContext,
        context: FileContext,
    ) -> list[Issue]:
        if ancestors.has_ancestor("select_statement"):
            return []
        return [self.issue(context, node, SEND_WITHOUT_SELECT_MESSAGE)]
