# Unbuffered channel creation: flags make(chan T) calls without a capacity.

from __future__ import annotations

from typing import Optional

from tree_sitter import Node as TSNode

from chancheck.ancestry import AncestorContext
from chancheck.context import FileContext, get_source_span
from chancheck.findings.models import Issue, Severity
from chancheck.rules.base import Rule

UNBUFFERED_CHANNEL_MESSAGE = "unbuffered channel creation detected - consider specifying buffer size"


def _get_call_args(call_node: TSNode) -> list[TSNode]:
    """Named argument nodes of a call, comments excluded."""
    args = call_node.child_by_field_name("arguments")
    if args is None:
        return []
    return [c for c in args.named_children if c.type != "comment"]


def _get_builtin_name(context: FileContext, call_node: TSNode) -> Optional[str]:
    """Return the callee name when it is a bare identifier (not pkg.make)."""
    fn = call_node.child_by_field_name("function")
    if fn is None or fn.type != "identifier":
        return None
    return get_source_span(context, fn)


class UnbufferedChannelRule(Rule):
    """Reports make(chan T) with a single argument, i.e. no buffer size."""

    id = "unbuffered-channel"
    name = "Unbuffered channel creation"
    severity = Severity.INFO
    node_types = frozenset({"call_expression"})

    def inspect(
        self,
        node: TSNode,
        ancestors: AncestorContext,
        context: FileContext,
    ) -> list[Issue]:
        if _get_builtin_name(context, node) != "make":
            return []
        args = _get_call_args(node)
        if not args or args[0].type != "channel_type":
            return []
        if len(args) != 1:
            return []
        return [self.issue(context, node, UNBUFFERED_CHANNEL_MESSAGE)]
