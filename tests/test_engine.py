"""Tests for the traversal engine: visit order, ancestor tracking, dispatch."""

from pathlib import Path

from chancheck.ancestry import AncestorContext
from chancheck.context import FileContext
from chancheck.engine import TraversalEngine
from chancheck.findings.collector import IssueCollector
from chancheck.findings.models import Severity
from chancheck.parser import create_parser, parse_bytes
from chancheck.rules.base import Rule
from chancheck.rules.channel_send import ChannelSendWithoutSelectRule
from chancheck.rules.unbuffered_channel import UnbufferedChannelRule


class RecordingRule(Rule):
    """Records every node it is offered together with the ancestor types."""

    id = "recording"
    name = "Recording"
    severity = Severity.INFO

    def __init__(self, *node_types: str) -> None:
        self.node_types = frozenset(node_types)
        self.calls: list[tuple] = []

    def inspect(self, node, ancestors, context):
        self.calls.append((node, [_key(a) for a in ancestors]))
        return []


def _key(node):
    return (node.type, node.start_byte, node.end_byte)


def _parent_chain(node):
    chain = []
    parent = node.parent
    while parent is not None:
        chain.append(_key(parent))
        parent = parent.parent
    return list(reversed(chain))


def _count(node, node_type=None):
    total = 1 if node_type is None or node.type == node_type else 0
    return total + sum(_count(c, node_type) for c in node.children)


def _context(source: bytes) -> FileContext:
    tree = parse_bytes(source, parser=create_parser())
    return FileContext(path=Path("test.go"), source=source, tree=tree)


def _default_rules():
    return [ChannelSendWithoutSelectRule(), UnbufferedChannelRule()]


def _messages(issues):
    return [(i.severity, i.location.line) for i in issues]


SCENARIO_A = b"""package test

func a() {
	ch := make(chan int)
	ch <- 1
}
"""

SCENARIO_B = b"""package test

func b() {
	ch := make(chan int, 1)
	ch <- 1
}
"""

SCENARIO_C = b"""package test

func c() {
	ch := make(chan int, 1)
	select {
	case ch <- 1:
	default:
	}
}
"""

SCENARIO_D = b"""package test

func d(in <-chan int, out chan int) {
	select {
	case v := <-in:
		if v > 0 {
			for {
				out <- v
			}
		}
	}
}
"""

SCENARIO_E = b"""package test

func e(ch chan int) {
	select {
	case ch <- 1:
	default:
	}
	ch <- 2
}
"""


class TestScenarios:
    def test_scenario_a_unbuffered_send(self):
        issues = list(TraversalEngine(_default_rules()).walk(*_root(SCENARIO_A)))
        assert _messages(issues) == [(Severity.INFO, 4), (Severity.WARNING, 5)]

    def test_scenario_b_buffered_send(self):
        issues = list(TraversalEngine(_default_rules()).walk(*_root(SCENARIO_B)))
        assert _messages(issues) == [(Severity.WARNING, 5)]

    def test_scenario_c_select_with_default(self):
        issues = list(TraversalEngine(_default_rules()).walk(*_root(SCENARIO_C)))
        assert issues == []

    def test_scenario_d_send_deep_inside_select_case(self):
        issues = list(TraversalEngine(_default_rules()).walk(*_root(SCENARIO_D)))
        assert issues == []

    def test_scenario_e_one_send_in_one_out(self):
        issues = list(TraversalEngine(_default_rules()).walk(*_root(SCENARIO_E)))
        assert _messages(issues) == [(Severity.WARNING, 8)]
        assert issues[0].location.snippet == "ch <- 2"


def _root(source: bytes):
    ctx = _context(source)
    return ctx.root_node, ctx


class TestAncestorTracking:
    def test_context_empty_after_walk(self):
        ctx = _context(SCENARIO_D)
        ancestors = AncestorContext()
        TraversalEngine(_default_rules()).walk(ctx.root_node, ctx, ancestors)
        assert len(ancestors) == 0

    def test_caller_context_restored_after_walk(self):
        ctx = _context(SCENARIO_A)
        outer = AncestorContext([ctx.root_node])
        TraversalEngine(_default_rules()).walk(ctx.root_node, ctx, outer)
        assert outer.depth == 1

    def test_ancestors_are_exact_path_to_parent(self):
        ctx = _context(SCENARIO_D)
        rule = RecordingRule("identifier", "send_statement", "select_statement")
        TraversalEngine([rule]).walk(ctx.root_node, ctx)
        assert rule.calls
        for node, seen in rule.calls:
            assert seen == _parent_chain(node)

    def test_siblings_do_not_see_each_other(self):
        source = b"package test\n\nfunc f(c chan int) {\n\tselect {\n\tdefault:\n\t}\n\tc <- 1\n}\n"
        ctx = _context(source)
        rule = RecordingRule("send_statement")
        TraversalEngine([rule]).walk(ctx.root_node, ctx)
        (_, seen), = rule.calls
        assert "select_statement" not in [kind for kind, _, _ in seen]

    def test_every_node_visited_once_in_pre_order(self):
        ctx = _context(SCENARIO_A)
        rule = RecordingRule("identifier")
        TraversalEngine([rule]).walk(ctx.root_node, ctx)
        assert len(rule.calls) == _count(ctx.root_node, "identifier")
        starts = [node.start_byte for node, _ in rule.calls]
        assert starts == sorted(starts)

    def test_deeply_nested_tree_does_not_recurse(self):
        depth = 600
        body = "{" * depth + "c <- 1" + "}" * depth
        source = f"package test\n\nfunc f(c chan int) {{\n{body}\n}}\n".encode()
        ctx = _context(source)
        ancestors = AncestorContext()
        issues = TraversalEngine(_default_rules()).walk(ctx.root_node, ctx, ancestors)
        assert len(issues) == 1
        assert len(ancestors) == 0


class TestEngineBehaviour:
    def test_absent_root_is_noop(self):
        ctx = _context(SCENARIO_A)
        rule = RecordingRule("send_statement", "call_expression")
        result = TraversalEngine([rule]).walk(None, ctx)
        assert isinstance(result, IssueCollector)
        assert len(result) == 0
        assert rule.calls == []

    def test_empty_file_yields_nothing(self):
        ctx = _context(b"")
        assert len(TraversalEngine(_default_rules()).walk(ctx.root_node, ctx)) == 0

    def test_malformed_tree_does_not_crash(self):
        ctx = _context(b"package test\nfunc f( { ch <- \n select {")
        assert ctx.root_node.has_error
        result = TraversalEngine(_default_rules()).walk(ctx.root_node, ctx)
        assert isinstance(result, IssueCollector)

    def test_walk_is_idempotent(self):
        ctx = _context(SCENARIO_A)
        engine = TraversalEngine(_default_rules())
        first = list(engine.walk(ctx.root_node, ctx))
        second = list(engine.walk(ctx.root_node, ctx))
        assert first == second
        assert [i.model_dump() for i in first] == [i.model_dump() for i in second]

    def test_walk_does_not_mutate_tree(self):
        ctx = _context(SCENARIO_E)
        before = ctx.root_node.text
        TraversalEngine(_default_rules()).walk(ctx.root_node, ctx)
        assert ctx.root_node.text == before

    def test_dispatch_by_node_type_in_registration_order(self):
        first = RecordingRule("send_statement")
        second = RecordingRule("send_statement")
        other = RecordingRule("call_expression")
        engine = TraversalEngine([first, second, other])
        assert engine.rules_for("send_statement") == (first, second)
        assert engine.rules_for("call_expression") == (other,)
        assert engine.rules_for("binary_expression") == ()

    def test_each_walk_gets_fresh_collector(self):
        ctx = _context(SCENARIO_B)
        engine = TraversalEngine(_default_rules())
        a = engine.walk(ctx.root_node, ctx)
        b = engine.walk(ctx.root_node, ctx)
        assert a is not b
        assert len(a) == len(b) == 1
