import pytest

from cspf.algorithms.paths import path_vertices, paths
from cspf.algorithms.spf import cspf, spf
from cspf.config import SpfConfig
from cspf.errors import (
    ExpressionEvaluationError,
    ExpressionParseError,
    NilGraphError,
)
from cspf.graph import Graph, Tag, Vertex

BLUE_OR_REDBLUE = 'link == "blue" || link == "redblue"'


def _ids(path):
    return [v.id for v in path_vertices(path)]


def test_constrained_diamond(tagged_diamond):
    """Only the blue branch plus the redblue tail satisfies the constraint."""
    sub = cspf(tagged_diamond, "A", "E", BLUE_OR_REDBLUE)
    found = paths(sub, "A", "E")
    assert len(found) == 1
    assert len(found[0]) == 3
    assert _ids(found[0]) == ["A", "B", "D", "E"]
    assert all(edge.tags["link"] in ("blue", "redblue") for edge in found[0])


def test_constrained_method_form(tagged_diamond):
    found = tagged_diamond.cspf("A", "E", BLUE_OR_REDBLUE).paths("A", "E")
    assert [_ids(p) for p in found] == [["A", "B", "D", "E"]]


def test_red_only_constraint_blocks_tail(tagged_diamond):
    sub = cspf(tagged_diamond, "A", "E", 'link == "red"')
    assert len(sub) == 0
    assert paths(sub, "A", "E") == []
    sub = cspf(tagged_diamond, "A", "D", 'link == "red"')
    assert [_ids(p) for p in paths(sub, "A", "D")] == [["A", "C", "D"]]


def test_constraint_does_not_persist(tagged_diamond):
    """A later plain SPF on the same graph is unconstrained."""
    tagged_diamond.cspf("A", "E", BLUE_OR_REDBLUE)
    found = tagged_diamond.spf("A", "E").paths("A", "E")
    assert {tuple(_ids(p)) for p in found} == {
        ("A", "B", "D", "E"),
        ("A", "C", "D", "E"),
    }


def test_invalid_expression_syntax(tagged_diamond):
    """An unsupported operator is a parse error; no subgraph is produced."""
    sub = None
    with pytest.raises(ExpressionParseError):
        sub = cspf(tagged_diamond, "A", "E", 'link == "blue" or link == "redblue"')
    assert sub is None
    assert paths(sub, "A", "E") == []


def test_evaluation_error_aborts(tagged_diamond):
    with pytest.raises(ExpressionEvaluationError):
        cspf(tagged_diamond, "A", "E", "link > 1")


def test_evaluation_error_only_for_relaxed_edges():
    # The edge into the settled source is never evaluated.
    g = Graph()
    g.add_edge("A", "B", 1, Tag("bw", 10))
    g.add_edge("B", "A", 1, Tag("bw", "fast"))
    sub = cspf(g, "A", "B", "bw >= 10")
    assert [_ids(p) for p in paths(sub, "A", "B")] == [["A", "B"]]


def test_numeric_constraint_changes_shortest_path():
    g = Graph()
    g.add_edge("A", "B", 1, Tag("bw", 1))
    g.add_edge("B", "D", 1, Tag("bw", 1))
    g.add_edge("A", "C", 5, Tag("bw", 100))
    g.add_edge("C", "D", 5, Tag("bw", 100))

    assert [_ids(p) for p in spf(g, "A", "D").paths("A", "D")] == [["A", "B", "D"]]
    sub = cspf(g, "A", "D", "bw >= 10")
    assert [_ids(p) for p in sub.paths("A", "D")] == [["A", "C", "D"]]


def test_untagged_edges_with_null_lookup():
    g = Graph()
    g.add_edge("A", "B", 1)
    g.add_edge("A", "B", 1, Tag("avoid", True))
    sub = cspf(g, "A", "B", "avoid != true")
    assert sub.num_edges() == 1
    assert dict(next(sub.edges()).tags) == {}


def test_strict_lookup_via_config():
    g = Graph()
    g.add_edge("A", "B", 1)
    config = SpfConfig(missing_attribute_is_null=False)
    with pytest.raises(ExpressionEvaluationError, match="Unknown attribute"):
        cspf(g, "A", "B", "avoid != true", config=config)


def test_custom_evaluator():
    class PrefixEngine:
        """Treats the expression as a required prefix of the 'name' tag."""

        def compile(self, expression):
            engine = self

            class Prefix:
                def evaluate(self, attrs):
                    engine.calls += 1
                    return str(attrs.get("name", "")).startswith(expression)

            return Prefix()

        calls = 0

    g = Graph()
    g.add_edge("A", "B", 1, Tag("name", "core-1"))
    g.add_edge("A", "B", 1, Tag("name", "edge-1"))
    engine = PrefixEngine()
    sub = cspf(g, "A", "B", "core", evaluator=engine)
    assert [e.tags["name"] for e in sub.edges()] == ["core-1"]
    assert engine.calls == 2


def test_custom_predicate_must_return_bool(diamond):
    class Sloppy:
        def evaluate(self, attrs):
            return "yes"

    with pytest.raises(ExpressionEvaluationError, match="expected bool"):
        spf(diamond, "A", "D", Sloppy())


def test_nil_graph_checked_before_compiling():
    with pytest.raises(NilGraphError):
        cspf(None, "A", "B", "this is not valid ((")
    with pytest.raises(NilGraphError):
        cspf(None, Vertex("A"), Vertex("B"), BLUE_OR_REDBLUE)


def test_generated_allow_list_constraint():
    g = Graph()
    g.add_edge("A", "B", 1, Tag("link", "x7"))
    g.add_edge("A", "C", 1, Tag("link", "y"))
    g.add_edge("C", "B", 1, Tag("link", "x9"))
    allowed = " || ".join(f'link == "x{i}"' for i in range(1200))
    sub = cspf(g, "A", "B", allowed)
    assert [_ids(p) for p in paths(sub, "A", "B")] == [["A", "B"]]


@pytest.mark.parametrize(
    "expression",
    ["(" * 500, "(" * 200 + 'link == "x7"' + ")" * 200],
)
def test_deeply_nested_expression_is_parse_error(tagged_diamond, expression):
    with pytest.raises(ExpressionParseError):
        cspf(tagged_diamond, "A", "E", expression)
