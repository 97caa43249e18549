import networkx as nx

from cspf.algorithms.paths import path_cost, path_vertices, paths
from cspf.graph import Graph, Vertex
from cspf.nx import to_networkx


def _ids(path):
    return [v.id for v in path_vertices(path)]


def _square_with_cross():
    # A->B, A->C, B->D, C->D and the B<->C cross links, all cost 1
    g = Graph()
    g.add_edge("A", "B", 1)
    g.add_edge("A", "C", 1)
    g.add_edge("B", "D", 1)
    g.add_edge("C", "D", 1)
    g.add_edge("B", "C", 1)
    g.add_edge("C", "B", 1)
    return g


def test_single_edge():
    g = Graph()
    edge = g.add_edge("A", "B", 1)
    assert paths(g, "A", "B") == [[edge]]


def test_src_equals_dst_gives_one_empty_path():
    g = Graph()
    g.add_edge("A", "B", 1)
    assert paths(g, "A", "A") == [[]]
    assert paths(Graph(), "X", "X") == [[]]


def test_nil_graph_gives_no_paths():
    assert paths(None, "A", "B") == []
    assert paths(None, "A", "A") == []


def test_unreachable_gives_no_paths():
    g = Graph()
    g.add_edge("A", "B", 1)
    g.add_node("C")
    assert paths(g, "A", "C") == []
    assert paths(g, "B", "A") == []
    assert paths(g, "A", "missing") == []


def test_all_simple_paths_in_order():
    """Sibling paths follow each vertex's outgoing edge order."""
    found = paths(_square_with_cross(), "A", "D")
    assert [_ids(p) for p in found] == [
        ["A", "B", "D"],
        ["A", "B", "C", "D"],
        ["A", "C", "D"],
        ["A", "C", "B", "D"],
    ]


def test_matches_networkx_simple_edge_paths():
    g = _square_with_cross()
    g.add_edge("A", "B", 3)
    g.add_edge("D", "A", 1)
    G = to_networkx(g)
    expected = len(list(nx.all_simple_edge_paths(G, "A", "D")))
    assert len(paths(g, "A", "D")) == expected


def test_cycles_terminate(cycle_with_tail):
    found = paths(cycle_with_tail, "A", "E")
    assert [_ids(p) for p in found] == [["A", "B", "C", "D", "E"]]
    assert [_ids(p) for p in paths(cycle_with_tail, "B", "A")] == [
        ["B", "C", "D", "A"]
    ]


def test_parallel_edges_are_distinct_paths():
    g = Graph()
    e1 = g.add_edge("A", "B", 1)
    e2 = g.add_edge("A", "B", 2)
    found = paths(g, "A", "B")
    assert len(found) == 2
    assert found[0][0] is e1
    assert found[1][0] is e2


def test_results_are_independent_lists(diamond):
    found = paths(diamond, "A", "D")
    found[0].clear()
    assert len(found[1]) == 2
    assert all(len(p) == 2 for p in paths(diamond, "A", "D"))


def test_deep_chain_does_not_recurse():
    g = Graph()
    for i in range(5000):
        g.add_edge(str(i), str(i + 1), 1)
    found = paths(g, "0", "5000")
    assert len(found) == 1
    assert len(found[0]) == 5000


def test_graph_is_not_modified(diamond):
    before = [list(diamond.out_edges(v)) for v in diamond.vertices()]
    paths(diamond, "A", "D")
    assert [list(diamond.out_edges(v)) for v in diamond.vertices()] == before


def test_path_helpers():
    g = Graph()
    g.add_edge("A", "B", 2)
    g.add_edge("B", "C", 3)
    (path,) = paths(g, "A", "C")
    assert path_cost(path) == 5
    assert path_vertices(path) == [Vertex("A"), Vertex("B"), Vertex("C")]
    assert path_cost([]) == 0
    assert path_vertices([]) == []
    assert path_vertices([], "A") == [Vertex("A")]
