import networkx as nx
import pytest

from cspf.errors import InvalidCostError
from cspf.graph import Graph, Tag, Vertex
from cspf.nx import from_networkx, to_networkx


def test_to_networkx_structure(tagged_diamond):
    G = to_networkx(tagged_diamond)
    assert isinstance(G, nx.MultiDiGraph)
    assert list(G.nodes) == ["A", "B", "C", "D", "E"]
    assert G.number_of_edges() == 5
    data = G.get_edge_data("A", "B", key=0)
    assert data == {"cost": 1, "tags": {"link": "blue"}, "link": "blue"}


def test_to_networkx_parallel_and_reserved_tags():
    g = Graph()
    g.add_edge("A", "B", 1, Tag("key", "k1"), Tag("cost", 99))
    g.add_edge("A", "B", 2)
    G = to_networkx(g)
    assert G.number_of_edges("A", "B") == 2
    first = G.get_edge_data("A", "B", key=0)
    assert first["cost"] == 1
    assert first["tags"] == {"key": "k1", "cost": 99}
    assert "key" not in first


def test_round_trip_preserves_graph(graph3):
    g = from_networkx(to_networkx(graph3))
    assert g.vertices() == graph3.vertices()
    assert [(e.src, e.dst, e.cost, dict(e.tags)) for e in g.edges()] == [
        (e.src, e.dst, e.cost, dict(e.tags)) for e in graph3.edges()
    ]


def test_from_networkx_digraph_selected_tags():
    G = nx.DiGraph()
    G.add_edge("A", "B", weight=3, link="blue", note="x")
    G.add_edge(1, 2)
    g = from_networkx(G, cost_attr="weight", tag_attrs=["link"])
    (edge,) = g.out_edges("A")
    assert edge.cost == 3
    assert dict(edge.tags) == {"link": "blue"}
    (edge,) = g.out_edges("1")
    assert edge.cost == 1
    assert edge.dst == Vertex("2")


def test_from_networkx_all_attrs_as_tags():
    G = nx.MultiDiGraph()
    G.add_edge("A", "B", cost=2, link="red", bw=10)
    g = from_networkx(G)
    (edge,) = g.out_edges("A")
    assert dict(edge.tags) == {"link": "red", "bw": 10}


def test_from_networkx_rejects_undirected():
    with pytest.raises(TypeError):
        from_networkx(nx.Graph())


def test_from_networkx_rejects_bad_cost():
    G = nx.DiGraph()
    G.add_edge("A", "B", cost=1.5)
    with pytest.raises(InvalidCostError):
        from_networkx(G)


def test_from_networkx_default_cost():
    G = nx.DiGraph()
    G.add_edge("A", "B", link="blue")
    g = from_networkx(G, default_cost=7)
    (edge,) = g.out_edges("A")
    assert edge.cost == 7
    assert dict(edge.tags) == {"link": "blue"}
