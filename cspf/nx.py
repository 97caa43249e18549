"""NetworkX graph conversion utilities.

Example:
    >>> import networkx as nx
    >>> from cspf.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.MultiDiGraph()
    >>> G.add_edge("A", "B", cost=1, link="blue")
    0
    >>> graph = from_networkx(G, tag_attrs=["link"])
    >>> G_out = to_networkx(graph)
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

import networkx as nx

from cspf.graph import Graph, Tag

__all__ = [
    "to_networkx",
    "from_networkx",
]

# Tags with these names are not flattened into NetworkX edge attributes
_RESERVED_ATTRS = ("cost", "tags", "key")


def to_networkx(graph: Graph) -> nx.MultiDiGraph:
    """Convert a Graph into a ``networkx.MultiDiGraph``.

    Nodes are the vertex ID strings. Each edge becomes a multi-edge carrying
    ``cost`` and a ``tags`` dict. Tags are also flattened into the edge
    attributes, except those named ``cost``, ``tags`` or ``key``.

    Args:
        graph: Graph to convert.

    Returns:
        A new MultiDiGraph with vertices and edges in the graph's order.
    """
    G = nx.MultiDiGraph()
    for vertex in graph:
        G.add_node(vertex.id)
    for edge in graph.edges():
        attrs = {k: v for k, v in edge.tags.items() if k not in _RESERVED_ATTRS}
        G.add_edge(
            edge.src.id, edge.dst.id, cost=edge.cost, tags=dict(edge.tags), **attrs
        )
    return G


def from_networkx(
    G: Any,
    *,
    cost_attr: str = "cost",
    default_cost: int = 1,
    tag_attrs: Optional[Iterable[str]] = None,
) -> Graph:
    """Build a Graph from a directed NetworkX graph.

    Args:
        G: A ``networkx.DiGraph`` or ``networkx.MultiDiGraph``.
        cost_attr: Edge attribute holding the integer cost.
        default_cost: Cost used when an edge lacks ``cost_attr``.
        tag_attrs: Edge attributes to copy as tags. If None, the ``tags`` dict
            written by to_networkx is used when present, else every attribute
            except ``cost_attr``.

    Returns:
        A new Graph. Node and edge order follow NetworkX iteration order.

    Raises:
        TypeError: If G is undirected.
        InvalidCostError: If an edge cost is not a non-negative integer.
    """
    if not G.is_directed():
        raise TypeError("from_networkx requires a directed graph")

    selected = list(tag_attrs) if tag_attrs is not None else None
    graph = Graph()
    for node in G.nodes:
        graph.add_node(str(node))

    for u, v, data in G.edges(data=True):
        cost = data.get(cost_attr, default_cost)
        if selected is not None:
            tags = [Tag(k, data[k]) for k in selected if k in data]
        elif isinstance(data.get("tags"), dict):
            tags = [Tag(k, val) for k, val in data["tags"].items()]
        else:
            tags = [Tag(k, val) for k, val in data.items() if k != cost_attr]
        graph.add_edge(str(u), str(v), cost, *tags)

    return graph
