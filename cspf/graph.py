"""Graph store: vertices, tagged edges and the adjacency structure.

A ``Graph`` maps every vertex to the ordered list of its outgoing edges.
Graphs only grow: vertices and edges are added, never removed or mutated.
Edge insertion order is preserved per vertex, and vertices iterate in the
order they were first seen, so every traversal over a graph is reproducible.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Union,
)

from cspf.errors import DuplicateTagKeyError, InvalidCostError

if TYPE_CHECKING:
    import threading

    from cspf.config import SpfConfig
    from cspf.expr import Evaluator, Predicate

__all__ = [
    "Vertex",
    "Tag",
    "Edge",
    "Graph",
    "VertexLike",
    "as_vertex",
]


@dataclass(frozen=True)
class Vertex:
    """A vertex of the graph, identified by its ``id``."""

    id: str

    def __str__(self) -> str:
        return self.id


#: Anything accepted where a vertex is expected.
VertexLike = Union[Vertex, str]


def as_vertex(v: VertexLike) -> Vertex:
    """Return ``v`` as a Vertex, wrapping plain string IDs."""
    if isinstance(v, Vertex):
        return v
    if isinstance(v, str):
        return Vertex(v)
    raise TypeError(f"Expected Vertex or str, got {type(v).__name__}")


@dataclass(frozen=True)
class Tag:
    """A key/value attribute attached to an edge.

    Attributes:
        key: Attribute name, unique within one edge.
        value: Attribute value of any type.
    """

    key: str
    value: Any


def _empty_tags() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True, repr=False)
class Edge:
    """A directed, weighted edge ``src -> dst``.

    Attributes:
        src: Source vertex.
        dst: Destination vertex.
        cost: Non-negative integer cost.
        tags: Read-only mapping of tag key to value.
    """

    src: Vertex
    dst: Vertex
    cost: int
    tags: Mapping[str, Any] = field(default_factory=_empty_tags, hash=False)

    def __repr__(self) -> str:
        return f"Edge({self.src}->{self.dst}, cost={self.cost}, tags={dict(self.tags)})"


def _check_cost(cost: Any) -> None:
    if isinstance(cost, bool) or not isinstance(cost, int):
        raise InvalidCostError(
            f"Edge cost must be a non-negative integer, got {type(cost).__name__}"
        )
    if cost < 0:
        raise InvalidCostError(f"Edge cost must be non-negative, got {cost}")


class Graph:
    """A directed multigraph mapping each vertex to its outgoing edges.

    Vertices may be passed as ``Vertex`` objects or plain string IDs.
    Mutating methods are not thread-safe; callers must serialize them.

    Example:
        >>> g = Graph()
        >>> g.add_edge("A", "B", 1, Tag("link", "blue"))
        Edge(A->B, cost=1, tags={'link': 'blue'})
        >>> [len(p) for p in g.paths("A", "B")]
        [1]
    """

    def __init__(self) -> None:
        self._adj: Dict[Vertex, List[Edge]] = {}

    def __repr__(self) -> str:
        return f"Graph(vertices={len(self._adj)}, edges={self.num_edges()})"

    def __len__(self) -> int:
        return len(self._adj)

    def __contains__(self, v: object) -> bool:
        if isinstance(v, str):
            v = Vertex(v)
        return v in self._adj

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._adj)

    #
    # Read access
    #
    @property
    def vertex_set(self) -> Mapping[Vertex, List[Edge]]:
        """Read-only view of the adjacency mapping."""
        return MappingProxyType(self._adj)

    def vertices(self) -> List[Vertex]:
        """Return all vertices in insertion order."""
        return list(self._adj)

    def out_edges(self, v: VertexLike) -> List[Edge]:
        """Return a copy of the outgoing edges of ``v`` (empty if unknown)."""
        return list(self._adj.get(as_vertex(v), ()))

    def edges(self) -> Iterator[Edge]:
        """Iterate every edge, grouped by source vertex in insertion order."""
        for edges in self._adj.values():
            yield from edges

    def num_edges(self) -> int:
        return sum(len(edges) for edges in self._adj.values())

    #
    # Mutation
    #
    def add_node(self, v: VertexLike) -> None:
        """Ensure ``v`` is present; existing edges are left untouched."""
        self._adj.setdefault(as_vertex(v), [])

    def add_edge(
        self, src: VertexLike, dst: VertexLike, cost: int, *tags: Tag
    ) -> Edge:
        """Add a directed edge ``src -> dst`` with a cost and optional tags.

        Missing endpoints are added automatically. Repeated calls with the same
        endpoints add parallel edges.

        Args:
            src: Source vertex.
            dst: Destination vertex.
            cost: Non-negative integer cost.
            *tags: Tags attached to the edge; keys must be unique.

        Returns:
            The newly created Edge.

        Raises:
            DuplicateTagKeyError: If two tags share a key. The graph is unchanged.
            InvalidCostError: If cost is negative or not an integer.
        """
        src_v, dst_v = as_vertex(src), as_vertex(dst)
        _check_cost(cost)

        tag_map: Dict[str, Any] = {}
        for tag in tags:
            if tag.key in tag_map:
                raise DuplicateTagKeyError(tag.key)
            tag_map[tag.key] = tag.value

        edge = Edge(src_v, dst_v, cost, MappingProxyType(tag_map))
        self._append_edge(edge)
        return edge

    def _append_edge(self, edge: Edge) -> None:
        """Append an already-built edge without validation."""
        self._adj.setdefault(edge.src, [])
        self._adj.setdefault(edge.dst, [])
        self._adj[edge.src].append(edge)

    #
    # Path computation
    #
    def spf(
        self,
        src: VertexLike,
        dst: VertexLike,
        predicate: Optional["Predicate"] = None,
        *,
        cancel: Optional["threading.Event"] = None,
        config: Optional["SpfConfig"] = None,
    ) -> Graph:
        """Shortest-path subgraph from ``src``. See cspf.algorithms.spf."""
        from cspf.algorithms.spf import spf

        return spf(self, src, dst, predicate, cancel=cancel, config=config)

    def cspf(
        self,
        src: VertexLike,
        dst: VertexLike,
        expression: str,
        *,
        evaluator: Optional["Evaluator"] = None,
        cancel: Optional["threading.Event"] = None,
        config: Optional["SpfConfig"] = None,
    ) -> Graph:
        """Constrained shortest-path subgraph. See cspf.algorithms.cspf."""
        from cspf.algorithms.spf import cspf

        return cspf(
            self,
            src,
            dst,
            expression,
            evaluator=evaluator,
            cancel=cancel,
            config=config,
        )

    def paths(self, src: VertexLike, dst: VertexLike) -> List[List[Edge]]:
        """All simple paths from ``src`` to ``dst``. See cspf.algorithms.paths."""
        from cspf.algorithms.paths import paths

        return paths(self, src, dst)
