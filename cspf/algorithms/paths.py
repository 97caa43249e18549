from __future__ import annotations

from typing import List, Optional, Sequence, Set

from cspf.graph import Edge, Graph, Vertex, VertexLike, as_vertex

__all__ = [
    "paths",
    "path_cost",
    "path_vertices",
]


def paths(
    graph: Optional[Graph],
    src: VertexLike,
    dst: VertexLike,
) -> List[List[Edge]]:
    """
    Enumerate all simple paths from ``src`` to ``dst`` by depth-first search.

    Typically applied to the subgraph returned by ``spf``/``cspf``. A vertex is
    visited at most once per descent and released on backtrack, so cycles do
    not loop and every simple path is found. Sibling paths follow the order of
    each vertex's outgoing edges. Uses an explicit stack instead of recursion.

    Args:
        graph: Graph to search. None yields no paths.
        src: Start vertex.
        dst: End vertex.

    Returns:
        A list of paths, each a list of edges from src to dst. ``[[]]`` when
        src equals dst; ``[]`` when dst is unreachable.
    """
    if graph is None:
        return []

    src_v, dst_v = as_vertex(src), as_vertex(dst)
    if src_v == dst_v:
        return [[]]

    outgoing = graph._adj
    found: List[List[Edge]] = []
    visited: Set[Vertex] = {src_v}
    path: List[Edge] = []
    # Each stack entry: [vertex, index of next outgoing edge to try]
    stack: List[List[object]] = [[src_v, 0]]

    while stack:
        frame = stack[-1]
        vertex, idx = frame
        edges = outgoing.get(vertex, ())  # type: ignore[call-overload]

        if idx < len(edges):
            frame[1] = idx + 1
            edge = edges[idx]
            if edge.dst in visited:
                continue
            path.append(edge)
            if edge.dst == dst_v:
                found.append(list(path))
                path.pop()
            else:
                visited.add(edge.dst)
                stack.append([edge.dst, 0])
        else:
            # backtrack
            stack.pop()
            visited.discard(vertex)  # type: ignore[arg-type]
            if path:
                path.pop()

    return found


def path_cost(path: Sequence[Edge]) -> int:
    """Return the total cost of a path."""
    return sum(edge.cost for edge in path)


def path_vertices(path: Sequence[Edge], src: Optional[VertexLike] = None) -> List[Vertex]:
    """
    Return the vertices a path traverses, in order.

    Args:
        path: Sequence of edges.
        src: Vertex to report for an empty path.

    Returns:
        ``[path[0].src, path[0].dst, path[1].dst, ...]``; ``[src]`` for an
        empty path when src is given, otherwise ``[]``.
    """
    if not path:
        return [as_vertex(src)] if src is not None else []
    return [path[0].src] + [edge.dst for edge in path]
