"""Shortest Path First with optional tag constraints.

``spf`` runs an equal-cost multipath Dijkstra from a source vertex and returns
a new Graph holding every edge that lies on some minimum-cost path from that
source. ``cspf`` does the same after compiling a constraint expression; edges
whose tags do not satisfy it are never relaxed.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import TYPE_CHECKING, Dict, List, Optional, Set, Tuple

from cspf.config import PREDECESSOR_REPLACE, SPF_CONFIG, SpfConfig
from cspf.errors import (
    ComputationCancelledError,
    ExpressionEvaluationError,
    NilGraphError,
)
from cspf.expr import Evaluator, ExpressionEvaluator, Predicate
from cspf.graph import Edge, Graph, Vertex, VertexLike, as_vertex
from cspf.logging import debug_timer, get_logger

if TYPE_CHECKING:
    import threading

__all__ = [
    "Cost",
    "shortest_paths",
    "spf",
    "cspf",
]

_logger = get_logger(__name__)

#: Additive path cost; edge costs are non-negative integers.
Cost = int


def _check_cancel(cancel: Optional["threading.Event"]) -> None:
    if cancel is not None and cancel.is_set():
        raise ComputationCancelledError("Path computation cancelled")


def _edge_satisfies(predicate: Optional[Predicate], edge: Edge) -> bool:
    if predicate is None:
        return True
    result = predicate.evaluate(edge.tags)
    if not isinstance(result, bool):
        raise ExpressionEvaluationError(
            f"Predicate returned {type(result).__name__} for {edge!r}, expected bool"
        )
    return result


def shortest_paths(
    graph: Optional[Graph],
    src: VertexLike,
    predicate: Optional[Predicate] = None,
    *,
    cancel: Optional["threading.Event"] = None,
    config: Optional[SpfConfig] = None,
) -> Tuple[Dict[Vertex, Cost], Dict[Vertex, List[Edge]]]:
    """Run the constrained Dijkstra relaxation from ``src``.

    Vertices are settled in order of distance; ties are broken by vertex
    insertion order. An edge is relaxed only if its target is still unsettled
    and it satisfies ``predicate``. A candidate distance equal to the best known
    one adds the edge to the target's predecessor list, which is what keeps
    every equal-cost path.

    Args:
        graph: Graph to search.
        src: Source vertex. An unknown source settles nothing.
        predicate: Optional constraint over edge tags.
        cancel: Optional event; when set the computation is aborted.
        config: Overrides the global SPF_CONFIG.

    Returns:
        A tuple of (costs, pred):
          - costs: Maps each reached vertex to its minimal cost from src.
          - pred: Maps each reached vertex other than src to the edges
            achieving that cost.

    Raises:
        NilGraphError: If graph is None.
        ExpressionEvaluationError: If the predicate fails on any edge.
        ComputationCancelledError: If cancel is set during the computation.
    """
    if graph is None:
        raise NilGraphError()
    cfg = config or SPF_CONFIG
    replace = cfg.predecessor_policy == PREDECESSOR_REPLACE

    src_v = as_vertex(src)
    outgoing = graph._adj
    order = {v: idx for idx, v in enumerate(outgoing)}

    costs: Dict[Vertex, Cost] = {}
    pred: Dict[Vertex, List[Edge]] = {}
    settled: Set[Vertex] = set()
    min_pq: List[Tuple[Cost, int, Vertex]] = []

    if src_v in outgoing:
        costs[src_v] = 0
        min_pq.append((0, order[src_v], src_v))

    while min_pq:
        _check_cancel(cancel)
        current_cost, _, vertex = heappop(min_pq)
        if vertex in settled or current_cost > costs[vertex]:
            continue
        settled.add(vertex)

        for edge in outgoing[vertex]:
            target = edge.dst
            if target in settled:
                continue
            _check_cancel(cancel)
            if not _edge_satisfies(predicate, edge):
                continue

            new_cost = current_cost + edge.cost
            known = costs.get(target)
            if known is None or new_cost < known:
                costs[target] = new_cost
                if replace:
                    pred[target] = [edge]
                else:
                    pred.setdefault(target, []).append(edge)
                heappush(min_pq, (new_cost, order[target], target))
            elif new_cost == known:
                pred[target].append(edge)

    _logger.debug(
        "SPF from %s settled %d of %d vertices", src_v, len(settled), len(outgoing)
    )
    return costs, pred


def spf(
    graph: Optional[Graph],
    src: VertexLike,
    dst: VertexLike,
    predicate: Optional[Predicate] = None,
    *,
    cancel: Optional["threading.Event"] = None,
    config: Optional[SpfConfig] = None,
) -> Graph:
    """Compute the shortest-path subgraph rooted at ``src``.

    The result contains every predecessor edge recorded by the relaxation,
    across the whole graph, not only those leading to ``dst``. Use
    ``cspf.algorithms.paths`` on it to list the ``src -> dst`` paths. Edges keep
    the relative order they had in ``graph``.

    Args:
        graph: Graph to search.
        src: Source vertex.
        dst: Destination vertex.
        predicate: Optional constraint over edge tags.
        cancel: Optional event; when set the computation is aborted.
        config: Overrides the global SPF_CONFIG.

    Returns:
        A new Graph. It is empty when ``dst`` is unreachable and differs
        from ``src``.

    Raises:
        NilGraphError: If graph is None.
        ExpressionEvaluationError: If the predicate fails on any edge.
        ComputationCancelledError: If cancel is set during the computation.
    """
    if graph is None:
        raise NilGraphError()

    src_v, dst_v = as_vertex(src), as_vertex(dst)
    with debug_timer(_logger, "SPF relaxation from %s", src_v):
        _, pred = shortest_paths(
            graph, src_v, predicate, cancel=cancel, config=config
        )

    result = Graph()
    if dst_v not in pred and src_v != dst_v:
        _logger.debug("SPF: %s is unreachable from %s", dst_v, src_v)
        return result

    kept = {id(edge) for edges in pred.values() for edge in edges}
    for edge in graph.edges():
        if id(edge) in kept:
            result._append_edge(edge)

    _logger.debug(
        "SPF %s -> %s: subgraph with %d vertices, %d edges",
        src_v,
        dst_v,
        len(result),
        result.num_edges(),
    )
    return result


def cspf(
    graph: Optional[Graph],
    src: VertexLike,
    dst: VertexLike,
    expression: str,
    *,
    evaluator: Optional[Evaluator] = None,
    cancel: Optional["threading.Event"] = None,
    config: Optional[SpfConfig] = None,
) -> Graph:
    """Constrained SPF: only edges whose tags satisfy ``expression`` are used.

    The expression is compiled once and passed to ``spf`` for this call only;
    nothing is stored on ``graph``.

    Args:
        graph: Graph to search.
        src: Source vertex.
        dst: Destination vertex.
        expression: Constraint such as ``link == "blue" || link == "redblue"``.
        evaluator: Expression engine; defaults to ExpressionEvaluator.
        cancel: Optional event; when set the computation is aborted.
        config: Overrides the global SPF_CONFIG.

    Returns:
        The constrained shortest-path subgraph (possibly empty).

    Raises:
        NilGraphError: If graph is None.
        ExpressionParseError: If the expression is malformed.
        ExpressionEvaluationError: If the expression fails on any edge.
        ComputationCancelledError: If cancel is set during the computation.
    """
    if graph is None:
        raise NilGraphError()
    cfg = config or SPF_CONFIG
    if evaluator is None:
        evaluator = ExpressionEvaluator(cfg.missing_attribute_is_null)

    predicate = evaluator.compile(expression)
    return spf(graph, src, dst, predicate, cancel=cancel, config=cfg)
