"""cspf: Constrained Shortest Path First over tagged directed graphs.

Computes equal-cost shortest paths in a directed multigraph, optionally
restricted to edges whose tags satisfy a boolean constraint expression, and
enumerates the resulting paths.

Primary API:
    Graph, Vertex, Edge, Tag - Graph store
    spf() / cspf() - Shortest-path subgraph, unconstrained or constrained
    paths() - All simple paths between two vertices

Example:
    from cspf import Graph, Tag

    graph = Graph()
    graph.add_edge("A", "B", 1, Tag("link", "blue"))
    graph.add_edge("A", "C", 1, Tag("link", "red"))
    graph.add_edge("B", "D", 1, Tag("link", "blue"))
    graph.add_edge("C", "D", 1, Tag("link", "red"))

    sub = graph.cspf("A", "D", 'link == "blue"')
    for path in sub.paths("A", "D"):
        print(path)
"""

from __future__ import annotations

from cspf import logging
from cspf._version import __version__
from cspf.algorithms import cspf, path_cost, path_vertices, paths, shortest_paths, spf
from cspf.config import SPF_CONFIG, SpfConfig
from cspf.errors import (
    ComputationCancelledError,
    CspfError,
    DuplicateTagKeyError,
    ExpressionError,
    ExpressionEvaluationError,
    ExpressionParseError,
    InvalidCostError,
    NilGraphError,
)
from cspf.expr import (
    CompiledExpression,
    Evaluator,
    ExpressionEvaluator,
    Predicate,
    compile_expression,
)
from cspf.graph import Edge, Graph, Tag, Vertex

__all__ = [
    # Version
    "__version__",
    # Graph store
    "Graph",
    "Vertex",
    "Edge",
    "Tag",
    # Algorithms
    "spf",
    "cspf",
    "shortest_paths",
    "paths",
    "path_cost",
    "path_vertices",
    # Constraints
    "Evaluator",
    "Predicate",
    "ExpressionEvaluator",
    "CompiledExpression",
    "compile_expression",
    # Configuration
    "SpfConfig",
    "SPF_CONFIG",
    # Errors
    "CspfError",
    "NilGraphError",
    "DuplicateTagKeyError",
    "InvalidCostError",
    "ExpressionError",
    "ExpressionParseError",
    "ExpressionEvaluationError",
    "ComputationCancelledError",
    # Utilities
    "logging",
]
