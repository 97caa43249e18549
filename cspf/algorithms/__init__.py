"""Path computation: SPF/CSPF and path enumeration."""

from cspf.algorithms.paths import path_cost, path_vertices, paths
from cspf.algorithms.spf import Cost, cspf, shortest_paths, spf

__all__ = [
    "Cost",
    "cspf",
    "path_cost",
    "path_vertices",
    "paths",
    "shortest_paths",
    "spf",
]
