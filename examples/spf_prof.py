# pylint: disable=invalid-name
from line_profiler import LineProfiler

from cspf.algorithms.spf import shortest_paths, spf
from cspf.expr import compile_expression
from cspf.graph import Graph, Tag


g = Graph()
node_ids = []
for node_num in range(100):
    node_id = str(node_num)
    for _node_id in node_ids:
        for _cost in range(20, 0, -1):
            color = "blue" if _cost % 2 else "red"
            g.add_edge(_node_id, node_id, _cost, Tag("link", color))
            g.add_edge(node_id, _node_id, _cost, Tag("link", color))
    g.add_node(node_id)
    node_ids.append(node_id)

predicate = compile_expression('link == "blue"')

lp = LineProfiler()
lp.add_function(shortest_paths)
lp_wrapper = lp(spf)
lp_wrapper(g, "0", "99", predicate)
lp.print_stats()
