"""Structural graph-to-graph transforms applied after loading.

Each transform works on a networkx copy and returns a new DiGraph, leaving
its input untouched, so the driver can rebind its graph handle after every
step.
"""

import logging
from collections.abc import Callable

import networkx as nx

from dynbatch.config.options import InputTransform
from dynbatch.graph.types import DEFAULT_WEIGHT, WEIGHT_ATTR, DiGraph

log = logging.getLogger(__name__)


def transpose(graph: DiGraph) -> DiGraph:
    """Reverse every edge, keeping weights."""
    return DiGraph(graph.nx_graph.reverse(copy=True))


def symmetrize(graph: DiGraph) -> DiGraph:
    """Add each missing reverse edge with the forward edge's weight."""
    g = graph.nx_graph
    out = g.copy()
    out.add_edges_from(
        (v, u, dict(attrs)) for u, v, attrs in g.edges(data=True) if not g.has_edge(v, u)
    )
    return DiGraph(out)


def unsymmetrize(graph: DiGraph) -> DiGraph:
    """Drop the u > v half of every reciprocal pair.

    One-way edges are kept whatever their direction.
    """
    g = graph.nx_graph
    out = g.copy()
    out.remove_edges_from([(u, v) for u, v in g.edges if u > v and g.has_edge(v, u)])
    return DiGraph(out)


def loop_deadends(graph: DiGraph) -> DiGraph:
    """Add a weight-1 self-loop to every vertex without out-edges."""
    out = graph.nx_graph.copy()
    deadends = [u for u, d in graph.nx_graph.out_degree() if d == 0]
    out.add_edges_from(((u, u) for u in deadends), **{WEIGHT_ATTR: DEFAULT_WEIGHT})
    return DiGraph(out)


def loop_vertices(graph: DiGraph) -> DiGraph:
    """Add a weight-1 self-loop to every vertex that lacks one."""
    out = graph.nx_graph.copy()
    looped = {u for u, _ in nx.selfloop_edges(graph.nx_graph)}
    missing = [u for u in out if u not in looped]
    out.add_edges_from(((u, u) for u in missing), **{WEIGHT_ATTR: DEFAULT_WEIGHT})
    return DiGraph(out)


def _reweighted(graph: DiGraph, weight: int) -> DiGraph:
    out = graph.nx_graph.copy()
    nx.set_edge_attributes(out, weight, WEIGHT_ATTR)
    return DiGraph(out)


def clear_weights(graph: DiGraph) -> DiGraph:
    """Set every edge weight to 0."""
    return _reweighted(graph, 0)


def set_weights(graph: DiGraph) -> DiGraph:
    """Set every edge weight to 1."""
    return _reweighted(graph, 1)


_TRANSFORMS: dict[InputTransform, Callable[[DiGraph], DiGraph]] = {
    InputTransform.TRANSPOSE: transpose,
    InputTransform.SYMMETRIZE: symmetrize,
    InputTransform.UNSYMMETRIZE: unsymmetrize,
    InputTransform.LOOP_DEADENDS: loop_deadends,
    InputTransform.LOOP_VERTICES: loop_vertices,
    InputTransform.CLEAR_WEIGHTS: clear_weights,
    InputTransform.SET_WEIGHTS: set_weights,
}


def apply_transform(name: InputTransform, graph: DiGraph) -> DiGraph:
    """Apply one named transform and return the resulting graph."""
    result = _TRANSFORMS[name](graph)
    log.debug(
        "Transform %s: size %d -> %d", name, graph.size(), result.size()
    )
    return result
