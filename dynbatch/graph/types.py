"""In-memory directed graph handle used throughout a run."""

from collections.abc import Iterable, Iterator

import networkx as nx
import numpy as np

DATA_ATTR = "data"
WEIGHT_ATTR = "weight"
DEFAULT_WEIGHT = 1


class DiGraph:
    """Simple directed graph with integer keys, vertex data and edge weights.

    Backed by a networkx.DiGraph, which already holds each (u, v) pair at
    most once: adding an existing edge overwrites its weight. This handle
    adds the integer conventions (missing vertex data reads as 0) and
    ascending-key iteration, so written snapshots and sampled batches are
    deterministic whatever order edges were inserted in.
    """

    def __init__(self, graph: nx.DiGraph | None = None) -> None:
        self._g = graph if graph is not None else nx.DiGraph()

    def __repr__(self) -> str:
        return f"DiGraph(order={self.order()}, size={self.size()})"

    @property
    def nx_graph(self) -> nx.DiGraph:
        """The underlying networkx graph."""
        return self._g

    # ── Queries ────────────────────────────────────────────────────

    def order(self) -> int:
        """Number of vertices."""
        return self._g.number_of_nodes()

    def size(self) -> int:
        """Number of directed edges."""
        return self._g.number_of_edges()

    def has_vertex(self, u: int) -> bool:
        return self._g.has_node(u)

    def has_edge(self, u: int, v: int) -> bool:
        return self._g.has_edge(u, v)

    def edge_weight(self, u: int, v: int) -> int:
        return self._g.edges[u, v][WEIGHT_ATTR]

    def vertex_data(self, u: int) -> int:
        return self._g.nodes[u].get(DATA_ATTR, 0)

    def degree(self, u: int) -> int:
        """Out-degree of u."""
        return self._g.out_degree(u)

    def in_degree(self, u: int) -> int:
        return self._g.in_degree(u)

    def vertex_keys(self) -> list[int]:
        """Vertex keys in ascending order."""
        return sorted(self._g)

    def vertices(self) -> Iterator[tuple[int, int]]:
        """Yield (key, data) in ascending key order."""
        for u in self.vertex_keys():
            yield u, self.vertex_data(u)

    def edges(self, u: int) -> Iterator[tuple[int, int]]:
        """Yield (target, weight) of u's out-edges in ascending target order."""
        succ = self._g.succ[u]
        for v in sorted(succ):
            yield v, succ[v][WEIGHT_ATTR]

    def all_edges(self) -> Iterator[tuple[int, int, int]]:
        """Yield every (u, v, w), sources then targets ascending."""
        for u in self.vertex_keys():
            for v, w in self.edges(u):
                yield u, v, w

    def degree_arrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Keys, out-degrees and in-degrees as aligned int64 arrays."""
        keys = self.vertex_keys()
        out_deg = dict(self._g.out_degree())
        in_deg = dict(self._g.in_degree())
        return (
            np.asarray(keys, dtype=np.int64),
            np.fromiter((out_deg[u] for u in keys), dtype=np.int64, count=len(keys)),
            np.fromiter((in_deg[u] for u in keys), dtype=np.int64, count=len(keys)),
        )

    def edge_arrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Sources, targets and weights of all edges in iteration order."""
        edges = list(self.all_edges())
        if not edges:
            empty = np.zeros(0, dtype=np.int64)
            return empty, empty.copy(), empty.copy()
        src, dst, wts = np.asarray(edges, dtype=np.int64).T
        return src, dst, wts

    # ── Mutation ───────────────────────────────────────────────────

    def add_vertex(self, u: int, data: int = 0) -> None:
        """Add vertex u, or update its data if it already exists."""
        self._g.add_node(int(u), **{DATA_ATTR: int(data)})

    def add_edge(self, u: int, v: int, w: int = DEFAULT_WEIGHT) -> bool:
        """Add edge u -> v, creating missing endpoints.

        Returns:
            True if the edge is new, False if an existing weight was overwritten.
        """
        u, v = int(u), int(v)
        is_new = not self._g.has_edge(u, v)
        self._g.add_edge(u, v, **{WEIGHT_ATTR: int(w)})
        return is_new

    def remove_edge(self, u: int, v: int) -> bool:
        """Remove edge u -> v. A missing edge is a no-op returning False."""
        if not self._g.has_edge(u, v):
            return False
        self._g.remove_edge(u, v)
        return True

    def add_edges(self, edges: Iterable[tuple[int, int, int]]) -> None:
        self._g.add_weighted_edges_from(
            ((int(u), int(v), int(w)) for u, v, w in edges), weight=WEIGHT_ATTR
        )

    def copy(self) -> "DiGraph":
        return DiGraph(self._g.copy())
