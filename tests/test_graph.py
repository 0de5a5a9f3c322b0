"""Tests for the in-memory DiGraph handle."""

import networkx as nx
import numpy as np

from dynbatch.graph import DiGraph


def _graph(edges):
    g = DiGraph()
    for u, v, *w in edges:
        g.add_edge(u, v, *w)
    return g


class TestMutation:
    """add_edge/remove_edge keep the graph simple and counters exact."""

    def test_add_edge_creates_endpoints(self):
        g = DiGraph()
        assert g.add_edge(1, 2, 5) is True
        assert g.order() == 2
        assert g.size() == 1
        assert g.edge_weight(1, 2) == 5

    def test_readd_overwrites_weight(self):
        g = _graph([(1, 2, 5)])
        assert g.add_edge(1, 2, 9) is False
        assert g.size() == 1
        assert g.in_degree(2) == 1
        assert g.edge_weight(1, 2) == 9

    def test_remove_edge(self):
        g = _graph([(1, 2), (2, 3)])
        assert g.remove_edge(1, 2) is True
        assert g.size() == 1
        assert g.in_degree(2) == 0
        assert g.has_vertex(1)

    def test_remove_missing_is_noop(self):
        g = _graph([(1, 2)])
        assert g.remove_edge(2, 1) is False
        assert g.remove_edge(7, 8) is False
        assert g.size() == 1

    def test_add_vertex_updates_data(self):
        g = DiGraph()
        g.add_vertex(4, 3)
        g.add_vertex(4, 8)
        assert g.order() == 1
        assert g.vertex_data(4) == 8

    def test_self_loop_counts_once(self):
        g = _graph([(1, 1)])
        assert g.size() == 1
        assert g.degree(1) == 1
        assert g.in_degree(1) == 1

    def test_sparse_large_keys(self):
        g = _graph([(2**40, 3), (3, 2**40)])
        assert g.vertex_keys() == [3, 2**40]
        assert g.has_edge(2**40, 3)


class TestIteration:
    """Iteration is in ascending key order."""

    def test_all_edges_sorted(self):
        g = _graph([(3, 1), (1, 5), (1, 2)])
        assert list(g.all_edges()) == [(1, 2, 1), (1, 5, 1), (3, 1, 1)]

    def test_vertices_sorted(self):
        g = DiGraph()
        for u in (5, 2, 9):
            g.add_vertex(u, u * 10)
        assert list(g.vertices()) == [(2, 20), (5, 50), (9, 90)]

    def test_degree_arrays(self):
        g = _graph([(1, 2), (1, 3), (2, 3)])
        keys, out_deg, in_deg = g.degree_arrays()
        assert keys.tolist() == [1, 2, 3]
        assert out_deg.tolist() == [2, 1, 0]
        assert in_deg.tolist() == [0, 1, 2]
        assert out_deg.dtype == np.int64

    def test_edge_arrays(self):
        g = _graph([(2, 1, 4), (1, 2, 3)])
        src, dst, w = g.edge_arrays()
        assert src.tolist() == [1, 2]
        assert dst.tolist() == [2, 1]
        assert w.tolist() == [3, 4]

    def test_empty_graph_arrays(self):
        keys, out_deg, in_deg = DiGraph().degree_arrays()
        assert keys.size == 0 and out_deg.size == 0 and in_deg.size == 0


class TestCopy:
    """copy() is deep with respect to adjacency."""

    def test_copy_independent(self):
        g = _graph([(1, 2)])
        g.add_vertex(3, 7)
        h = g.copy()
        h.add_edge(2, 3)
        h.remove_edge(1, 2)
        assert g.size() == 1 and g.has_edge(1, 2)
        assert h.vertex_data(3) == 7
        assert h.size() == 1


class TestNetworkxBacking:
    """The handle is a view over a networkx.DiGraph."""

    def test_mutations_reach_networkx(self):
        g = _graph([(1, 2, 4)])
        assert isinstance(g.nx_graph, nx.DiGraph)
        assert g.nx_graph.edges[1, 2]["weight"] == 4
        g.remove_edge(1, 2)
        assert g.nx_graph.number_of_edges() == 0

    def test_wraps_existing_graph(self):
        base = nx.DiGraph()
        base.add_edge(5, 3, weight=2)
        base.add_node(9)
        g = DiGraph(base)
        assert list(g.all_edges()) == [(5, 3, 2)]
        assert g.vertex_data(9) == 0
        assert g.in_degree(3) == 1

    def test_add_edges_bulk(self):
        g = DiGraph()
        g.add_edges([(2, 1, 3), (1, 2, 4), (2, 1, 7)])
        assert g.size() == 2
        assert g.edge_weight(2, 1) == 7
