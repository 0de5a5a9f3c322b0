"""Tests for structural graph transforms."""

import pytest

from dynbatch.config import InputTransform
from dynbatch.graph import (
    DiGraph,
    apply_transform,
    clear_weights,
    loop_deadends,
    loop_vertices,
    set_weights,
    symmetrize,
    transpose,
    unsymmetrize,
)


@pytest.fixture
def graph():
    """1 -> 2 (w=5), 2 -> 1 (w=6), 3 -> 1 (w=2), plus isolated 4."""
    g = DiGraph()
    g.add_edge(1, 2, 5)
    g.add_edge(2, 1, 6)
    g.add_edge(3, 1, 2)
    g.add_vertex(4, 7)
    return g


class TestDirectionTransforms:
    def test_transpose(self, graph):
        t = transpose(graph)
        assert list(t.all_edges()) == [(1, 2, 6), (1, 3, 2), (2, 1, 5)]
        assert t.order() == 4
        assert t.vertex_data(4) == 7

    def test_transpose_leaves_input(self, graph):
        transpose(graph)
        assert graph.has_edge(3, 1) and not graph.has_edge(1, 3)

    def test_symmetrize(self, graph):
        s = symmetrize(graph)
        assert s.has_edge(1, 3)
        assert s.edge_weight(1, 3) == 2
        # Reciprocal pairs keep their own weights
        assert s.edge_weight(1, 2) == 5
        assert s.edge_weight(2, 1) == 6
        assert s.size() == 4

    def test_unsymmetrize(self, graph):
        u = unsymmetrize(graph)
        assert list(u.all_edges()) == [(1, 2, 5), (3, 1, 2)]
        assert u.order() == 4


class TestLoopTransforms:
    def test_loop_deadends(self, graph):
        g = loop_deadends(graph)
        assert g.has_edge(4, 4)
        assert not g.has_edge(1, 1)
        assert g.size() == graph.size() + 1

    def test_loop_vertices(self, graph):
        g = loop_vertices(graph)
        assert all(g.has_edge(u, u) for u in g.vertex_keys())
        assert g.size() == graph.size() + 4

    def test_loop_vertices_existing_loop(self):
        g = DiGraph()
        g.add_edge(1, 1, 9)
        looped = loop_vertices(g)
        assert looped.size() == 1
        assert looped.edge_weight(1, 1) == 9


class TestWeightTransforms:
    def test_clear_weights(self, graph):
        g = clear_weights(graph)
        assert {w for _, _, w in g.all_edges()} == {0}
        assert g.order() == graph.order()

    def test_set_weights(self, graph):
        g = set_weights(clear_weights(graph))
        assert {w for _, _, w in g.all_edges()} == {1}
        assert g.size() == graph.size()


class TestApplyTransform:
    @pytest.mark.parametrize("name", list(InputTransform))
    def test_every_name_dispatches(self, graph, name):
        result = apply_transform(name, graph)
        assert isinstance(result, DiGraph)
        assert result.order() == graph.order()

    def test_chain_in_order(self, graph):
        g = graph
        for name in (InputTransform.TRANSPOSE, InputTransform.LOOP_DEADENDS):
            g = apply_transform(name, g)
        # After transpose, 3 has no out-edges and gets the loop
        assert g.has_edge(3, 3)
        assert g.has_edge(4, 4)
