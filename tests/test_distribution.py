"""Tests for the Distribution Analyzer."""

import numpy as np
import pytest

from dynbatch.analysis import (
    align_distributions,
    degree_distribution,
    format_distribution,
    in_degree_distribution,
    to_probability_vector,
)
from dynbatch.graph import DiGraph


@pytest.fixture
def graph():
    """1 -> 2, 1 -> 3, 2 -> 3."""
    g = DiGraph()
    g.add_edge(1, 2)
    g.add_edge(1, 3)
    g.add_edge(2, 3)
    return g


class TestDegreeDistribution:
    def test_out_degree(self, graph):
        assert degree_distribution(graph) == {0: 1, 1: 1, 2: 1}

    def test_undirected(self, graph):
        assert degree_distribution(graph, undirected=True) == {2: 3}

    def test_in_degree(self, graph):
        assert in_degree_distribution(graph) == {0: 1, 1: 1, 2: 1}

    def test_keys_ascending(self):
        g = DiGraph()
        for v in range(1, 6):
            g.add_edge(0, v)
        g.add_edge(1, 2)
        dist = degree_distribution(g)
        assert list(dist) == sorted(dist)
        assert dist == {0: 4, 1: 1, 5: 1}

    def test_counts_sum_to_order(self, graph):
        graph.add_vertex(10)
        assert sum(degree_distribution(graph).values()) == graph.order()

    def test_empty_graph(self):
        assert degree_distribution(DiGraph()) == {}
        assert in_degree_distribution(DiGraph()) == {}


class TestProbabilityVector:
    def test_sums_to_one(self):
        p = to_probability_vector({0: 3, 1: 5, 7: 2})
        assert p.sum() == pytest.approx(1.0, abs=1e-9)
        assert p.tolist() == pytest.approx([0.3, 0.5, 0.2])

    def test_key_order_not_insertion_order(self):
        p = to_probability_vector({7: 2, 0: 3, 1: 5})
        assert p.tolist() == pytest.approx([0.3, 0.5, 0.2])

    def test_empty(self):
        assert to_probability_vector({}).size == 0

    def test_align(self):
        keys, p, q = align_distributions({1: 2}, {2: 2.0})
        assert keys == [1, 2]
        assert np.array_equal(p, [1.0, 0.0])
        assert np.array_equal(q, [0.0, 1.0])

    def test_align_shared_keys(self):
        keys, p, q = align_distributions({0: 1, 2: 3}, {0: 2.0, 1: 2.0})
        assert keys == [0, 1, 2]
        assert p.tolist() == pytest.approx([0.25, 0.0, 0.75])
        assert q.tolist() == pytest.approx([0.5, 0.5, 0.0])


class TestFormat:
    def test_format(self):
        text = format_distribution({0: 2, 3: 1})
        assert text.splitlines() == [
            "Degree Distribution:",
            "Degree 0: 2 vertices",
            "Degree 3: 1 vertices",
        ]

    def test_custom_title(self):
        assert format_distribution({}, title="In-degree").splitlines() == ["In-degree:"]
