"""Tests for the Batch Applier."""

import pytest

from dynbatch.errors import BatchApplicationError
from dynbatch.graph import DiGraph
from dynbatch.update import Batch, apply_batch, validate_batch


@pytest.fixture
def graph():
    g = DiGraph()
    g.add_edge(1, 2)
    g.add_edge(2, 3)
    g.add_vertex(4)
    return g


class TestApplyBatch:
    def test_deletions_then_insertions(self, graph):
        batch = Batch(deletions=((1, 2),), insertions=((3, 4, 1), (4, 1, 2)))
        apply_batch(graph, batch)
        assert not graph.has_edge(1, 2)
        assert graph.has_edge(3, 4)
        assert graph.edge_weight(4, 1) == 2
        assert graph.size() == 3

    def test_delete_and_reinsert_same_edge(self, graph):
        batch = Batch(deletions=((1, 2),), insertions=((1, 2, 7),))
        apply_batch(graph, batch)
        assert graph.has_edge(1, 2)
        assert graph.edge_weight(1, 2) == 7
        assert graph.size() == 2

    def test_missing_deletion_is_noop(self, graph):
        apply_batch(graph, Batch(deletions=((3, 1), (9, 9))))
        assert graph.size() == 2

    def test_insert_existing_overwrites(self, graph):
        apply_batch(graph, Batch(insertions=((1, 2, 5),)))
        assert graph.size() == 2
        assert graph.edge_weight(1, 2) == 5

    def test_returns_applied_counts(self, graph):
        """Repeated and existing pairs only overwrite weights and are not counted."""
        batch = Batch(
            deletions=((1, 2), (3, 1)),
            insertions=((3, 4, 1), (3, 4, 2), (2, 3, 5)),
        )
        size_before = graph.size()
        deleted, inserted = apply_batch(graph, batch)
        assert (deleted, inserted) == (1, 1)
        assert graph.size() - size_before == inserted - deleted
        assert graph.edge_weight(3, 4) == 2
        assert graph.edge_weight(2, 3) == 5

    def test_empty_batch(self, graph):
        before = list(graph.all_edges())
        apply_batch(graph, Batch())
        assert list(graph.all_edges()) == before

    def test_order_unchanged(self, graph):
        apply_batch(graph, Batch(deletions=((1, 2), (2, 3))))
        assert graph.order() == 4
        assert graph.size() == 0


class TestAtomicity:
    def test_unknown_endpoint_rejected(self, graph):
        before = list(graph.all_edges())
        batch = Batch(deletions=((1, 2),), insertions=((2, 4, 1), (3, 99, 1)))
        with pytest.raises(BatchApplicationError, match="99"):
            apply_batch(graph, batch)
        assert list(graph.all_edges()) == before
        assert not graph.has_vertex(99)

    def test_validate_batch(self, graph):
        assert validate_batch(graph, Batch(insertions=((1, 4, 1),))) == []
        errors = validate_batch(graph, Batch(insertions=((5, 6, 1),)))
        assert len(errors) == 1
        assert "[5, 6]" in errors[0]
