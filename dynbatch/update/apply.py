"""Batch Applier: applies one batch to the graph as a single logical step."""

import logging

from dynbatch.errors import BatchApplicationError
from dynbatch.graph.types import DiGraph
from dynbatch.update.types import Batch

log = logging.getLogger(__name__)


def validate_batch(graph: DiGraph, batch: Batch) -> list[str]:
    """Check a batch against the graph without mutating it.

    Batches only ever connect existing vertices; vertex growth is not part
    of an edge batch.

    Returns:
        List of error strings (empty = batch can be applied).
    """
    errors: list[str] = []
    missing = sorted(
        {x for u, v, _ in batch.insertions for x in (u, v) if not graph.has_vertex(x)}
    )
    if missing:
        errors.append(f"Insertion endpoints not in graph: {missing[:10]}")
    return errors


def apply_batch(graph: DiGraph, batch: Batch) -> tuple[int, int]:
    """Apply deletions, then insertions, to the graph in place.

    The batch is validated before the first mutation, so it is either
    applied completely or not at all. Deleting an absent edge is a no-op.
    Inserting an existing edge overwrites its weight.

    Returns:
        (deleted, inserted): edges actually removed and edges actually new.
        The graph size changes by exactly inserted - deleted.

    Raises:
        BatchApplicationError: If the batch fails validation.
    """
    errors = validate_batch(graph, batch)
    if errors:
        raise BatchApplicationError("; ".join(errors))

    removed = sum(graph.remove_edge(u, v) for u, v in batch.deletions)
    added = sum(graph.add_edge(u, v, w) for u, v, w in batch.insertions)
    log.debug(
        "Applied batch: -%d/%d deletions, +%d/%d insertions, size now %d",
        removed, len(batch.deletions), added, len(batch.insertions), graph.size(),
    )
    return removed, added
