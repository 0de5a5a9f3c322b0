"""Distribution Sampler: builds one batch of edge insertions and deletions.

Dispatch is by UpdateNature through a registry of update functions that all
share one signature, so reserved natures can be filled in without touching
the batch driver.

Rounding policy: the insertion count is round_half_up(batch_size *
edge_insertions) and the deletion count round_half_up(batch_size *
edge_deletions), computed independently. When fewer valid edges exist than
requested, the batch is smaller and the shortfall is visible on the Batch.
"""

import logging
import math
from collections.abc import Callable

import numpy as np

from dynbatch.config.options import (
    ProbabilityDistribution,
    UpdateNature,
    parse_probability_distribution,
    parse_update_nature,
)
from dynbatch.errors import SamplingError
from dynbatch.graph.types import DiGraph
from dynbatch.update.policies import (
    EdgeModel,
    GraphSnapshot,
    custom_model,
    head_mass,
    preferential_model,
    uniform_model,
)
from dynbatch.update.types import (
    DEFAULT_EDGE_WEIGHT,
    Batch,
    SamplingResult,
    SamplingTarget,
)

log = logging.getLogger(__name__)

# Graphs with n * n at or below this enumerate every valid pair;
# larger graphs fall back to rejection sampling.
ENUMERATION_LIMIT = 1 << 20
MAX_REJECTION_DRAWS = 10_000_000


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def batch_counts(
    batch_size: int, edge_insertions: float, edge_deletions: float
) -> tuple[int, int]:
    """Requested (insertions, deletions) for a batch."""
    return (
        round_half_up(batch_size * edge_insertions),
        round_half_up(batch_size * edge_deletions),
    )


def _normalized(x: np.ndarray) -> np.ndarray:
    total = x.sum()
    if total <= 0:
        return np.zeros_like(x, dtype=np.float64)
    return x / total


def _enumerate_insertions(
    snap: GraphSnapshot,
    model: EdgeModel,
    count: int,
    rng: np.random.Generator,
    allow_duplicate_edges: bool,
    allow_self_loops: bool,
) -> list[tuple[int, int]]:
    """Draw from the explicit list of valid pairs (small graphs)."""
    n = snap.n
    weights = np.outer(model.source, model.target)
    if not allow_duplicate_edges:
        weights[snap.src_idx, snap.dst_idx] = 0.0
    if not allow_self_loops:
        np.fill_diagonal(weights, 0.0)
    flat = weights.ravel()
    total = flat.sum()
    if total <= 0:
        return []
    if allow_duplicate_edges:
        picks = rng.choice(flat.size, size=count, replace=True, p=flat / total)
    else:
        size = min(count, int(np.count_nonzero(flat)))
        picks = rng.choice(flat.size, size=size, replace=False, p=flat / total)
    return [divmod(int(k), n) for k in picks]


def _reject_insertions(
    snap: GraphSnapshot,
    model: EdgeModel,
    count: int,
    rng: np.random.Generator,
    allow_duplicate_edges: bool,
    allow_self_loops: bool,
    acceptance: float,
) -> list[tuple[int, int]]:
    """Draw endpoints independently and reject invalid pairs (large graphs)."""
    src_p = _normalized(model.source)
    dst_p = _normalized(model.target)
    budget = min(MAX_REJECTION_DRAWS, int(4 * count / max(acceptance, 1e-12)) + 1000)
    chosen: list[tuple[int, int]] = []
    seen: set[tuple[int, int]] = set()
    draws = 0
    while len(chosen) < count and draws < budget:
        chunk = min(budget - draws, 2 * (count - len(chosen)) + 16)
        us = rng.choice(snap.n, size=chunk, p=src_p)
        vs = rng.choice(snap.n, size=chunk, p=dst_p)
        draws += chunk
        for i, j in zip(us.tolist(), vs.tolist()):
            if i == j and not allow_self_loops:
                continue
            if not allow_duplicate_edges:
                if (i, j) in seen or snap.graph.has_edge(int(snap.keys[i]), int(snap.keys[j])):
                    continue
                seen.add((i, j))
            chosen.append((i, j))
            if len(chosen) == count:
                break
    if len(chosen) < count:
        log.warning(
            "Rejection budget of %d draws exhausted with %d of %d insertions",
            budget, len(chosen), count,
        )
    return chosen


def _deletion_weights(
    snap: GraphSnapshot, model: EdgeModel, allow_self_loops: bool
) -> np.ndarray:
    """Per-edge deletion weights; existing self-loops are kept unless loops are allowed."""
    if allow_self_loops:
        return model.deletion
    return np.where(snap.src_idx == snap.dst_idx, 0.0, model.deletion)


def _sample_deletions(
    snap: GraphSnapshot, deletion: np.ndarray, count: int, rng: np.random.Generator
) -> np.ndarray:
    """Edge positions to delete, without replacement, weighted per edge."""
    positive = int(np.count_nonzero(deletion))
    if count == 0 or positive == 0:
        return np.zeros(0, dtype=np.int64)
    size = min(count, positive)
    return rng.choice(snap.m, size=size, replace=False, p=_normalized(deletion))


def sample_with_model(
    snap: GraphSnapshot,
    model: EdgeModel,
    rng: np.random.Generator,
    n_insertions: int,
    n_deletions: int,
    allow_duplicate_edges: bool,
    allow_self_loops: bool,
) -> tuple[Batch, SamplingTarget, np.ndarray]:
    """Sample a batch from an EdgeModel.

    Insertions are drawn first, then deletions, both from the pre-batch
    snapshot. Without duplicates, insertions are non-edges, so they never
    collide with the deletions of the same batch.

    Returns:
        (batch, target, weights) where weights[i] is the single-draw
        probability of the i-th sampled insertion among all valid pairs.
    """
    mass = head_mass(snap, model.source, model.target, allow_duplicate_edges, allow_self_loops)
    total_mass = float(mass.sum())

    pairs: list[tuple[int, int]] = []
    if n_insertions > 0 and total_mass > 0:
        count = n_insertions
        if not allow_duplicate_edges:
            capacity = head_mass(
                snap,
                (model.source > 0).astype(np.float64),
                (model.target > 0).astype(np.float64),
                allow_duplicate_edges,
                allow_self_loops,
            )
            count = min(count, int(round(capacity.sum())))
        if snap.n * snap.n <= ENUMERATION_LIMIT:
            pairs = _enumerate_insertions(
                snap, model, count, rng, allow_duplicate_edges, allow_self_loops
            )
        else:
            acceptance = total_mass / (model.source.sum() * model.target.sum())
            pairs = _reject_insertions(
                snap, model, count, rng, allow_duplicate_edges, allow_self_loops, acceptance
            )

    if pairs:
        i_idx = np.fromiter((i for i, _ in pairs), dtype=np.int64, count=len(pairs))
        j_idx = np.fromiter((j for _, j in pairs), dtype=np.int64, count=len(pairs))
        weights = model.source[i_idx] * model.target[j_idx] / total_mass
    else:
        weights = np.zeros(0, dtype=np.float64)

    deletion = _deletion_weights(snap, model, allow_self_loops)
    deleted = _sample_deletions(snap, deletion, n_deletions, rng)

    insertions = tuple(
        (int(snap.keys[i]), int(snap.keys[j]), DEFAULT_EDGE_WEIGHT) for i, j in pairs
    )
    deletions = tuple(
        (int(snap.keys[snap.src_idx[e]]), int(snap.keys[snap.dst_idx[e]])) for e in deleted
    )
    batch = Batch(deletions, insertions, n_deletions, n_insertions)
    if batch.insertion_shortfall or batch.deletion_shortfall:
        log.warning(
            "Sampling shortfall: %d/%d insertions, %d/%d deletions",
            len(insertions), n_insertions, len(deletions), n_deletions,
        )

    delete_heads = np.zeros(snap.n, dtype=np.float64)
    if snap.m:
        np.add.at(delete_heads, snap.dst_idx, _normalized(deletion))
    target = SamplingTarget(
        in_degrees=snap.in_degrees,
        insert_heads=_normalized(mass),
        delete_heads=delete_heads,
        n_insertions=len(insertions),
        n_deletions=len(deletions),
    )
    return batch, target, weights


# ── Update natures ─────────────────────────────────────────────────


def custom_update(
    graph: DiGraph,
    rng: np.random.Generator,
    batch_size: int,
    edge_insertions: float,
    edge_deletions: float,
    allow_duplicate_edges: bool,
    *,
    distribution: ProbabilityDistribution = ProbabilityDistribution.DEGREE,
    allow_self_loops: bool = False,
    smoothing: float = 1.0,
) -> SamplingResult:
    """Endpoints weighted by a named distribution family; returns its weights."""
    snap = GraphSnapshot.of(graph)
    model = custom_model(distribution, snap, rng)
    n_ins, n_del = batch_counts(batch_size, edge_insertions, edge_deletions)
    batch, target, weights = sample_with_model(
        snap, model, rng, n_ins, n_del, allow_duplicate_edges, allow_self_loops
    )
    return SamplingResult(batch, target, weights)


def uniform_update(
    graph: DiGraph,
    rng: np.random.Generator,
    batch_size: int,
    edge_insertions: float,
    edge_deletions: float,
    allow_duplicate_edges: bool,
    *,
    distribution: ProbabilityDistribution = ProbabilityDistribution.DEGREE,
    allow_self_loops: bool = False,
    smoothing: float = 1.0,
) -> SamplingResult:
    """Uniform over valid ordered pairs; deletions uniform over existing edges."""
    snap = GraphSnapshot.of(graph)
    n_ins, n_del = batch_counts(batch_size, edge_insertions, edge_deletions)
    batch, target, _ = sample_with_model(
        snap, uniform_model(snap), rng, n_ins, n_del, allow_duplicate_edges, allow_self_loops
    )
    return SamplingResult(batch, target)


def preferential_update(
    graph: DiGraph,
    rng: np.random.Generator,
    batch_size: int,
    edge_insertions: float,
    edge_deletions: float,
    allow_duplicate_edges: bool,
    *,
    distribution: ProbabilityDistribution = ProbabilityDistribution.DEGREE,
    allow_self_loops: bool = False,
    smoothing: float = 1.0,
) -> SamplingResult:
    """Endpoints weighted by degree + smoothing, deletions likewise."""
    snap = GraphSnapshot.of(graph)
    n_ins, n_del = batch_counts(batch_size, edge_insertions, edge_deletions)
    batch, target, _ = sample_with_model(
        snap,
        preferential_model(snap, smoothing),
        rng,
        n_ins,
        n_del,
        allow_duplicate_edges,
        allow_self_loops,
    )
    return SamplingResult(batch, target)


def _reserved_update(nature: UpdateNature) -> Callable[..., SamplingResult]:
    def update(
        graph: DiGraph,
        rng: np.random.Generator,
        batch_size: int,
        edge_insertions: float,
        edge_deletions: float,
        allow_duplicate_edges: bool,
        **_: object,
    ) -> SamplingResult:
        n_ins, n_del = batch_counts(batch_size, edge_insertions, edge_deletions)
        log.warning("Update nature %r is reserved; producing an empty batch", str(nature))
        _, _, in_deg = graph.degree_arrays()
        return SamplingResult(
            Batch((), (), n_del, n_ins), SamplingTarget.unchanged(in_deg)
        )

    update.__name__ = f"{nature}_update"
    return update


UPDATES: dict[UpdateNature, Callable[..., SamplingResult]] = {
    UpdateNature.CUSTOM: custom_update,
    UpdateNature.UNIFORM: uniform_update,
    UpdateNature.PREFERENTIAL: preferential_update,
    UpdateNature.PLANTED: _reserved_update(UpdateNature.PLANTED),
    UpdateNature.MATCH: _reserved_update(UpdateNature.MATCH),
}


def sample_batch(
    nature: UpdateNature | str,
    distribution: ProbabilityDistribution | str,
    graph: DiGraph,
    rng: np.random.Generator,
    batch_size: int,
    edge_insertions: float,
    edge_deletions: float,
    allow_duplicate_edges: bool = False,
    allow_self_loops: bool = False,
    smoothing: float = 1.0,
) -> SamplingResult:
    """Produce one batch under the given update nature.

    Args:
        nature: Update nature; strings are parsed (UnknownUpdateNature).
        distribution: Family for the custom nature; ignored otherwise.
        graph: Current graph, read only.
        rng: The run's Generator; all draws come from it in a fixed order.
        batch_size: Batch size the fractions apply to.
        edge_insertions: Insertion fraction of batch_size.
        edge_deletions: Deletion fraction of batch_size.
        allow_duplicate_edges: Allow insertions of existing or repeated pairs.
        allow_self_loops: Allow u == v insertions.
        smoothing: Degree smoothing of the preferential nature.

    Returns:
        SamplingResult with the batch, its target model, and (custom nature
        only) the sampling weights of the sampled insertions.

    Raises:
        SamplingError: If the probability model is numerically invalid.
    """
    nature = parse_update_nature(nature)
    distribution = parse_probability_distribution(distribution)
    try:
        return UPDATES[nature](
            graph,
            rng,
            batch_size,
            edge_insertions,
            edge_deletions,
            allow_duplicate_edges,
            distribution=distribution,
            allow_self_loops=allow_self_loops,
            smoothing=smoothing,
        )
    except ValueError as exc:
        raise SamplingError(f"{nature or 'custom'} sampling failed: {exc}") from exc
