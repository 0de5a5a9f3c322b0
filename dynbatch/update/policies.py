"""Endpoint and deletion weights for each sampling policy.

A policy is expressed as an EdgeModel: a weight per vertex for choosing the
source of an insertion, a weight per vertex for choosing its target, and a
weight per existing edge for choosing deletions. Sampling an insertion draws
both endpoints independently from these weights and rejects invalid pairs,
so a pair (u, v) is picked with probability proportional to
source[u] * target[v] over the valid pairs.
"""

from dataclasses import dataclass

import numpy as np

from dynbatch.config.options import ProbabilityDistribution
from dynbatch.graph.types import DiGraph


@dataclass(frozen=True)
class GraphSnapshot:
    """Array view of the graph taken once before sampling a batch.

    Edge endpoints are stored as positions into `keys` (ascending vertex
    keys), which is the index space of every per-vertex weight array.
    """

    graph: DiGraph
    keys: np.ndarray  # int64 vertex keys, ascending
    out_degrees: np.ndarray
    in_degrees: np.ndarray
    src_idx: np.ndarray  # per edge, position of the source in keys
    dst_idx: np.ndarray  # per edge, position of the target in keys
    has_loop: np.ndarray  # bool per vertex

    @property
    def n(self) -> int:
        return len(self.keys)

    @property
    def m(self) -> int:
        return len(self.src_idx)

    @classmethod
    def of(cls, graph: DiGraph) -> "GraphSnapshot":
        keys, out_deg, in_deg = graph.degree_arrays()
        src, dst, _ = graph.edge_arrays()
        src_idx = np.searchsorted(keys, src)
        dst_idx = np.searchsorted(keys, dst)
        has_loop = np.zeros(len(keys), dtype=bool)
        has_loop[src_idx[src_idx == dst_idx]] = True
        return cls(graph, keys, out_deg, in_deg, src_idx, dst_idx, has_loop)


@dataclass(frozen=True)
class EdgeModel:
    """Insertion endpoint weights and deletion weights of one policy."""

    source: np.ndarray  # float64 per vertex
    target: np.ndarray  # float64 per vertex
    deletion: np.ndarray  # float64 per existing edge, in snapshot edge order


def uniform_model(snap: GraphSnapshot) -> EdgeModel:
    """Uniform over valid ordered pairs; deletions uniform over edges."""
    ones = np.ones(snap.n, dtype=np.float64)
    return EdgeModel(ones, ones, np.ones(snap.m, dtype=np.float64))


def _symmetric_model(weights: np.ndarray, snap: GraphSnapshot) -> EdgeModel:
    """Same weights on both endpoints; edges deleted by endpoint weight product."""
    deletion = weights[snap.src_idx] * weights[snap.dst_idx]
    return EdgeModel(weights, weights, deletion)


def preferential_model(snap: GraphSnapshot, smoothing: float) -> EdgeModel:
    """Preferential attachment: weight = total degree + smoothing.

    The smoothing constant gives zero-degree vertices a nonzero chance.
    Deletions are weighted by the same endpoint weights, so insertion and
    deletion pressure are symmetric.
    """
    degree = (snap.out_degrees + snap.in_degrees).astype(np.float64)
    return _symmetric_model(degree + smoothing, snap)


def zipf_weights(n: int, rng: np.random.Generator, alpha: float = 1.0) -> np.ndarray:
    """Zipf rank weights 1/rank^alpha, randomly assigned, normalized to sum n."""
    if n == 0:
        return np.zeros(0, dtype=np.float64)
    ranks = np.arange(1, n + 1, dtype=np.float64)
    raw = 1.0 / (ranks**alpha)
    # Randomize which vertex gets which rank
    rng.shuffle(raw)
    return raw * (n / raw.sum())


def family_weights(
    family: ProbabilityDistribution, snap: GraphSnapshot, rng: np.random.Generator
) -> np.ndarray:
    """Per-vertex weights of a custom probability distribution family.

    DEGREE and IN_DEGREE give isolated vertices zero weight, so on an
    edgeless graph the custom sampler has no candidates at all.
    """
    if family is ProbabilityDistribution.DEGREE:
        return (snap.out_degrees + snap.in_degrees).astype(np.float64)
    if family is ProbabilityDistribution.IN_DEGREE:
        return snap.in_degrees.astype(np.float64)
    if family is ProbabilityDistribution.UNIFORM:
        return np.ones(snap.n, dtype=np.float64)
    if family is ProbabilityDistribution.ZIPF:
        return zipf_weights(snap.n, rng)
    if family is ProbabilityDistribution.EXPONENTIAL:
        return rng.exponential(1.0, snap.n)
    raise ValueError(f"No weights defined for distribution {family!r}")


def custom_model(
    family: ProbabilityDistribution, snap: GraphSnapshot, rng: np.random.Generator
) -> EdgeModel:
    return _symmetric_model(family_weights(family, snap, rng), snap)


def head_mass(
    snap: GraphSnapshot,
    source: np.ndarray,
    target: np.ndarray,
    allow_duplicate_edges: bool,
    allow_self_loops: bool,
) -> np.ndarray:
    """Total weight of valid insertion pairs ending at each vertex.

    mass[v] = target[v] * sum(source[u] for valid u), where u is invalid if
    u == v (self-loops disallowed) or u -> v already exists (duplicates
    disallowed). Normalized, this is the probability that one insertion
    lands on v; with 0/1 weights its sum counts the valid pairs.
    """
    available = np.full(snap.n, source.sum(), dtype=np.float64)
    if not allow_duplicate_edges:
        np.subtract.at(available, snap.dst_idx, source[snap.src_idx])
        if not allow_self_loops:
            # Existing loops were already subtracted as in-edges
            available -= np.where(snap.has_loop, 0.0, source)
    elif not allow_self_loops:
        available -= source
    return target * np.clip(available, 0.0, None)
