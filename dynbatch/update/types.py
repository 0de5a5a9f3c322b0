"""Batch and sampling-result data structures."""

from dataclasses import dataclass

import numpy as np

DEFAULT_EDGE_WEIGHT = 1


@dataclass(frozen=True, slots=True)
class Batch:
    """One atomic update step: deletions are applied before insertions.

    The requested counts are kept next to the sampled edges so that a
    shortfall (fewer valid edges than asked for) stays observable.
    """

    deletions: tuple[tuple[int, int], ...] = ()
    insertions: tuple[tuple[int, int, int], ...] = ()
    requested_deletions: int = 0
    requested_insertions: int = 0

    @property
    def insertion_shortfall(self) -> int:
        return self.requested_insertions - len(self.insertions)

    @property
    def deletion_shortfall(self) -> int:
        return self.requested_deletions - len(self.deletions)

    def is_empty(self) -> bool:
        return not self.deletions and not self.insertions


@dataclass(frozen=True)
class SamplingTarget:
    """The sampler's intended model for one batch, per vertex.

    Arrays are aligned with the pre-batch vertex keys in ascending order.
    Uses frozen=True but omits slots=True since numpy arrays don't interact
    well with __slots__.
    """

    in_degrees: np.ndarray  # int64, pre-batch in-degree
    insert_heads: np.ndarray  # float64, P(an insertion lands on v)
    delete_heads: np.ndarray  # float64, P(a deletion removes an in-edge of v)
    n_insertions: int  # insertions actually sampled
    n_deletions: int  # deletions actually sampled

    @classmethod
    def unchanged(cls, in_degrees: np.ndarray) -> "SamplingTarget":
        """Target of an empty batch: every vertex keeps its in-degree."""
        zeros = np.zeros(len(in_degrees), dtype=np.float64)
        return cls(in_degrees, zeros, zeros.copy(), 0, 0)


@dataclass(frozen=True)
class SamplingResult:
    """Sampler output: the batch, its intended model, and custom-path weights."""

    batch: Batch
    target: SamplingTarget
    weights: np.ndarray | None = None  # only for the custom update nature
