"""Divergence Validator: Kullback-Leibler divergence between distributions.

Inputs must already be normalized; nothing here renormalizes a vector
passed to kl_divergence. Where the reference has mass the compared
distribution lacks, the divergence is undefined and ZeroSupportMismatch is
raised for the caller to report.
"""

from collections.abc import Mapping, Sequence

import numpy as np
from scipy.special import rel_entr

from dynbatch.analysis.distribution import align_distributions
from dynbatch.errors import ZeroSupportMismatch


def kl_divergence(p: Sequence[float] | np.ndarray, q: Sequence[float] | np.ndarray) -> float:
    """KL(P || Q) = sum of P[i] * log(P[i] / Q[i]).

    The vectors are compared index by index over the longer length; a
    missing index counts as probability 0.

    Args:
        p: Reference probability vector.
        q: Compared probability vector.

    Returns:
        Divergence in nats (>= 0 for normalized inputs).

    Raises:
        ZeroSupportMismatch: If P[i] > 0 and Q[i] == 0 for some i.
    """
    p = np.asarray(p, dtype=np.float64)
    q = np.asarray(q, dtype=np.float64)
    size = max(len(p), len(q))
    p = np.pad(p, (0, size - len(p)))
    q = np.pad(q, (0, size - len(q)))

    bad = np.flatnonzero((p > 0) & (q == 0))
    if bad.size:
        i = int(bad[0])
        raise ZeroSupportMismatch(i, float(p[i]))
    return float(np.sum(rel_entr(p, q)))


def normalize(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """Divide by the sum. Empty or zero-sum input gives an empty vector."""
    values = np.asarray(values, dtype=np.float64)
    total = values.sum()
    if values.size == 0 or total <= 0:
        return np.zeros(0, dtype=np.float64)
    return values / total


def degree_divergence(observed: Mapping[int, float], expected: Mapping[int, float]) -> float:
    """KL(observed || expected) with both sides aligned on the union of degrees.

    The observed distribution is passed as kl_divergence's P (its reference
    side) and the model's expected distribution as Q. This is the reverse of
    reading the expected model as the reference: the divergence measures how
    far the graph the batch produced sits from the model, and a degree the
    graph actually reached but the model gave no mass is a sampler/graph
    mismatch that raises ZeroSupportMismatch.
    """
    _, p, q = align_distributions(observed, expected)
    return kl_divergence(p, q)


def sampling_weight_divergence(weights: Sequence[float] | np.ndarray) -> float:
    """KL of the normalized sampling weights against uniform mass.

    0 when every sampled insertion was equally likely; grows as the custom
    distribution concentrates the batch on few pairs. Empty weights give 0.
    """
    w = normalize(weights)
    if w.size == 0:
        return 0.0
    return kl_divergence(w, np.full(w.size, 1.0 / w.size))
