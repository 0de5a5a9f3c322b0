"""Expected post-batch in-degree distribution implied by a SamplingTarget.

Each vertex v with pre-batch in-degree d is modelled as

    d + Binomial(k_ins, pi_v) - min(d, Binomial(k_del, q_v))

where pi_v is the probability that one insertion lands on v and q_v the
probability that one deletion removes an in-edge of v. Averaging the
per-vertex laws over all vertices gives the expected vertex count per
in-degree, the distribution the sampler intends the graph to reach.
"""

import logging
from collections import defaultdict

import numpy as np
from scipy.stats import binom

from dynbatch.update.types import SamplingTarget

log = logging.getLogger(__name__)

# Binomial tail mass dropped on each side of a window
TAIL_MASS = 1e-12


def binomial_window(k: int, p: float) -> tuple[int, np.ndarray]:
    """Support start and pmf of Binomial(k, p), tails below TAIL_MASS dropped."""
    if k == 0 or p <= 0.0:
        return 0, np.ones(1)
    if p >= 1.0:
        return k, np.ones(1)
    lo = max(0, int(binom.ppf(TAIL_MASS, k, p)))
    hi = int(binom.isf(TAIL_MASS, k, p))
    support = np.arange(lo, hi + 1)
    return lo, binom.pmf(support, k, p)


def _clip_losses(d: int, lo: int, pmf: np.ndarray) -> tuple[int, np.ndarray]:
    """Fold loss mass beyond d onto d: a vertex cannot lose more in-edges than it has."""
    if lo >= d:
        return d, np.array([pmf.sum()])
    keep = lo + np.arange(len(pmf)) <= d
    clipped = pmf[keep].copy()
    clipped[-1] += pmf[~keep].sum()
    return lo, clipped


def expected_in_degree_distribution(target: SamplingTarget) -> dict[int, float]:
    """Expected vertex count per in-degree after the batch.

    Vertices sharing (in-degree, pi, q) are grouped so each distinct law is
    computed once.

    Returns:
        {in_degree: expected_vertex_count}, ascending, positive entries only.
    """
    if len(target.in_degrees) == 0:
        return {}

    rows = np.column_stack(
        [
            target.in_degrees.astype(np.float64),
            target.insert_heads,
            target.delete_heads,
        ]
    )
    groups, counts = np.unique(rows, axis=0, return_counts=True)
    log.debug("Expected in-degree law over %d vertex groups", len(groups))

    expected: dict[int, float] = defaultdict(float)
    for (d, pi, q), count in zip(groups, counts):
        d = int(d)
        gain_lo, gain = binomial_window(target.n_insertions, float(pi))
        loss_lo, loss = binomial_window(target.n_deletions, float(q))
        loss_lo, loss = _clip_losses(d, loss_lo, loss)

        law = np.convolve(gain, loss[::-1])
        start = d + gain_lo - loss_lo - (len(loss) - 1)
        for offset in np.flatnonzero(law > 0):
            expected[start + int(offset)] += count * float(law[offset])

    return {k: expected[k] for k in sorted(expected)}
