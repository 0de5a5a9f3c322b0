"""KL divergence trajectory and graph growth across the batches of a run."""

import matplotlib.pyplot as plt
import numpy as np

from dynbatch.results.types import BatchRecord
from dynbatch.visualization.style import ERROR_COLOR, PALETTE


def plot_divergence_trajectory(records: list[BatchRecord]) -> plt.Figure:
    """Plot per-batch KL divergence (left) and graph size (right).

    Batches whose divergence was undefined or that were skipped are marked
    on the x-axis in the error color instead of being dropped silently.
    """
    fig, (ax_kl, ax_size) = plt.subplots(1, 2, figsize=(14, 5))

    index = np.array([r.index for r in records], dtype=np.int64)
    kl = np.array(
        [np.nan if r.kl_divergence is None else r.kl_divergence for r in records],
        dtype=np.float64,
    )
    ok = np.isfinite(kl)

    if ok.any():
        ax_kl.plot(index[ok], kl[ok], color=PALETTE[0], marker="o", markersize=3)
    if (~ok).any():
        ax_kl.scatter(
            index[~ok], np.zeros(int((~ok).sum())),
            color=ERROR_COLOR, marker="x", label="undefined / skipped",
        )
        ax_kl.legend(fontsize=8)
    ax_kl.set_xlabel("Batch")
    ax_kl.set_ylabel("KL(observed || expected)")
    ax_kl.set_title("In-degree divergence")

    ax_size.plot(index, [r.size for r in records], color=PALETTE[2], label="Edges")
    ax_size.plot(index, [r.order for r in records], color=PALETTE[4], label="Vertices")
    ax_size.set_xlabel("Batch")
    ax_size.set_ylabel("Count")
    ax_size.set_title("Graph shape")
    ax_size.legend(fontsize=8)

    fig.tight_layout()
    return fig
