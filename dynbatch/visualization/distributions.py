"""Observed vs expected in-degree distribution plot for one batch."""

from collections.abc import Mapping

import matplotlib.pyplot as plt
import numpy as np

from dynbatch.analysis.distribution import align_distributions
from dynbatch.visualization.style import EXPECTED_COLOR, OBSERVED_COLOR


def plot_degree_distributions(
    observed: Mapping[int, float],
    expected: Mapping[int, float],
    title: str = "In-degree distribution",
    log_scale: bool = False,
) -> plt.Figure:
    """Bar chart of observed vertex counts with the expected counts overlaid.

    Both distributions are aligned on the union of their degree keys so
    degrees present on only one side still show up.

    Args:
        observed: {degree: vertex_count} measured on the graph.
        expected: {degree: expected_vertex_count} from the sampling target.
        title: Axes title.
        log_scale: Use a log y-axis (useful for heavy-tailed graphs).

    Returns:
        The matplotlib Figure.
    """
    fig, ax = plt.subplots(figsize=(8, 5))
    keys = sorted(set(observed) | set(expected))
    if not keys:
        ax.text(
            0.5, 0.5, "Empty graph",
            transform=ax.transAxes, ha="center", va="center",
            fontsize=12, color="gray",
        )
        ax.set_title(title)
        return fig

    obs = np.array([observed.get(k, 0) for k in keys], dtype=np.float64)
    exp = np.array([expected.get(k, 0.0) for k in keys], dtype=np.float64)
    x = np.array(keys)

    ax.bar(x, obs, width=0.8, color=OBSERVED_COLOR, alpha=0.7, label="Observed")
    ax.plot(x, exp, color=EXPECTED_COLOR, marker="o", markersize=3, linewidth=1.5, label="Expected")
    ax.set_xlabel("In-degree")
    ax.set_ylabel("Vertices")
    if log_scale:
        ax.set_yscale("log")
    ax.set_title(title)
    ax.legend()
    return fig


def plot_probability_mass(
    observed: Mapping[int, float],
    expected: Mapping[int, float],
    title: str = "In-degree probability mass",
) -> plt.Figure:
    """Step plot of both distributions normalized over their aligned keys."""
    fig, ax = plt.subplots(figsize=(8, 5))
    keys, p, q = align_distributions(observed, expected)
    if keys:
        ax.step(keys, p, where="mid", color=OBSERVED_COLOR, label="Observed")
        ax.step(keys, q, where="mid", color=EXPECTED_COLOR, linestyle="--", label="Expected")
        ax.legend()
    ax.set_xlabel("In-degree")
    ax.set_ylabel("Probability")
    ax.set_title(title)
    return fig
