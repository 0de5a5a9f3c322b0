"""Orchestrator: render all figures for a finished run.

Saves one observed-vs-expected in-degree figure per batch plus the
divergence trajectory, each as PNG + SVG.
"""

import logging
from pathlib import Path

from dynbatch.results.types import RunSummary
from dynbatch.visualization.style import apply_style, save_figure

log = logging.getLogger(__name__)


def render_run(summary: RunSummary, plot_dir: str | Path) -> list[Path]:
    """Generate all figures for a run.

    Each plot is wrapped in try/except so one failure doesn't block the
    others.

    Args:
        summary: The finished run's records.
        plot_dir: Directory for the figures. Created if absent.

    Returns:
        List of paths to generated figure files.
    """
    apply_style()
    plot_dir = Path(plot_dir)
    generated_files: list[Path] = []

    for record in summary.records:
        if not record.observed and not record.expected:
            continue
        name = f"in_degree_batch_{record.index}"
        try:
            from dynbatch.visualization.distributions import plot_degree_distributions

            fig = plot_degree_distributions(
                record.observed,
                record.expected,
                title=f"In-degree distribution, batch {record.index}",
            )
            generated_files.extend(save_figure(fig, plot_dir, name))
            log.info("Generated: %s", name)
        except Exception as e:
            log.warning("Failed to generate %s: %s", name, e)

    if summary.records:
        try:
            from dynbatch.visualization.divergence import plot_divergence_trajectory

            fig = plot_divergence_trajectory(summary.records)
            generated_files.extend(save_figure(fig, plot_dir, "divergence_trajectory"))
            log.info("Generated: divergence_trajectory")
        except Exception as e:
            log.warning("Failed to generate divergence_trajectory: %s", e)

    return generated_files
