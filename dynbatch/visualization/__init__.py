"""Static figures for batch runs: degree distributions and divergence."""

from dynbatch.visualization.render import render_run
from dynbatch.visualization.style import apply_style, save_figure

__all__ = [
    "apply_style",
    "render_run",
    "save_figure",
]
