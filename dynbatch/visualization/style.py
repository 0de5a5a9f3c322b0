"""Shared look and file output for run figures."""

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for headless rendering

import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path

PALETTE = sns.color_palette("colorblind", n_colors=8)
OBSERVED_COLOR = PALETTE[0]
EXPECTED_COLOR = PALETTE[1]
ERROR_COLOR = PALETTE[3]

FIGURE_FORMATS = ("png", "svg")
DPI = 300


def apply_style() -> None:
    """Seaborn whitegrid with sizes suited to small degree histograms."""
    sns.set_theme(style="whitegrid", palette=PALETTE)
    plt.rcParams.update({
        "savefig.dpi": DPI,
        "font.size": 10,
        "axes.titlesize": 11,
        "figure.figsize": (7, 4.5),
        "svg.fonttype": "none",
    })


def save_figure(fig: plt.Figure, output_dir: Path, name: str) -> tuple[Path, ...]:
    """Write fig once per FIGURE_FORMATS entry under output_dir, then close it.

    Returns:
        The written paths, in FIGURE_FORMATS order.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = tuple(output_dir / f"{name}.{ext}" for ext in FIGURE_FORMATS)
    for path in paths:
        fig.savefig(path, dpi=DPI, bbox_inches="tight")
    plt.close(fig)
    return paths
