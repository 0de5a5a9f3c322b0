"""Distribution Analyzer: degree histograms and their probability vectors.

Distributions are plain dicts built in ascending degree order. Every
conversion to a vector re-sorts the keys, so successive batches (and the
observed vs expected sides of a comparison) always share one index order.
"""

from collections.abc import Mapping

import numpy as np

from dynbatch.graph.types import DiGraph

DegreeDistribution = dict[int, int]


def _bucket(values: np.ndarray) -> DegreeDistribution:
    keys, counts = np.unique(values, return_counts=True)
    return {int(k): int(c) for k, c in zip(keys, counts)}


def degree_distribution(graph: DiGraph, undirected: bool = False) -> DegreeDistribution:
    """Vertex count per degree value.

    Args:
        graph: Graph to analyze.
        undirected: Count out-degree + in-degree instead of out-degree only.

    Returns:
        {degree: vertex_count}, ascending by degree. Empty for an empty graph.
    """
    _, out_deg, in_deg = graph.degree_arrays()
    return _bucket(out_deg + in_deg if undirected else out_deg)


def in_degree_distribution(graph: DiGraph) -> DegreeDistribution:
    """Vertex count per in-degree value, ascending by in-degree."""
    _, _, in_deg = graph.degree_arrays()
    return _bucket(in_deg)


def to_probability_vector(distribution: Mapping[int, float]) -> np.ndarray:
    """Bucket counts divided by their total, in ascending key order.

    An empty distribution (empty graph) gives an empty vector.
    """
    if not distribution:
        return np.zeros(0, dtype=np.float64)
    counts = np.array([distribution[k] for k in sorted(distribution)], dtype=np.float64)
    total = counts.sum()
    if total <= 0:
        return np.zeros(0, dtype=np.float64)
    return counts / total


def align_distributions(
    p: Mapping[int, float], q: Mapping[int, float]
) -> tuple[list[int], np.ndarray, np.ndarray]:
    """Probability vectors of p and q over the union of their keys.

    A key missing from one side gets probability 0 there, so index i of
    both vectors refers to the same degree.

    Returns:
        (keys, p_vector, q_vector) with keys ascending.
    """
    keys = sorted(set(p) | set(q))
    p_vec = to_probability_vector({k: p.get(k, 0) for k in keys})
    q_vec = to_probability_vector({k: q.get(k, 0) for k in keys})
    if p_vec.size == 0:
        p_vec = np.zeros(len(keys), dtype=np.float64)
    if q_vec.size == 0:
        q_vec = np.zeros(len(keys), dtype=np.float64)
    return keys, p_vec, q_vec


def format_distribution(distribution: Mapping[int, float], title: str = "Degree Distribution") -> str:
    """Console histogram, one `Degree d: c vertices` line per bucket."""
    lines = [f"{title}:"]
    for k in sorted(distribution):
        lines.append(f"Degree {k}: {distribution[k]:g} vertices")
    return "\n".join(lines)
