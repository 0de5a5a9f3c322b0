"""Post-batch analysis: degree distributions, sampling targets, and divergence."""

from dynbatch.analysis.distribution import (
    DegreeDistribution,
    align_distributions,
    degree_distribution,
    format_distribution,
    in_degree_distribution,
    to_probability_vector,
)
from dynbatch.analysis.divergence import (
    degree_divergence,
    kl_divergence,
    normalize,
    sampling_weight_divergence,
)
from dynbatch.analysis.target import binomial_window, expected_in_degree_distribution

__all__ = [
    "DegreeDistribution",
    "align_distributions",
    "binomial_window",
    "degree_distribution",
    "degree_divergence",
    "expected_in_degree_distribution",
    "format_distribution",
    "in_degree_distribution",
    "kl_divergence",
    "normalize",
    "sampling_weight_divergence",
    "to_probability_vector",
]
