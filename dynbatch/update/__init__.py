"""Batch update generation: sampling policies, batch types, and the applier."""

from dynbatch.update.apply import apply_batch, validate_batch
from dynbatch.update.sampler import (
    UPDATES,
    batch_counts,
    custom_update,
    preferential_update,
    round_half_up,
    sample_batch,
    uniform_update,
)
from dynbatch.update.types import Batch, SamplingResult, SamplingTarget

__all__ = [
    "Batch",
    "SamplingResult",
    "SamplingTarget",
    "UPDATES",
    "apply_batch",
    "batch_counts",
    "custom_update",
    "preferential_update",
    "round_half_up",
    "sample_batch",
    "uniform_update",
    "validate_batch",
]
