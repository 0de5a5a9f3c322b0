"""Run configuration system with frozen, hashable, serializable dataclasses."""

from dynbatch.config.defaults import DEFAULT_CONFIG
from dynbatch.config.hashing import batch_config_hash, config_hash, full_config_hash
from dynbatch.config.options import (
    InputFormat,
    InputTransform,
    OutputFormat,
    ProbabilityDistribution,
    UpdateNature,
)
from dynbatch.config.run import (
    BatchConfig,
    GrowthConfig,
    InputConfig,
    OutputConfig,
    RunConfig,
)
from dynbatch.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "BatchConfig",
    "DEFAULT_CONFIG",
    "GrowthConfig",
    "InputConfig",
    "InputFormat",
    "InputTransform",
    "OutputConfig",
    "OutputFormat",
    "ProbabilityDistribution",
    "RunConfig",
    "UpdateNature",
    "batch_config_hash",
    "config_from_dict",
    "config_from_json",
    "config_hash",
    "config_to_dict",
    "config_to_json",
    "full_config_hash",
]
