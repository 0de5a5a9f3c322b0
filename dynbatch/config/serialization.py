"""JSON serialization and deserialization for run configs."""

import json
from dataclasses import asdict
from typing import Any

from dacite import Config as DaciteConfig
from dacite import from_dict

from dynbatch.config.options import (
    InputFormat,
    InputTransform,
    OutputFormat,
    ProbabilityDistribution,
    UpdateNature,
    parse_input_format,
    parse_input_transform,
    parse_input_transforms,
    parse_output_format,
    parse_probability_distribution,
    parse_update_nature,
)
from dynbatch.config.run import RunConfig

# Unknown selector strings raise the matching ConfigurationError here,
# before dacite's own type check sees them. Empty transform names are
# dropped from the list first.
_TYPE_HOOKS = {
    InputFormat: parse_input_format,
    InputTransform: parse_input_transform,
    tuple[InputTransform, ...]: parse_input_transforms,
    UpdateNature: parse_update_nature,
    ProbabilityDistribution: parse_probability_distribution,
    OutputFormat: parse_output_format,
}

_DACITE_CONFIG = DaciteConfig(
    type_hooks=_TYPE_HOOKS,
    cast=[tuple, float],
    check_types=True,
    strict=True,
)


def config_to_json(config: RunConfig) -> str:
    """Serialize a RunConfig to a JSON string.

    Uses sorted keys and 2-space indent for human readability and diffability.
    """
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> RunConfig:
    """Deserialize a JSON string to a RunConfig.

    dacite runs with strict=True to reject unknown keys and cast=[tuple, float] to
    turn the JSON transform list back into a tuple; float fields also accept
    JSON integers.
    """
    return config_from_dict(json.loads(json_str))


def config_to_dict(config: RunConfig) -> dict[str, Any]:
    """Convert a RunConfig to a plain dictionary."""
    return asdict(config)


def config_from_dict(d: dict[str, Any]) -> RunConfig:
    """Reconstruct a RunConfig from a plain dictionary."""
    return from_dict(data_class=RunConfig, data=d, config=_DACITE_CONFIG)
