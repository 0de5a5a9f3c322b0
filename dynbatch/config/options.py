"""Named options resolved once at configuration-parse time.

Every string-valued selector of the run (input format, transforms, update
nature, probability distribution, output format) is parsed into a StrEnum
here, so an unknown value is reported before any work starts.
"""

from enum import StrEnum

from dynbatch.errors import (
    UnknownInputFormat,
    UnknownInputTransform,
    UnknownOutputFormat,
    UnknownProbabilityDistribution,
    UnknownUpdateNature,
)


class InputFormat(StrEnum):
    """On-disk formats the loader understands."""

    MATRIX_MARKET = "matrix-market"
    EDGELIST = "edgelist"
    SNAP_TEMPORAL = "snap-temporal"


class InputTransform(StrEnum):
    """Structural graph-to-graph transforms applied after loading."""

    TRANSPOSE = "transpose"
    SYMMETRIZE = "symmetrize"
    UNSYMMETRIZE = "unsymmetrize"
    LOOP_DEADENDS = "loop-deadends"
    LOOP_VERTICES = "loop-vertices"
    CLEAR_WEIGHTS = "clear-weights"
    SET_WEIGHTS = "set-weights"


class UpdateNature(StrEnum):
    """Sampling policy used to build each batch.

    CUSTOM: endpoints weighted by a named ProbabilityDistribution.
    UNIFORM: uniform over valid ordered pairs / existing edges.
    PREFERENTIAL: endpoints weighted by degree plus a smoothing constant.
    PLANTED, MATCH: reserved policies, currently produce empty batches.
    """

    CUSTOM = ""
    UNIFORM = "uniform"
    PREFERENTIAL = "preferential"
    PLANTED = "planted"
    MATCH = "match"


class ProbabilityDistribution(StrEnum):
    """Per-vertex weight families for the custom sampler."""

    DEGREE = "degree"
    IN_DEGREE = "in-degree"
    UNIFORM = "uniform"
    ZIPF = "zipf"
    EXPONENTIAL = "exponential"


class OutputFormat(StrEnum):
    """Snapshot writers."""

    EDGELIST = "edgelist"


_DISTRIBUTION_ALIASES = {
    "": ProbabilityDistribution.DEGREE,
    "degree-proportional": ProbabilityDistribution.DEGREE,
    "power-law": ProbabilityDistribution.ZIPF,
}


def parse_input_format(value: str | InputFormat) -> InputFormat:
    try:
        return InputFormat(value)
    except ValueError:
        raise UnknownInputFormat(str(value)) from None


def parse_input_transform(value: str | InputTransform) -> InputTransform:
    try:
        return InputTransform(value)
    except ValueError:
        raise UnknownInputTransform(str(value)) from None


def parse_input_transforms(values) -> tuple[InputTransform, ...]:
    """Parse transform names in order, skipping empty names."""
    return tuple(parse_input_transform(v) for v in values if v != "")


def parse_update_nature(value: str | UpdateNature) -> UpdateNature:
    try:
        return UpdateNature(value)
    except ValueError:
        raise UnknownUpdateNature(str(value)) from None


def parse_probability_distribution(
    value: str | ProbabilityDistribution,
) -> ProbabilityDistribution:
    if isinstance(value, ProbabilityDistribution):
        return value
    if value in _DISTRIBUTION_ALIASES:
        return _DISTRIBUTION_ALIASES[value]
    try:
        return ProbabilityDistribution(value)
    except ValueError:
        raise UnknownProbabilityDistribution(str(value)) from None


def parse_output_format(value: str | OutputFormat) -> OutputFormat:
    try:
        return OutputFormat(value)
    except ValueError:
        raise UnknownOutputFormat(str(value)) from None
