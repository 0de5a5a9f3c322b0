"""Run configuration dataclasses, all frozen and slotted for immutability."""

from dataclasses import dataclass, field, fields

from dynbatch.config.options import (
    InputFormat,
    InputTransform,
    OutputFormat,
    ProbabilityDistribution,
    UpdateNature,
    parse_input_format,
    parse_input_transforms,
    parse_output_format,
    parse_probability_distribution,
    parse_update_nature,
)
from dynbatch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class InputConfig:
    """Where the initial graph comes from and how it is prepared."""

    path: str = ""
    format: InputFormat = InputFormat.MATRIX_MARKET
    transforms: tuple[InputTransform, ...] = ()  # applied in order

    def __post_init__(self) -> None:
        """Resolve string selectors (uses object.__setattr__ since frozen)."""
        object.__setattr__(self, "format", parse_input_format(self.format))
        object.__setattr__(self, "transforms", parse_input_transforms(self.transforms))


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Snapshot naming: one file per batch at <directory><prefix>_<counter>."""

    directory: str = ""
    prefix: str = "batch"
    format: OutputFormat = OutputFormat.EDGELIST
    weighted: bool = True
    summary: bool = False  # write <directory><prefix>_summary.json
    plot_dir: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "format", parse_output_format(self.format))


@dataclass(frozen=True, slots=True)
class BatchConfig:
    """Batch sizing and sampling policy.

    batch_size wins when non-zero; otherwise the size is re-resolved every
    batch as round(graph.size() * batch_size_ratio). Insertion and deletion
    fractions are independent rates against the same batch size.
    """

    batch_size: int = 0
    batch_size_ratio: float = 0.0
    edge_insertions: float = 0.0
    edge_deletions: float = 0.0
    allow_duplicate_edges: bool = False
    allow_self_loops: bool = False
    update_nature: UpdateNature = UpdateNature.CUSTOM
    probability_distribution: ProbabilityDistribution = ProbabilityDistribution.DEGREE
    preferential_smoothing: float = 1.0
    multi_batch: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "update_nature", parse_update_nature(self.update_nature))
        object.__setattr__(
            self,
            "probability_distribution",
            parse_probability_distribution(self.probability_distribution),
        )
        for name in (
            "batch_size",
            "batch_size_ratio",
            "edge_insertions",
            "edge_deletions",
            "preferential_smoothing",
            "multi_batch",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {value}", value)


@dataclass(frozen=True, slots=True)
class GrowthConfig:
    """Reserved vertex-growth and structure-preservation knobs.

    Accepted so that existing command lines keep working; the batch driver
    warns when any of them is set and otherwise ignores them.
    """

    vertex_insertions: float = 0.0
    vertex_deletions: float = 0.0
    vertex_growth_rate: float = 0.0
    allow_duplicate_vertices: bool = False
    min_degree: int = 0
    max_degree: int = 0
    max_diameter: int = 0
    preserve_degree_distribution: bool = False
    preserve_communities: bool = False
    preserve_k_core: int = 0

    def active_fields(self) -> list[str]:
        """Names of the knobs that differ from their defaults."""
        return [f.name for f in fields(self) if getattr(self, f.name) != f.default]


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Top-level run configuration composing all sub-configs.

    seed=None means the seed is drawn from OS entropy at start and logged.
    """

    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    growth: GrowthConfig = field(default_factory=GrowthConfig)
    seed: int | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if self.seed is not None and self.seed < 0:
            raise ConfigurationError(f"seed must be >= 0, got {self.seed}", self.seed)
