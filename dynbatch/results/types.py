"""Per-batch records and the run summary they accumulate into."""

from dataclasses import dataclass, field


@dataclass(slots=True)
class BatchRecord:
    """Outcome of one batch iteration.

    inserted and deleted count what applying the batch changed, so
    size_delta == inserted - deleted. They fall below the sampled counts when
    duplicates are allowed and an insertion only overwrites a weight.

    kl_divergence is None when the divergence was undefined for the batch
    or the batch was skipped; error then holds the reported message.
    """

    index: int  # 1-based, matches the snapshot file counter
    batch_size: int
    requested_insertions: int = 0
    requested_deletions: int = 0
    sampled_insertions: int = 0
    sampled_deletions: int = 0
    inserted: int = 0  # edges that were new to the graph
    deleted: int = 0  # edges that were present and removed
    order: int = 0
    size: int = 0
    size_delta: int = 0
    kl_divergence: float | None = None
    weight_divergence: float | None = None  # custom nature only
    observed: dict[int, int] = field(default_factory=dict)
    expected: dict[int, float] = field(default_factory=dict)
    output_path: str | None = None
    elapsed_s: float = 0.0
    error: str | None = None


@dataclass(slots=True)
class RunSummary:
    """Everything a finished run reports: seed, final shape, and each batch."""

    run_id: str
    seed: int
    initial_order: int = 0
    initial_size: int = 0
    records: list[BatchRecord] = field(default_factory=list)

    @property
    def divergences(self) -> list[float | None]:
        return [r.kl_divergence for r in self.records]

    @property
    def n_errors(self) -> int:
        return sum(r.error is not None for r in self.records)
