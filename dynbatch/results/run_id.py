"""Run ID generation with scannable parameter slug format."""

from datetime import datetime, timezone

from dynbatch.config.run import RunConfig


def generate_run_id(config: RunConfig, seed: int) -> str:
    """Generate a scannable run ID from config parameters.

    Format: {nature}_b{batch_size}_i{ins}_d{del}_x{multi_batch}_s{seed}_{YYYYMMDD}_{HHMMSS}
    Example: uniform_b100_i0.8_d0.2_x10_s42_20261018_143012

    The custom nature is written as "custom-{distribution}". A ratio-sized
    batch shows as r{ratio} in place of b{batch_size}.
    """
    batch = config.batch
    nature = str(batch.update_nature) or f"custom-{batch.probability_distribution}"
    size = f"b{batch.batch_size}" if batch.batch_size else f"r{batch.batch_size_ratio:g}"
    ts = datetime.now(timezone.utc)
    return (
        f"{nature}"
        f"_{size}"
        f"_i{batch.edge_insertions:g}"
        f"_d{batch.edge_deletions:g}"
        f"_x{batch.multi_batch}"
        f"_s{seed}"
        f"_{ts.strftime('%Y%m%d_%H%M%S')}"
    )
