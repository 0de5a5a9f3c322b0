"""Batch Driver: load, transform, then sample/apply/analyze/validate/write N times.

One Generator and one graph are owned here and passed down explicitly.
Configuration errors propagate to the caller; statistical and per-batch
sampling errors are reported on the console and in the batch record, and
the run continues with the next batch.
"""

import logging
import os
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import numpy as np

from dynbatch.analysis.distribution import (
    degree_distribution,
    format_distribution,
    in_degree_distribution,
)
from dynbatch.analysis.divergence import degree_divergence, sampling_weight_divergence
from dynbatch.analysis.target import expected_in_degree_distribution
from dynbatch.config.run import BatchConfig, RunConfig
from dynbatch.errors import BatchApplicationError, SamplingError, ZeroSupportMismatch
from dynbatch.graph.io import load_graph, output_path, write_edgelist
from dynbatch.graph.transforms import apply_transform
from dynbatch.graph.types import DiGraph
from dynbatch.reproducibility.seed import make_rng, resolve_seed
from dynbatch.results.run_id import generate_run_id
from dynbatch.results.types import BatchRecord, RunSummary
from dynbatch.update.apply import apply_batch
from dynbatch.update.sampler import round_half_up, sample_batch

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def resolve_batch_size(batch: BatchConfig, graph: DiGraph) -> int:
    """Explicit batch_size when non-zero, else round(size * ratio) for the current graph."""
    if batch.batch_size:
        return batch.batch_size
    return round_half_up(graph.size() * batch.batch_size_ratio)


def prepare_output_dir(directory: str) -> None:
    """Create the output directory when it is given as a directory path.

    The directory is a plain filename prefix, so only a value ending in a
    path separator names a directory to create.
    """
    if directory and directory.endswith(("/", os.sep)):
        Path(directory).mkdir(parents=True, exist_ok=True)


def load_initial_graph(config: RunConfig) -> DiGraph:
    """Load the input graph and apply the configured transforms in order."""
    with stage_timer("Load Graph"):
        graph = load_graph(config.input.format, config.input.path)
        print(f"Loaded graph: order={graph.order()}, size={graph.size()}")

    if config.input.transforms:
        with stage_timer("Transform Graph"):
            for name in config.input.transforms:
                graph = apply_transform(name, graph)
                log.info(
                    "Applied %s: order=%d, size=%d", name, graph.order(), graph.size()
                )
            print(f"Transformed graph: order={graph.order()}, size={graph.size()}")
    return graph


def run_batch(
    config: RunConfig,
    graph: DiGraph,
    rng: np.random.Generator,
    index: int,
) -> BatchRecord:
    """Run one Sample -> Apply -> Analyze -> Validate -> Write iteration.

    The graph is mutated in place. A batch that cannot be sampled or
    applied leaves the graph untouched and writes no snapshot.

    Raises:
        ConfigurationError: If the snapshot file cannot be created.
    """
    t0 = time.monotonic()
    batch_cfg = config.batch
    size_before = graph.size()
    batch_size = resolve_batch_size(batch_cfg, graph)
    record = BatchRecord(index=index, batch_size=batch_size)

    try:
        result = sample_batch(
            batch_cfg.update_nature,
            batch_cfg.probability_distribution,
            graph,
            rng,
            batch_size,
            batch_cfg.edge_insertions,
            batch_cfg.edge_deletions,
            allow_duplicate_edges=batch_cfg.allow_duplicate_edges,
            allow_self_loops=batch_cfg.allow_self_loops,
            smoothing=batch_cfg.preferential_smoothing,
        )
        record.requested_insertions = result.batch.requested_insertions
        record.requested_deletions = result.batch.requested_deletions
        record.sampled_insertions = len(result.batch.insertions)
        record.sampled_deletions = len(result.batch.deletions)
        record.deleted, record.inserted = apply_batch(graph, result.batch)
    except (SamplingError, BatchApplicationError) as exc:
        log.error("Batch %d skipped: %s", index, exc)
        print(f"Error: {exc}")
        record.error = str(exc)
        record.order = graph.order()
        record.size = graph.size()
        record.elapsed_s = time.monotonic() - t0
        return record

    record.order = graph.order()
    record.size = graph.size()
    record.size_delta = record.size - size_before

    print(format_distribution(degree_distribution(graph)))
    record.observed = in_degree_distribution(graph)
    record.expected = expected_in_degree_distribution(result.target)

    try:
        record.kl_divergence = degree_divergence(record.observed, record.expected)
        print(f"KL Divergence: {record.kl_divergence}")
    except ZeroSupportMismatch as exc:
        log.warning("Batch %d divergence undefined: %s", index, exc)
        print(f"Error: {exc}")
        record.error = str(exc)

    if result.weights is not None:
        record.weight_divergence = sampling_weight_divergence(result.weights)
        log.info("Batch %d sampling-weight divergence: %.6g", index, record.weight_divergence)

    path = output_path(config.output.directory, config.output.prefix, index)
    write_edgelist(path, graph, weighted=config.output.weighted)
    record.output_path = path
    record.elapsed_s = time.monotonic() - t0
    log.info(
        "Batch %d: +%d/-%d edges, order=%d, size=%d, wrote %s",
        index, record.inserted, record.deleted, record.order, record.size, path,
    )
    return record


def run_batches(config: RunConfig) -> RunSummary:
    """Execute a full run: Init -> Load -> Transform* -> BatchLoop(n) -> Done.

    Args:
        config: Fully parsed run configuration.

    Returns:
        RunSummary with one record per batch iteration.

    Raises:
        ConfigurationError: On missing input, unwritable output, or any
            other configuration problem. Nothing after the failing stage runs.
    """
    with stage_timer("Init"):
        seed = resolve_seed(config.seed)
        rng = make_rng(seed)
        print(f"Seed: {seed}")
        active = config.growth.active_fields()
        if active:
            log.warning("Vertex growth options are not implemented and are ignored: %s", active)
        prepare_output_dir(config.output.directory)

    graph = load_initial_graph(config)
    summary = RunSummary(
        run_id=generate_run_id(config, seed),
        seed=seed,
        initial_order=graph.order(),
        initial_size=graph.size(),
    )

    for index in range(1, config.batch.multi_batch + 1):
        with stage_timer(f"Batch {index}/{config.batch.multi_batch}"):
            summary.records.append(run_batch(config, graph, rng, index))

    if config.output.summary:
        from dynbatch.results.schema import write_summary

        with stage_timer("Write Summary"):
            path = write_summary(config, summary)
            log.info("Summary written to %s", path)

    if config.output.plot_dir:
        from dynbatch.visualization.render import render_run

        with stage_timer("Visualization"):
            figures = render_run(summary, config.output.plot_dir)
            log.info("Generated %d figure files", len(figures))

    return summary
