#!/usr/bin/env python3
"""Entry point for generating batch updates of a dynamic directed graph.

Loads a graph, applies the requested transforms, then produces
--multi-batch batches of edge insertions/deletions, writing one snapshot
per batch and reporting the in-degree KL divergence of each.

Usage:
    python run_batches.py --input-graph web.mtx --batch-size 100 \\
        --edge-insertions 0.8 --edge-deletions 0.2 --update-nature uniform
    python run_batches.py --config run.json --multi-batch 10 --seed 42
    python run_batches.py --config run.json --dry-run
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

from dacite import DaciteError

from dynbatch.config import (
    RunConfig,
    batch_config_hash,
    config_from_dict,
    config_to_dict,
    full_config_hash,
)
from dynbatch.errors import ConfigurationError

log = logging.getLogger(__name__)

# (flag destination, config section, config field)
_OVERRIDES: list[tuple[str, str | None, str]] = [
    ("input_graph", "input", "path"),
    ("input_format", "input", "format"),
    ("input_transform", "input", "transforms"),
    ("output_dir", "output", "directory"),
    ("output_prefix", "output", "prefix"),
    ("output_format", "output", "format"),
    ("summary", "output", "summary"),
    ("plot_dir", "output", "plot_dir"),
    ("batch_size", "batch", "batch_size"),
    ("batch_size_ratio", "batch", "batch_size_ratio"),
    ("edge_insertions", "batch", "edge_insertions"),
    ("edge_deletions", "batch", "edge_deletions"),
    ("allow_duplicate_edges", "batch", "allow_duplicate_edges"),
    ("allow_self_loops", "batch", "allow_self_loops"),
    ("update_nature", "batch", "update_nature"),
    ("probability_distribution", "batch", "probability_distribution"),
    ("preferential_smoothing", "batch", "preferential_smoothing"),
    ("multi_batch", "batch", "multi_batch"),
    ("vertex_insertions", "growth", "vertex_insertions"),
    ("vertex_deletions", "growth", "vertex_deletions"),
    ("vertex_growth_rate", "growth", "vertex_growth_rate"),
    ("allow_duplicate_vertices", "growth", "allow_duplicate_vertices"),
    ("min_degree", "growth", "min_degree"),
    ("max_degree", "growth", "max_degree"),
    ("max_diameter", "growth", "max_diameter"),
    ("preserve_degree_distribution", "growth", "preserve_degree_distribution"),
    ("preserve_communities", "growth", "preserve_communities"),
    ("preserve_k_core", "growth", "preserve_k_core"),
    ("seed", None, "seed"),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate batch updates for a dynamic directed graph"
    )
    parser.add_argument("--config", type=str, help="Path to a run config JSON file")

    io = parser.add_argument_group("input/output")
    io.add_argument("--input-graph", type=str, help="Input graph file")
    io.add_argument(
        "--input-format", type=str,
        help="matrix-market (default), edgelist or snap-temporal",
    )
    io.add_argument(
        "--input-transform", type=str, action="append",
        help="Transform applied after loading; repeat to chain (in order)",
    )
    io.add_argument("--output-dir", type=str, help="Prefix prepended to snapshot names")
    io.add_argument("--output-prefix", type=str, help="Snapshot name stem")
    io.add_argument("--output-format", type=str, help="Snapshot format (edgelist)")
    io.add_argument(
        "--unweighted", action="store_true",
        help="Omit edge weights from snapshots",
    )
    io.add_argument(
        "--summary", action="store_true", default=None,
        help="Write <output-dir><output-prefix>_summary.json",
    )
    io.add_argument("--plot-dir", type=str, help="Write distribution figures here")

    batch = parser.add_argument_group("batch")
    batch.add_argument("--batch-size", type=int)
    batch.add_argument("--batch-size-ratio", type=float, help="Batch size as a fraction of edges")
    batch.add_argument("--edge-insertions", type=float, help="Insertions as a fraction of batch size")
    batch.add_argument("--edge-deletions", type=float, help="Deletions as a fraction of batch size")
    batch.add_argument("--allow-duplicate-edges", action="store_true", default=None)
    batch.add_argument("--allow-self-loops", action="store_true", default=None)
    batch.add_argument(
        "--update-nature", type=str,
        help="uniform, preferential, planted, match; empty for custom",
    )
    batch.add_argument(
        "--probability-distribution", type=str,
        help="Custom nature family: degree, in-degree, uniform, zipf, exponential",
    )
    batch.add_argument("--preferential-smoothing", type=float)
    batch.add_argument("--multi-batch", type=int, help="Number of batches to generate")
    batch.add_argument("--seed", type=int, help="RNG seed (default: OS entropy)")

    growth = parser.add_argument_group("growth (reserved, ignored with a warning)")
    growth.add_argument("--vertex-insertions", type=float)
    growth.add_argument("--vertex-deletions", type=float)
    growth.add_argument("--vertex-growth-rate", type=float)
    growth.add_argument("--allow-duplicate-vertices", action="store_true", default=None)
    growth.add_argument("--min-degree", type=int)
    growth.add_argument("--max-degree", type=int)
    growth.add_argument("--max-diameter", type=int)
    growth.add_argument("--preserve-degree-distribution", action="store_true", default=None)
    growth.add_argument("--preserve-communities", action="store_true", default=None)
    growth.add_argument("--preserve-k-core", type=int)

    parser.add_argument(
        "--dry-run", action="store_true",
        help="Show the resolved config without running",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG-level logging")
    return parser


def build_config(args: argparse.Namespace) -> RunConfig:
    """Merge command-line flags over the --config JSON (if any).

    Raises:
        ConfigurationError: On unknown selector names or invalid values.
        DaciteError: On malformed JSON structure.
    """
    data: dict[str, Any] = {}
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}", str(config_path))
        data = json.loads(config_path.read_text())

    for dest, section, name in _OVERRIDES:
        value = getattr(args, dest)
        if value is None:
            continue
        target = data if section is None else data.setdefault(section, {})
        target[name] = value

    if args.unweighted:
        data.setdefault("output", {})["weighted"] = False

    return config_from_dict(data)


def print_plan(config: RunConfig) -> None:
    batch = config.batch
    print(f"Config hash:   {full_config_hash(config)}")
    print(f"Batch hash:    {batch_config_hash(config)}")
    print()
    print(f"Input:    {config.input.path} ({config.input.format})")
    if config.input.transforms:
        print(f"          transforms: {', '.join(config.input.transforms)}")
    size = batch.batch_size or f"ratio {batch.batch_size_ratio:g} of edges"
    print(f"Batch:    size={size}, insertions={batch.edge_insertions:g}, "
          f"deletions={batch.edge_deletions:g}, batches={batch.multi_batch}")
    print(f"Sampling: nature={batch.update_nature or 'custom'}, "
          f"distribution={batch.probability_distribution}, "
          f"duplicates={batch.allow_duplicate_edges}, self-loops={batch.allow_self_loops}")
    print(f"Output:   {config.output.directory}{config.output.prefix}_<n> "
          f"({config.output.format}, weighted={config.output.weighted})")
    print(f"Seed:     {config.seed if config.seed is not None else 'OS entropy'}")


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
    except (ConfigurationError, DaciteError, ValueError) as exc:
        log.error("Invalid configuration: %s", exc)
        sys.exit(1)

    print_plan(config)
    if args.dry_run:
        print("\nResolved config:")
        print(json.dumps(config_to_dict(config), indent=2, sort_keys=True))
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    from dynbatch.pipeline import run_batches

    start = time.monotonic()
    try:
        summary = run_batches(config)
    except ConfigurationError as exc:
        log.error("%s", exc, exc_info=args.verbose)
        sys.exit(1)

    print(f"\n{'=' * 60}")
    print(f"Run complete in {time.monotonic() - start:.1f}s")
    print(f"  Run:      {summary.run_id}")
    print(f"  Batches:  {len(summary.records)} ({summary.n_errors} with errors)")
    if summary.records:
        last = summary.records[-1]
        print(f"  Graph:    order={last.order}, size={last.size}")
    print(f"{'=' * 60}")


if __name__ == "__main__":
    main()
