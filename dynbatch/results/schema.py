"""Run summary schema validation and writing.

Uses a Python validation function (not jsonschema) to check required fields,
types, and per-batch record consistency before writing the summary JSON.
"""

import json
import math
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from dynbatch.config.hashing import batch_config_hash, full_config_hash
from dynbatch.config.run import RunConfig
from dynbatch.reproducibility.git_hash import get_git_hash
from dynbatch.results.types import RunSummary

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "run_id",
    "timestamp",
    "description",
    "config",
    "batches",
    "metadata",
}

REQUIRED_BATCH_FIELDS = {
    "index",
    "batch_size",
    "requested_insertions",
    "requested_deletions",
    "sampled_insertions",
    "sampled_deletions",
    "inserted",
    "deleted",
    "order",
    "size",
    "kl_divergence",
    "error",
}

REQUIRED_METADATA_FIELDS = {"seed", "code_hash", "config_hash", "batch_config_hash"}


def _summary_path(directory: str, prefix: str) -> str:
    return f"{directory}{prefix}_summary.json"


def validate_summary(summary: dict[str, Any]) -> list[str]:
    """Validate a summary dict against the project schema.

    Returns a list of error strings. An empty list means the summary is valid.

    Checks:
    - All required top-level, metadata and per-batch fields are present
    - timestamp parses as ISO 8601
    - batch indices run 1..N in order
    - kl_divergence is None or a finite non-negative number
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(summary.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in summary and not isinstance(summary["schema_version"], str):
        errors.append("schema_version must be a string")

    if "config" in summary and not isinstance(summary["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in summary:
        ts = summary["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    metadata = summary.get("metadata")
    if metadata is not None:
        if not isinstance(metadata, dict):
            errors.append("metadata must be a dict")
        else:
            for name in sorted(REQUIRED_METADATA_FIELDS - set(metadata.keys())):
                errors.append(f"metadata missing field: {name}")

    batches = summary.get("batches")
    if batches is not None:
        if not isinstance(batches, list):
            errors.append("batches must be a list")
            batches = []
        for position, record in enumerate(batches, start=1):
            if not isinstance(record, dict):
                errors.append(f"batches[{position - 1}] must be a dict")
                continue
            for name in sorted(REQUIRED_BATCH_FIELDS - set(record.keys())):
                errors.append(f"batches[{position - 1}] missing field: {name}")
            if record.get("index") != position:
                errors.append(
                    f"batches[{position - 1}].index is {record.get('index')}, "
                    f"expected {position}"
                )
            kl = record.get("kl_divergence")
            if kl is not None and (
                not isinstance(kl, (int, float)) or not math.isfinite(kl) or kl < 0
            ):
                errors.append(
                    f"batches[{position - 1}].kl_divergence must be None or a "
                    f"finite non-negative number, got {kl!r}"
                )

    return errors


def build_summary(
    config: RunConfig,
    summary: RunSummary,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Assemble the JSON-ready summary dict for a finished run.

    Degree keys of the per-batch distributions become strings, as JSON
    object keys must.
    """
    batches = []
    for record in summary.records:
        row = asdict(record)
        row["observed"] = {str(k): v for k, v in record.observed.items()}
        row["expected"] = {str(k): v for k, v in record.expected.items()}
        batches.append(row)

    return {
        "schema_version": SCHEMA_VERSION,
        "run_id": summary.run_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "description": config.description,
        "config": asdict(config),
        "initial": {"order": summary.initial_order, "size": summary.initial_size},
        "batches": batches,
        "metadata": {
            "seed": summary.seed,
            "code_hash": get_git_hash(),
            "config_hash": full_config_hash(config),
            "batch_config_hash": batch_config_hash(config),
            **(metadata or {}),
        },
    }


def write_summary(
    config: RunConfig,
    summary: RunSummary,
    metadata: dict[str, Any] | None = None,
) -> str:
    """Write <directory><prefix>_summary.json for a finished run.

    Args:
        config: The run configuration (supplies output location and hashes).
        summary: Per-batch records gathered by the batch driver.
        metadata: Optional additional metadata merged into the metadata block.

    Returns:
        The path written.

    Raises:
        ValueError: If the assembled summary fails validation.
    """
    result = build_summary(config, summary, metadata)

    errors = validate_summary(result)
    if errors:
        raise ValueError(
            "Summary validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    path = _summary_path(config.output.directory, config.output.prefix)
    with open(path, "w") as f:
        json.dump(result, f, indent=2)
    return path


def load_summary(summary_path: str | Path) -> dict[str, Any]:
    """Load and validate a summary JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the loaded summary fails validation.
    """
    path = Path(summary_path)
    with open(path) as f:
        result = json.load(f)

    errors = validate_summary(result)
    if errors:
        raise ValueError(
            f"Summary validation failed for {path}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    return result
