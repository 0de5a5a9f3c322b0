"""Run identity hashes over the canonical JSON form of a config."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from dynbatch.config.run import RunConfig

HASH_LENGTH = 16

# Where files go does not change what a run computes.
LOCATION_FIELDS = ("directory", "plot_dir")


def _digest(payload: dict[str, Any]) -> str:
    blob = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(blob.encode("utf-8")).hexdigest()[:HASH_LENGTH]


def config_hash(config: Any) -> str:
    """Hex digest of any config dataclass or config section."""
    return _digest(asdict(config))


def batch_config_hash(config: RunConfig) -> str:
    """Hash of the sampling policy only (config.batch).

    Runs that differ only in input, output or seed share this hash, which
    makes it the key for comparing divergence across graphs.
    """
    return config_hash(config.batch)


def full_config_hash(config: RunConfig) -> str:
    """Hash of everything that determines a run's snapshots, seed included."""
    payload = asdict(config)
    for name in LOCATION_FIELDS:
        payload["output"].pop(name)
    return _digest(payload)
