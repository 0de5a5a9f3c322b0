"""Reproducibility infrastructure: seed resolution and code provenance tracking."""

from dynbatch.reproducibility.git_hash import get_git_hash
from dynbatch.reproducibility.seed import make_rng, resolve_seed, verify_seed_determinism

__all__ = [
    "get_git_hash",
    "make_rng",
    "resolve_seed",
    "verify_seed_determinism",
]
