"""Tests for seed resolution, the run Generator, and git provenance."""

import logging
import re
import subprocess
from unittest.mock import patch

import numpy as np

from dynbatch.reproducibility import (
    get_git_hash,
    make_rng,
    resolve_seed,
    verify_seed_determinism,
)


class TestSeedResolution:
    """Explicit seeds pass through; missing seeds come from OS entropy."""

    def test_explicit_seed(self):
        assert resolve_seed(42) == 42
        assert resolve_seed(0) == 0

    def test_entropy_seed_range(self):
        seed = resolve_seed(None)
        assert isinstance(seed, int)
        assert 0 <= seed < 2**63

    def test_entropy_seed_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="dynbatch.reproducibility.seed")
        seed = resolve_seed(None)
        assert str(seed) in caplog.text

    def test_entropy_seeds_differ(self):
        assert resolve_seed(None) != resolve_seed(None)


class TestGenerator:
    """make_rng gives replayable streams."""

    def test_same_seed_same_stream(self):
        a = make_rng(7).integers(0, 1000, 50)
        b = make_rng(7).integers(0, 1000, 50)
        assert np.array_equal(a, b)

    def test_different_seed_different_stream(self):
        a = make_rng(7).random(20)
        b = make_rng(8).random(20)
        assert not np.array_equal(a, b)

    def test_verify_seed_determinism(self):
        assert verify_seed_determinism(42) is True
        assert verify_seed_determinism(0) is True
        assert verify_seed_determinism(999999) is True


class TestGitHash:
    """get_git_hash never raises and reports dirty checkouts."""

    def test_format(self):
        h = get_git_hash()
        assert re.match(r"^([0-9a-f]{4,}(-dirty)?|unknown)$", h)

    def test_outside_repository(self, tmp_path):
        with patch(
            "dynbatch.reproducibility.git_hash.subprocess.check_output",
            side_effect=subprocess.CalledProcessError(128, ["git"]),
        ):
            assert get_git_hash(tmp_path) == "unknown"

    def test_git_missing(self, tmp_path):
        with patch(
            "dynbatch.reproducibility.git_hash.subprocess.check_output",
            side_effect=FileNotFoundError("git"),
        ):
            assert get_git_hash(tmp_path) == "unknown"

    def test_clean_checkout(self, tmp_path):
        with patch(
            "dynbatch.reproducibility.git_hash.subprocess.check_output",
            return_value=b"abc1234\n",
        ):
            assert get_git_hash(tmp_path) == "abc1234"

    def test_dirty_checkout(self, tmp_path):
        def fake_git(args, **kwargs):
            if args[1] == "rev-parse":
                return b"abc1234\n"
            raise subprocess.CalledProcessError(1, args)

        with patch(
            "dynbatch.reproducibility.git_hash.subprocess.check_output",
            side_effect=fake_git,
        ):
            assert get_git_hash(tmp_path) == "abc1234-dirty"
