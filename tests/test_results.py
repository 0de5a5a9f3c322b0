"""Tests for the run summary schema, writing, and run ID generation."""

import json
import re
from unittest.mock import patch

import pytest

from dynbatch.config import BatchConfig, OutputConfig, RunConfig
from dynbatch.results import (
    BatchRecord,
    RunSummary,
    build_summary,
    generate_run_id,
    load_summary,
    validate_summary,
    write_summary,
)


def _summary() -> RunSummary:
    return RunSummary(
        run_id="uniform_b2_i1_d0_x2_s42_20261018_120000",
        seed=42,
        initial_order=4,
        initial_size=3,
        records=[
            BatchRecord(
                index=1, batch_size=2, requested_insertions=2, inserted=2,
                order=4, size=5, size_delta=2, kl_divergence=0.12,
                observed={0: 1, 2: 3}, expected={0: 0.8, 2: 3.2},
            ),
            BatchRecord(index=2, batch_size=2, error="Q[3] must be non-zero"),
        ],
    )


class TestValidateSummary:
    """validate_summary accepts valid dicts and rejects invalid ones."""

    @pytest.fixture
    def valid_summary(self):
        return build_summary(RunConfig(seed=42), _summary())

    def test_valid(self, valid_summary):
        assert validate_summary(valid_summary) == []

    def test_missing_fields(self):
        errors = validate_summary({"schema_version": "1.0"})
        assert any("Missing required" in e for e in errors)

    def test_bad_timestamp(self, valid_summary):
        valid_summary["timestamp"] = "yesterday"
        assert any("ISO 8601" in e for e in validate_summary(valid_summary))

    def test_missing_metadata_field(self, valid_summary):
        del valid_summary["metadata"]["seed"]
        assert "metadata missing field: seed" in validate_summary(valid_summary)

    def test_batch_index_gap(self, valid_summary):
        valid_summary["batches"][1]["index"] = 3
        assert any("expected 2" in e for e in validate_summary(valid_summary))

    def test_missing_batch_field(self, valid_summary):
        del valid_summary["batches"][0]["kl_divergence"]
        errors = validate_summary(valid_summary)
        assert "batches[0] missing field: kl_divergence" in errors

    def test_negative_divergence(self, valid_summary):
        valid_summary["batches"][0]["kl_divergence"] = -0.5
        assert any("kl_divergence" in e for e in validate_summary(valid_summary))

    def test_nan_divergence(self, valid_summary):
        valid_summary["batches"][0]["kl_divergence"] = float("nan")
        assert any("kl_divergence" in e for e in validate_summary(valid_summary))


class TestBuildSummary:
    def test_metadata(self):
        with patch("dynbatch.results.schema.get_git_hash", return_value="abc1234"):
            result = build_summary(RunConfig(seed=42), _summary(), metadata={"host": "x"})
        meta = result["metadata"]
        assert meta["seed"] == 42
        assert meta["code_hash"] == "abc1234"
        assert re.match(r"^[0-9a-f]{16}$", meta["config_hash"])
        assert re.match(r"^[0-9a-f]{16}$", meta["batch_config_hash"])
        assert meta["host"] == "x"

    def test_degree_keys_are_strings(self):
        result = build_summary(RunConfig(), _summary())
        assert result["batches"][0]["observed"] == {"0": 1, "2": 3}
        assert result["initial"] == {"order": 4, "size": 3}
        json.dumps(result)


class TestWriteSummary:
    def test_write_and_load(self, tmp_path):
        cfg = RunConfig(output=OutputConfig(directory=f"{tmp_path}/", prefix="run"), seed=42)
        path = write_summary(cfg, _summary())
        assert path == f"{tmp_path}/run_summary.json"
        loaded = load_summary(path)
        assert loaded["run_id"] == _summary().run_id
        assert loaded["batches"][1]["error"].startswith("Q[3]")
        assert loaded["batches"][1]["kl_divergence"] is None

    def test_validates_before_write(self, tmp_path):
        cfg = RunConfig(output=OutputConfig(directory=f"{tmp_path}/", prefix="run"))
        bad = _summary()
        bad.records[0].kl_divergence = -1.0
        with pytest.raises(ValueError, match="validation failed"):
            write_summary(cfg, bad)
        assert not (tmp_path / "run_summary.json").exists()

    def test_load_invalid_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"schema_version": "1.0"}))
        with pytest.raises(ValueError, match="validation failed"):
            load_summary(path)


class TestRunSummary:
    def test_properties(self):
        summary = _summary()
        assert summary.divergences == [0.12, None]
        assert summary.n_errors == 1


class TestGenerateRunId:
    def test_format(self):
        cfg = RunConfig(batch=BatchConfig(batch_size=100, edge_insertions=0.8, edge_deletions=0.2, update_nature="uniform", multi_batch=10))
        run_id = generate_run_id(cfg, 42)
        assert re.match(r"^uniform_b100_i0\.8_d0\.2_x10_s42_\d{8}_\d{6}$", run_id)

    def test_custom_and_ratio(self):
        cfg = RunConfig(batch=BatchConfig(batch_size_ratio=0.05, probability_distribution="zipf"))
        run_id = generate_run_id(cfg, 7)
        assert run_id.startswith("custom-zipf_r0.05_i0_d0_x1_s7_")
