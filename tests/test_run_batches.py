"""Tests for the command-line entry point."""

import json

import pytest

from dynbatch.config import InputTransform, UpdateNature
from run_batches import build_config, build_parser, main


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "g.txt"
    path.write_text("0 1\n1 2\n2 3\n")
    return path


def _args(*argv):
    return build_parser().parse_args(list(argv))


class TestBuildConfig:
    """Flags override the JSON file; unset flags leave it alone."""

    def test_flags_only(self, graph_file):
        cfg = build_config(_args(
            "--input-graph", str(graph_file), "--input-format", "edgelist",
            "--batch-size", "5", "--edge-insertions", "0.6", "--update-nature", "uniform",
            "--seed", "3",
        ))
        assert cfg.input.path == str(graph_file)
        assert cfg.batch.batch_size == 5
        assert cfg.batch.edge_insertions == 0.6
        assert cfg.batch.update_nature is UpdateNature.UNIFORM
        assert cfg.seed == 3

    def test_transforms_in_order(self):
        cfg = build_config(_args("--input-transform", "transpose", "--input-transform", "loop-deadends"))
        assert cfg.input.transforms == (InputTransform.TRANSPOSE, InputTransform.LOOP_DEADENDS)

    def test_flags_override_json(self, tmp_path):
        config_path = tmp_path / "run.json"
        config_path.write_text(json.dumps({
            "batch": {"batch_size": 10, "edge_deletions": 0.5},
            "seed": 1,
        }))
        cfg = build_config(_args("--config", str(config_path), "--batch-size", "20"))
        assert cfg.batch.batch_size == 20
        assert cfg.batch.edge_deletions == 0.5
        assert cfg.seed == 1

    def test_boolean_flags(self):
        cfg = build_config(_args("--allow-duplicate-edges", "--unweighted", "--preserve-communities"))
        assert cfg.batch.allow_duplicate_edges is True
        assert cfg.batch.allow_self_loops is False
        assert cfg.output.weighted is False
        assert cfg.growth.preserve_communities is True


class TestMain:
    def test_unknown_nature_exits_1(self, graph_file):
        with pytest.raises(SystemExit) as info:
            main(["--input-graph", str(graph_file), "--update-nature", "random-walk"])
        assert info.value.code == 1

    def test_missing_input_exits_1(self, tmp_path):
        with pytest.raises(SystemExit) as info:
            main(["--input-graph", str(tmp_path / "nope.mtx"), "--output-dir", f"{tmp_path}/"])
        assert info.value.code == 1

    def test_missing_config_exits_1(self, tmp_path):
        with pytest.raises(SystemExit) as info:
            main(["--config", str(tmp_path / "nope.json")])
        assert info.value.code == 1

    def test_dry_run_writes_nothing(self, graph_file, tmp_path, capsys):
        main([
            "--input-graph", str(graph_file), "--input-format", "edgelist",
            "--output-dir", f"{tmp_path}/out/", "--dry-run",
        ])
        assert "[dry-run]" in capsys.readouterr().out
        assert not (tmp_path / "out").exists()

    def test_full_run(self, graph_file, tmp_path, capsys):
        main([
            "--input-graph", str(graph_file), "--input-format", "edgelist",
            "--output-dir", f"{tmp_path}/out/", "--output-prefix", "g",
            "--batch-size", "2", "--edge-insertions", "1.0", "--update-nature", "uniform",
            "--multi-batch", "2", "--seed", "9", "--summary",
        ])
        assert (tmp_path / "out" / "g_1").read_text().startswith("4 5\n")
        assert (tmp_path / "out" / "g_2").read_text().startswith("4 7\n")
        assert (tmp_path / "out" / "g_summary.json").exists()
        assert "Run complete" in capsys.readouterr().out
