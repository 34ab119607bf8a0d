"""
Tests for the command line entry point.
"""

import json
import logging

import matplotlib

matplotlib.use("Agg")

from main import build_parser, main, params_from_args  # noqa: E402
from treegen.config import TreeParams  # noqa: E402
from treegen.logging_config import setup_logging  # noqa: E402


class TestArguments:
    """Tests for parameter assembly from the command line."""

    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert params_from_args(args) == TreeParams.default()

    def test_overrides(self) -> None:
        args = build_parser().parse_args(
            [
                "--preset", "sapling", "--seed", "7", "--levels", "2",
                "--segments", "4", "--tree-steps", "3",
            ]
        )
        params = params_from_args(args)
        assert params.seed == 7
        assert params.levels == 2
        assert params.segments == 4
        assert params.tree_steps == 3
        assert params.trunk_length == TreeParams.sapling().trunk_length

    def test_params_file(self, tmp_path) -> None:
        path = tmp_path / "params.json"
        path.write_text(json.dumps({"seed": 11, "twist_rate": 1.0}), encoding="utf-8")
        args = build_parser().parse_args(["--params", str(path)])
        params = params_from_args(args)
        assert params.seed == 11
        assert params.twist_rate == 1.0

    def test_random_seed(self) -> None:
        args = build_parser().parse_args(["--random-seed"])
        assert 0 <= params_from_args(args).seed < 1000


class TestMain:
    """Tests for full CLI runs."""

    def test_writes_obj(self, tmp_path, capsys) -> None:
        path = tmp_path / "tree.obj"
        code = main(["--levels", "2", "--twigs", "--obj", str(path)])
        assert code == 0
        assert path.read_text(encoding="utf-8").startswith("o tree")
        out = capsys.readouterr().out
        assert "TREE MESH SUMMARY" in out

    def test_render(self, tmp_path) -> None:
        path = tmp_path / "tree.png"
        assert main(["--levels", "1", "--render", str(path)]) == 0
        assert path.exists()

    def test_invalid_mesh_returns_error(self, tmp_path, capsys) -> None:
        """A zero radius falloff puts the base ring at infinity."""
        path = tmp_path / "params.json"
        path.write_text(json.dumps({"radius_falloff_rate": 0.0, "levels": 1}), encoding="utf-8")
        assert main(["--params", str(path)]) == 1
        assert "invalid" in capsys.readouterr().err


class TestLogging:
    """Tests for logger setup."""

    def test_setup_logging_replaces_handlers(self, tmp_path) -> None:
        log_file = tmp_path / "treegen.log"
        logger = setup_logging(logging.DEBUG, str(log_file))
        logger = setup_logging(logging.DEBUG, str(log_file))
        assert logger.name == "treegen"
        assert len(logger.handlers) == 2
        logger.debug("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
        setup_logging(logging.WARNING)
