"""Tests for CLI argument parsing and the main entry point."""

from pathlib import Path
from unittest.mock import patch

import pytest

from cli import build_overrides, main, parse_args
from constants import DEFAULT_OUTPUT_FILE, DEFAULT_UNMATCHED_FILE
from core.exceptions import UnknownPlatformException
from core.models import ArtTypeOption


@pytest.fixture(autouse=True)
def no_api_key_env(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)


class TestCLIArguments:
    """Tests for parse_args function."""

    def test_defaults(self):
        args = parse_args(["roms"])

        assert args.library == Path("roms")
        assert args.output == Path(DEFAULT_OUTPUT_FILE)
        assert args.unmatched == Path(DEFAULT_UNMATCHED_FILE)
        assert args.config is None
        assert args.verbose is False

    def test_unset_options_are_none(self):
        """Test that options left out do not override the config file."""
        overrides = build_overrides(parse_args(["roms"]))

        assert set(overrides) == {
            "ai", "ai_model", "regions", "force", "art_type",
            "base_url", "max_workers", "timeout", "anthropic_api_key",
        }
        assert all(value is None for value in overrides.values())

    def test_all_options(self):
        args = parse_args([
            "roms",
            "-o", "art.csv",
            "--unmatched", "missing.txt",
            "--force",
            "-t", "box+snap",
            "--ai",
            "--ai-model", "claude-haiku-4-5",
            "--regions", "Japan,USA",
            "--base-url", "http://localhost:8080",
            "--max-workers", "8",
            "--timeout", "2.5",
        ])
        overrides = build_overrides(args)

        assert args.output == Path("art.csv")
        assert args.unmatched == Path("missing.txt")
        assert overrides["force"] is True
        assert overrides["art_type"] == "box+snap"
        assert overrides["ai"] is True
        assert overrides["ai_model"] == "claude-haiku-4-5"
        assert overrides["regions"] == "Japan,USA"
        assert overrides["max_workers"] == 8
        assert overrides["timeout"] == 2.5

    def test_invalid_art_type_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["roms", "--type", "poster"])

    def test_library_required(self):
        with pytest.raises(SystemExit):
            parse_args([])


class TestMain:
    """Tests for the main entry point."""

    def test_missing_library(self, tmp_path):
        assert main([str(tmp_path / "missing")]) == 1

    def test_invalid_config(self, tmp_path):
        config = tmp_path / "romart.yaml"
        config.write_text("maxWorkers: 0\n")

        assert main([str(tmp_path), "--config", str(config)]) == 1

    def test_mistyped_config_value(self, tmp_path):
        config = tmp_path / "romart.yaml"
        config.write_text('timeout: "30"\n')

        assert main([str(tmp_path), "--config", str(config)]) == 1

    def test_runs_resolve_command(self, tmp_path):
        with patch("commands.resolve.resolve_library", return_value=([], [], [])) as resolve:
            exit_code = main([str(tmp_path), "-o", str(tmp_path / "art.csv"), "-t", "snap"])

        assert exit_code == 0
        kwargs = resolve.call_args.kwargs
        assert kwargs["library_dir"] == tmp_path
        assert kwargs["output_file"] == tmp_path / "art.csv"
        assert kwargs["options"].art_type is ArtTypeOption.SNAP

    def test_configuration_error(self, tmp_path):
        with patch("commands.resolve.resolve_library", side_effect=UnknownPlatformException("Unknown - Console")):
            assert main([str(tmp_path)]) == 1
