"""Tests for CLI commands."""

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner
from docweave.cli import cli


def _write_project(root: Path) -> Path:
    """Create a minimal project and return its config file."""
    docs = root / "docs"
    docs.mkdir()
    (docs / "index.md").write_text("# Home\n\nWelcome.\n", encoding="utf-8")
    (docs / "guide.md").write_text("# Guide\n\nSteps.\n", encoding="utf-8")
    (root / "nav.yaml").write_text(
        "- title: Home\n  path: index.md\n  index: true\n- title: Guide\n  path: guide.md\n",
        encoding="utf-8",
    )
    config_file = root / "docweave.toml"
    config_file.write_text('[site]\nname = "CLI Docs"\n', encoding="utf-8")
    return config_file


class TestBuildCommand:
    """Tests for the build command."""

    def test__builds_site(self, tmp_path: Path) -> None:
        config_file = _write_project(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Built 2 pages" in result.output
        assert (tmp_path / "site" / "index.html").is_file()
        assert (tmp_path / "site" / "guide" / "index.html").is_file()
        assert (tmp_path / "site" / "static" / "search" / "search_index.json").is_file()

    def test__site_dir_override(self, tmp_path: Path) -> None:
        config_file = _write_project(tmp_path)
        out = tmp_path / "public"

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(config_file), "-d", str(out)])

        assert result.exit_code == 0
        assert (out / "index.html").is_file()

    def test__unknown_skin__exits_with_error(self, tmp_path: Path) -> None:
        config_file = _write_project(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(config_file), "--skin", "neon"])

        assert result.exit_code == 1
        assert "Error: No skin 'neon'" in result.output

    def test__missing_source__strict_fails_lenient_builds(self, tmp_path: Path) -> None:
        config_file = _write_project(tmp_path)
        (tmp_path / "docs" / "guide.md").unlink()

        runner = CliRunner()
        strict = runner.invoke(cli, ["build", "-c", str(config_file)])
        lenient = runner.invoke(cli, ["build", "-c", str(config_file), "--no-strict"])

        assert strict.exit_code == 1
        assert "Source file not found" in strict.output
        assert lenient.exit_code == 0

    def test__missing_config__fails(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(tmp_path / "missing.toml")])

        assert result.exit_code != 0


class TestServeCommand:
    """Tests for the serve command."""

    def test__builds_then_serves(self, tmp_path: Path) -> None:
        config_file = _write_project(tmp_path)

        runner = CliRunner()
        with patch("docweave.server.run_server") as run_server:
            result = runner.invoke(cli, ["serve", "-c", str(config_file), "-p", "9001"])

        assert result.exit_code == 0
        run_server.assert_called_once_with(tmp_path / "site", "127.0.0.1", 9001)

    def test__no_build_missing_site__fails(self, tmp_path: Path) -> None:
        config_file = _write_project(tmp_path)

        runner = CliRunner()
        with patch("docweave.server.run_server") as run_server:
            result = runner.invoke(cli, ["serve", "-c", str(config_file), "--no-build"])

        assert result.exit_code == 1
        assert "Site directory not found" in result.output
        run_server.assert_not_called()
