"""Unit tests for the init command."""

from pathlib import Path

from sdclean.cli.main import app
from sdclean.core.config import CleanerConfig, load_config
from typer.testing import CliRunner

runner = CliRunner()


class TestInitCommand:
    """Tests for sdclean init."""

    def test_writes_default_config(self, tmp_path: Path) -> None:
        path = tmp_path / "sdclean" / "config.toml"

        result = runner.invoke(app, ["init", "-c", str(path)])

        assert result.exit_code == 0
        assert load_config(path) == CleanerConfig()

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("dry_run = true\n")

        result = runner.invoke(app, ["init", "-c", str(path)])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert path.read_text() == "dry_run = true\n"

    def test_force_overwrites(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("dry_run = true\n")

        result = runner.invoke(app, ["init", "--force", "-c", str(path)])

        assert result.exit_code == 0
        assert load_config(path).dry_run is False
