"""Tests for the CLI entry points."""

from click.testing import CliRunner

from metro_space import __version__
from metro_space.cli import cli


def test_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_info_output():
    """info command prints graph statistics of the example map."""
    runner = CliRunner()
    result = runner.invoke(cli, ["info"])
    assert result.exit_code == 0, result.output
    assert "Stations: 17" in result.output
    assert "Edges: 22" in result.output
    assert "Components: 2" in result.output
    assert "Routes: 7" in result.output


def test_conflicts_output():
    runner = CliRunner()
    result = runner.invoke(cli, ["conflicts"])
    assert result.exit_code == 0, result.output
    assert "Conflicts:" in result.output


def test_conflicts_major_only_threshold():
    runner = CliRunner()
    result = runner.invoke(cli, ["conflicts", "--edge-margin", "1", "--major-only",
                                 "--correction-factor", "1000"])
    assert result.exit_code == 0, result.output
    assert "No conflicts." in result.output


def test_make_space_scale_renders_svg(tmp_path):
    """make-space writes the resulting map as SVG."""
    out = tmp_path / "map.svg"
    runner = CliRunner()
    result = runner.invoke(cli, ["make-space", "--strategy", "scale", "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert "Strategy: scale" in result.output
    assert out.exists()
    assert "<svg" in out.read_text()


def test_make_space_rejects_unknown_strategy():
    runner = CliRunner()
    result = runner.invoke(cli, ["make-space", "--strategy", "shrink"])
    assert result.exit_code != 0
