"""CLI smoke tests."""

from click.testing import CliRunner
from hierarchy_schema.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "generate" in result.output
    assert "check" in result.output


def test_generate_help_lists_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["generate", "--help"])

    assert result.exit_code == 0
    for option in ("--config", "--output", "--type", "--best-effort", "--verbose"):
        assert option in result.output
