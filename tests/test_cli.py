"""Tests for the root agecalc CLI."""

from __future__ import annotations

from click.testing import CliRunner

from agecalc import __version__
from agecalc.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "agecalc" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


def test_json_flag_accepted(cli_runner: CliRunner) -> None:
    assert cli_runner.invoke(cli, ["--json", "--version"]).exit_code == 0


def test_quiet_flag_accepted(cli_runner: CliRunner) -> None:
    assert cli_runner.invoke(cli, ["-q", "--version"]).exit_code == 0


def test_verbose_flag_accepted(cli_runner: CliRunner) -> None:
    assert cli_runner.invoke(cli, ["-v", "--version"]).exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    assert cli_runner.invoke(cli, ["-c", "/tmp/test.toml", "--version"]).exit_code == 0


# --- Commands registered ---

EXPECTED_COMMANDS = ["diff", "age", "adjust"]


def test_commands_registered() -> None:
    assert sorted(cli.commands) == sorted(EXPECTED_COMMANDS)


def test_commands_in_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    for name in EXPECTED_COMMANDS:
        assert name in result.output


def test_examples_flag(cli_runner: CliRunner) -> None:
    for name in EXPECTED_COMMANDS:
        result = cli_runner.invoke(cli, [name, "--examples"])
        assert result.exit_code == 0
        assert f"agecalc {name}" in result.output


def test_tz_option_overrides_config(cli_runner: CliRunner) -> None:
    with open("agecalc.toml", "w", encoding="utf-8") as fh:
        fh.write('[calendar]\ntimezone = "Mars/Olympus_Mons"\n')
    args = ["--tz", "UTC", "-q", "diff", "2024-01-01", "2024-01-02T06:00"]
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert result.output.strip() == "0 years, 0 months, 1 days 06:00:00"


def test_tz_option_rejects_unknown_zone(cli_runner: CliRunner) -> None:
    args = ["--tz", "Nowhere/Special", "diff", "2024-01-01", "2024-01-02"]
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 1
    assert "Unknown timezone" in result.output
