"""Tests for the diff command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from agecalc.cli import cli


class TestDiffCommand:
    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["diff", "2020-01-01T00:00:00", "2021-03-02T01:02:03"])
        assert result.exit_code == 0
        assert "1 years, 2 months, 1 days" in result.output
        assert "01:02:03" in result.output

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "diff", "2024-02-28", "2024-03-01"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "difference"
        assert (data["data"]["months"], data["data"]["days"]) == (0, 2)

    def test_quiet_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "diff", "2023-02-28", "2023-03-01"])
        assert result.exit_code == 0
        assert result.output.strip() == "0 years, 0 months, 1 days 00:00:00"

    def test_inverted_interval_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["diff", "2024-01-02", "2024-01-01"])
        assert result.exit_code == 1
        assert "End must be on or after start" in result.output

    def test_invalid_instant_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "diff", "2023-02-29", "2024-01-01"])
        assert result.exit_code == 1
        assert '"INVALID_INSTANT"' in result.output

    def test_negative_days_warns_on_stderr(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["diff", "2025-01-31", "2025-03-01"])
        assert result.exit_code == 0
        assert "WARNING: Day component is negative" in result.output

    @pytest.mark.usefixtures("_frozen_now")
    def test_end_defaults_to_now(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "diff", "2025-06-01T09:00"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["end"] == "2025-06-01T09:30:15"

    def test_verbose_includes_telemetry(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "-v", "diff", "2020-01-01", "2020-01-02"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["meta"]["telemetry"]["name"] == "AgeService.difference"

    def test_totals_hidden_by_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cfg = tmp_path / "agecalc.toml"
        cfg.write_text("[display]\nshow_totals = false\n")
        result = cli_runner.invoke(cli, ["-c", str(cfg), "diff", "2020-01-01", "2021-01-01"])
        assert result.exit_code == 0
        assert "total:" not in result.output

    def test_unknown_timezone_fails(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cfg = tmp_path / "agecalc.toml"
        cfg.write_text('[calendar]\ntimezone = "Nowhere/Special"\n')
        result = cli_runner.invoke(cli, ["-c", str(cfg), "diff", "2020-01-01", "2021-01-01"])
        assert result.exit_code == 1
        assert "Unknown timezone" in result.output
