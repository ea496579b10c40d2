"""``agecalc`` entry point: global output and config flags, then a command."""

from __future__ import annotations

from typing import Any

import click

from agecalc import __version__
from agecalc.commands import register_commands
from agecalc.commands._context import AppContext
from agecalc.config.settings import AgeSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="agecalc")
@click.option("--json", "json_output", is_flag=True, help="Print the result envelope as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the breakdown or adjusted value.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs, error detail and call timing.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "--tz", "timezone", default=None, metavar="ZONE", help="IANA zone for now and totals."
)
@click.option("-c", "--config", "config_path", default=None, help="Path to agecalc.toml.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    timezone: str | None,
    config_path: str | None,
) -> None:
    """agecalc: elapsed calendar time between date-times, and date arithmetic."""
    overrides: dict[str, Any] = {}
    if timezone is not None:
        overrides["calendar"] = {"timezone": timezone}
    settings = AgeSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        **overrides,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
