"""Command: age from a date of birth."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from agecalc.commands._base import AgeCommand

if TYPE_CHECKING:
    from agecalc.commands._context import AppContext


@click.command(
    cls=AgeCommand,
    examples="""\
  agecalc age 1990-06-15T08:30
  agecalc age 1990-06-15 --at 2025-01-01
  agecalc --json age 2004-02-29""",
)
@click.argument("birth")
@click.option("--at", "at", default=None, help="Reference instant (default: now).")
@click.pass_obj
def age(app: AppContext, birth: str, at: str | None) -> None:
    """Age of someone born at BIRTH, with totals and references."""
    app.emit(app.service.age(birth, at))
