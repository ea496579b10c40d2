"""Command: calendar difference between two instants."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from agecalc.commands._base import AgeCommand

if TYPE_CHECKING:
    from agecalc.commands._context import AppContext


@click.command(
    cls=AgeCommand,
    examples="""\
  agecalc diff 2020-01-01T00:00 2021-03-02T01:02:03
  agecalc diff 1990-06-15
  agecalc --json diff 2024-02-28 2024-03-01
  agecalc -q diff 2000-01-01 now""",
)
@click.argument("start")
@click.argument("end", required=False, default=None)
@click.pass_obj
def diff(app: AppContext, start: str, end: str | None) -> None:
    """Elapsed calendar time from START to END (default: now).

    Instants use YYYY-MM-DD, YYYY-MM-DDThh:mm or YYYY-MM-DDThh:mm:ss.
    """
    app.emit(app.service.difference(start, end))
