"""Command: move an instant by day/month/year deltas."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from agecalc.commands._base import AgeCommand

if TYPE_CHECKING:
    from agecalc.commands._context import AppContext

_DELTA_SIGNS = ("+", "-")


def _split_value(args: tuple[str, ...]) -> tuple[str | None, tuple[str, ...]]:
    """Separate the optional leading VALUE from the signed delta tokens."""
    if args and not args[0].startswith(_DELTA_SIGNS):
        return args[0], args[1:]
    return None, args


@click.command(
    cls=AgeCommand,
    context_settings={"ignore_unknown_options": True},
    examples="""\
  agecalc adjust 2025-01-31T10:00 +1m
  agecalc adjust 2024-02-29T00:00 +1y -1d
  agecalc adjust -7d
  agecalc -q adjust 2000-01-01T00:00 +10y""",
)
@click.argument("args", nargs=-1, required=True, metavar="[VALUE] DELTA...")
@click.pass_obj
def adjust(app: AppContext, args: tuple[str, ...]) -> None:
    """Apply each DELTA (e.g. +1d, -3m, +1y) to VALUE in order.

    VALUE defaults to now and may be given as "now"; an unparsable VALUE
    also starts from now.
    """
    value, deltas = _split_value(args)
    if not deltas:
        raise click.UsageError("Missing argument 'DELTA...'.")
    app.emit(app.service.adjust(value, deltas))
