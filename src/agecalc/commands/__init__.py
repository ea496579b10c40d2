"""Subcommand modules for agecalc.

Provides register_commands() which uses deferred imports to keep
``agecalc --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from agecalc.commands.adjust import adjust
    from agecalc.commands.age import age
    from agecalc.commands.diff import diff

    cli.add_command(diff)
    cli.add_command(age)
    cli.add_command(adjust)
