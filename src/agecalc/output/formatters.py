"""Output mode dispatch for ServiceResult.

The CLI renders results for humans (Rich), for scripts (--quiet), or
for machines (--json).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from agecalc.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from agecalc.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output-related flags plus the display toggles from config."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    show_totals: bool = True
    show_references: bool = True


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet, quiet wins over the Rich renderer.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(
        result,
        verbose=settings.verbose,
        show_totals=settings.show_totals,
        show_references=settings.show_references,
    )
