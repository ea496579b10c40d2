"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy AgeService construction and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from agecalc.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from agecalc.config.settings import AgeSettings
    from agecalc.services.age import AgeService
    from agecalc.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The service is built on first use so ``--help`` and ``--version``
    never resolve the configured timezone.
    """

    def __init__(self, settings: AgeSettings) -> None:
        self.settings = settings
        self._service: AgeService | None = None

        from agecalc.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from agecalc.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> AgeService:
        """The AgeService instance (created lazily on first access)."""
        if self._service is None:
            from agecalc.services.age import AgeService

            self._service = AgeService(
                tz=self.settings.resolve_timezone(),
                reference_format=self.settings.display.reference_format,
            )
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            show_totals=self.settings.display.show_totals,
            show_references=self.settings.display.show_references,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
