"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Owns process-wide setup (logging, telemetry) and
result emission: stdout for results, stderr for warnings and failures,
exit status from :attr:`ServiceResult.exit_code`.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from tokenctl.config.logging import configure_logging
from tokenctl.output.formatters import OutputSettings, format_result
from tokenctl.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from tokenctl.config.settings import TokSettings
    from tokenctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: TokSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
            color=not settings.no_color and sys.stdout.isatty(),
            indent=settings.output.indent,
        )

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )
        if settings.verbose:
            enable_telemetry()

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and exit non-zero if it failed.

        Warnings go to stderr in human mode and are dropped with
        ``--quiet``; the JSON payload already carries them.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(result.exit_code)

        click.echo(text)
        if self.output.json_output or self.output.quiet:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
