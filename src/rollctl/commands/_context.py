"""AppContext: per-invocation state for the roll command.

Built once the command knows it has an expression to roll, so ``--help``
and ``--version`` never load configuration or touch logging.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rollctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from rollctl.config.settings import RollSettings
    from rollctl.services.result import ServiceResult


class AppContext:
    """Settings plus centralized result emission."""

    def __init__(self, settings: RollSettings) -> None:
        self.settings = settings

        from rollctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from rollctl.services.telemetry import enable_telemetry

            enable_telemetry()

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult to stdout with the right exit semantics.

        * Success: returns normally (exit code 0).
        * Failure: the rejection reasons and help hint still go to stdout,
          then the process exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        click.echo(format_result(result, settings=settings))
        if not result.ok:
            raise SystemExit(1)
