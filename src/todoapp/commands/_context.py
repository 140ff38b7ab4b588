"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands with
``@click.pass_obj``. Holds the resolved settings, builds the policy
registry lazily and routes results to stdout/stderr with exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from todoapp.config.logging import configure_logging
from todoapp.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from todoapp.config.settings import TodoSettings
    from todoapp.services.registry import PolicyRegistry
    from todoapp.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The registry is built on first use so ``--help`` and ``--examples``
    never touch policy configuration.
    """

    def __init__(self, settings: TodoSettings) -> None:
        self.settings = settings
        self._registry: PolicyRegistry | None = None

        configure_logging(verbose=settings.debug_logging, log_json=settings.json_logging)

    @property
    def registry(self) -> PolicyRegistry:
        """The process policies (created lazily on first access)."""
        if self._registry is None:
            from todoapp.services.registry import PolicyRegistry

            self._registry = PolicyRegistry.from_settings(self.settings)
        return self._registry

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout and returns. Warnings go to stderr
          unless they are already part of the JSON payload.
        * Failure: writes to stderr and exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
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
