"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Hub initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from patchbay.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from patchbay.config.settings import PatchbaySettings
    from patchbay.infrastructure.hub import Hub
    from patchbay.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The hub is lazily
    initialized on first use so ``--help`` and ``--version`` never
    open a connection.
    """

    def __init__(self, settings: PatchbaySettings) -> None:
        self.settings = settings
        self._hub: Hub | None = None

        # Configure structured logging
        from patchbay.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def hub(self) -> Hub:
        """The hub instance (created lazily on first access)."""
        if self._hub is None:
            from patchbay.infrastructure.hub import Hub

            self._hub = Hub(self.settings)
        return self._hub

    def close(self) -> None:
        """Release the hub's clients, if one was created."""
        if self._hub is not None:
            self._hub.close()
            self._hub = None

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
