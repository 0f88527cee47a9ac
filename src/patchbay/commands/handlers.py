"""Command: describe notification handlers and pipelines."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from patchbay.commands._base import PbCommand

if TYPE_CHECKING:
    from patchbay.commands._context import AppContext


@click.command(
    cls=PbCommand,
    examples="""\
  patchbay handlers
  patchbay --strategy chain handlers
  patchbay --json handlers""",
)
@click.pass_obj
def handlers(app: AppContext) -> None:
    """Show the pipeline strategy and configured handlers."""
    from patchbay.services.pipelines import PipelineService

    app.emit(PipelineService(app.hub).describe())
