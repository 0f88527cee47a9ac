"""Command: import a log file from any source."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from patchbay.commands._base import PbCommand
from patchbay.domain.types import SourceKind

if TYPE_CHECKING:
    from patchbay.commands._context import AppContext


@click.command(
    "import",
    cls=PbCommand,
    examples="""\
  patchbay import file logs/app.log
  patchbay import http https://example.com/logs/today.log
  patchbay --strategy chain import ftp logs/app.log
  patchbay -q import file logs/app.log""",
)
@click.argument("source", type=click.Choice([s.value for s in SourceKind]))
@click.argument("identifier")
@click.pass_obj
def import_cmd(app: AppContext, source: str, identifier: str) -> None:
    """Import the log at IDENTIFIER from SOURCE and notify handlers."""
    from patchbay.services.imports import ImportService

    app.emit(ImportService(app.hub).import_log(source, identifier))
