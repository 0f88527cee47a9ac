"""Command: read a raw blob from a source."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from patchbay.commands._base import PbCommand
from patchbay.domain.types import SourceKind

if TYPE_CHECKING:
    from patchbay.commands._context import AppContext


@click.command(
    cls=PbCommand,
    examples="""\
  patchbay read file logs/app.log
  patchbay read http https://example.com/robots.txt
  patchbay --json read ftp pub/README""",
)
@click.argument("source", type=click.Choice([s.value for s in SourceKind]))
@click.argument("identifier")
@click.pass_obj
def read(app: AppContext, source: str, identifier: str) -> None:
    """Read IDENTIFIER from SOURCE and show its size, digest and text."""
    from patchbay.services.read import ReadService

    app.emit(ReadService(app.hub).read(source, identifier))
