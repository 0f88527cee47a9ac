"""Command: show a saved record."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from patchbay.commands._base import PbCommand

if TYPE_CHECKING:
    from patchbay.commands._context import AppContext


@click.command(
    cls=PbCommand,
    examples="""\
  patchbay get 1
  patchbay --json get 7""",
)
@click.argument("record_id", type=int)
@click.pass_obj
def get(app: AppContext, record_id: int) -> None:
    """Show the record with RECORD_ID."""
    from patchbay.services.records import RecordService

    app.emit(RecordService(app.hub).get(record_id))
