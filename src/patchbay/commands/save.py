"""Command: save a record and run its notification handlers."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from patchbay.commands._base import PbCommand

if TYPE_CHECKING:
    from patchbay.commands._context import AppContext


def _parse_data(ctx: click.Context, _param: click.Parameter, value: str) -> dict[str, Any]:
    try:
        data = json.loads(value)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise click.BadParameter("must be a JSON object")
    return data


@click.command(
    cls=PbCommand,
    examples="""\
  patchbay save order --data '{"id": 42, "total": 9.5}'
  patchbay --strategy chain save signup --data '{"email": "a@example.com"}'""",
)
@click.argument("kind")
@click.option(
    "--data",
    default="{}",
    callback=_parse_data,
    help="Record payload as a JSON object.",
)
@click.pass_obj
def save(app: AppContext, kind: str, data: dict[str, Any]) -> None:
    """Persist a record of KIND, then notify handlers."""
    from patchbay.services.records import RecordService

    app.emit(RecordService(app.hub).save(kind, data))
