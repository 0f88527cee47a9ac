"""Command: collect user info from a social network profile."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from patchbay.commands._base import PbCommand
from patchbay.domain.types import Network

if TYPE_CHECKING:
    from patchbay.commands._context import AppContext


@click.command(
    cls=PbCommand,
    examples="""\
  patchbay profile vk https://vk.com/id1
  patchbay profile facebook https://www.facebook.com/profile.php?id=4
  patchbay --json profile twitter https://x.com/jack""",
)
@click.argument("network", type=click.Choice([n.value for n in Network]))
@click.argument("locator")
@click.pass_obj
def profile(app: AppContext, network: str, locator: str) -> None:
    """Collect the name and friends of the profile at LOCATOR on NETWORK."""
    from patchbay.services.profiles import ProfileService

    app.emit(ProfileService(app.hub).collect(network, locator))
