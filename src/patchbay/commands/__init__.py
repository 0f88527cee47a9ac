"""Subcommand modules for patchbay.

Provides register_commands() which uses deferred imports to keep
``patchbay --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from patchbay.commands.get import get
    from patchbay.commands.handlers import handlers
    from patchbay.commands.import_cmd import import_cmd
    from patchbay.commands.profile import profile
    from patchbay.commands.read import read
    from patchbay.commands.save import save

    cli.add_command(read)
    cli.add_command(import_cmd)
    cli.add_command(profile)
    cli.add_command(save)
    cli.add_command(get)
    cli.add_command(handlers)
