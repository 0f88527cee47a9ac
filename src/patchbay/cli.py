"""Root CLI group for patchbay with global flags and command registration."""

from __future__ import annotations

import click

from patchbay import __version__
from patchbay.commands import register_commands
from patchbay.commands._context import AppContext
from patchbay.config.settings import PatchbaySettings
from patchbay.domain.types import CompositionStrategy


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="patchbay")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in CompositionStrategy]),
    default=None,
    help="Override the pipeline composition strategy.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    strategy: str | None,
) -> None:
    """patchbay — dispatch reads and notify handlers."""
    ctx.ensure_object(dict)
    settings = PatchbaySettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        pipeline={"strategy": strategy} if strategy else None,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
