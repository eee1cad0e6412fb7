"""Root CLI group for gavel with global flags and command registration."""

from __future__ import annotations

import click

from gavel import __version__
from gavel.commands import register_commands
from gavel.commands._context import AppContext
from gavel.config.settings import ConfigError, GavelSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="gavel")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with timing spans.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """gavel: online auction backend (HTTP server and admin CLI)."""
    ctx.ensure_object(dict)
    try:
        settings = GavelSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj = AppContext(settings)
    ctx.call_on_close(ctx.obj.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
