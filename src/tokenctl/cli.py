"""Root CLI group for tokenctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from tokenctl import __version__
from tokenctl.commands import register_commands
from tokenctl.commands._context import AppContext
from tokenctl.config.settings import TokSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="tokenctl")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only OK/ERROR and the op name.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs, error detail, and timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-color", is_flag=True, help="Never style output, even on a terminal.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Use this config file instead of discovering tokenctl.toml.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_color: bool,
    config_path: Path | None,
) -> None:
    """tokenctl — resolve aliases and inherited types in design token files."""
    settings = TokSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_color=no_color,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
