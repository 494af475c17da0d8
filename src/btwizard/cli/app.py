from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Annotated

import typer

from btwizard.utils.logging import setup_logging

from . import config as config_cmd
from .simulate import register as register_simulate

app = typer.Typer(
    help="btwizard - scan for nearby Bluetooth devices, pair one or skip",
    no_args_is_help=True,
)

app.add_typer(config_cmd.app, name="config")
register_simulate(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", "-l", help="Log level (default: $LOGLEVEL)"),
    ] = None,
) -> None:
    """btwizard CLI."""
    setup_logging(log_level)

    if version:
        typer.echo(f"btwizard version {get_version('btwizard')}")
        raise typer.Exit()
