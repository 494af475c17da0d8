from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from btwizard.config import (
    Settings,
    render_settings_toml,
    resolve_config_path,
    write_settings,
)

from .common import load_settings_or_exit

app = typer.Typer(no_args_is_help=True, help="Inspect or create the config file")


def _config_path(allow_missing: bool = True) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


@app.command("show")
def show_config(
    toml: Annotated[
        bool, typer.Option("--toml", help="Print as TOML instead of a table")
    ] = False,
) -> None:
    """Show the effective configuration."""
    settings = load_settings_or_exit()
    path, exists = _config_path()

    if toml:
        typer.echo(render_settings_toml(settings), nl=False)
        return

    table = Table(title=f"Config source: {path if exists else 'defaults'}")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", justify="right")
    for section, model in settings:
        for key, value in model.model_dump().items():
            table.add_row(f"{section}.{key}", str(value))
    Console().print(table)


@app.command("path")
def config_path() -> None:
    """Print where the config file is looked up."""
    path, exists = _config_path()
    typer.echo(f"{path} ({'exists' if exists else 'missing'})")


@app.command("init")
def init_config(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Write a config file with default values."""
    path, exists = _config_path()

    if exists and not force:
        typer.echo(f"Config already exists at {path}")
        return

    write_settings(Settings(), path)
    typer.echo(f"Wrote default config to {path}")
