from __future__ import annotations

import typer

from btwizard.config import Settings, get_settings


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def with_simulation_overrides(settings: Settings, **overrides: int | None) -> Settings:
    """Apply command line values that were actually given."""
    given = {key: value for key, value in overrides.items() if value is not None}
    if not given:
        return settings
    simulation = settings.simulation.model_copy(update=given)
    return settings.model_copy(update={"simulation": simulation})
