from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

APP_NAME = "btwizard"
CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "BTWIZARD_CONFIG"


class ScanningConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    # seconds; the n-th retry waits retry_delay * n
    retry_delay: float = Field(default=1.0, gt=0)
    max_retries: int = Field(default=3, ge=0)


class SimulationConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    device_count: int = Field(default=4, ge=0, le=32)
    discovery_interval: float = Field(default=0.3, gt=0)
    bond_delay: float = Field(default=0.5, gt=0)
    start_failures: int = Field(default=0, ge=0)


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    scanning: ScanningConfig = Field(default_factory=ScanningConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)


def default_config_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(config_home) / APP_NAME / CONFIG_FILENAME


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    """Return the config file location and whether it exists.

    ``$BTWIZARD_CONFIG`` wins over the XDG default. Pointing it at a file
    that does not exist is an error unless ``allow_missing`` is set.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if not override:
        path = default_config_path()
        return path, path.is_file()

    path = Path(os.path.expandvars(os.path.expanduser(override)))
    if not path.is_file() and not allow_missing:
        raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
    return path, path.is_file()


def load_settings(path: Path) -> Settings:
    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path()
    return load_settings(path) if exists else Settings()


def render_settings_toml(settings: Settings) -> str:
    lines = ["# btwizard configuration"]
    for section, model in settings:
        lines += ["", f"[{section}]"]
        lines += [f"{key} = {value}" for key, value in model.model_dump().items()]
    return "\n".join(lines) + "\n"


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
