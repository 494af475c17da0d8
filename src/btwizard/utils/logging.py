from __future__ import annotations

import logging
import os

import coloredlogs  # type: ignore[import]

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
TIME_FORMAT = "%H:%M:%S"

# Held at WARNING whatever the requested level.
NOISY_LOGGERS = ("asyncio",)


def resolve_level(level: str | None = None) -> str:
    return (level or os.environ.get("LOGLEVEL") or "INFO").upper()


def setup_logging(level: str | None = None) -> None:
    """Colored console logging; ``$LOGLEVEL`` applies when no level is given."""
    resolved = resolve_level(level)
    coloredlogs.install(level=resolved, fmt=LOG_FORMAT, datefmt=TIME_FORMAT)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
