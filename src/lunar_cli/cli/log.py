"""Logging setup for the process boundary.

Library modules only create ``logging.getLogger(__name__)`` loggers;
handlers are installed here, once, by the console entry point.  Records
are rendered by Rich on stderr so they never mix with command output.
"""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "LUNAR_CLI_LOG_LEVEL"
DEFAULT_LEVEL = logging.WARNING
LOGGER_NAME = "lunar_cli"


def parse_level(value: str | None) -> int | None:
    """Return the numeric level for a name such as ``"debug"``, or ``None``."""
    if not value:
        return None
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else None


def configure_logging(level: str | None = None) -> None:
    """Attach a Rich handler to the package logger.

    *level* defaults to :data:`LOG_LEVEL_ENV`, then WARNING.  Calling this
    more than once only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    resolved = parse_level(level if level is not None else os.environ.get(LOG_LEVEL_ENV))
    logger.setLevel(resolved if resolved is not None else DEFAULT_LEVEL)

    from rich.console import Console
    from rich.logging import RichHandler

    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)


def apply_level(value: str | None) -> bool:
    """Set the package log level from a configuration value.

    Returns ``False`` when *value* is not a known level name.
    """
    level = parse_level(value)
    if level is None:
        return False
    logging.getLogger(LOGGER_NAME).setLevel(level)
    return True
