"""Logging setup for bulk import entry points."""

from __future__ import annotations

import logging
from typing import Final

from .env import optional_env_var
from .errors import InvalidConfigurationError

LOG_LEVEL_ENV: Final[str] = "BULKIMPORT_LOG_LEVEL"
# metadata loads run on worker threads
LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(threadName)s] [%(name)s] %(message)s"


def resolve_log_level(level: int | None = None) -> int:
    """Return ``level`` or the level named by ``BULKIMPORT_LOG_LEVEL`` (default INFO)."""

    if level is not None:
        return level
    name = optional_env_var(LOG_LEVEL_ENV)
    if name is None:
        return logging.INFO
    resolved = logging.getLevelNamesMapping().get(name.upper())
    if resolved is None:
        raise InvalidConfigurationError(LOG_LEVEL_ENV, name, "not a logging level name")
    return resolved


def configure_logging(*, level: int | None = None, force: bool = False) -> int:
    """Initialise the root logger for an import run and return the level used.

    SQLAlchemy's engine logger is held at WARNING unless DEBUG is requested.
    """

    effective = resolve_log_level(level)
    logging.basicConfig(level=effective, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    engine_level = logging.DEBUG if effective <= logging.DEBUG else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(engine_level)
    return effective
