"""Environment access for bulk import settings."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

log = logging.getLogger(__name__)


def load_env_file(path: Path | str | None = None) -> bool:
    """Load a dotenv file into ``os.environ`` without overriding existing values.

    Without ``path`` python-dotenv locates a ``.env`` file itself. Returns
    whether any variable was set.
    """

    loaded = load_dotenv(path, override=False)
    log.debug("Loaded env file %s: %s", path or ".env", loaded)
    return loaded


def optional_env_var(name: str) -> str | None:
    """Return a stripped setting, or None when it is unset; blank values raise."""

    value = os.getenv(name)
    if value is None:
        return None
    if not value.strip():
        raise MissingConfigurationError(name)
    return value.strip()
