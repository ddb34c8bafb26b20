"""Where the bulk import target repository keeps its database."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var
from .errors import InvalidConfigurationError

APP_DIR_NAME: Final[str] = "bulkimport"
DEFAULT_DB_FILENAME: Final[str] = "bulkimport.db"
DATA_DIR_ENV: Final[str] = "BULKIMPORT_DATA_DIR"
DB_FILENAME_ENV: Final[str] = "BULKIMPORT_DB_FILENAME"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Location of the SQLite target repository used when no URI is configured."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def database_path(self, *, ensure: bool = True) -> Path:
        base = self.resolve_data_dir()
        if ensure:
            base.mkdir(parents=True, exist_ok=True)
        return base / self.database_filename

    def database_uri(self, *, ensure: bool = True) -> str:
        return f"sqlite+pysqlite:///{self.database_path(ensure=ensure)}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return base_path / APP_DIR_NAME


def get_storage_config() -> StorageConfig:
    env_dir = optional_env_var(DATA_DIR_ENV)
    filename = optional_env_var(DB_FILENAME_ENV) or DEFAULT_DB_FILENAME
    if Path(filename).name != filename:
        raise InvalidConfigurationError(DB_FILENAME_ENV, filename, "must be a bare file name")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    return StorageConfig(data_dir=data_dir, database_filename=filename)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` wins; otherwise a SQLite file inside the data directory."""

    env_uri = optional_env_var(DATABASE_URI_ENV)
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    storage_config = storage or get_storage_config()
    return DatabaseConfig(uri=storage_config.database_uri())
