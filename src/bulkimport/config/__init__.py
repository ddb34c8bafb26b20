"""Bulk import settings: env file loading, logging and database location."""

from __future__ import annotations

from .env import load_env_file, optional_env_var
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .logging import configure_logging, resolve_log_level
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_storage_config",
    "load_env_file",
    "optional_env_var",
    "resolve_log_level",
]
