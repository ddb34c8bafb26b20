"""SQLAlchemy adapter package for bulkimport."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .records import NodeVersion, RepositoryNode
from .repositories import SqlAlchemyContentWriter, SqlAlchemyTargetRepository
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "NodeVersion",
    "RepositoryNode",
    "SqlAlchemyContentWriter",
    "SqlAlchemyTargetRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
