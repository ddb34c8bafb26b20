"""Domain port definitions for adapters."""

from __future__ import annotations

from .control import ImportJobControl
from .metadata import MetadataLoader
from .target import ContentWriter, PathResolver, TargetRepository
from .unit_of_work import (
    ImportRepositories,
    ImportUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ContentWriter",
    "ImportJobControl",
    "ImportRepositories",
    "ImportUnitOfWork",
    "MetadataLoader",
    "PathResolver",
    "RepositoryCollection",
    "TargetRepository",
    "UnitOfWork",
]
