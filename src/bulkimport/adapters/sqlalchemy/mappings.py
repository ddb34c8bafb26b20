"""SQLAlchemy mapping metadata for the target content repository."""

from __future__ import annotations

import json
import logging
import uuid
from functools import cache
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    Boolean,
    Column,
    Dialect,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from .records import NodeVersion, RepositoryNode

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class JsonText(TypeDecorator[Any]):
    """JSON document stored as text; values that JSON cannot encode become strings."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(value, default=str, sort_keys=True)

    def process_result_value(self, value: str | None, dialect: Dialect) -> Any:
        _ = dialect
        if value is None:
            return None
        return json.loads(value)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

node_table = Table(
    "node",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "parent_id",
        UUIDColumnType,
        ForeignKey("node.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    ),
    Column("name", String, nullable=False),
    Column("is_folder", Boolean, nullable=False),
    Column("content_type", String, nullable=True),
    Column("namespace", String, nullable=True),
    Column("parent_association_type", String, nullable=True),
    UniqueConstraint("parent_id", "name"),
)

node_version_table = Table(
    "node_version",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "node_id",
        UUIDColumnType,
        ForeignKey("node.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("ordinal", Integer, nullable=False),
    Column("version_label", String, nullable=True),
    Column("content", LargeBinary, nullable=True),
    Column("size_in_bytes", Integer, nullable=False, default=0),
    Column("mimetype", String, nullable=True),
    Column("encoding", String, nullable=True),
    Column("content_type", String, nullable=True),
    Column("aspects", JsonText, nullable=False),
    Column("properties", JsonText, nullable=False),
    UniqueConstraint("node_id", "ordinal"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the repository records."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(RepositoryNode, node_table)
    mapper_registry.map_imperatively(NodeVersion, node_version_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
