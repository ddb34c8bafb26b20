"""Rows of the target content repository as plain dataclasses."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any


def new_id() -> uuid.UUID:
    return uuid.uuid4()


@dataclass(eq=False, kw_only=True)
class RepositoryNode:
    """A folder or content node; the handle the path resolver hands out."""

    name: str
    is_folder: bool
    parent_id: uuid.UUID | None = None
    content_type: str | None = None
    namespace: str | None = None
    parent_association_type: str | None = None
    id: uuid.UUID = field(default_factory=new_id)


@dataclass(eq=False, kw_only=True)
class NodeVersion:
    """One replayed version of a node, with its content and metadata."""

    node_id: uuid.UUID
    ordinal: int
    version_label: str | None = None
    content: bytes | None = None
    size_in_bytes: int = 0
    mimetype: str | None = None
    encoding: str | None = None
    content_type: str | None = None
    aspects: list[str] = field(default_factory=list[str])
    properties: dict[str, Any] = field(default_factory=dict[str, Any])
    id: uuid.UUID = field(default_factory=new_id)
