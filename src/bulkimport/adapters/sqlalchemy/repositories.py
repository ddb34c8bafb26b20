"""Target repository backed by a SQLAlchemy session."""

from __future__ import annotations

import codecs
import mimetypes
from logging import getLogger
from typing import TYPE_CHECKING, Final

from sqlalchemy import func, select

from .mappings import node_table, node_version_table
from .records import NodeVersion, RepositoryNode

if TYPE_CHECKING:
    from collections.abc import Sequence
    from decimal import Decimal
    from pathlib import Path

    from sqlalchemy.orm import Session

    from bulkimport.domain.model.metadata import MetadataRecord

log = getLogger(__name__)

ROOT_NAME: Final[str] = ""

_TEXTUAL_MIMETYPES: Final[frozenset[str]] = frozenset(
    {
        "application/json",
        "application/javascript",
        "application/xml",
        "application/x-sh",
        "image/svg+xml",
    }
)

_BOM_ENCODINGS: Final[tuple[tuple[bytes, str], ...]] = (
    (codecs.BOM_UTF8, "UTF-8"),
    (codecs.BOM_UTF32_LE, "UTF-32LE"),
    (codecs.BOM_UTF32_BE, "UTF-32BE"),
    (codecs.BOM_UTF16_LE, "UTF-16LE"),
    (codecs.BOM_UTF16_BE, "UTF-16BE"),
)


def guess_text_encoding(data: bytes) -> str:
    """Best-effort charset of ``data``: BOM first, then UTF-8, else ISO-8859-1."""

    for bom, encoding in _BOM_ENCODINGS:
        if data.startswith(bom):
            return encoding
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return "ISO-8859-1"
    return "UTF-8"


def _is_textual(mimetype: str | None) -> bool:
    if mimetype is None:
        return True
    return mimetype.startswith("text/") or mimetype in _TEXTUAL_MIMETYPES


class SqlAlchemyContentWriter:
    """Writes one ``NodeVersion`` row's content and content properties."""

    def __init__(self, session: Session, version: NodeVersion) -> None:
        self.session = session
        self.version = version

    def guess_mimetype(self, filename: str) -> None:
        mimetype, _ = mimetypes.guess_type(filename, strict=False)
        self.version.mimetype = mimetype or "application/octet-stream"

    def put_content(self, source: Path) -> None:
        data = source.read_bytes()
        self.version.content = data
        self.version.size_in_bytes = len(data)
        self.session.flush()

    def guess_encoding(self) -> None:
        data = self.version.content
        if data is None or not _is_textual(self.version.mimetype):
            return
        self.version.encoding = guess_text_encoding(data)


class SqlAlchemyTargetRepository:
    """Folder tree and version store implementing the target repository port."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def root(self) -> RepositoryNode:
        """Return the repository root folder, creating it on first use."""

        stmt = (
            select(RepositoryNode)
            .where(node_table.c.parent_id.is_(None))
            .where(node_table.c.name == ROOT_NAME)
        )
        root = self.session.execute(stmt).scalar_one_or_none()
        if root is None:
            root = RepositoryNode(name=ROOT_NAME, is_folder=True)
            self.session.add(root)
            self.session.flush()
            log.info("Created repository root %s", root.id)
        return root

    def get_child(self, parent: RepositoryNode, name: str) -> RepositoryNode | None:
        stmt = (
            select(RepositoryNode)
            .where(node_table.c.parent_id == parent.id)
            .where(node_table.c.name == name)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def children(self, parent: RepositoryNode) -> list[RepositoryNode]:
        stmt = (
            select(RepositoryNode)
            .where(node_table.c.parent_id == parent.id)
            .order_by(node_table.c.name)
        )
        return list(self.session.execute(stmt).scalars())

    def resolve_path(
        self,
        root: RepositoryNode,
        path_elements: Sequence[str],
        *,
        create_missing: bool = False,
    ) -> RepositoryNode | None:
        current = root
        for name in path_elements:
            child = self.get_child(current, name)
            if child is None:
                if not create_missing:
                    log.debug("Path element %r not found below %s", name, current.id)
                    return None
                child = self.create_node(current, name, is_folder=True)
            elif not child.is_folder:
                log.debug("Path element %r below %s is not a folder", name, current.id)
                return None
            current = child
        return current

    def create_node(
        self,
        parent: RepositoryNode,
        name: str,
        *,
        is_folder: bool,
        content_type: str | None = None,
        namespace: str | None = None,
        parent_association_type: str | None = None,
    ) -> RepositoryNode:
        if not parent.is_folder:
            raise ValueError(f"cannot create {name!r} below non-folder node {parent.name!r}")
        node = RepositoryNode(
            name=name,
            is_folder=is_folder,
            parent_id=parent.id,
            content_type=content_type,
            namespace=namespace,
            parent_association_type=parent_association_type,
        )
        self.session.add(node)
        self.session.flush()
        return node

    def new_version(
        self,
        node: RepositoryNode,
        *,
        version_number: Decimal | None,
        metadata: MetadataRecord | None = None,
    ) -> SqlAlchemyContentWriter:
        version = NodeVersion(
            node_id=node.id,
            ordinal=self._next_ordinal(node),
            version_label=None if version_number is None else str(version_number),
            content_type=None if metadata is None else metadata.content_type,
            aspects=[] if metadata is None else sorted(metadata.aspects),
            properties={} if metadata is None else dict(metadata.properties),
        )
        self.session.add(version)
        self.session.flush()
        return SqlAlchemyContentWriter(self.session, version)

    def list_versions(self, node: RepositoryNode) -> list[NodeVersion]:
        stmt = (
            select(NodeVersion)
            .where(node_version_table.c.node_id == node.id)
            .order_by(node_version_table.c.ordinal)
        )
        return list(self.session.execute(stmt).scalars())

    def _next_ordinal(self, node: RepositoryNode) -> int:
        stmt = select(func.max(node_version_table.c.ordinal)).where(
            node_version_table.c.node_id == node.id
        )
        current = self.session.execute(stmt).scalar_one_or_none()
        return 1 if current is None else current + 1
