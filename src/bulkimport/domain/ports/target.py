"""Ports for the target content repository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from decimal import Decimal
    from pathlib import Path

    from bulkimport.domain.model.metadata import MetadataRecord


@runtime_checkable
class PathResolver[TNode](Protocol):
    """Resolves a path of names below a root node."""

    def resolve_path(
        self,
        root: TNode,
        path_elements: Sequence[str],
        *,
        create_missing: bool = False,
    ) -> TNode | None:
        """Return the node at ``path_elements`` below ``root``, or None if absent."""
        ...


@runtime_checkable
class ContentWriter(Protocol):
    """Write sink for the content of one version.

    The guess operations are advisory; callers tolerate their failure.
    """

    def guess_mimetype(self, filename: str) -> None: ...

    def put_content(self, source: Path) -> None: ...

    def guess_encoding(self) -> None: ...


@runtime_checkable
class TargetRepository[TNode](PathResolver[TNode], Protocol):
    """Node store the replay stage writes items and their versions into."""

    def root(self) -> TNode: ...

    def get_child(self, parent: TNode, name: str) -> TNode | None: ...

    def create_node(
        self,
        parent: TNode,
        name: str,
        *,
        is_folder: bool,
        content_type: str | None = None,
        namespace: str | None = None,
        parent_association_type: str | None = None,
    ) -> TNode: ...

    def new_version(
        self,
        node: TNode,
        *,
        version_number: Decimal | None,
        metadata: MetadataRecord | None = None,
    ) -> ContentWriter: ...


__all__ = ["ContentWriter", "PathResolver", "TargetRepository"]
