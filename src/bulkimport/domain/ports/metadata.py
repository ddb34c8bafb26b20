"""Port for loading sidecar metadata files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from bulkimport.domain.model.metadata import MetadataRecord


@runtime_checkable
class MetadataLoader(Protocol):
    """Parses one metadata file into a ``MetadataRecord``.

    Implementations raise ``MetadataParseError`` for unreadable or malformed files.
    """

    def load_metadata(self, path: Path) -> MetadataRecord: ...


__all__ = ["MetadataLoader"]
