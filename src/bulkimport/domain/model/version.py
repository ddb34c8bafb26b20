"""One version of an import item, built up from its content and metadata files."""

from __future__ import annotations

import logging
import re
import stat
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Final

from bulkimport.domain.errors import (
    InvalidVersionLabelError,
    MissingContentError,
    MissingMetadataError,
)
from bulkimport.domain.model.memo import Memoized

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from bulkimport.domain.model.metadata import MetadataRecord
    from bulkimport.domain.ports.metadata import MetadataLoader
    from bulkimport.domain.ports.target import ContentWriter

log = logging.getLogger(__name__)

type VersionNumber = Decimal | None

# plain decimal notation with an optional exponent and nothing else
VERSION_LABEL: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
)


def parse_version_label(
    label: str | None,
    *,
    path: Path | None = None,
    item_name: str | None = None,
) -> VersionNumber:
    """Parse a version label into an exact decimal; ``None`` means unversioned."""

    if label is None:
        return None
    if VERSION_LABEL.fullmatch(label) is None:
        raise InvalidVersionLabelError(label, path=path, item_name=item_name)
    try:
        return Decimal(label)
    except InvalidOperation as exc:
        raise InvalidVersionLabelError(label, path=path, item_name=item_name) from exc


def version_sort_key(version_number: VersionNumber) -> tuple[bool, Decimal]:
    """Ascending key; unversioned sorts after every numbered version."""

    if version_number is None:
        return (True, Decimal(0))
    return (False, version_number)


class VersionEntry:
    """A single version of an item: at most one content file and one metadata file.

    Filesystem facts about the content file are cached when the content slot is
    set, so aggregate queries never stat again. Metadata is loaded on first use
    and cached for the lifetime of the entry.
    """

    def __init__(
        self,
        version_number: VersionNumber,
        *,
        metadata_loader: MetadataLoader | None = None,
        content_file: Path | None = None,
        metadata_file: Path | None = None,
        item_name: str | None = None,
    ) -> None:
        if content_file is None and metadata_file is None:
            raise ValueError("version requires a content file or a metadata file")
        self._version_number = version_number
        self._metadata_loader = metadata_loader
        self._item_name = item_name
        self._content_file: Path | None = None
        self._metadata_file: Path | None = None
        self._is_directory: bool | None = None
        self._size_in_bytes = 0
        self._metadata: Memoized[MetadataRecord] = Memoized(self._load_metadata)
        if content_file is not None:
            self.set_content_file(content_file)
        if metadata_file is not None:
            self.set_metadata_file(metadata_file)

    @property
    def version_number(self) -> VersionNumber:
        return self._version_number

    @property
    def sort_key(self) -> tuple[bool, Decimal]:
        return version_sort_key(self._version_number)

    @property
    def content_file(self) -> Path | None:
        return self._content_file

    @property
    def metadata_file(self) -> Path | None:
        return self._metadata_file

    def set_content_file(self, content_file: Path) -> None:
        """Fill the content slot and cache the file's stat results."""

        if self._content_file is not None and self._content_file != content_file:
            log.warning(
                "Replacing content file %s with %s for %s",
                self._content_file,
                content_file,
                self,
            )
        stat_result = content_file.stat()
        self._content_file = content_file
        self._is_directory = stat.S_ISDIR(stat_result.st_mode)
        self._size_in_bytes = 0 if self._is_directory else stat_result.st_size

    def set_metadata_file(self, metadata_file: Path) -> None:
        """Fill the metadata slot; a metadata loader must be configured."""

        if self._metadata_loader is None:
            raise ValueError(
                f"metadata file {metadata_file} requires a metadata loader for {self}"
            )
        if self._metadata.is_computed:
            raise ValueError("metadata file cannot change once metadata has been loaded")
        if self._metadata_file is not None and self._metadata_file != metadata_file:
            log.warning(
                "Replacing metadata file %s with %s for %s",
                self._metadata_file,
                metadata_file,
                self,
            )
        self._metadata_file = metadata_file

    @property
    def is_directory(self) -> bool | None:
        """Cached directory flag; None until a content file is known."""
        return self._is_directory

    @property
    def size_in_bytes(self) -> int:
        return self._size_in_bytes

    @property
    def has_content(self) -> bool:
        return self._content_file is not None and not self._is_directory

    @property
    def has_metadata(self) -> bool:
        return self._metadata_file is not None

    @property
    def content_source(self) -> str | None:
        return None if self._content_file is None else str(self._content_file.absolute())

    @property
    def metadata_source(self) -> str | None:
        return None if self._metadata_file is None else str(self._metadata_file.absolute())

    def get_raw_metadata(self) -> MetadataRecord:
        if self._metadata_file is None:
            raise MissingMetadataError(self._version_number, item_name=self._item_name)
        return self._metadata.get()

    def get_metadata(self) -> Mapping[str, object]:
        return self.get_raw_metadata().properties

    def get_type(self) -> str | None:
        return self.get_raw_metadata().content_type

    def get_aspects(self) -> frozenset[str]:
        if self._metadata_file is None:
            return frozenset()
        return self._metadata.get().aspects

    def put_content(self, writer: ContentWriter) -> None:
        """Stream the content file into ``writer``.

        MIME type and encoding guesses are advisory: a failing guess is logged
        and the write carries on.
        """

        content_file = self._content_file
        if content_file is None or self._is_directory:
            raise MissingContentError(self._version_number, item_name=self._item_name)
        try:
            writer.guess_mimetype(content_file.name)
        except Exception:
            log.warning("Unable to guess mimetype of %s", content_file, exc_info=True)
        writer.put_content(content_file)
        try:
            writer.guess_encoding()
        except Exception:
            log.warning("Unable to guess encoding of %s", content_file, exc_info=True)

    def _load_metadata(self) -> MetadataRecord:
        metadata_file = self._metadata_file
        loader = self._metadata_loader
        if metadata_file is None or loader is None:
            raise MissingMetadataError(self._version_number, item_name=self._item_name)
        log.debug("Loading metadata for %s from %s", self, metadata_file)
        return loader.load_metadata(metadata_file)

    def __lt__(self, other: VersionEntry) -> bool:
        return self.sort_key < other.sort_key

    def __repr__(self) -> str:
        label = "unversioned" if self._version_number is None else str(self._version_number)
        owner = f"{self._item_name}@" if self._item_name else ""
        return f"VersionEntry({owner}{label})"
