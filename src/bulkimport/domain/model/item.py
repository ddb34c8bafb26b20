"""Import items: one logical filesystem item and its ordered versions."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from bulkimport.domain.errors import OutOfOrderBatchError
from bulkimport.domain.model.version import VersionEntry, VersionNumber, parse_version_label

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

    from bulkimport.domain.ports.metadata import MetadataLoader
    from bulkimport.domain.ports.target import PathResolver

log = logging.getLogger(__name__)

PATH_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[\\/]+")


def split_path_elements(relative_path: str | None) -> tuple[str, ...]:
    """Split a slash or backslash delimited path, dropping empty elements."""

    if not relative_path:
        return ()
    return tuple(element for element in PATH_SEPARATORS.split(relative_path) if element)


@dataclass(frozen=True, slots=True)
class ImportFile:
    """A raw file entry produced by the directory scanner for one item."""

    path: Path
    version_label: str | None = None
    is_metadata: bool = False


class VersionSetBuilder:
    """Accumulates file entries into versions keyed by version number.

    ``upsert`` is idempotent and order independent; ``build`` finalises the set.
    """

    def __init__(self, item_name: str, *, metadata_loader: MetadataLoader | None = None) -> None:
        self.item_name = item_name
        self._metadata_loader = metadata_loader
        self._versions: dict[VersionNumber, VersionEntry] = {}

    def upsert(self, import_file: ImportFile) -> VersionEntry:
        version_number = parse_version_label(
            import_file.version_label,
            path=import_file.path,
            item_name=self.item_name,
        )
        version = self._versions.get(version_number)
        if version is None:
            version = VersionEntry(
                version_number,
                metadata_loader=self._metadata_loader,
                content_file=None if import_file.is_metadata else import_file.path,
                metadata_file=import_file.path if import_file.is_metadata else None,
                item_name=self.item_name,
            )
            self._versions[version_number] = version
            log.debug("Created %r from %s", version, import_file.path)
        elif import_file.is_metadata:
            version.set_metadata_file(import_file.path)
        else:
            version.set_content_file(import_file.path)
        return version

    def upsert_all(self, import_files: Iterable[ImportFile]) -> None:
        for import_file in import_files:
            self.upsert(import_file)

    def build(self) -> tuple[VersionEntry, ...]:
        return tuple(sorted(self._versions.values(), key=lambda version: version.sort_key))


class ImportItem:
    """A logical item to import, owning its versions in ascending version order."""

    def __init__(
        self,
        name: str,
        versions: Iterable[VersionEntry],
        *,
        target_relative_path: str | None = None,
    ) -> None:
        if not name or not name.strip():
            raise ValueError("import item name must not be empty or blank")
        ordered = tuple(sorted(versions, key=lambda version: version.sort_key))
        if not ordered:
            raise ValueError("import item requires at least one version")
        numbers = [version.version_number for version in ordered]
        if len(set(numbers)) != len(numbers):
            raise ValueError("import item versions must have unique version numbers")
        self._name = name
        self._target_relative_path = target_relative_path
        self._path_elements = split_path_elements(target_relative_path)
        self._versions = ordered

    @classmethod
    def from_files(
        cls,
        name: str,
        files: Iterable[ImportFile],
        *,
        target_relative_path: str | None = None,
        metadata_loader: MetadataLoader | None = None,
    ) -> ImportItem:
        """Fold the raw file entries of one item into an ``ImportItem``."""

        builder = VersionSetBuilder(name, metadata_loader=metadata_loader)
        builder.upsert_all(files)
        return cls(name, builder.build(), target_relative_path=target_relative_path)

    @property
    def name(self) -> str:
        return self._name

    @property
    def target_relative_path(self) -> str | None:
        return self._target_relative_path

    @property
    def path_elements(self) -> tuple[str, ...]:
        return self._path_elements

    @property
    def versions(self) -> tuple[VersionEntry, ...]:
        """Versions in ascending order, unversioned last."""
        return self._versions

    def newest_first(self) -> Iterator[VersionEntry]:
        return reversed(self._versions)

    def resolve_parent[TNode](
        self,
        target_root: TNode,
        resolver: PathResolver[TNode],
    ) -> TNode | None:
        """Return the existing parent node, or None when the caller's root applies.

        Raises ``OutOfOrderBatchError`` when the parent path does not exist yet.
        """

        log.debug("Looking up parent in target-relative location %r", self._target_relative_path)
        if not self._path_elements:
            return None
        try:
            parent = resolver.resolve_path(target_root, self._path_elements, create_missing=False)
        except FileNotFoundError as exc:
            raise OutOfOrderBatchError(self._target_relative_path or "") from exc
        if parent is None:
            raise OutOfOrderBatchError(self._target_relative_path or "")
        return parent

    def parent_association_type(self) -> str | None:
        # every hit overwrites, so the oldest version carrying a value wins
        result: str | None = None
        for version in self.newest_first():
            if not version.has_metadata:
                continue
            value = version.get_raw_metadata().parent_association_type
            if value is not None:
                result = value
        return result

    def namespace(self) -> str | None:
        for version in self.newest_first():
            if not version.has_metadata:
                continue
            value = version.get_raw_metadata().namespace
            if value is not None:
                return value
        return None

    def is_directory(self) -> bool:
        for version in self.newest_first():
            if version.is_directory is not None:
                return version.is_directory
        return False

    def size_in_bytes(self) -> int:
        return sum(version.size_in_bytes for version in self._versions if version.has_content)

    def number_of_versions(self) -> int:
        return len(self._versions)

    def number_of_metadata_properties(self) -> int:
        return sum(
            version.get_raw_metadata().size for version in self._versions if version.has_metadata
        )

    def __iter__(self) -> Iterator[VersionEntry]:
        return iter(self._versions)

    def __len__(self) -> int:
        return len(self._versions)

    def __str__(self) -> str:
        count = len(self._versions)
        return f"{self._name} ({count} version{'s' if count > 1 else ''})"

    def __repr__(self) -> str:
        return (
            f"ImportItem(name={self._name!r}, target_relative_path="
            f"{self._target_relative_path!r}, versions={len(self._versions)})"
        )
