"""Error kinds raised while reconciling and importing items."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from decimal import Decimal
    from pathlib import Path


class BulkImportError(Exception):
    """Base class for every failure surfaced by the import core."""


class InvalidVersionLabelError(BulkImportError, ValueError):
    """Raised when a version label does not parse as a decimal number."""

    def __init__(
        self,
        label: str,
        *,
        path: Path | None = None,
        item_name: str | None = None,
    ) -> None:
        self.label = label
        self.path = path
        self.item_name = item_name
        message = f"Invalid version label {label!r}"
        if item_name is not None:
            message += f" for item {item_name!r}"
        if path is not None:
            message += f" ({path})"
        super().__init__(message)


class MissingMetadataError(BulkImportError, LookupError):
    """Raised when metadata is requested from a version without a metadata file.

    Callers are expected to check ``VersionEntry.has_metadata`` first.
    """

    def __init__(self, version_number: Decimal | None, *, item_name: str | None = None) -> None:
        self.version_number = version_number
        self.item_name = item_name
        label = "unversioned" if version_number is None else f"version {version_number}"
        target = f" of item {item_name!r}" if item_name is not None else ""
        super().__init__(f"No metadata file is associated with {label}{target}")


class MissingContentError(BulkImportError, LookupError):
    """Raised when content is written from a version that has no file content."""

    def __init__(self, version_number: Decimal | None, *, item_name: str | None = None) -> None:
        self.version_number = version_number
        self.item_name = item_name
        label = "unversioned" if version_number is None else f"version {version_number}"
        target = f" of item {item_name!r}" if item_name is not None else ""
        super().__init__(f"No content file is associated with {label}{target}")


class MetadataParseError(BulkImportError):
    """Raised by metadata loaders when a metadata file cannot be parsed."""

    def __init__(self, path: Path, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        message = f"Unable to parse metadata file {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class OutOfOrderBatchError(BulkImportError):
    """Raised when an item's parent folder does not exist yet in the target repository.

    The bulk import driver processed a child before its parent. The condition is
    not transient; the caller decides whether to abort or requeue the batch.
    """

    def __init__(self, relative_path: str) -> None:
        self.relative_path = relative_path
        super().__init__(
            f"Parent folder {relative_path!r} does not exist in the target repository "
            "(out of order batch)"
        )


__all__ = [
    "BulkImportError",
    "InvalidVersionLabelError",
    "MetadataParseError",
    "MissingContentError",
    "MissingMetadataError",
    "OutOfOrderBatchError",
]
