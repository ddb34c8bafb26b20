"""Public domain model surface."""

from __future__ import annotations

from bulkimport.domain.model.item import (
    ImportFile,
    ImportItem,
    VersionSetBuilder,
    split_path_elements,
)
from bulkimport.domain.model.memo import Memoized
from bulkimport.domain.model.metadata import MetadataRecord
from bulkimport.domain.model.version import (
    VersionEntry,
    VersionNumber,
    parse_version_label,
    version_sort_key,
)

__all__ = [  # noqa: RUF022
    # items
    "ImportFile",
    "ImportItem",
    "VersionSetBuilder",
    "split_path_elements",
    # versions
    "VersionEntry",
    "VersionNumber",
    "parse_version_label",
    "version_sort_key",
    # metadata
    "MetadataRecord",
    # helpers
    "Memoized",
]
