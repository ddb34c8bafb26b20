"""Translate validated metadata payloads into domain records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bulkimport.domain.model.metadata import MetadataRecord

if TYPE_CHECKING:
    from .schema import MetadataPayload


def translate_metadata(payload: MetadataPayload) -> MetadataRecord:
    return MetadataRecord.build(
        content_type=payload.type,
        aspects=payload.aspects,
        properties=payload.properties,
        parent_association_type=payload.parent_association,
        namespace=payload.namespace,
    )
