"""Public interface for the metadata adapter."""

from __future__ import annotations

from .loader import MetadataParser, ParsedMetadataLoader
from .schema import MetadataPayload
from .translator import translate_metadata

__all__ = [
    "MetadataParser",
    "MetadataPayload",
    "ParsedMetadataLoader",
    "translate_metadata",
]
