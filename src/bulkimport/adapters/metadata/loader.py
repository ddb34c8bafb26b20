"""Metadata loader wrapping a syntax-specific parser."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from bulkimport.domain.errors import MetadataParseError

from .schema import MetadataPayload
from .translator import translate_metadata

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

    from bulkimport.domain.model.metadata import MetadataRecord

type MetadataParser = Callable[[Path], Mapping[str, object]]

log = getLogger(__name__)


class ParsedMetadataLoader:
    """Loads metadata files through ``parse`` and validates the resulting mapping.

    ``parse`` owns the on-disk syntax. Read failures, parser ``ValueError`` and
    validation errors all surface as ``MetadataParseError``.
    """

    def __init__(self, parse: MetadataParser) -> None:
        self._parse = parse

    def load_metadata(self, path: Path) -> MetadataRecord:
        try:
            document = self._parse(path)
        except OSError as exc:
            raise MetadataParseError(path, exc.strerror or str(exc)) from exc
        except ValueError as exc:
            raise MetadataParseError(path, str(exc)) from exc

        try:
            payload = MetadataPayload.model_validate(document)
        except ValidationError as exc:
            raise MetadataParseError(path, f"{exc.error_count()} validation error(s)") from exc

        record = translate_metadata(payload)
        log.debug("Loaded %d properties from %s", record.size, path)
        return record


__all__ = ["MetadataParser", "ParsedMetadataLoader"]
