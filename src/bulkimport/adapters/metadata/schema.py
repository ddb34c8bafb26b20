"""Pydantic model validating parsed metadata documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class MetadataBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class MetadataPayload(MetadataBaseModel):
    """Syntax-independent shape of one metadata file once parsed into a mapping."""

    type: str | None = None
    aspects: tuple[str, ...] = ()
    properties: dict[str, Any] = Field(default_factory=dict[str, Any])
    parent_association: str | None = Field(default=None, alias="parentAssociation")
    namespace: str | None = None

    _normalize_type = field_validator("type", mode="before")(_blank_to_none)
    _normalize_parent_association = field_validator("parent_association", mode="before")(
        _blank_to_none
    )
    _normalize_namespace = field_validator("namespace", mode="before")(_blank_to_none)

    @field_validator("aspects", mode="before")
    @classmethod
    def _split_aspects(cls, value: object) -> object:
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value

    @field_validator("properties", mode="before")
    @classmethod
    def _require_mapping(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return dict(cast(Mapping[str, Any], value))
        return value


__all__ = ["MetadataPayload"]
