"""Semantic metadata loaded from a sidecar metadata file."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

type PropertyName = str
type PropertyValue = object


def _freeze_properties(properties: Mapping[str, object]) -> Mapping[str, object]:
    return MappingProxyType(dict(properties))


@dataclass(frozen=True, slots=True)
class MetadataRecord:
    """Immutable bag of properties describing one version of an item."""

    content_type: str | None = None
    aspects: frozenset[str] = field(default_factory=frozenset[str])
    properties: Mapping[PropertyName, PropertyValue] = field(
        default_factory=lambda: MappingProxyType({})
    )
    parent_association_type: str | None = None
    namespace: str | None = None

    def __post_init__(self) -> None:
        # frozen: bypass __setattr__ to normalise the collections once
        object.__setattr__(self, "aspects", frozenset(self.aspects))
        object.__setattr__(self, "properties", _freeze_properties(self.properties))

    @classmethod
    def build(
        cls,
        *,
        content_type: str | None = None,
        aspects: Iterable[str] = (),
        properties: Mapping[str, object] | None = None,
        parent_association_type: str | None = None,
        namespace: str | None = None,
    ) -> MetadataRecord:
        return cls(
            content_type=content_type,
            aspects=frozenset(aspects),
            properties=properties or {},
            parent_association_type=parent_association_type,
            namespace=namespace,
        )

    @property
    def size(self) -> int:
        """Number of key/value properties carried by the record."""
        return len(self.properties)
