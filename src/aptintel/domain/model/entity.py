"""
Canonical threat-group entity: the merged, de-duplicated view of all source records
that resolved to one canonical name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import NAMESPACE_URL, uuid5

from aptintel.domain.model.enums import MergedField
from aptintel.domain.model.provenance import Provenance

if TYPE_CHECKING:
    from collections.abc import Iterable

    from aptintel.domain.model.primitives import (
        CountryCode,
        EntityIdentifier,
        SourceId,
        Year,
    )

_IDENTIFIER_NAMESPACE = uuid5(NAMESPACE_URL, "aptintel:threat-group")


def entity_identifier(canonical_name: str) -> EntityIdentifier:
    """Stable opaque id; identical canonical names get identical ids in every run."""
    return str(uuid5(_IDENTIFIER_NAMESPACE, canonical_name))


def union_into(target: list[str], values: Iterable[str]) -> int:
    """Append values not yet present (exact string match). Returns how many were added."""

    added = 0
    for value in values:
        if value not in target:
            target.append(value)
            added += 1
    return added


@dataclass(eq=False, kw_only=True)
class CanonicalEntity:
    canonical_name: str
    original_name: str
    identifier: EntityIdentifier = ""
    description: str = ""
    country: CountryCode | None = None
    aliases: list[str] = field(default_factory=list[str])
    categories: list[str] = field(default_factory=list[str])
    references: list[str] = field(default_factory=list[str])
    external_ids: list[str] = field(default_factory=list[str], repr=False)
    state_sponsor: str | None = None
    victims: list[str] = field(default_factory=list[str], repr=False)
    attribution_confidence: int | None = None
    related: list[str] = field(default_factory=list[str], repr=False)
    first_seen: Year | None = None
    last_seen: Year | None = None
    document_count: int = 0

    _provenance: Provenance = field(default_factory=Provenance, repr=False, init=False)

    def __post_init__(self) -> None:
        if not self.identifier:
            self.identifier = entity_identifier(self.canonical_name)

    @property
    def provenance(self) -> Provenance:
        return self._provenance

    @property
    def contributing_sources(self) -> tuple[SourceId, ...]:
        return tuple(self._provenance.sources)

    @property
    def state_sponsored(self) -> bool:
        return bool(self.state_sponsor)

    @property
    def first_seen_source(self) -> SourceId | None:
        return self._provenance.source_for(MergedField.FIRST_SEEN)

    @property
    def all_names(self) -> tuple[str, ...]:
        """Canonical name, original spelling and aliases, without exact duplicates."""

        names: list[str] = []
        union_into(names, (self.canonical_name, self.original_name, *self.aliases))
        return tuple(name for name in names if name)

    def source_for(self, merged_field: MergedField) -> SourceId | None:
        return self._provenance.source_for(merged_field)
