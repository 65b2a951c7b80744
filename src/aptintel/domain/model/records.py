"""Per-source observations of a threat group, as emitted by ingestion adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aptintel.domain.model.primitives import CountryCode, RawYear, SourceId


@dataclass(frozen=True, slots=True, kw_only=True)
class RawEntityRecord:
    """One source's view of one group. Never mutated after an adapter produced it."""

    name: str | None
    source_id: SourceId
    original_name: str | None = None
    description: str = ""
    country: CountryCode | None = None
    aliases: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    references: tuple[str, ...] = ()
    first_seen: RawYear | None = None
    last_seen: RawYear | None = None
    source_priority: int = 0
    external_id: str | None = None
    state_sponsor: str | None = None
    victims: tuple[str, ...] = ()
    attribution_confidence: int | None = None
    related: tuple[str, ...] = ()

    @property
    def is_malformed(self) -> bool:
        return not isinstance(self.name, str) or not self.name.strip()

    @property
    def display_name(self) -> str:
        return self.original_name or self.name or ""


@dataclass(frozen=True, slots=True)
class SourceBatch:
    """All records one source produced during a single ingestion pass."""

    source_id: SourceId
    records: tuple[RawEntityRecord, ...] = ()
    priority: int = 0

    def __len__(self) -> int:
        return len(self.records)
