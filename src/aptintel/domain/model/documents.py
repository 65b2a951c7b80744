"""Reports (documents) and their association with canonical entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

    from aptintel.domain.model.primitives import CountryCode, DocumentId, EntityIdentifier


@dataclass(frozen=True, slots=True)
class Link:
    document_id: DocumentId
    entity_identifier: EntityIdentifier


@dataclass(frozen=True, slots=True, kw_only=True)
class LinkedEntity:
    """Summary of a linked entity as carried on a document."""

    identifier: EntityIdentifier
    canonical_name: str
    country: CountryCode | None = None
    categories: tuple[str, ...] = ()


@dataclass(eq=False, kw_only=True)
class DocumentRecord:
    """A report. Only ``linked_entities`` changes, and only during linking."""

    document_id: DocumentId
    title: str = ""
    filename: str = ""
    source: str = "Unknown"
    date: date | None = None
    year: int | None = None
    link: str = ""
    linked_entities: list[LinkedEntity] = field(default_factory=list[LinkedEntity])

    def __post_init__(self) -> None:
        if self.year is None and self.date is not None:
            self.year = self.date.year

    @property
    def linked_identifiers(self) -> tuple[EntityIdentifier, ...]:
        return tuple(linked.identifier for linked in self.linked_entities)

    @property
    def search_text(self) -> str:
        return f"{self.title} {self.filename}".lower()
