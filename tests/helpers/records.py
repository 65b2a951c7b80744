"""Reusable factories and fakes for record, document and source tests."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from aptintel.domain.model import DocumentRecord, RawEntityRecord, SourceBatch

if TYPE_CHECKING:
    from collections.abc import Sequence

    from aptintel.domain.model import RawYear


def make_record(
    name: str | None = "APT29",
    *,
    source_id: str = "source-a",
    aliases: Sequence[str] = (),
    categories: Sequence[str] = (),
    references: Sequence[str] = (),
    country: str | None = None,
    description: str = "",
    first_seen: RawYear | None = None,
    last_seen: RawYear | None = None,
    original_name: str | None = None,
    source_priority: int = 0,
    external_id: str | None = None,
    state_sponsor: str | None = None,
    victims: Sequence[str] = (),
    attribution_confidence: int | None = None,
    related: Sequence[str] = (),
) -> RawEntityRecord:
    return RawEntityRecord(
        name=name,
        source_id=source_id,
        original_name=original_name,
        description=description,
        country=country,
        aliases=tuple(aliases),
        categories=tuple(categories),
        references=tuple(references),
        first_seen=first_seen,
        last_seen=last_seen,
        source_priority=source_priority,
        external_id=external_id,
        state_sponsor=state_sponsor,
        victims=tuple(victims),
        attribution_confidence=attribution_confidence,
        related=tuple(related),
    )


def apt29_records() -> list[RawEntityRecord]:
    """Three catalogs describing APT29, most authoritative first."""

    return [
        make_record("APT29", source_id="A", aliases=["Cozy Bear"], country="RU"),
        make_record(
            "APT 29",
            source_id="B",
            aliases=["The Dukes"],
            first_seen=2008,
            last_seen=2025,
            source_priority=1,
        ),
        make_record("APT29", source_id="C", first_seen=2010, source_priority=2),
    ]


def make_document(
    document_id: str,
    title: str = "",
    *,
    filename: str = "",
    source: str = "Unknown",
    published: date | None = None,
    year: int | None = None,
) -> DocumentRecord:
    return DocumentRecord(
        document_id=document_id,
        title=title,
        filename=filename,
        source=source,
        date=published,
        year=year,
    )


@dataclass
class FakeRecordSource:
    """In-memory ``RawRecordSource`` that can fail or wait for a signal first."""

    source_id: str
    records: Sequence[RawEntityRecord] = ()
    priority: int = 0
    error: Exception | None = None
    wait_for: threading.Event | None = None
    calls: int = field(default=0, init=False)

    def __call__(self) -> SourceBatch:
        self.calls += 1
        if self.wait_for is not None:
            self.wait_for.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return SourceBatch(
            source_id=self.source_id, records=tuple(self.records), priority=self.priority
        )
