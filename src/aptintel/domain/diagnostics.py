"""Diagnostics gathered across one ingestion pass.

Nothing in the pipeline raises for bad input; anomalies end up here instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aptintel.domain.model import SourceId


@dataclass(slots=True)
class SourceFailure:
    source_id: SourceId
    reason: str


@dataclass(slots=True)
class Diagnostics:
    sources_processed: int = 0
    sources_failed: int = 0
    failures: list[SourceFailure] = field(default_factory=list[SourceFailure])
    empty_sources: list[SourceId] = field(default_factory=list["SourceId"])
    records_received: int = 0
    records_skipped: int = 0
    entities_created: int = 0
    records_merged: int = 0
    names_canonicalized: int = 0
    aliases_resolved: int = 0
    alias_collisions: int = 0
    name_index_collisions: int = 0
    unparseable_dates: int = 0
    earliest_dates_used: int = 0
    links_created: int = 0
    first_seen_inferred: int = 0

    def record_failure(self, source_id: SourceId, reason: str) -> None:
        self.sources_failed += 1
        self.failures.append(SourceFailure(source_id=source_id, reason=reason))

    def record_source(self, source_id: SourceId, record_count: int) -> None:
        self.sources_processed += 1
        self.records_received += record_count
        if record_count == 0:
            self.empty_sources.append(source_id)
