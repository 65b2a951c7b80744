"""Merge engine: fold per-source raw records into one canonical entity per name.

Records are processed in a single pass in the order given. Callers that want
the order-sensitive rules (country, state sponsor, equally long descriptions)
pinned to an explicit source ranking pass ``source_priority``; the records are
then stably re-ordered by that ranking before merging.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from aptintel.domain.aliases import AliasRegistry
from aptintel.domain.canonicalization import canonicalize
from aptintel.domain.dates import UnparseableDateError, YearBound, coerce_year
from aptintel.domain.diagnostics import Diagnostics
from aptintel.domain.model import CanonicalEntity, MergedField, union_into

from .policy import DEFAULT_FIELD_RULES, FieldRule, ObservedYears

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from aptintel.domain.model import RawEntityRecord, SourceId

log = logging.getLogger(__name__)


@dataclass(slots=True)
class MergeResult:
    entities: dict[str, CanonicalEntity]
    diagnostics: Diagnostics

    def __len__(self) -> int:
        return len(self.entities)

    def get(self, canonical_name: str) -> CanonicalEntity | None:
        return self.entities.get(canonical_name)


def order_by_source_priority(records: Iterable[RawEntityRecord]) -> list[RawEntityRecord]:
    """Stable sort on each record's own ``source_priority`` (lower first)."""

    return sorted(records, key=lambda record: record.source_priority)


def order_by_source_ranking(
    records: Iterable[RawEntityRecord],
    source_priority: Sequence[SourceId],
) -> list[RawEntityRecord]:
    """Stable sort by position of ``source_id`` in ``source_priority``.

    Sources missing from the ranking go last, in the order they arrived.
    """

    rank = {source_id: position for position, source_id in enumerate(source_priority)}
    unranked = len(rank)
    return sorted(records, key=lambda record: rank.get(record.source_id, unranked))


@dataclass(slots=True)
class MergeEngine:
    registry: AliasRegistry = field(default_factory=AliasRegistry)
    rules: tuple[FieldRule, ...] = DEFAULT_FIELD_RULES

    def merge(
        self,
        records: Iterable[RawEntityRecord],
        *,
        source_priority: Sequence[SourceId] | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> MergeResult:
        active = diagnostics if diagnostics is not None else Diagnostics()
        ordered = (
            order_by_source_ranking(records, source_priority)
            if source_priority is not None
            else list(records)
        )
        resolved_before = self.registry.stats.aliases_resolved
        entities: dict[str, CanonicalEntity] = {}

        for record in ordered:
            key = self._merge_key(record, active)
            if key is None:
                continue
            years = _observed_years(record, active)
            existing = entities.get(key)
            if existing is None:
                entities[key] = _new_entity(key, record, years)
                active.entities_created += 1
                continue
            for rule in self.rules:
                rule(existing, record, years, diagnostics=active)
            existing.provenance.add_source(record.source_id)
            active.records_merged += 1

        active.aliases_resolved += self.registry.stats.aliases_resolved - resolved_before
        log.info(
            "Merged %s records into %s groups (%s skipped)",
            len(ordered),
            len(entities),
            active.records_skipped,
        )
        return MergeResult(entities=entities, diagnostics=active)

    def _merge_key(self, record: RawEntityRecord, diagnostics: Diagnostics) -> str | None:
        if record.is_malformed:
            diagnostics.records_skipped += 1
            log.debug("Skipping record without name from %s", record.source_id)
            return None
        raw_name = (record.name or "").strip()
        canonical = canonicalize(raw_name)
        if canonical != raw_name:
            diagnostics.names_canonicalized += 1
        return self.registry.resolve(canonical)


def merge_records(
    records: Iterable[RawEntityRecord],
    *,
    registry: AliasRegistry | None = None,
    source_priority: Sequence[SourceId] | None = None,
    diagnostics: Diagnostics | None = None,
) -> MergeResult:
    """Merge ``records`` using ``registry`` (a fresh one with only static aliases if omitted)."""

    engine = MergeEngine(registry=registry or AliasRegistry())
    return engine.merge(records, source_priority=source_priority, diagnostics=diagnostics)


def _observed_years(record: RawEntityRecord, diagnostics: Diagnostics) -> ObservedYears:
    return ObservedYears(
        first_seen=_year(record, record.first_seen, YearBound.EARLIEST, diagnostics),
        last_seen=_year(record, record.last_seen, YearBound.LATEST, diagnostics),
    )


def _year(
    record: RawEntityRecord,
    value: object,
    bound: YearBound,
    diagnostics: Diagnostics,
) -> int | None:
    try:
        return coerce_year(value, bound=bound)
    except UnparseableDateError:
        diagnostics.unparseable_dates += 1
        log.debug(
            "Ignoring unparseable date %r on %s from %s",
            value,
            record.display_name,
            record.source_id,
        )
        return None


def _new_entity(key: str, record: RawEntityRecord, years: ObservedYears) -> CanonicalEntity:
    entity = CanonicalEntity(
        canonical_name=key,
        original_name=record.original_name or (record.name or "").strip(),
        description=record.description or "",
        country=record.country or None,
        first_seen=years.first_seen,
        last_seen=years.last_seen,
        state_sponsor=record.state_sponsor or None,
        attribution_confidence=record.attribution_confidence,
    )
    union_into(entity.aliases, record.aliases)
    union_into(entity.categories, record.categories)
    union_into(entity.references, record.references)
    union_into(entity.victims, record.victims)
    union_into(entity.related, record.related)
    if record.external_id:
        entity.external_ids.append(record.external_id)

    provenance = entity.provenance
    provenance.add_source(record.source_id)
    provenance.record_field(MergedField.ORIGINAL_NAME, record.source_id)
    if entity.description:
        provenance.record_field(MergedField.DESCRIPTION, record.source_id)
    if entity.country:
        provenance.record_field(MergedField.COUNTRY, record.source_id)
    if entity.first_seen is not None:
        provenance.record_field(MergedField.FIRST_SEEN, record.source_id)
    if entity.last_seen is not None:
        provenance.record_field(MergedField.LAST_SEEN, record.source_id)
    if entity.state_sponsor:
        provenance.record_field(MergedField.STATE_SPONSOR, record.source_id)
    if entity.attribution_confidence is not None:
        provenance.record_field(MergedField.ATTRIBUTION_CONFIDENCE, record.source_id)
    return entity
