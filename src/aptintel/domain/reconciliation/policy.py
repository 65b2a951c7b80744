"""Field-specific conflict rules applied when a record merges into an existing entity.

Each rule is deterministic given the order records arrive in. The year and
set-union rules (and the highest attribution confidence) are order
independent; ``country`` and ``state_sponsor`` keep the first non-empty
value and ``description`` keeps the first of several equally long texts, so
those three depend on source order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Protocol

from aptintel.domain.model import MergedField, union_into

if TYPE_CHECKING:
    from aptintel.domain.diagnostics import Diagnostics
    from aptintel.domain.model import CanonicalEntity, RawEntityRecord


@dataclass(frozen=True, slots=True)
class ObservedYears:
    """A record's first/last seen values, already reduced to years."""

    first_seen: int | None = None
    last_seen: int | None = None


class FieldRule(Protocol):
    """Fold one aspect of ``record`` into ``entity``; return True if the entity changed."""

    def __call__(
        self,
        entity: CanonicalEntity,
        record: RawEntityRecord,
        years: ObservedYears,
        *,
        diagnostics: Diagnostics,
    ) -> bool: ...


def earliest_first_seen(
    entity: CanonicalEntity,
    record: RawEntityRecord,
    years: ObservedYears,
    *,
    diagnostics: Diagnostics,
) -> bool:
    if years.first_seen is None:
        return False
    if entity.first_seen is not None and years.first_seen >= entity.first_seen:
        return False
    entity.first_seen = years.first_seen
    entity.provenance.record_field(MergedField.FIRST_SEEN, record.source_id)
    diagnostics.earliest_dates_used += 1
    return True


def latest_last_seen(
    entity: CanonicalEntity,
    record: RawEntityRecord,
    years: ObservedYears,
    *,
    diagnostics: Diagnostics,  # noqa: ARG001
) -> bool:
    if years.last_seen is None:
        return False
    if entity.last_seen is not None and years.last_seen <= entity.last_seen:
        return False
    entity.last_seen = years.last_seen
    entity.provenance.record_field(MergedField.LAST_SEEN, record.source_id)
    return True


def longest_description(
    entity: CanonicalEntity,
    record: RawEntityRecord,
    years: ObservedYears,  # noqa: ARG001
    *,
    diagnostics: Diagnostics,  # noqa: ARG001
) -> bool:
    description = record.description or ""
    if len(description) <= len(entity.description):
        return False
    entity.description = description
    entity.provenance.record_field(MergedField.DESCRIPTION, record.source_id)
    return True


def first_country(
    entity: CanonicalEntity,
    record: RawEntityRecord,
    years: ObservedYears,  # noqa: ARG001
    *,
    diagnostics: Diagnostics,  # noqa: ARG001
) -> bool:
    if entity.country or not record.country:
        return False
    entity.country = record.country
    entity.provenance.record_field(MergedField.COUNTRY, record.source_id)
    return True


def first_state_sponsor(
    entity: CanonicalEntity,
    record: RawEntityRecord,
    years: ObservedYears,  # noqa: ARG001
    *,
    diagnostics: Diagnostics,  # noqa: ARG001
) -> bool:
    if entity.state_sponsor or not record.state_sponsor:
        return False
    entity.state_sponsor = record.state_sponsor
    entity.provenance.record_field(MergedField.STATE_SPONSOR, record.source_id)
    return True


def highest_attribution_confidence(
    entity: CanonicalEntity,
    record: RawEntityRecord,
    years: ObservedYears,  # noqa: ARG001
    *,
    diagnostics: Diagnostics,  # noqa: ARG001
) -> bool:
    confidence = record.attribution_confidence
    if confidence is None:
        return False
    if entity.attribution_confidence is not None and confidence <= entity.attribution_confidence:
        return False
    entity.attribution_confidence = confidence
    entity.provenance.record_field(MergedField.ATTRIBUTION_CONFIDENCE, record.source_id)
    return True


def union_collections(
    entity: CanonicalEntity,
    record: RawEntityRecord,
    years: ObservedYears,  # noqa: ARG001
    *,
    diagnostics: Diagnostics,  # noqa: ARG001
) -> bool:
    # exact-string dedup: "Cozy Bear" and "cozy bear" are kept as two aliases
    added = union_into(entity.aliases, record.aliases)
    added += union_into(entity.categories, record.categories)
    added += union_into(entity.references, record.references)
    added += union_into(entity.victims, record.victims)
    added += union_into(entity.related, record.related)
    if record.external_id:
        added += union_into(entity.external_ids, (record.external_id,))
    return added > 0


DEFAULT_FIELD_RULES: Final[tuple[FieldRule, ...]] = (
    earliest_first_seen,
    latest_last_seen,
    union_collections,
    longest_description,
    first_country,
    first_state_sponsor,
    highest_attribution_confidence,
)
