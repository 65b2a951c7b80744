"""Translate raw schema payloads into domain records."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from aptintel.domain.dates import extract_year, parse_observed_range, parse_report_date
from aptintel.domain.model import DocumentRecord, RawEntityRecord
from aptintel.domain.vocabulary import country_code

from .schema import DocumentPayload, RawEntityPayload

if TYPE_CHECKING:
    from aptintel.domain.model import SourceId

    from .schema import DocumentInput, RawEntityInput


log = getLogger(__name__)


def _ensure_entity_payload(raw: RawEntityInput) -> RawEntityPayload:
    if isinstance(raw, RawEntityPayload):
        return raw
    return RawEntityPayload.model_validate(raw)


def _ensure_document_payload(raw: DocumentInput) -> DocumentPayload:
    if isinstance(raw, DocumentPayload):
        return raw
    return DocumentPayload.model_validate(raw)


def translate_record(
    raw: RawEntityInput,
    *,
    source_id: SourceId,
    source_priority: int = 0,
) -> RawEntityRecord:
    """Build a ``RawEntityRecord``; per-record source id and priority win over the file."""

    payload = _ensure_entity_payload(raw)
    first_seen = payload.first_seen
    last_seen = payload.last_seen
    if payload.observed and (first_seen is None or last_seen is None):
        observed = parse_observed_range(payload.observed)
        first_seen = first_seen if first_seen is not None else observed.first_seen
        last_seen = last_seen if last_seen is not None else observed.last_seen

    return RawEntityRecord(
        name=payload.name,
        source_id=payload.source_id or source_id,
        original_name=payload.original_name,
        description=payload.description,
        country=_country(payload.country),
        aliases=tuple(payload.aliases),
        categories=tuple(payload.categories),
        references=tuple(payload.references),
        first_seen=first_seen,
        last_seen=last_seen,
        source_priority=(
            payload.source_priority if payload.source_priority is not None else source_priority
        ),
        external_id=payload.external_id,
        state_sponsor=payload.state_sponsor,
        victims=tuple(payload.victims),
        attribution_confidence=payload.attribution_confidence,
        related=tuple(payload.related),
    )


def translate_document(raw: DocumentInput) -> DocumentRecord:
    payload = _ensure_document_payload(raw)
    report_date = parse_report_date(payload.date)
    year = payload.year
    if year is None:
        year = report_date.year if report_date is not None else extract_year(payload.date)
    if payload.date and report_date is None:
        log.debug("Report %s has unparseable date %r", payload.document_id, payload.date)

    return DocumentRecord(
        document_id=payload.document_id or payload.filename,
        title=payload.title,
        filename=payload.filename,
        source=payload.source,
        date=report_date,
        year=year,
        link=payload.link,
    )


def _country(value: str | None) -> str | None:
    """ISO code for known country names; anything else passes through unchanged."""

    if value is None:
        return None
    return country_code(value) or value
