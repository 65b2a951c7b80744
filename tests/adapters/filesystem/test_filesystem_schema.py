from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from aptintel.adapters.filesystem import (
    DocumentPayload,
    RawEntityPayload,
    translate_document,
    translate_record,
)
from aptintel.domain.reconciliation import merge_records


def test_entity_payload_reads_camel_case_fields() -> None:
    payload = RawEntityPayload.model_validate(
        {
            "name": "APT 29",
            "originalName": "APT29",
            "firstSeen": 2008,
            "lastSeen": "2025",
            "sourceId": "mitre-attack",
            "sourcePriority": 1,
            "externalId": "G0016",
            "aliases": ["Cozy Bear", None, 7],
            "unexpected": "ignored",
        }
    )

    assert payload.original_name == "APT29"
    assert payload.first_seen == 2008
    assert payload.last_seen == "2025"
    assert payload.source_priority == 1
    assert payload.aliases == ["Cozy Bear"]


def test_entity_payload_normalizes_blanks_and_nulls() -> None:
    payload = RawEntityPayload.model_validate(
        {"name": "  ", "description": None, "country": "", "categories": "government"}
    )

    assert payload.name is None
    assert payload.description == ""
    assert payload.country is None
    assert payload.categories == ["government"]


def test_entity_payload_rejects_wrong_types() -> None:
    with pytest.raises(ValidationError):
        RawEntityPayload.model_validate({"name": "APT1", "sourcePriority": "first"})


def test_translate_record_prefers_record_source_over_file_source() -> None:
    record = translate_record(
        {"name": "APT28", "sourceId": "etda", "country": "Russia"},
        source_id="file-source",
        source_priority=3,
    )

    assert record.source_id == "etda"
    assert record.source_priority == 3
    assert record.country == "RU"


def test_translate_record_keeps_unknown_country_codes() -> None:
    record = translate_record({"name": "Group X", "country": "XX"}, source_id="file")

    assert record.country == "XX"
    assert record.source_id == "file"


def test_translate_record_fills_years_from_observed_range() -> None:
    record = translate_record(
        {"name": "APT10", "observed": "2009-Mar 2023", "lastSeen": 2024},
        source_id="google-apt",
    )

    assert record.first_seen == 2009
    assert record.last_seen == 2024


def test_boolean_years_count_as_unparseable_dates() -> None:
    record = translate_record(
        {"name": "APT1", "firstSeen": True, "lastSeen": 1}, source_id="misp-galaxy"
    )

    assert record.first_seen == "true"
    assert record.last_seen == 1

    result = merge_records([record])

    entity = result.get("APT1")
    assert entity is not None
    assert entity.first_seen is None
    assert result.diagnostics.unparseable_dates == 1


def test_translate_record_reads_attribution_fields() -> None:
    record = translate_record(
        {
            "name": "APT1",
            "stateSponsor": "China",
            "attributionConfidence": "90",
            "victims": ["United States", 3],
            "related": "APT2",
        },
        source_id="misp-galaxy",
    )

    assert record.state_sponsor == "China"
    assert record.attribution_confidence == 90
    assert record.victims == ("United States",)
    assert record.related == ("APT2",)


def test_unreadable_attribution_confidence_is_dropped() -> None:
    payload = RawEntityPayload.model_validate(
        {"name": "APT1", "attributionConfidence": "high", "stateSponsor": " "}
    )

    assert payload.attribution_confidence is None
    assert payload.state_sponsor is None


def test_translate_record_keeps_missing_name_for_the_merge_to_skip() -> None:
    record = translate_record({"aliases": ["orphan"]}, source_id="file")

    assert record.is_malformed


def test_document_payload_accepts_aptnotes_columns() -> None:
    payload = DocumentPayload.model_validate(
        {
            "Title": "Cozy Bear targets government networks",
            "Filename": "cozy_bear.pdf",
            "Source": "",
            "Date": "03/15/2017",
            "Link": "https://example.org/cozy_bear.pdf",
            "SHA-1": "abc123",
        }
    )

    assert payload.document_id == "abc123"
    assert payload.source == "Unknown"
    assert payload.title.startswith("Cozy Bear")


def test_document_payload_falls_back_to_filename_for_id() -> None:
    payload = DocumentPayload.model_validate({"filename": "report.pdf", "documentId": ""})

    assert payload.document_id == "report.pdf"


def test_document_payload_requires_some_identity() -> None:
    with pytest.raises(ValidationError):
        DocumentPayload.model_validate({"title": "No id and no filename"})


def test_translate_document_derives_date_and_year() -> None:
    dated = translate_document({"documentId": 17, "title": "T", "date": "2018-07-01"})
    year_only = translate_document({"documentId": "d2", "date": "Spring 2016"})
    explicit = translate_document({"documentId": "d3", "date": "2019-01-01", "year": "2018"})

    assert dated.document_id == "17"
    assert dated.date == date(2018, 7, 1)
    assert dated.year == 2018
    assert year_only.date is None
    assert year_only.year == 2016
    assert explicit.year == 2018
