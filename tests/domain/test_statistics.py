from __future__ import annotations

from datetime import date

from aptintel.domain.linking import link_documents
from aptintel.domain.model import CanonicalEntity
from aptintel.domain.reconciliation import merge_records
from aptintel.domain.statistics import build_timeline, compute_statistics
from tests.helpers.records import make_document, make_record


def _merged() -> list[CanonicalEntity]:
    government = ["government"]
    records = [
        make_record("APT28", source_id="A", country="RU", categories=government, first_seen=2007),
        make_record("APT29", source_id="A", country="RU", categories=government, first_seen=2008),
        make_record("APT1", source_id="A", country="CN", categories=["defense"], first_seen=2006),
        make_record("Unknown Actor", source_id="A"),
        make_record("APT40", source_id="A", country="CN", first_seen=2007),
    ]
    return list(merge_records(records).entities.values())


def test_totals_and_country_breakdown() -> None:
    entities = _merged()

    statistics = compute_statistics(entities)

    assert statistics.total_entities == 5
    assert statistics.entities_with_country == 4
    assert statistics.entities_with_first_seen == 4
    assert [(entry.code, entry.name, entry.count) for entry in statistics.by_country] == [
        ("RU", "Russia", 2),
        ("CN", "China", 2),
    ]


def test_category_and_year_breakdowns() -> None:
    statistics = compute_statistics(_merged())

    assert [(entry.category, entry.count) for entry in statistics.by_category] == [
        ("government", 2),
        ("defense", 1),
    ]
    assert [(entry.year, entry.count) for entry in statistics.by_year] == [
        (2006, 1),
        (2007, 2),
        (2008, 1),
    ]


def test_timeline_is_ascending_and_stable_for_ties() -> None:
    timeline = build_timeline(_merged())

    assert [entity.canonical_name for entity in timeline] == ["APT1", "APT28", "APT40", "APT29"]


def test_document_statistics() -> None:
    entities = _merged()
    documents = [
        make_document("d1", "APT28 phishing", published=date(2016, 10, 1)),
        make_document("d2", "APT1 exposed", year=2013),
        make_document("d3", "Unrelated report", published=date(2016, 2, 1)),
        make_document("d4", "Undated memo"),
    ]
    links = link_documents(entities, documents)

    statistics = compute_statistics(entities, documents, links)

    assert statistics.total_documents == 4
    assert statistics.linked_documents == 2
    assert statistics.total_links == 2
    assert [(entry.year, entry.count) for entry in statistics.documents_by_year] == [
        (2013, 1),
        (2016, 2),
    ]


def test_recomputing_replaces_previous_result() -> None:
    entities = _merged()
    before = compute_statistics(entities)
    unknown = next(entity for entity in entities if entity.canonical_name == "Unknown Actor")
    unknown.first_seen = 2001

    after = compute_statistics(entities)

    assert before.entities_with_first_seen == 4
    assert after.entities_with_first_seen == 5
    assert after.timeline[0] is unknown
    assert len(after.timeline) == 5
