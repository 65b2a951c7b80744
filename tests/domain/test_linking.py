from __future__ import annotations

from datetime import date

from aptintel.domain.diagnostics import Diagnostics
from aptintel.domain.linking import build_term_table, documents_by_entity, link_documents
from aptintel.domain.model import Link
from aptintel.domain.reconciliation import merge_records
from tests.helpers.records import apt29_records, make_document, make_record


def test_cozy_bear_report_links_apt29_once() -> None:
    entity = merge_records(apt29_records()).entities["APT29"]
    document = make_document("doc-1", "Cozy Bear targets government networks")

    links = link_documents([entity], [document])

    assert links == {Link(document_id="doc-1", entity_identifier=entity.identifier)}
    assert entity.document_count == 1
    assert document.linked_identifiers == (entity.identifier,)
    assert document.linked_entities[0].canonical_name == "APT29"
    assert document.linked_entities[0].country == "RU"


def test_name_and_alias_in_same_document_link_once() -> None:
    entity = merge_records(apt29_records()).entities["APT29"]
    document = make_document("doc-1", "APT29 aka The Dukes", filename="apt29_cozy_bear.pdf")

    links = link_documents([entity], [document])

    assert len(links) == 1
    assert entity.document_count == 1
    assert len(document.linked_entities) == 1


def test_short_terms_need_word_boundaries() -> None:
    entity = merge_records([make_record("TA505", source_id="A")]).entities["TA505"]
    near_miss = make_document("doc-1", "TA5051 campaign")
    hit = make_document("doc-2", "New TA505 campaign")

    links = link_documents([entity], [near_miss, hit])

    assert links == {Link(document_id="doc-2", entity_identifier=entity.identifier)}
    assert near_miss.linked_entities == []


def test_short_term_boundary_is_case_insensitive_on_search_text() -> None:
    entity = merge_records([make_record("FIN7", source_id="A")]).entities["FIN7"]
    document = make_document("doc-1", "", filename="fin7-carbanak.pdf")

    assert len(link_documents([entity], [document])) == 1


def test_long_terms_match_as_substrings() -> None:
    entity = merge_records([make_record("Gamaredon Group", source_id="A")]).entities[
        "Gamaredon Group"
    ]
    document = make_document("doc-1", "Leak: Gamaredon Groupware")

    assert len(link_documents([entity], [document])) == 1


def test_terms_shorter_than_minimum_are_ignored() -> None:
    entity = merge_records([make_record("XY", source_id="A")]).entities["XY"]
    document = make_document("doc-1", "XY strikes again")

    assert link_documents([entity], [document]) == set()
    assert build_term_table([entity]) == []


def test_relinking_resets_counts() -> None:
    entity = merge_records(apt29_records()).entities["APT29"]
    documents = [make_document("doc-1", "Cozy Bear"), make_document("doc-2", "APT29 update")]
    diagnostics = Diagnostics()

    link_documents([entity], documents, diagnostics=diagnostics)
    links = link_documents([entity], documents, diagnostics=diagnostics)

    assert len(links) == 2
    assert entity.document_count == 2
    assert all(len(document.linked_entities) == 1 for document in documents)
    assert diagnostics.links_created == 4


def test_shared_term_links_every_entity_that_claims_it() -> None:
    entities = list(
        merge_records(
            [
                make_record("Group One", source_id="A", aliases=["Shared Toolkit"]),
                make_record("Group Two", source_id="A", aliases=["Shared Toolkit"]),
            ]
        ).entities.values()
    )
    document = make_document("doc-1", "Shared Toolkit analysis")

    links = link_documents(entities, [document])

    assert {link.entity_identifier for link in links} == {entity.identifier for entity in entities}


def test_term_table_is_longest_first() -> None:
    entity = merge_records(apt29_records()).entities["APT29"]

    terms = [term.text for term in build_term_table([entity])]

    assert terms == sorted(terms, key=len, reverse=True)
    assert set(terms) == {"apt29", "cozy bear", "the dukes"}


def test_documents_by_entity_orders_newest_first() -> None:
    entity = merge_records(apt29_records()).entities["APT29"]
    documents = [
        make_document("old", "APT29 2015", published=date(2015, 1, 1)),
        make_document("undated", "APT29 notes"),
        make_document("new", "APT29 2024", published=date(2024, 3, 1)),
    ]
    link_documents([entity], documents)

    grouped = documents_by_entity(documents)

    assert [document.document_id for document in grouped[entity.identifier]] == [
        "new",
        "old",
        "undated",
    ]
