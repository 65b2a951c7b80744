"""Chronological and categorical summaries of a merged entity set.

``compute_statistics`` is a pure function: call it again whenever entity data
changes (for example after a later enrichment pass lowers a first-seen year)
and replace the previous result with the new one.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

from aptintel.domain.vocabulary import country_name

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Sequence

    from aptintel.domain.model import CanonicalEntity, DocumentRecord, Link


@dataclass(frozen=True, slots=True)
class CountryCount:
    code: str
    name: str
    count: int


@dataclass(frozen=True, slots=True)
class CategoryCount:
    category: str
    count: int


@dataclass(frozen=True, slots=True)
class YearCount:
    year: int
    count: int


@dataclass(frozen=True, slots=True, kw_only=True)
class Statistics:
    total_entities: int
    entities_with_country: int
    entities_with_first_seen: int
    total_documents: int
    linked_documents: int
    total_links: int
    by_country: tuple[CountryCount, ...]
    by_category: tuple[CategoryCount, ...]
    by_year: tuple[YearCount, ...]
    documents_by_year: tuple[YearCount, ...]
    timeline: tuple[CanonicalEntity, ...]


def build_timeline(entities: Iterable[CanonicalEntity]) -> tuple[CanonicalEntity, ...]:
    """Entities with a first-seen year, oldest first (stable for equal years)."""

    dated = [entity for entity in entities if entity.first_seen is not None]
    dated.sort(key=lambda entity: entity.first_seen or 0)
    return tuple(dated)


def compute_statistics(
    entities: Iterable[CanonicalEntity],
    documents: Sequence[DocumentRecord] = (),
    links: Collection[Link] = (),
) -> Statistics:
    entity_list = list(entities)
    countries: Counter[str] = Counter()
    categories: Counter[str] = Counter()
    years: Counter[int] = Counter()

    for entity in entity_list:
        if entity.country:
            countries[entity.country] += 1
        categories.update(entity.categories)
        if entity.first_seen is not None:
            years[entity.first_seen] += 1

    document_years: Counter[int] = Counter(
        document.year for document in documents if document.year is not None
    )
    linked_ids = {link.document_id for link in links}
    timeline = build_timeline(entity_list)

    return Statistics(
        total_entities=len(entity_list),
        entities_with_country=sum(countries.values()),
        entities_with_first_seen=len(timeline),
        total_documents=len(documents),
        linked_documents=sum(
            1
            for document in documents
            if document.document_id in linked_ids or document.linked_entities
        ),
        total_links=len(links),
        # Counter.most_common keeps first-seen order for ties
        by_country=tuple(
            CountryCount(code=code, name=country_name(code), count=count)
            for code, count in countries.most_common()
        ),
        by_category=tuple(
            CategoryCount(category=category, count=count)
            for category, count in categories.most_common()
        ),
        by_year=_ascending(years),
        documents_by_year=_ascending(document_years),
        timeline=timeline,
    )


def _ascending(counts: Counter[int]) -> tuple[YearCount, ...]:
    return tuple(YearCount(year=year, count=counts[year]) for year in sorted(counts))
