"""Associate reports with canonical entities by matching name and alias terms.

Every entity contributes its canonical name, original spelling and aliases
as terms. A document's search text (title + filename, lower-cased) is tested
against every term: short terms must match as whole words so that "TA505"
does not fire on "TA5051", longer ones may match anywhere. Each
(document, entity) pair is linked at most once.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from aptintel.domain.model import Link, LinkedEntity

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from aptintel.domain.diagnostics import Diagnostics
    from aptintel.domain.model import CanonicalEntity, DocumentRecord, EntityIdentifier

log = logging.getLogger(__name__)

DEFAULT_MIN_TERM_LENGTH: Final = 3
DEFAULT_SHORT_TERM_MAX_LENGTH: Final = 4


@dataclass(slots=True)
class Term:
    text: str
    entities: list[CanonicalEntity] = field(default_factory=list["CanonicalEntity"])
    pattern: re.Pattern[str] | None = None

    def matches(self, search_text: str) -> bool:
        if self.pattern is not None:
            return self.pattern.search(search_text) is not None
        return self.text in search_text


def build_term_table(
    entities: Iterable[CanonicalEntity],
    *,
    min_term_length: int = DEFAULT_MIN_TERM_LENGTH,
    short_term_max_length: int = DEFAULT_SHORT_TERM_MAX_LENGTH,
) -> list[Term]:
    """Distinct lower-cased terms, longest first, each with the entities sharing it."""

    terms: dict[str, Term] = {}
    for entity in entities:
        for name in entity.all_names:
            if len(name) < min_term_length:
                continue
            text = name.lower()
            term = terms.get(text)
            if term is None:
                pattern = None
                if len(text) <= short_term_max_length:
                    pattern = re.compile(rf"\b{re.escape(text)}\b", re.ASCII)
                term = terms[text] = Term(text=text, pattern=pattern)
            if entity not in term.entities:
                term.entities.append(entity)
    return sorted(terms.values(), key=lambda term: len(term.text), reverse=True)


def link_documents(
    entities: Iterable[CanonicalEntity],
    documents: Sequence[DocumentRecord],
    *,
    min_term_length: int = DEFAULT_MIN_TERM_LENGTH,
    short_term_max_length: int = DEFAULT_SHORT_TERM_MAX_LENGTH,
    diagnostics: Diagnostics | None = None,
) -> set[Link]:
    """Link ``documents`` to ``entities`` and return the de-duplicated link set.

    Resets and then updates ``document_count`` on every entity and
    ``linked_entities`` on every document.
    """

    entity_list = list(entities)
    for entity in entity_list:
        entity.document_count = 0
    for document in documents:
        document.linked_entities.clear()

    terms = build_term_table(
        entity_list,
        min_term_length=min_term_length,
        short_term_max_length=short_term_max_length,
    )
    links: set[Link] = set()

    for document in documents:
        search_text = document.search_text
        for term in terms:
            if not term.matches(search_text):
                continue
            for entity in term.entities:
                link = Link(document_id=document.document_id, entity_identifier=entity.identifier)
                if link in links:
                    continue
                links.add(link)
                entity.document_count += 1
                document.linked_entities.append(_summary(entity))

    if diagnostics is not None:
        diagnostics.links_created += len(links)
    log.info(
        "Linked %s report-group associations across %s reports using %s terms",
        len(links),
        len(documents),
        len(terms),
    )
    return links


def documents_by_entity(
    documents: Iterable[DocumentRecord],
) -> dict[EntityIdentifier, list[DocumentRecord]]:
    """Linked documents per entity, most recent first and undated last."""

    grouped: dict[EntityIdentifier, list[DocumentRecord]] = {}
    for document in documents:
        for identifier in document.linked_identifiers:
            grouped.setdefault(identifier, []).append(document)
    for linked in grouped.values():
        linked.sort(key=_recency_key)
    return grouped


def _recency_key(document: DocumentRecord) -> tuple[bool, int]:
    if document.date is None:
        return (True, 0)
    return (False, -document.date.toordinal())


def _summary(entity: CanonicalEntity) -> LinkedEntity:
    return LinkedEntity(
        identifier=entity.identifier,
        canonical_name=entity.canonical_name,
        country=entity.country,
        categories=tuple(entity.categories),
    )
