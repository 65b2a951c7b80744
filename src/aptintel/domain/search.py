"""Plain substring search over merged entities and linked documents."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from aptintel.domain.canonicalization import to_searchable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from aptintel.domain.model import CanonicalEntity, DocumentRecord

MIN_QUERY_LENGTH: Final = 2

_TOKEN_SEPARATORS = re.compile(r"[^a-z0-9\s-]")


def tokenize(text: str | None) -> list[str]:
    """Lower-cased word tokens longer than one character."""

    if not text:
        return []
    return [
        token
        for token in _TOKEN_SEPARATORS.sub(" ", text.lower()).split()
        if len(token) > 1
    ]


def search_entities(
    entities: Iterable[CanonicalEntity],
    query: str,
) -> list[CanonicalEntity]:
    """Entities whose names, aliases or description words contain ``query``.

    A query shorter than two characters matches everything. Names are compared
    both lower-cased and in searchable form, so "apt 29" finds "APT29".
    """

    candidates = list(entities)
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return candidates

    lowered = query.lower()
    searchable = to_searchable(query)
    tokens = tokenize(query)
    return [
        entity
        for entity in candidates
        if _names_match(entity, lowered, searchable) or _tokens_match(entity, tokens)
    ]


def search_documents(
    documents: Iterable[DocumentRecord],
    query: str,
) -> list[DocumentRecord]:
    candidates = list(documents)
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return candidates
    lowered = query.lower()
    return [
        document
        for document in candidates
        if lowered in f"{document.title} {document.filename} {document.source}".lower()
    ]


def _names_match(entity: CanonicalEntity, lowered: str, searchable: str) -> bool:
    for name in entity.all_names:
        if lowered in name.lower():
            return True
        if searchable and searchable in to_searchable(name):
            return True
    return False


def _tokens_match(entity: CanonicalEntity, tokens: list[str]) -> bool:
    if not tokens:
        return False
    entity_tokens = tokenize(" ".join([*entity.all_names, entity.description]))
    return all(any(token in candidate for candidate in entity_tokens) for token in tokens)
