"""Lookup structures over a merged entity set. Always rebuilt from scratch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from aptintel.domain.vocabulary import normalize_category

if TYPE_CHECKING:
    from collections.abc import Iterable

    from aptintel.domain.diagnostics import Diagnostics
    from aptintel.domain.model import CanonicalEntity, EntityIdentifier

log = logging.getLogger(__name__)


@dataclass(slots=True)
class EntityIndex:
    by_identifier: dict[EntityIdentifier, CanonicalEntity] = field(
        default_factory=dict["EntityIdentifier", "CanonicalEntity"]
    )
    by_name: dict[str, EntityIdentifier] = field(default_factory=dict[str, "EntityIdentifier"])
    by_country: dict[str, set[EntityIdentifier]] = field(
        default_factory=dict[str, set["EntityIdentifier"]]
    )
    by_category: dict[str, set[EntityIdentifier]] = field(
        default_factory=dict[str, set["EntityIdentifier"]]
    )
    name_collisions: int = 0

    def __len__(self) -> int:
        return len(self.by_identifier)

    def get(self, identifier: EntityIdentifier) -> CanonicalEntity | None:
        return self.by_identifier.get(identifier)

    def find_by_name(self, name: str | None) -> CanonicalEntity | None:
        if not name:
            return None
        identifier = self.by_name.get(name.strip().lower())
        return self.by_identifier.get(identifier) if identifier is not None else None

    def with_country(self, code: str | None) -> tuple[CanonicalEntity, ...]:
        if not code:
            return ()
        return self._entities(self.by_country.get(code.strip().upper(), ()))

    def with_category(self, category: str | None) -> tuple[CanonicalEntity, ...]:
        if not category:
            return ()
        identifiers = self.by_category.get(category)
        if identifiers is None:
            identifiers = self.by_category.get(normalize_category(category), set())
        return self._entities(identifiers)

    def _entities(self, identifiers: Iterable[EntityIdentifier]) -> tuple[CanonicalEntity, ...]:
        entities = (self.by_identifier[identifier] for identifier in identifiers)
        return tuple(sorted(entities, key=lambda entity: entity.canonical_name))


def build_index(
    entities: Iterable[CanonicalEntity],
    *,
    diagnostics: Diagnostics | None = None,
) -> EntityIndex:
    """Build all four lookups. Name collisions are last-write-wins and only logged."""

    index = EntityIndex()
    for entity in entities:
        identifier = entity.identifier
        index.by_identifier[identifier] = entity

        for name in entity.all_names:
            key = name.lower()
            previous = index.by_name.get(key)
            if previous is not None and previous != identifier:
                index.name_collisions += 1
                log.warning(
                    "Name %r claimed by %s and %s; keeping %s",
                    name,
                    index.by_identifier[previous].canonical_name,
                    entity.canonical_name,
                    entity.canonical_name,
                )
            index.by_name[key] = identifier

        if entity.country:
            index.by_country.setdefault(entity.country.upper(), set()).add(identifier)

        for category in entity.categories:
            index.by_category.setdefault(category, set()).add(identifier)

    if diagnostics is not None:
        diagnostics.name_index_collisions += index.name_collisions
    log.info(
        "Indices built: %s groups, %s names, %s countries, %s categories",
        len(index.by_identifier),
        len(index.by_name),
        len(index.by_country),
        len(index.by_category),
    )
    return index
