"""Immutable pass results and the lock-guarded holder readers go through."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from aptintel.domain.canonicalization import canonicalize
from aptintel.domain.linking import documents_by_entity

if TYPE_CHECKING:
    from collections.abc import Mapping

    from aptintel.domain.diagnostics import Diagnostics
    from aptintel.domain.indexing import EntityIndex
    from aptintel.domain.model import CanonicalEntity, DocumentRecord, Link
    from aptintel.domain.statistics import Statistics


@dataclass(frozen=True, slots=True, kw_only=True)
class IntelSnapshot:
    """One complete, fully built pass. Replaced wholesale, never patched."""

    entities: Mapping[str, CanonicalEntity]
    index: EntityIndex
    documents: tuple[DocumentRecord, ...]
    links: frozenset[Link]
    statistics: Statistics
    diagnostics: Diagnostics
    aliases: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    version: int = 0

    def find(self, name: str | None) -> CanonicalEntity | None:
        """Look an entity up by canonical name, original spelling or alias.

        Names no record spelled out still resolve through the alias edges
        of the pass, so "Fancy Bear" finds APT28.
        """

        found = self.index.find_by_name(name)
        if found is not None or not name:
            return found
        canonical = canonicalize(name)
        found = self.index.find_by_name(canonical)
        if found is None:
            target = self.aliases.get(canonical.lower())
            if target is not None:
                found = self.entities.get(target)
        return found

    def documents_for(self, entity: CanonicalEntity) -> tuple[DocumentRecord, ...]:
        """Documents linked to ``entity``, most recent first."""

        return tuple(documents_by_entity(self.documents).get(entity.identifier, ()))


@dataclass(slots=True)
class SnapshotPublisher:
    """Holds the current snapshot; publishing swaps the reference under a lock."""

    _current: IntelSnapshot | None = None
    _version: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def publish(self, snapshot: IntelSnapshot) -> IntelSnapshot:
        """Install ``snapshot`` as the current one, stamped with the next version."""

        with self._lock:
            self._version += 1
            published = replace(snapshot, version=self._version)
            self._current = published
        return published

    def current(self) -> IntelSnapshot | None:
        with self._lock:
            return self._current

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

