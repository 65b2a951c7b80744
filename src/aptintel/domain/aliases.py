"""Alias registry: maps alternate group names onto canonical names.

Two tables are consulted in order. The static table is hand curated and always
wins; the dynamic table is filled from ingested records, where the last
registration of an alias decides its target.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from aptintel.domain.canonicalization import canonicalize

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from aptintel.domain.model import RawEntityRecord

log = logging.getLogger(__name__)


def _curated(*groups: tuple[str, tuple[str, ...]]) -> Mapping[str, str]:
    table: dict[str, str] = {}
    for canonical, aliases in groups:
        for alias in aliases:
            # later groups win for aliases listed twice
            table[alias] = canonical
    return MappingProxyType(table)


STATIC_ALIASES: Final[Mapping[str, str]] = _curated(
    ("APT1", ("comment crew", "comment panda", "pla unit 61398", "byzantine candor")),
    (
        "APT28",
        ("fancy bear", "sofacy", "pawn storm", "sednit", "strontium", "forest blizzard"),
    ),
    ("APT29", ("cozy bear", "the dukes", "nobelium", "midnight blizzard", "yttrium")),
    ("APT32", ("oceanlotus", "ocean lotus", "cobalt kitty", "canvas cyclone")),
    ("APT33", ("elfin", "magnallium", "refined kitten", "peach sandstorm")),
    ("APT34", ("oilrig", "oil rig", "helix kitten", "crambus", "hazel sandstorm")),
    (
        "APT35",
        ("charming kitten", "phosphorus", "magic hound", "mint sandstorm", "newscaster"),
    ),
    ("APT37", ("reaper", "scarcruft", "ricochet chollima", "group123")),
    ("APT38", ("lazarus group", "lazarus", "hidden cobra", "zinc", "labyrinth chollima")),
    ("APT40", ("leviathan", "temp.periscope", "bronze mohawk", "gingham typhoon")),
    ("APT41", ("winnti", "wicked panda", "barium", "brass typhoon", "double dragon")),
    # overlaps with APT35; reporting attributes the alias to APT42 as well
    ("APT42", ("charming kitten",)),
    ("APT44", ("sandworm", "voodoo bear", "iridium", "seashell blizzard")),
    ("Turla", ("turla", "snake", "venomous bear", "uroburos", "secret blizzard")),
)


@dataclass(slots=True)
class AliasRegistryStats:
    names_registered: int = 0
    aliases_resolved: int = 0
    collisions: int = 0


@dataclass(slots=True)
class AliasRegistry:
    """Static + dynamic alias tables. Create one per ingestion pass or call ``reset``."""

    static_aliases: Mapping[str, str] = field(default_factory=lambda: STATIC_ALIASES)
    _dynamic: dict[str, str] = field(default_factory=dict[str, str], repr=False)
    _known_aliases: dict[str, list[str]] = field(default_factory=dict[str, list[str]], repr=False)
    stats: AliasRegistryStats = field(default_factory=AliasRegistryStats)

    def register_alias(self, canonical_name: str, aliases: str | Iterable[str] | None) -> None:
        canonical = canonicalize(canonical_name)
        if not canonical:
            return
        alias_list = [aliases] if isinstance(aliases, str) else list(aliases or ())
        known = self._known_aliases.setdefault(canonical, [])
        self.stats.names_registered += 1

        for alias in alias_list:
            if not alias or not isinstance(alias, str):
                continue
            key = canonicalize(alias).lower()
            if not key:
                continue
            previous = self._dynamic.get(key)
            if previous is not None and previous != canonical:
                self.stats.collisions += 1
                log.warning(
                    "Alias collision: %r re-pointed from %s to %s", alias, previous, canonical
                )
            self._dynamic[key] = canonical
            if alias not in known:
                known.append(alias)

    def register_records(self, records: Iterable[RawEntityRecord]) -> int:
        """Register every well-formed record's aliases under its name."""

        registered = 0
        for record in records:
            if record.is_malformed:
                continue
            self.register_alias(record.name or "", record.aliases)
            registered += 1
        log.info(
            "Alias map built: %s aliases for %s groups",
            len(self._dynamic),
            len(self._known_aliases),
        )
        return registered

    def resolve(self, name: str | None) -> str:
        canonical = canonicalize(name)
        if not canonical:
            return ""
        key = canonical.lower()
        target = self.static_aliases.get(key)
        if target is None:
            target = self._dynamic.get(key)
        if target is None:
            return canonical
        self.stats.aliases_resolved += 1
        return target

    def is_same_entity(self, name_a: str | None, name_b: str | None) -> bool:
        return self.resolve(name_a).lower() == self.resolve(name_b).lower()

    def aliases_for(self, canonical_name: str) -> tuple[str, ...]:
        return tuple(self._known_aliases.get(canonicalize(canonical_name), ()))

    def edges(self) -> tuple[tuple[str, str], ...]:
        """Effective (alias, canonical) pairs; static entries shadow dynamic ones."""

        merged = dict(self._dynamic)
        merged.update(self.static_aliases)
        return tuple(merged.items())

    @property
    def dynamic_size(self) -> int:
        return len(self._dynamic)

    @property
    def canonical_count(self) -> int:
        return len(self._known_aliases)

    def reset(self) -> None:
        self._dynamic.clear()
        self._known_aliases.clear()
        self.stats = AliasRegistryStats()
