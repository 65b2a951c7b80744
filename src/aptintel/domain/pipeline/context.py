"""Shared context structures for the intel pipeline (state + context)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from aptintel.domain.aliases import AliasRegistry
from aptintel.domain.diagnostics import Diagnostics
from aptintel.domain.linking import DEFAULT_MIN_TERM_LENGTH, DEFAULT_SHORT_TERM_MAX_LENGTH

if TYPE_CHECKING:
    from aptintel.domain.indexing import EntityIndex
    from aptintel.domain.model import (
        CanonicalEntity,
        DocumentRecord,
        Link,
        RawEntityRecord,
        SourceId,
    )
    from aptintel.domain.statistics import Statistics


@dataclass(slots=True)
class PipelineContext:
    """Mutable context shared across pipeline phases.

    The registry and diagnostics are explicit objects so that two pipeline runs
    never share state unless the caller hands them the same instances.
    """

    registry: AliasRegistry = field(default_factory=AliasRegistry)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    source_priority: tuple[SourceId, ...] | None = None
    min_term_length: int = DEFAULT_MIN_TERM_LENGTH
    short_term_max_length: int = DEFAULT_SHORT_TERM_MAX_LENGTH
    current_year: int | None = None


@dataclass(slots=True)
class PipelineState:
    """Everything one pass reads and produces.

    Phases fill the output fields in order; ``records`` and ``documents`` are
    the inputs. Documents are mutated in place by the link phase only.
    """

    records: list[RawEntityRecord] = field(default_factory=list["RawEntityRecord"])
    documents: list[DocumentRecord] = field(default_factory=list["DocumentRecord"])
    entities: dict[str, CanonicalEntity] = field(default_factory=dict[str, "CanonicalEntity"])
    index: EntityIndex | None = None
    links: set[Link] = field(default_factory=set["Link"])
    statistics: Statistics | None = None
