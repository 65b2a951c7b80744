"""The phases of one intel pass, in the order they run.

alias registration -> merge -> (description years) -> index -> link -> statistics
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from aptintel.domain.dates import extract_year_from_description
from aptintel.domain.indexing import build_index
from aptintel.domain.linking import link_documents
from aptintel.domain.model import DESCRIPTION_SOURCE, MergedField
from aptintel.domain.reconciliation import MergeEngine
from aptintel.domain.statistics import compute_statistics

if TYPE_CHECKING:
    from aptintel.domain.pipeline.context import PipelineContext, PipelineState


log = getLogger(__name__)


@dataclass(slots=True)
class AliasRegistrationPhase:
    """Register every record's aliases before any merge key is computed.

    Running this over the complete record set first makes a record's merge key
    independent of whether the record declaring its alias came earlier.
    """

    name: str = "alias-registration"

    def run(self, state: PipelineState, *, context: PipelineContext) -> None:
        registry = context.registry
        collisions_before = registry.stats.collisions
        registered = registry.register_records(state.records)
        context.diagnostics.alias_collisions += registry.stats.collisions - collisions_before
        log.info("Registered aliases for %s records (%s edges)", registered, registry.dynamic_size)


@dataclass(slots=True)
class MergePhase:
    name: str = "merge"

    def run(self, state: PipelineState, *, context: PipelineContext) -> None:
        engine = MergeEngine(registry=context.registry)
        result = engine.merge(
            state.records,
            source_priority=context.source_priority,
            diagnostics=context.diagnostics,
        )
        state.entities = result.entities


@dataclass(slots=True)
class DescriptionYearPhase:
    """Fill a missing first-seen year from phrases like "active since 2012"."""

    name: str = "description-years"

    def run(self, state: PipelineState, *, context: PipelineContext) -> None:
        inferred = 0
        for entity in state.entities.values():
            if entity.first_seen is not None:
                continue
            year = extract_year_from_description(
                entity.description, current_year=context.current_year
            )
            if year is None:
                continue
            entity.first_seen = year
            entity.provenance.record_field(MergedField.FIRST_SEEN, DESCRIPTION_SOURCE)
            inferred += 1
        context.diagnostics.first_seen_inferred += inferred
        log.info("Inferred first-seen year from description for %s groups", inferred)


@dataclass(slots=True)
class IndexPhase:
    name: str = "index"

    def run(self, state: PipelineState, *, context: PipelineContext) -> None:
        state.index = build_index(state.entities.values(), diagnostics=context.diagnostics)


@dataclass(slots=True)
class LinkPhase:
    name: str = "link"

    def run(self, state: PipelineState, *, context: PipelineContext) -> None:
        state.links = link_documents(
            state.entities.values(),
            state.documents,
            min_term_length=context.min_term_length,
            short_term_max_length=context.short_term_max_length,
            diagnostics=context.diagnostics,
        )


@dataclass(slots=True)
class StatisticsPhase:
    name: str = "statistics"

    def run(self, state: PipelineState, *, context: PipelineContext) -> None:  # noqa: ARG002
        state.statistics = compute_statistics(
            state.entities.values(), state.documents, state.links
        )
