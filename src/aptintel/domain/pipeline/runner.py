"""Entry points for running the default intel pipeline."""

from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from aptintel.domain.linking import DEFAULT_MIN_TERM_LENGTH, DEFAULT_SHORT_TERM_MAX_LENGTH

from .context import PipelineContext, PipelineState
from .orchestrator import IngestionPipeline
from .phases import (
    AliasRegistrationPhase,
    DescriptionYearPhase,
    IndexPhase,
    LinkPhase,
    MergePhase,
    StatisticsPhase,
)
from .snapshot import IntelSnapshot

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from aptintel.domain.aliases import AliasRegistry
    from aptintel.domain.diagnostics import Diagnostics
    from aptintel.domain.model import DocumentRecord, RawEntityRecord, SourceId


def default_pipeline(*, infer_first_seen: bool = False) -> IngestionPipeline:
    """Alias registration, merge, index, link and statistics; description years on request."""

    pipeline = IngestionPipeline(phases=(AliasRegistrationPhase(), MergePhase()))
    if infer_first_seen:
        pipeline = pipeline.with_phase(DescriptionYearPhase())
    return pipeline.extend((IndexPhase(), LinkPhase(), StatisticsPhase()))


def build_snapshot(
    records: Iterable[RawEntityRecord],
    documents: Iterable[DocumentRecord] = (),
    *,
    registry: AliasRegistry | None = None,
    diagnostics: Diagnostics | None = None,
    source_priority: Sequence[SourceId] | None = None,
    infer_first_seen: bool = False,
    min_term_length: int = DEFAULT_MIN_TERM_LENGTH,
    short_term_max_length: int = DEFAULT_SHORT_TERM_MAX_LENGTH,
    current_year: int | None = None,
    pipeline: IngestionPipeline | None = None,
) -> IntelSnapshot:
    """Run one full pass and freeze its output into an ``IntelSnapshot``.

    ``registry`` and ``diagnostics`` default to fresh instances and documents
    are copied before linking, so repeated calls are independent.
    """

    context = PipelineContext(
        source_priority=tuple(source_priority) if source_priority is not None else None,
        min_term_length=min_term_length,
        short_term_max_length=short_term_max_length,
        current_year=current_year,
    )
    if registry is not None:
        context.registry = registry
    if diagnostics is not None:
        context.diagnostics = diagnostics

    state = PipelineState(
        records=list(records),
        documents=[replace(document, linked_entities=[]) for document in documents],
    )
    active = pipeline or default_pipeline(infer_first_seen=infer_first_seen)
    active.run(state, context=context)

    if state.index is None or state.statistics is None:
        msg = f"Pipeline {active.phase_names} did not produce an index and statistics"
        raise ValueError(msg)

    return IntelSnapshot(
        entities=MappingProxyType(state.entities),
        index=state.index,
        documents=tuple(state.documents),
        links=frozenset(state.links),
        statistics=state.statistics,
        diagnostics=context.diagnostics,
        aliases=MappingProxyType(dict(context.registry.edges())),
    )
