"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from aptintel.adapters.filesystem import load_documents, record_sources
from aptintel.config import get_pipeline_config
from aptintel.domain.aliases import AliasRegistry
from aptintel.domain.collection import CollectionResult, collect_source_batches
from aptintel.domain.pipeline import build_snapshot

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from aptintel.config import PipelineConfig
    from aptintel.domain.pipeline import IntelSnapshot, SnapshotPublisher
    from aptintel.domain.ports import RawRecordSource


log = getLogger(__name__)


def collect_records(
    sources: Sequence[RawRecordSource],
    *,
    config: PipelineConfig | None = None,
) -> CollectionResult:
    effective_config = config or get_pipeline_config()
    return collect_source_batches(
        sources,
        source_priority=effective_config.source_priority,
        max_workers=effective_config.max_workers,
    )


def build_intel_snapshot(
    record_paths: Sequence[Path] = (),
    document_paths: Sequence[Path] = (),
    *,
    sources: Sequence[RawRecordSource] | None = None,
    config: PipelineConfig | None = None,
    publisher: SnapshotPublisher | None = None,
) -> IntelSnapshot:
    """Collect every source, run one full pass and optionally publish the result."""

    effective_config = config or get_pipeline_config()
    effective_sources = sources if sources is not None else record_sources(record_paths)
    log.info(
        "Starting build: sources=%s, document_files=%s, priority=%s, infer_first_seen=%s",
        len(effective_sources),
        len(document_paths),
        ",".join(effective_config.source_priority),
        effective_config.infer_first_seen,
    )

    collected = collect_records(effective_sources, config=effective_config)
    documents = load_documents(document_paths)
    snapshot = build_snapshot(
        collected.records,
        documents,
        diagnostics=collected.diagnostics,
        source_priority=effective_config.source_priority,
        infer_first_seen=effective_config.infer_first_seen,
        min_term_length=effective_config.min_term_length,
        short_term_max_length=effective_config.short_term_max_length,
    )
    if publisher is not None:
        snapshot = publisher.publish(snapshot)

    diagnostics = snapshot.diagnostics
    log.info(
        "Finished build: groups=%s, records=%s, skipped=%s, links=%s, failed_sources=%s",
        len(snapshot.entities),
        diagnostics.records_received,
        diagnostics.records_skipped,
        len(snapshot.links),
        diagnostics.sources_failed,
    )
    return snapshot


def resolve_name(
    name: str,
    record_paths: Sequence[Path] = (),
    *,
    sources: Sequence[RawRecordSource] | None = None,
    config: PipelineConfig | None = None,
) -> str:
    """Canonical name for ``name`` given the static aliases plus those the sources declare."""

    effective_sources = sources if sources is not None else record_sources(record_paths)
    collected = collect_records(effective_sources, config=config)
    registry = AliasRegistry()
    registry.register_records(collected.records)
    return registry.resolve(name)
