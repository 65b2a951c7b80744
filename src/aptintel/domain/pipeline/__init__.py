"""Intel pipeline scaffolding.

Each phase operates on a ``PipelineState`` and communicates through a shared
``PipelineContext`` (alias registry, diagnostics, linker thresholds), so one
pass never leaks state into the next unless the caller passes the same objects.
"""

from __future__ import annotations

from .context import PipelineContext, PipelineState
from .orchestrator import IngestionPipeline, PipelinePhase
from .phases import (
    AliasRegistrationPhase,
    DescriptionYearPhase,
    IndexPhase,
    LinkPhase,
    MergePhase,
    StatisticsPhase,
)
from .runner import build_snapshot, default_pipeline
from .snapshot import IntelSnapshot, SnapshotPublisher

__all__ = [
    "AliasRegistrationPhase",
    "DescriptionYearPhase",
    "IndexPhase",
    "IngestionPipeline",
    "IntelSnapshot",
    "LinkPhase",
    "MergePhase",
    "PipelineContext",
    "PipelinePhase",
    "PipelineState",
    "SnapshotPublisher",
    "StatisticsPhase",
    "build_snapshot",
    "default_pipeline",
]
