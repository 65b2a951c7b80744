"""Phase-based orchestrator for the intel pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from aptintel.domain.pipeline.context import PipelineContext, PipelineState

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


class PipelinePhase(Protocol):
    """Contract implemented by each pipeline phase."""

    name: str

    def run(self, state: PipelineState, *, context: PipelineContext) -> None: ...


@dataclass(slots=True)
class IngestionPipeline:
    """Compose and execute the ordered pipeline phases.

    Phases run strictly one after another; each one sees the complete output
    of its predecessors.
    """

    phases: Sequence[PipelinePhase] = field(default_factory=tuple)

    def with_phase(self, phase: PipelinePhase) -> IngestionPipeline:
        """Return a new pipeline appending ``phase`` at the end."""

        return IngestionPipeline(phases=(*self.phases, phase))

    def extend(self, phases: Iterable[PipelinePhase]) -> IngestionPipeline:
        """Return a new pipeline with the provided ``phases`` concatenated."""

        return IngestionPipeline(phases=(*self.phases, *tuple(phases)))

    @property
    def phase_names(self) -> tuple[str, ...]:
        return tuple(phase.name for phase in self.phases)

    def run(self, state: PipelineState, *, context: PipelineContext | None = None) -> PipelineState:
        """Execute the configured phases in-order against ``state``."""

        active_context = context or PipelineContext()
        for phase in self.phases:
            phase.run(state, context=active_context)
        return state
