from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aptintel.domain.model.enums import MergedField
    from aptintel.domain.model.primitives import SourceId


@dataclass(eq=False, kw_only=True)
class Provenance:
    """Which sources contributed to a merged entity, and which one supplied each field."""

    # insertion ordered so output stays deterministic across runs
    sources: list[SourceId] = field(default_factory=list["SourceId"])
    field_sources: dict[MergedField, SourceId] = field(
        default_factory=dict["MergedField", "SourceId"], repr=False
    )

    def add_source(self, source: SourceId) -> None:
        if source not in self.sources:
            self.sources.append(source)

    def record_field(self, merged_field: MergedField, source: SourceId) -> None:
        self.field_sources[merged_field] = source

    def source_for(self, merged_field: MergedField) -> SourceId | None:
        return self.field_sources.get(merged_field)
