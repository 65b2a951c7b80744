"""Ports for pulling raw group records from external catalogs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from aptintel.domain.model import SourceBatch, SourceId


@runtime_checkable
class RawRecordSource(Protocol):
    """Callable port returning every record one catalog currently publishes.

    Implementations may block on I/O and may raise; the collector turns any
    exception into a failed-source diagnostic.
    """

    source_id: SourceId

    def __call__(self) -> SourceBatch: ...


__all__ = ["RawRecordSource"]
