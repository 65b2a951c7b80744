"""Collect raw records from every configured source before merging.

Sources may be called concurrently, but their output is buffered and
re-ordered by source priority once all of them finished. Arrival order never
leaks into the merge, which is order-sensitive for ``country`` and for ties.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from aptintel.domain.diagnostics import Diagnostics

if TYPE_CHECKING:
    from collections.abc import Sequence
    from concurrent.futures import Future

    from aptintel.domain.model import RawEntityRecord, SourceBatch, SourceId
    from aptintel.domain.ports import RawRecordSource

log = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS: Final = 4


@dataclass(slots=True)
class CollectionResult:
    records: list[RawEntityRecord] = field(default_factory=list["RawEntityRecord"])
    batches: list[SourceBatch] = field(default_factory=list["SourceBatch"])
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def __len__(self) -> int:
        return len(self.records)


def collect_source_batches(
    sources: Sequence[RawRecordSource],
    *,
    source_priority: Sequence[SourceId] = (),
    max_workers: int = DEFAULT_MAX_WORKERS,
    diagnostics: Diagnostics | None = None,
) -> CollectionResult:
    """Call every source, wait for all of them and return records in priority order.

    Batches are ordered by their rank in ``source_priority`` (unlisted sources
    last), then by the batch's own ``priority``, then by registration order.
    """

    result = CollectionResult(diagnostics=diagnostics if diagnostics is not None else Diagnostics())
    if not sources:
        return result

    workers = max(1, min(max_workers, len(sources)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="aptintel-source") as pool:
        futures = [pool.submit(source) for source in sources]
        completed = [
            _await_batch(source, future, result.diagnostics)
            for source, future in zip(sources, futures, strict=True)
        ]

    rank = {source_id: position for position, source_id in enumerate(source_priority)}
    unranked = len(rank)
    ordered = sorted(
        (
            (position, batch)
            for position, batch in enumerate(completed)
            if batch is not None
        ),
        key=lambda item: (rank.get(item[1].source_id, unranked), item[1].priority, item[0]),
    )

    for _, batch in ordered:
        result.batches.append(batch)
        result.records.extend(batch.records)
        result.diagnostics.record_source(batch.source_id, len(batch))
        if not batch.records:
            log.warning("Source %s returned no records", batch.source_id)

    log.info(
        "Collected %s records from %s sources (%s failed)",
        len(result.records),
        result.diagnostics.sources_processed,
        result.diagnostics.sources_failed,
    )
    return result


def _await_batch(
    source: RawRecordSource,
    future: Future[SourceBatch],
    diagnostics: Diagnostics,
) -> SourceBatch | None:
    source_id = getattr(source, "source_id", repr(source))
    try:
        return future.result()
    except Exception as exc:  # noqa: BLE001
        diagnostics.record_failure(source_id, str(exc) or type(exc).__name__)
        log.warning("Source %s failed: %s", source_id, exc)
        return None
