"""Read common raw schema JSON files from disk."""

from __future__ import annotations

import json
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, cast

from pydantic import ValidationError

from aptintel.domain.model import SourceBatch

from .schema import SourceFilePayload
from .translator import translate_document, translate_record

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from aptintel.domain.model import DocumentRecord, RawEntityRecord, SourceId


log = getLogger(__name__)


class SourceLoadError(RuntimeError):
    """Raised when a source file cannot be read or is not in the common schema."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(slots=True)
class JsonFileRecordSource:
    """A ``RawRecordSource`` backed by one entity file.

    ``source_id`` defaults to the file stem. An envelope's ``sourceId``, when
    present, is the id of the returned batch.
    """

    path: Path
    source_id: SourceId = ""
    priority: int | None = None

    def __post_init__(self) -> None:
        if not self.source_id:
            self.source_id = self.path.stem

    def __call__(self) -> SourceBatch:
        data = _read_json(self.path)
        if isinstance(data, list):
            source_id = self.source_id
            priority = self.priority or 0
            raw_records = cast(list[object], data)
        elif isinstance(data, dict):
            try:
                envelope = SourceFilePayload.model_validate(data)
            except ValidationError as exc:
                raise SourceLoadError(self.path, f"invalid source envelope: {exc}") from exc
            source_id = envelope.source_id or self.source_id
            priority = self.priority if self.priority is not None else envelope.priority
            raw_records = envelope.records
        else:
            raise SourceLoadError(self.path, "expected a list of records or a source object")

        records = _translate_records(
            raw_records, path=self.path, source_id=source_id, source_priority=priority
        )
        log.info("Read %s records for %s from %s", len(records), source_id, self.path)
        return SourceBatch(source_id=source_id, records=tuple(records), priority=priority)


def record_sources(
    paths: Iterable[Path],
    *,
    priority: int | None = None,
) -> list[JsonFileRecordSource]:
    return [JsonFileRecordSource(path=path, priority=priority) for path in paths]


def load_documents(paths: Iterable[Path]) -> list[DocumentRecord]:
    """Read every report file; invalid entries are skipped with a warning."""

    documents: list[DocumentRecord] = []
    seen: set[str] = set()
    for path in paths:
        data = _read_json(path)
        if not isinstance(data, list):
            raise SourceLoadError(path, "expected a list of documents")
        for position, raw in enumerate(cast(list[object], data)):
            if not isinstance(raw, dict):
                log.warning("Skipping document %s in %s: not an object", position, path)
                continue
            try:
                document = translate_document(cast(dict[str, object], raw))
            except ValidationError as exc:
                log.warning("Skipping document %s in %s: %s", position, path, exc)
                continue
            if document.document_id in seen:
                log.debug("Duplicate document %s in %s", document.document_id, path)
                continue
            seen.add(document.document_id)
            documents.append(document)
    log.info("Loaded %s documents", len(documents))
    return documents


def _translate_records(
    raw_records: list[object],
    *,
    path: Path,
    source_id: SourceId,
    source_priority: int,
) -> list[RawEntityRecord]:
    records: list[RawEntityRecord] = []
    for position, raw in enumerate(raw_records):
        if not isinstance(raw, dict):
            log.warning("Skipping record %s in %s: not an object", position, path)
            continue
        try:
            record = translate_record(
                cast(dict[str, object], raw),
                source_id=source_id,
                source_priority=source_priority,
            )
        except ValidationError as exc:
            log.warning("Skipping record %s in %s: %s", position, path, exc)
            continue
        records.append(record)
    return records


def _read_json(path: Path) -> object:
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except OSError as exc:
        raise SourceLoadError(path, f"cannot read file: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SourceLoadError(path, f"invalid JSON: {exc}") from exc
