"""Public interface for the common raw schema file adapter."""

from __future__ import annotations

from .loader import JsonFileRecordSource, SourceLoadError, load_documents, record_sources
from .schema import DocumentPayload, RawEntityPayload, SourceFilePayload
from .serialize import (
    document_to_dict,
    dumps,
    entity_to_dict,
    snapshot_to_dict,
    write_json,
)
from .translator import translate_document, translate_record

__all__ = [
    "DocumentPayload",
    "JsonFileRecordSource",
    "RawEntityPayload",
    "SourceFilePayload",
    "SourceLoadError",
    "document_to_dict",
    "dumps",
    "entity_to_dict",
    "load_documents",
    "record_sources",
    "snapshot_to_dict",
    "translate_document",
    "translate_record",
    "write_json",
]
