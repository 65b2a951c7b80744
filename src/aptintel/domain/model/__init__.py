"""Public domain model surface."""

from __future__ import annotations

from aptintel.domain.model.documents import DocumentRecord, Link, LinkedEntity
from aptintel.domain.model.entity import CanonicalEntity, entity_identifier, union_into
from aptintel.domain.model.enums import DESCRIPTION_SOURCE, MergedField, SourceCatalog
from aptintel.domain.model.primitives import (
    CountryCode,
    DocumentId,
    EntityIdentifier,
    RawYear,
    SourceId,
    Year,
)
from aptintel.domain.model.provenance import Provenance
from aptintel.domain.model.records import RawEntityRecord, SourceBatch

__all__ = [  # noqa: RUF022
    # records
    "RawEntityRecord",
    "SourceBatch",
    # entities
    "CanonicalEntity",
    "entity_identifier",
    "union_into",
    # provenance
    "Provenance",
    # documents
    "DocumentRecord",
    "Link",
    "LinkedEntity",
    # enums
    "DESCRIPTION_SOURCE",
    "MergedField",
    "SourceCatalog",
    # primitives
    "CountryCode",
    "DocumentId",
    "EntityIdentifier",
    "RawYear",
    "SourceId",
    "Year",
]
