"""JSON-ready views of snapshots for the CLI and file export."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import TYPE_CHECKING, Any, TypeAlias

from aptintel.domain.model import MergedField

if TYPE_CHECKING:
    from pathlib import Path

    from aptintel.domain.diagnostics import Diagnostics
    from aptintel.domain.model import CanonicalEntity, DocumentRecord
    from aptintel.domain.pipeline import IntelSnapshot
    from aptintel.domain.statistics import Statistics

JsonObject: TypeAlias = dict[str, Any]


def entity_to_dict(entity: CanonicalEntity) -> JsonObject:
    return {
        "identifier": entity.identifier,
        "canonicalName": entity.canonical_name,
        "originalName": entity.original_name,
        "description": entity.description,
        "country": entity.country,
        "aliases": list(entity.aliases),
        "categories": list(entity.categories),
        "references": list(entity.references),
        "externalIds": list(entity.external_ids),
        "stateSponsored": entity.state_sponsored,
        "stateSponsor": entity.state_sponsor,
        "attributionConfidence": entity.attribution_confidence,
        "victims": list(entity.victims),
        "related": list(entity.related),
        "firstSeen": entity.first_seen,
        "firstSeenSource": entity.first_seen_source,
        "lastSeen": entity.last_seen,
        "sources": list(entity.contributing_sources),
        "fieldSources": {
            merged_field.value: entity.source_for(merged_field)
            for merged_field in MergedField
            if entity.source_for(merged_field) is not None
        },
        "documentCount": entity.document_count,
    }


def document_to_dict(document: DocumentRecord) -> JsonObject:
    return {
        "documentId": document.document_id,
        "title": document.title,
        "filename": document.filename,
        "source": document.source,
        "date": document.date.isoformat() if document.date is not None else None,
        "year": document.year,
        "link": document.link,
        "linkedEntities": [
            {
                "identifier": linked.identifier,
                "canonicalName": linked.canonical_name,
                "country": linked.country,
                "categories": list(linked.categories),
            }
            for linked in document.linked_entities
        ],
    }


def statistics_to_dict(statistics: Statistics) -> JsonObject:
    return {
        "totalEntities": statistics.total_entities,
        "entitiesWithCountry": statistics.entities_with_country,
        "entitiesWithFirstSeen": statistics.entities_with_first_seen,
        "totalDocuments": statistics.total_documents,
        "linkedDocuments": statistics.linked_documents,
        "totalLinks": statistics.total_links,
        "byCountry": [asdict(entry) for entry in statistics.by_country],
        "byCategory": [asdict(entry) for entry in statistics.by_category],
        "byYear": [asdict(entry) for entry in statistics.by_year],
        "documentsByYear": [asdict(entry) for entry in statistics.documents_by_year],
        "timeline": [
            {"canonicalName": entity.canonical_name, "firstSeen": entity.first_seen}
            for entity in statistics.timeline
        ],
    }


def diagnostics_to_dict(diagnostics: Diagnostics) -> JsonObject:
    return asdict(diagnostics)


def snapshot_to_dict(snapshot: IntelSnapshot, *, include_entities: bool = False) -> JsonObject:
    data: JsonObject = {
        "version": snapshot.version,
        "statistics": statistics_to_dict(snapshot.statistics),
        "diagnostics": diagnostics_to_dict(snapshot.diagnostics),
    }
    if include_entities:
        data["entities"] = [
            entity_to_dict(entity)
            for entity in sorted(snapshot.entities.values(), key=lambda item: item.canonical_name)
        ]
    return data


def dumps(data: object) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_json(data: object, path: Path) -> None:
    path.write_text(dumps(data) + "\n", encoding="utf-8")
