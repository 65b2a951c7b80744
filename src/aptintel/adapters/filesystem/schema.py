"""Pydantic models describing the common raw schema files.

Entity files are either a bare list of records or an envelope::

    {"sourceId": "mitre-attack", "priority": 1, "records": [...]}

Report files are lists of documents, either in the camelCase schema or with
the capitalised column names of the APTnotes export (``Title``, ``SHA-1``...).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    field_validator,
    model_validator,
)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _identifier_text(value: object) -> object:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return _blank_to_none(value)


def _none_to_empty(value: object) -> object:
    return "" if value is None else value


def _string_list(value: object) -> object:
    """Accept ``null``, a single string or a list; drop non-string entries."""

    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in cast(list[object], value) if isinstance(item, str)]
    return value


class RawSchemaModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawEntityPayload(RawSchemaModel):
    name: str | None = None
    original_name: str | None = Field(default=None, alias="originalName")
    description: str = ""
    country: str | None = None
    aliases: list[str] = Field(default_factory=list[str])
    categories: list[str] = Field(default_factory=list[str])
    references: list[str] = Field(default_factory=list[str])
    first_seen: StrictInt | str | None = Field(default=None, alias="firstSeen")
    last_seen: StrictInt | str | None = Field(default=None, alias="lastSeen")
    observed: str | None = None
    source_id: str | None = Field(default=None, alias="sourceId")
    source_priority: int | None = Field(default=None, alias="sourcePriority")
    external_id: str | None = Field(default=None, alias="externalId")
    state_sponsor: str | None = Field(default=None, alias="stateSponsor")
    victims: list[str] = Field(default_factory=list[str])
    attribution_confidence: StrictInt | None = Field(default=None, alias="attributionConfidence")
    related: list[str] = Field(default_factory=list[str])

    _normalize_optional = field_validator(
        "name",
        "original_name",
        "country",
        "observed",
        "source_id",
        "external_id",
        "state_sponsor",
        mode="before",
    )(_blank_to_none)
    _normalize_description = field_validator("description", mode="before")(_none_to_empty)
    _normalize_lists = field_validator(
        "aliases", "categories", "references", "victims", "related", mode="before"
    )(_string_list)

    @field_validator("first_seen", "last_seen", mode="before")
    @classmethod
    def _normalize_year(cls, value: object) -> object:
        # kept as text so the merge counts it as an unparseable date
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return _blank_to_none(value)

    @field_validator("attribution_confidence", mode="before")
    @classmethod
    def _normalize_confidence(cls, value: object) -> object:
        # MISP stores the confidence as text ("50"); other text is dropped
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return None
            return int(stripped) if stripped.isdigit() else None
        return value


class SourceFilePayload(RawSchemaModel):
    """Envelope form. Records stay raw so they can be validated one by one."""

    source_id: str | None = Field(default=None, alias="sourceId")
    priority: int = 0
    records: list[object] = Field(default_factory=list[object])

    _normalize_source = field_validator("source_id", mode="before")(_blank_to_none)


class DocumentPayload(RawSchemaModel):
    document_id: str | None = Field(
        default=None, validation_alias=AliasChoices("documentId", "document_id", "SHA-1")
    )
    title: str = Field(default="", validation_alias=AliasChoices("title", "Title"))
    filename: str = Field(default="", validation_alias=AliasChoices("filename", "Filename"))
    source: str = Field(default="Unknown", validation_alias=AliasChoices("source", "Source"))
    date: str | None = Field(default=None, validation_alias=AliasChoices("date", "Date"))
    year: int | None = Field(default=None, validation_alias=AliasChoices("year", "Year"))
    link: str = Field(default="", validation_alias=AliasChoices("link", "Link"))

    _normalize_identifier = field_validator("document_id", mode="before")(_identifier_text)
    _normalize_date = field_validator("date", mode="before")(_blank_to_none)
    _normalize_text = field_validator("title", "filename", "link", mode="before")(_none_to_empty)
    _normalize_year = field_validator("year", mode="before")(_blank_to_none)

    @field_validator("source", mode="before")
    @classmethod
    def _default_source(cls, value: object) -> object:
        return _blank_to_none(value) or "Unknown"

    @model_validator(mode="after")
    def _require_identity(self) -> DocumentPayload:
        if self.document_id is None:
            if not self.filename:
                raise ValueError("document needs a documentId or a filename")
            self.document_id = self.filename
        return self


RawEntityInput = RawEntityPayload | Mapping[str, object]
DocumentInput = DocumentPayload | Mapping[str, object]
