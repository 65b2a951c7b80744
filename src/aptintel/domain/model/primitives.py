"""Domain primitives: scalar aliases shared by records and entities."""

from __future__ import annotations

from typing import TypeAlias

SourceId: TypeAlias = str
CountryCode: TypeAlias = str
Year: TypeAlias = int
EntityIdentifier: TypeAlias = str
DocumentId: TypeAlias = str

# Raw catalogs report either a year or free text such as "2015-Feb 2024".
RawYear: TypeAlias = int | str
