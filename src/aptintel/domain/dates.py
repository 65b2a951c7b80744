"""Reduce loosely formatted catalog dates to integer years."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Final

_YEAR: Final = re.compile(r"\b(?:19|20)\d{2}\b")
_MDY: Final = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")
_ISO_PREFIX: Final = re.compile(r"^(\d{4})-")
_OPEN_ENDED: Final = frozenset({"present", "current", "ongoing", "today", "now", "active"})

_START_PHRASES: Final = (
    re.compile(
        r"(?:since|from|starting|began|started"
        r"|first\s+(?:seen|observed|detected|identified|appeared|active)"
        r"|active\s+since|operating\s+since|emerged\s+in|dating\s+back\s+to)"
        r"\s+(?:at\s+least\s+)?(\d{4})"
    ),
    re.compile(r"(?:in|around|circa)\s+(\d{4})\s*(?:,|\.|\s|$)"),
    re.compile(r"(\d{4})\s*(?:-|–|to)\s*(?:present|current|ongoing|today)"),
)
_ANY_MODERN_YEAR: Final = re.compile(r"\b(199\d|20[0-2]\d)\b")
_EARLIEST_PLAUSIBLE_YEAR: Final = 1990


class YearBound(StrEnum):
    """Which year to keep when free text mentions several."""

    EARLIEST = "earliest"
    LATEST = "latest"


@dataclass(frozen=True, slots=True)
class YearRange:
    first_seen: int | None = None
    last_seen: int | None = None


class UnparseableDateError(ValueError):
    """Raised by ``coerce_year`` when a value cannot be reduced to a year."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Cannot reduce {value!r} to a year")


def is_open_ended(value: object) -> bool:
    return isinstance(value, str) and value.strip().lower() in _OPEN_ENDED


def coerce_year(value: object, *, bound: YearBound = YearBound.EARLIEST) -> int | None:
    """Reduce ``value`` to a year.

    ``None``, blank strings and open-ended markers ("present") are absent and
    return ``None``. Strings mentioning several years keep the earliest or
    latest one depending on ``bound``. Anything else raises
    ``UnparseableDateError``.
    """

    if value is None:
        return None
    if isinstance(value, bool):
        raise UnparseableDateError(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, date):
        return value.year
    if not isinstance(value, str):
        raise UnparseableDateError(value)

    text = value.strip()
    if not text or is_open_ended(text):
        return None
    if text.isdigit() and len(text) == 4:
        return int(text)
    years = [int(match) for match in _YEAR.findall(text)]
    if not years:
        raise UnparseableDateError(value)
    return min(years) if bound is YearBound.EARLIEST else max(years)


def parse_observed_range(observed: str | None) -> YearRange:
    """Parse ranges such as ``"2015-Feb 2024"`` into first/last seen years."""

    if not observed:
        return YearRange()
    years = [int(match) for match in _YEAR.findall(observed)]
    if not years:
        return YearRange()
    return YearRange(first_seen=min(years), last_seen=max(years))


def extract_year(date_text: str | None) -> int | None:
    """Year of a report date in one of the formats report catalogs use."""

    if not date_text:
        return None
    text = date_text.strip()
    if len(text) == 4 and text.isdigit():
        return int(text)
    if (match := _MDY.search(text)) is not None:
        return int(match.group(3))
    if (match := _ISO_PREFIX.match(text)) is not None:
        return int(match.group(1))
    if (match := _YEAR.search(text)) is not None:
        return int(match.group(0))
    return None


def parse_report_date(date_text: str | None) -> date | None:
    """Parse ``MM/DD/YYYY`` or ISO dates; ``None`` when neither fits."""

    if not date_text:
        return None
    text = date_text.strip()
    if (match := _MDY.fullmatch(text)) is not None:
        month, day, year = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def _current_year() -> int:
    return datetime.now(UTC).year


def extract_year_from_description(
    description: str | None,
    *,
    current_year: int | None = None,
) -> int | None:
    """Earliest plausible activity year mentioned in a free-text description.

    Phrases that mark a start ("since 2012", "first observed in 2009",
    "2014-present") are preferred; only when none is present does any year
    between 1990 and ``current_year`` count.
    """

    if not description:
        return None
    text = description.lower()
    upper = current_year if current_year is not None else _current_year()

    def plausible(year: int) -> bool:
        return _EARLIEST_PLAUSIBLE_YEAR <= year <= upper

    found = [
        int(match.group(1))
        for pattern in _START_PHRASES
        for match in pattern.finditer(text)
        if plausible(int(match.group(1)))
    ]
    if not found:
        found = [
            int(match.group(1))
            for match in _ANY_MODERN_YEAR.finditer(text)
            if plausible(int(match.group(1)))
        ]
    return min(found) if found else None
