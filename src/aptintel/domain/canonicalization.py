"""Name canonicalization for threat-group names.

Catalogs disagree on separators in label-plus-number names ("APT 29", "APT-29",
"apt_29"). ``canonicalize`` rewrites them to one tight spelling; every other
component assumes names already went through it.
"""

from __future__ import annotations

import re
from typing import Final

# Ordered: only the first matching pattern is applied.
_LABEL_NUMBER_PATTERNS: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (re.compile(r"APT[\s\-_]+(\d+)", re.IGNORECASE), "APT"),
    (re.compile(r"FIN[\s\-_]+(\d+)", re.IGNORECASE), "FIN"),
    (re.compile(r"UNC[\s\-_]+(\d+)", re.IGNORECASE), "UNC"),
    (re.compile(r"TA[\s\-_]+(\d+)", re.IGNORECASE), "TA"),
    (re.compile(r"Group[\s\-_]+(\d+)", re.IGNORECASE), "Group"),
    # MITRE group ids, separator optional
    (re.compile(r"G[\s\-_]*(\d+)", re.IGNORECASE), "G"),
)

_APT_NUMBER = re.compile(r"APT[\s\-_]*(\d+)", re.IGNORECASE)
_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def canonicalize(raw_name: object) -> str:
    """Return the canonical spelling of ``raw_name`` ("" for empty or non-string input)."""

    if not isinstance(raw_name, str):
        return ""
    name = raw_name.strip()
    for pattern, prefix in _LABEL_NUMBER_PATTERNS:
        match = pattern.fullmatch(name)
        if match is not None:
            return f"{prefix}{match.group(1)}"
    return name


def extract_apt_number(name: str | None) -> int | None:
    if not name:
        return None
    match = _APT_NUMBER.search(name)
    return int(match.group(1)) if match else None


def to_searchable(name: str | None) -> str:
    """Lower-cased alphanumerics of the canonical spelling, for substring search."""

    if not name:
        return ""
    return _NON_ALPHANUMERIC.sub("", canonicalize(name).lower())
