"""Reference vocabularies: country display names and target-sector spellings."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

COUNTRY_NAMES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "CN": "China",
        "RU": "Russia",
        "KP": "North Korea",
        "IR": "Iran",
        "US": "United States",
        "IL": "Israel",
        "PK": "Pakistan",
        "IN": "India",
        "VN": "Vietnam",
        "UA": "Ukraine",
        "BY": "Belarus",
        "TR": "Turkey",
        "SA": "Saudi Arabia",
        "AE": "United Arab Emirates",
        "SY": "Syria",
        "LB": "Lebanon",
        "PS": "Palestine",
        "EG": "Egypt",
        "NG": "Nigeria",
        "ZA": "South Africa",
        "BR": "Brazil",
        "GB": "United Kingdom",
        "DE": "Germany",
        "FR": "France",
        "NL": "Netherlands",
        "KR": "South Korea",
        "JP": "Japan",
        "TW": "Taiwan",
        "MY": "Malaysia",
        "SG": "Singapore",
        "PH": "Philippines",
        "ID": "Indonesia",
        "TH": "Thailand",
    }
)

COUNTRY_CODES: Final[Mapping[str, str]] = MappingProxyType(
    {name.lower(): code for code, name in COUNTRY_NAMES.items()}
)

_SECTOR_SPELLINGS: Final[dict[str, tuple[str, ...]]] = {
    "government": ("government", "gov", "government, administration", "public sector", "state"),
    "military": ("military", "defense", "defence", "armed forces"),
    "finance": ("finance", "financial", "banking", "financial services", "banks"),
    "technology": (
        "technology",
        "tech",
        "it",
        "information technology",
        "software",
        "hardware",
    ),
    "telecommunications": ("telecommunications", "telecom", "telco", "communications"),
    "energy": ("energy", "power", "utilities", "oil", "gas", "oil and gas", "petroleum"),
    "healthcare": ("healthcare", "health", "medical", "pharmaceutical", "pharma", "hospitals"),
    "aerospace": ("aerospace", "aviation", "airlines", "space"),
    "defense": ("defense", "defence", "defense industrial base", "dib"),
    "manufacturing": ("manufacturing", "industrial", "industry"),
    "education": ("education", "academic", "universities", "research"),
    "media": ("media", "journalism", "news", "press", "entertainment"),
    "retail": ("retail", "e-commerce", "ecommerce", "commerce"),
    "transportation": ("transportation", "transport", "logistics", "shipping"),
    "chemical": ("chemical", "chemicals"),
    "legal": ("legal", "law", "law firms"),
    "ngo": ("ngo", "non-profit", "nonprofit", "civil society", "think tank", "think tanks"),
    "crypto": ("cryptocurrency", "crypto", "blockchain", "defi"),
}

# "defense"/"defence" appear under military and defense; the later group wins.
SECTOR_LOOKUP: Final[Mapping[str, str]] = MappingProxyType(
    {
        spelling: sector
        for sector, spellings in _SECTOR_SPELLINGS.items()
        for spelling in spellings
    }
)

UNKNOWN_SECTOR: Final = "unknown"


def normalize_category(category: str | None) -> str:
    if not category or not category.strip():
        return UNKNOWN_SECTOR
    lowered = category.strip().lower()
    return SECTOR_LOOKUP.get(lowered, lowered)


def country_name(code: str | None) -> str:
    if not code:
        return "Unknown"
    return COUNTRY_NAMES.get(code.upper(), code)


def country_code(name: str | None) -> str | None:
    """ISO code for a display name; codes pass through upper-cased."""

    if not name or not name.strip():
        return None
    stripped = name.strip()
    if stripped.upper() in COUNTRY_NAMES:
        return stripped.upper()
    return COUNTRY_CODES.get(stripped.lower())
