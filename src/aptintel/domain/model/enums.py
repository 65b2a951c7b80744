"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class SourceCatalog(StrEnum):
    """External catalogs known to report threat groups.

    Source ids are plain strings in records; these are the ones the default
    priority order knows about.
    """

    MISP_GALAXY = "misp-galaxy"
    MITRE_ATTACK = "mitre-attack"
    APT_MALWARE = "apt-malware"
    ETDA = "etda"
    MALPEDIA = "malpedia"
    GOOGLE_APT = "google-apt"
    APTNOTES = "aptnotes"


class MergedField(StrEnum):
    """Scalar fields whose supplying source is tracked in provenance."""

    ORIGINAL_NAME = "original_name"
    DESCRIPTION = "description"
    COUNTRY = "country"
    FIRST_SEEN = "first_seen"
    LAST_SEEN = "last_seen"
    STATE_SPONSOR = "state_sponsor"
    ATTRIBUTION_CONFIDENCE = "attribution_confidence"


DESCRIPTION_SOURCE = "description"
