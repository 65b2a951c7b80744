"""Pipeline configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from aptintel.domain.collection import DEFAULT_MAX_WORKERS
from aptintel.domain.linking import DEFAULT_MIN_TERM_LENGTH, DEFAULT_SHORT_TERM_MAX_LENGTH
from aptintel.domain.model import SourceCatalog

from .env import env_flag, env_int, env_list

SOURCE_PRIORITY_ENV: Final = "APTINTEL_SOURCE_PRIORITY"
INFER_FIRST_SEEN_ENV: Final = "APTINTEL_INFER_FIRST_SEEN"
MAX_WORKERS_ENV: Final = "APTINTEL_MAX_WORKERS"

# Order in which the dashboard processed its catalogs.
DEFAULT_SOURCE_PRIORITY: Final[tuple[str, ...]] = tuple(
    catalog.value
    for catalog in (
        SourceCatalog.MISP_GALAXY,
        SourceCatalog.MITRE_ATTACK,
        SourceCatalog.APT_MALWARE,
        SourceCatalog.ETDA,
        SourceCatalog.MALPEDIA,
        SourceCatalog.GOOGLE_APT,
    )
)


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    source_priority: tuple[str, ...] = DEFAULT_SOURCE_PRIORITY
    infer_first_seen: bool = False
    max_workers: int = DEFAULT_MAX_WORKERS
    min_term_length: int = DEFAULT_MIN_TERM_LENGTH
    short_term_max_length: int = DEFAULT_SHORT_TERM_MAX_LENGTH


def get_pipeline_config() -> PipelineConfig:
    return PipelineConfig(
        source_priority=env_list(SOURCE_PRIORITY_ENV, DEFAULT_SOURCE_PRIORITY),
        infer_first_seen=env_flag(INFER_FIRST_SEEN_ENV),
        max_workers=env_int(MAX_WORKERS_ENV, DEFAULT_MAX_WORKERS, minimum=1),
    )
