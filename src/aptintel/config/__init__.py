"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_int, env_list
from .errors import ConfigurationError
from .logging import configure_logging, get_log_level
from .pipeline import DEFAULT_SOURCE_PRIORITY, PipelineConfig, get_pipeline_config

__all__ = [
    "DEFAULT_SOURCE_PRIORITY",
    "ConfigurationError",
    "PipelineConfig",
    "configure_logging",
    "env_flag",
    "env_int",
    "env_list",
    "get_log_level",
    "get_pipeline_config",
]
