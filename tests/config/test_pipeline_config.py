from __future__ import annotations

import logging

import pytest

from aptintel.config import (
    DEFAULT_SOURCE_PRIORITY,
    ConfigurationError,
    get_log_level,
    get_pipeline_config,
)


def test_defaults_without_environment() -> None:
    config = get_pipeline_config()

    assert config.source_priority == DEFAULT_SOURCE_PRIORITY
    assert config.source_priority[0] == "misp-galaxy"
    assert config.infer_first_seen is False
    assert config.max_workers == 4
    assert config.min_term_length == 3
    assert config.short_term_max_length == 4


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APTINTEL_SOURCE_PRIORITY", " etda , mitre-attack,, ")
    monkeypatch.setenv("APTINTEL_INFER_FIRST_SEEN", "yes")
    monkeypatch.setenv("APTINTEL_MAX_WORKERS", "8")

    config = get_pipeline_config()

    assert config.source_priority == ("etda", "mitre-attack")
    assert config.infer_first_seen is True
    assert config.max_workers == 8


def test_blank_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APTINTEL_SOURCE_PRIORITY", "   ")
    monkeypatch.setenv("APTINTEL_INFER_FIRST_SEEN", "")

    config = get_pipeline_config()

    assert config.source_priority == DEFAULT_SOURCE_PRIORITY
    assert config.infer_first_seen is False


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("APTINTEL_INFER_FIRST_SEEN", "maybe"),
        ("APTINTEL_MAX_WORKERS", "many"),
        ("APTINTEL_MAX_WORKERS", "0"),
    ],
)
def test_invalid_values_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError) as exc:
        get_pipeline_config()

    assert name in str(exc.value)


def test_log_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_log_level() == logging.INFO

    monkeypatch.setenv("APTINTEL_LOG_LEVEL", "debug")
    assert get_log_level() == logging.DEBUG

    monkeypatch.setenv("APTINTEL_LOG_LEVEL", "chatty")
    with pytest.raises(ConfigurationError):
        get_log_level()
