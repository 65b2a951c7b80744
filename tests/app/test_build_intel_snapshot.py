from __future__ import annotations

from typing import TYPE_CHECKING

from aptintel.app import build_intel_snapshot, collect_records, resolve_name
from aptintel.config import PipelineConfig
from aptintel.domain.pipeline import SnapshotPublisher
from tests.helpers.records import FakeRecordSource, make_record

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def _sources() -> list[FakeRecordSource]:
    return [
        FakeRecordSource(
            "mitre-attack",
            records=[make_record("APT 29", source_id="mitre-attack", country="CN")],
        ),
        FakeRecordSource(
            "misp-galaxy",
            records=[
                make_record(
                    "APT29", source_id="misp-galaxy", aliases=["Cozy Bear"], country="RU"
                )
            ],
        ),
    ]


def test_configured_priority_decides_order_sensitive_fields() -> None:
    config = PipelineConfig(source_priority=("misp-galaxy", "mitre-attack"), max_workers=2)

    snapshot = build_intel_snapshot(sources=_sources(), config=config)

    entity = snapshot.find("cozy bear")
    assert entity is not None
    assert entity.canonical_name == "APT29"
    assert entity.country == "RU"
    assert entity.contributing_sources == ("misp-galaxy", "mitre-attack")


def test_reversed_priority_changes_country() -> None:
    config = PipelineConfig(source_priority=("mitre-attack", "misp-galaxy"))

    snapshot = build_intel_snapshot(sources=_sources(), config=config)

    entity = snapshot.find("APT29")
    assert entity is not None
    assert entity.country == "CN"


def test_publisher_stamps_versions() -> None:
    publisher = SnapshotPublisher()
    config = PipelineConfig()

    first = build_intel_snapshot(sources=_sources(), config=config, publisher=publisher)
    second = build_intel_snapshot(sources=_sources(), config=config, publisher=publisher)

    assert (first.version, second.version) == (1, 2)
    assert publisher.current() is second


def test_failing_source_does_not_abort_build() -> None:
    sources = [*_sources(), FakeRecordSource("etda", error=RuntimeError("offline"))]

    snapshot = build_intel_snapshot(sources=sources, config=PipelineConfig())

    assert len(snapshot.entities) == 1
    assert snapshot.diagnostics.sources_processed == 2
    assert snapshot.diagnostics.sources_failed == 1


def test_collect_records_orders_by_configured_priority() -> None:
    config = PipelineConfig(source_priority=("misp-galaxy",))

    collected = collect_records(_sources(), config=config)

    assert [batch.source_id for batch in collected.batches] == ["misp-galaxy", "mitre-attack"]
    assert len(collected) == 2


def test_resolve_name_uses_declared_aliases(
    write_json_file: Callable[[str, object], Path],
) -> None:
    path = write_json_file(
        "etda.json",
        [{"name": "Curious Magpie", "aliases": ["Tin Heron"]}],
    )

    assert resolve_name("tin heron", [path], config=PipelineConfig()) == "Curious Magpie"
    assert resolve_name("Unknown Crew", [path], config=PipelineConfig()) == "Unknown Crew"
