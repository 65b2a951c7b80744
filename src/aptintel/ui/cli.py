from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from aptintel.adapters.filesystem import (
    document_to_dict,
    dumps,
    entity_to_dict,
    snapshot_to_dict,
    write_json,
)
from aptintel.app import build_intel_snapshot, resolve_name
from aptintel.config import (
    ConfigurationError,
    configure_logging,
    get_log_level,
    get_pipeline_config,
)
from aptintel.domain.search import search_documents, search_entities

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from aptintel.config import PipelineConfig

log = logging.getLogger(__name__)


def _add_input_arguments(parser: argparse.ArgumentParser, *, documents: bool) -> None:
    parser.add_argument(
        "--records",
        type=Path,
        nargs="+",
        required=True,
        metavar="FILE",
        help="Entity files in the common raw schema (one source per file)",
    )
    if documents:
        parser.add_argument(
            "--documents",
            type=Path,
            nargs="+",
            default=[],
            metavar="FILE",
            help="Report files to link against the merged groups",
        )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Merge threat-group catalogs and link reports")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build a snapshot and print its summary")
    _add_input_arguments(build, documents=True)
    build.add_argument(
        "--priority",
        type=str,
        help="Comma-separated source ids, most authoritative first (defaults to config)",
    )
    build.add_argument(
        "--infer-first-seen",
        action="store_true",
        default=None,
        help="Fill missing first-seen years from descriptions",
    )
    build.add_argument(
        "--entities",
        action="store_true",
        help="Include every merged group in the output",
    )
    build.add_argument(
        "--output",
        type=Path,
        help="Write the JSON summary to this file instead of stdout",
    )

    resolve = subparsers.add_parser("resolve", help="Print the canonical name for a name")
    resolve.add_argument("name", type=str)
    _add_input_arguments(resolve, documents=False)

    show = subparsers.add_parser("show", help="Print one merged group with its reports")
    show.add_argument("name", type=str)
    _add_input_arguments(show, documents=True)

    search = subparsers.add_parser("search", help="List groups (and reports) matching a query")
    search.add_argument("query", type=str)
    _add_input_arguments(search, documents=True)

    return parser.parse_args(list(argv))


def _parse_priority(value: str) -> tuple[str, ...]:
    priority = tuple(item.strip() for item in value.split(",") if item.strip())
    if not priority:
        raise ValueError(f"Invalid --priority: {value!r}")
    return priority


def _effective_config(args: argparse.Namespace) -> PipelineConfig:
    config = get_pipeline_config()
    if getattr(args, "priority", None):
        config = replace(config, source_priority=_parse_priority(args.priority))
    if getattr(args, "infer_first_seen", None):
        config = replace(config, infer_first_seen=True)
    return config


def _emit(data: object) -> None:
    print(dumps(data))  # noqa: T201


def _run_build(args: argparse.Namespace, config: PipelineConfig) -> None:
    snapshot = build_intel_snapshot(args.records, args.documents, config=config)
    summary = snapshot_to_dict(snapshot, include_entities=args.entities)
    if args.output is not None:
        write_json(summary, args.output)
        log.info("Wrote summary to %s", args.output)
    else:
        _emit(summary)


def _run_show(args: argparse.Namespace, config: PipelineConfig) -> int:
    snapshot = build_intel_snapshot(args.records, args.documents, config=config)
    entity = snapshot.find(args.name)
    if entity is None:
        log.warning("No group named %r", args.name)
        return 1
    _emit(
        {
            "entity": entity_to_dict(entity),
            "documents": [
                document_to_dict(document) for document in snapshot.documents_for(entity)
            ],
        }
    )
    return 0


def _run_search(args: argparse.Namespace, config: PipelineConfig) -> None:
    snapshot = build_intel_snapshot(args.records, args.documents, config=config)
    entities = sorted(
        search_entities(snapshot.entities.values(), args.query),
        key=lambda entity: entity.canonical_name,
    )
    result: dict[str, object] = {
        "entities": [
            {
                "identifier": entity.identifier,
                "canonicalName": entity.canonical_name,
                "country": entity.country,
                "firstSeen": entity.first_seen,
            }
            for entity in entities
        ]
    }
    if args.documents:
        result["documents"] = [
            {"documentId": document.document_id, "title": document.title}
            for document in search_documents(snapshot.documents, args.query)
        ]
    _emit(result)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging(level=get_log_level())
        parsed_args = _parse_args(args_list)
        config = _effective_config(parsed_args)
    except (ValueError, ConfigurationError):
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "build":
            _run_build(parsed_args, config)
        elif parsed_args.command == "resolve":
            canonical = resolve_name(parsed_args.name, parsed_args.records, config=config)
            print(canonical)  # noqa: T201
        elif parsed_args.command == "show":
            status = _run_show(parsed_args, config)
            if status:
                sys.exit(status)
        elif parsed_args.command == "search":
            _run_search(parsed_args, config)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point: load ``.env`` and install the SIGINT handler first."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
