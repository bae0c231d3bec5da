#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Final

from dotenv import load_dotenv

from domsenricher.adapters.tree import load_tree
from domsenricher.app import add_relation, enrich_tree
from domsenricher.config import configure_logging
from domsenricher.domain.enrichment import DEFAULT_DATASTREAM
from domsenricher.domain.rels_ext import content_model, doms_relation, external_relation

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from domsenricher.domain.rels_ext import RelationTriple

log = logging.getLogger(__name__)

NAMESPACE_CHOICES: Final[tuple[str, ...]] = ("external", "doms", "model")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Enrich DOMS RELS-EXT datastreams")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level, including every merged document",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    enrich = subparsers.add_parser("enrich", help="Enrich every node of a batch tree")
    enrich.add_argument("tree", type=Path, help="JSON description of the batch tree")
    enrich.add_argument(
        "--dry-run",
        action="store_true",
        help="Read datastreams but only log the changes",
    )
    enrich.add_argument(
        "--datastream",
        default=DEFAULT_DATASTREAM,
        help="Datastream to enrich (default: %(default)s)",
    )
    enrich.add_argument(
        "--report",
        type=Path,
        help="Write a JSON failure report to this path",
    )

    single = subparsers.add_parser("add-relation", help="Add one relation to one object")
    single.add_argument("pid", help="PID of the object to update, e.g. uuid:...")
    single.add_argument("--predicate", required=True, help="Relation name, e.g. hasPart")
    single.add_argument("--object", dest="object_pid", required=True, help="PID of the target")
    single.add_argument(
        "--namespace",
        choices=NAMESPACE_CHOICES,
        default="external",
        help="Relation namespace (default: %(default)s)",
    )
    single.add_argument("--datastream", default=DEFAULT_DATASTREAM)
    single.add_argument("--dry-run", action="store_true")

    return parser.parse_args(list(argv))


def _build_triple(args: argparse.Namespace) -> RelationTriple:
    if args.namespace == "model":
        if args.predicate != "hasModel":
            raise ValueError("The model namespace only supports the hasModel relation")
        return content_model(args.object_pid)
    if args.namespace == "doms":
        return doms_relation(args.predicate, args.object_pid)
    return external_relation(args.predicate, args.object_pid)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        triple = _build_triple(parsed_args) if parsed_args.command == "add-relation" else None
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    if parsed_args.verbose:
        configure_logging(level=logging.DEBUG, force=True)

    try:
        if parsed_args.command == "enrich":
            result = enrich_tree(
                load_tree(parsed_args.tree),
                dry_run=parsed_args.dry_run,
                datastream=parsed_args.datastream,
            )
            if parsed_args.report is not None:
                parsed_args.report.write_text(result.collector.to_json(), encoding="utf-8")
            for failure in result.collector.failures:
                log.error(
                    "Failure on %s (%s): %s", failure.reference, failure.kind, failure.message
                )
            if not result.success:
                sys.exit(1)
        elif parsed_args.command == "add-relation" and triple is not None:
            add_relation(
                parsed_args.pid,
                triple,
                dry_run=parsed_args.dry_run,
                datastream=parsed_args.datastream,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during enrichment")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
