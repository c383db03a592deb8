"""Искать блоки в индексах пространств и вывести результат в JSON."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from application.use_cases.search import search
from domain.errors import BlockSearchError
from infrastructure.config import ContainerConfig, build_default_container
from infrastructure.storage.space_session import SpaceSession, SpaceSource
from ui.logging_utils import setup_logging
from ui.presenters import present_error, present_results

logger = logging.getLogger(__name__)


def parse_index(value: str) -> SpaceSource:
    space_id, sep, path = value.partition("=")
    if not sep or not space_id or not path:
        raise argparse.ArgumentTypeError(f"expected SPACE_ID=PATH, got {value!r}")
    return SpaceSource(space_id=space_id, path=Path(path))


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blocksearch", description=__doc__)
    parser.add_argument("terms", nargs="*", help="Search terms; none lists documents")
    parser.add_argument(
        "--index",
        action="append",
        dest="indexes",
        type=parse_index,
        default=[],
        metavar="SPACE_ID=PATH",
        help="Search index of a space. The first one is the primary space.",
    )
    parser.add_argument("--all-spaces", action="store_true", help="Search every space, not only the primary one.")
    parser.add_argument("--daily", action="store_true", help="Keep daily notes titled YYYY.MM.DD.")
    parser.add_argument("--primary-space", help="Space to search instead of the first index.")
    parser.add_argument("--no-backfill", action="store_true", help="Skip resolving parent document titles.")
    parser.add_argument("--limit", type=int, help="Maximum results, at most 40 (default: 40).")
    parser.add_argument("--log-level", help="Overrides BLOCKSEARCH_LOG_LEVEL.")
    parser.add_argument("--log-file", help="Overrides BLOCKSEARCH_LOG_FILE; empty disables the file log.")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> tuple[list[dict], int]:
    """Run the search and return the launcher items with an exit status."""

    sources: list[SpaceSource] = args.indexes
    primary_space_id = None
    if not args.all_spaces:
        primary_space_id = args.primary_space or (sources[0].space_id if sources else None)
    logger.info("Search scope: all_spaces=%s, primary space: %s", args.all_spaces, primary_space_id)

    config = ContainerConfig()
    if args.limit is not None:
        config = ContainerConfig(result_limit=max(1, min(args.limit, config.result_limit)))
    container = build_default_container(config)
    try:
        with SpaceSession.open(sources) as session:
            records = search(
                args.terms,
                spaces=session.spaces,
                query_builder=container.query_builder,
                reranker=container.reranker,
                repository_factory=container.repository_factory,
                all_spaces=args.all_spaces,
                daily=args.daily,
                primary_space_id=primary_space_id,
                result_limit=container.config.result_limit,
                fetch_limit=container.config.fetch_limit,
                backfill=not args.no_backfill,
            )
    except BlockSearchError as exc:
        logger.error("Search failed: %s", exc)
        return [present_error(exc)], 1

    items = present_results(records, args.terms, create_space_id=sources[0].space_id)
    return items, 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    items, status = run(args)
    json.dump({"items": items}, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")
    return status


if __name__ == "__main__":
    sys.exit(main())
