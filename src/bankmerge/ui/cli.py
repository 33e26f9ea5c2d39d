from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Final

from dotenv import find_dotenv, load_dotenv

from bankmerge.adapters.base_registry import JsonRegistryStore
from bankmerge.adapters.feeds import FeedAcquirer, build_feeds
from bankmerge.adapters.output import FileRegistryWriter
from bankmerge.app import run_merge
from bankmerge.config import (
    ConfigurationError,
    configure_logging,
    get_base_registry_config,
    get_feed_config,
    get_storage_config,
    parse_base_location,
)
from bankmerge.domain.model import FEED_SOURCES, Source
from bankmerge.domain.reconciliation import RunStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_NO_CHANGES: Final[int] = 187
_LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bankmerge",
        description="Reconcile the Brazilian bank registry with the BCB and Nuclea feeds",
    )
    parser.add_argument(
        "--base",
        type=str,
        help="Path or URL of the canonical bancos.json (defaults to config)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory receiving the result files (defaults to config)",
    )
    parser.add_argument(
        "--changelog",
        type=Path,
        help="Existing CHANGELOG.md to extend with this run's entry",
    )
    parser.add_argument(
        "--skip",
        action="append",
        default=[],
        choices=[source.value for source in FEED_SOURCES],
        help="Feed to leave out of this run (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="INFO",
        choices=_LOG_LEVELS,
        help="Logging verbosity",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=parsed_args.log_level)

    try:
        storage = get_storage_config()
        base = (
            parse_base_location(parsed_args.base)
            if parsed_args.base
            else get_base_registry_config()
        )
        skip = [Source(value) for value in parsed_args.skip]
        store = JsonRegistryStore(config=base)
        acquirer = FeedAcquirer(build_feeds(get_feed_config(), skip=skip))
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    writer = FileRegistryWriter(
        output_dir=parsed_args.output_dir or storage.output_dir,
        changelog_path=parsed_args.changelog or storage.changelog_path,
    )

    try:
        result = run_merge(
            store=store,
            acquirer=acquirer,
            writer=writer,
        )
    except Exception:
        log.exception("Fatal error during merge")
        sys.exit(1)

    if result.status is RunStatus.NO_CHANGES:
        sys.exit(EXIT_NO_CHANGES)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run(argv: Sequence[str] | None = None) -> None:
    """Console script entry point: load `.env` from the working directory, then run."""
    load_dotenv(find_dotenv(usecwd=True))
    signal(SIGINT, sigint_handler)
    main(argv)


if __name__ == "__main__":
    run()
