"""Command line entry point: print random fortunes.

    misfortune --dir ~/fortunes --prefixes "zen;computers/" -n 3
"""

from __future__ import annotations

import argparse
import sys

import structlog

from misfortune.config import Settings
from misfortune.errors import MisfortuneError
from misfortune.index import FortuneIndex
from misfortune.logging_setup import configure_logging
from misfortune.matchers import build_matcher

log = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="misfortune",
        description="Print a random fortune from a directory of fortune files.",
    )
    parser.add_argument("--dir", dest="directory", help="Fortunes directory.")
    parser.add_argument("--prefixes", help="';'-separated relative path prefixes to draw from.")
    parser.add_argument("--regex", help="Regular expression selecting files to draw from.")
    parser.add_argument(
        "-n", "--count", type=int, default=1, help="Number of fortunes to print (default: 1)."
    )
    parser.add_argument(
        "--separator", default="%", help="Line printed between fortunes (default: %%)."
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Override log level."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.count < 1:
        print("misfortune: --count must be >= 1", file=sys.stderr)
        return 2

    settings = Settings()
    overrides = {
        key: value
        for key, value in (
            ("directory", args.directory),
            ("prefixes", args.prefixes),
            ("regex", args.regex),
        )
        if value is not None
    }
    fortunes = settings.fortunes.model_copy(update=overrides)
    logging_settings = settings.logging
    if args.log_level is not None:
        logging_settings = logging_settings.model_copy(update={"level": args.log_level})
    configure_logging(logging_settings)

    try:
        matcher = build_matcher(fortunes.prefixes, fortunes.regex)
        index = FortuneIndex(fortunes.directory, prune_deleted=settings.index.prune_deleted)
        for i in range(args.count):
            if i:
                print(args.separator)
            print(index.random_matching(matcher))
    except MisfortuneError as exc:
        log.error("misfortune_failed", code=exc.code.value, error=exc.message)
        print(f"misfortune: {exc.message}", file=sys.stderr)
        if exc.suggestion:
            print(exc.suggestion, file=sys.stderr)
        return 1
    return 0
