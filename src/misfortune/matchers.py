"""Build file matchers from configuration.

The index only ever sees a plain callable over relative paths; this module is
where the configured prefixes or regular expression become one.
"""

from __future__ import annotations

import re

import structlog

from misfortune.errors import InvalidPatternError
from misfortune.index import FileMatcher

log = structlog.get_logger()


def match_all(relative_path: str) -> bool:
    return True


def prefix_matcher(prefixes: str) -> FileMatcher:
    """Match paths starting with any of the ``;``-separated *prefixes*."""
    parts = tuple(prefixes.split(";"))

    def matcher(relative_path: str) -> bool:
        return relative_path.startswith(parts)

    return matcher


def regex_matcher(pattern: str) -> FileMatcher:
    """Match paths in which *pattern* is found anywhere."""
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc

    def matcher(relative_path: str) -> bool:
        return compiled.search(relative_path) is not None

    return matcher


def build_matcher(prefixes: str | None = None, regex: str | None = None) -> FileMatcher:
    """Choose a matcher: prefixes, else regex, else everything."""
    if prefixes is not None and regex is not None:
        log.warning("matcher_conflict", detail="Both prefixes and regex are set; using prefixes.")

    if prefixes is not None:
        return prefix_matcher(prefixes)
    if regex is not None:
        return regex_matcher(regex)
    return match_all
