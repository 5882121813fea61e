"""Host adapter: one index, one matcher, one fortune per update cycle.

The host calls ``reload`` whenever configuration may have changed and
``update`` on every refresh cycle, then displays ``get_string``. Recoverable
failures are turned into fixed display strings here, and nowhere else.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from misfortune.errors import FileReadError, MisfortuneError, NoMatchError
from misfortune.index import FileMatcher, FortuneIndex
from misfortune.matchers import build_matcher, match_all

if TYPE_CHECKING:
    from misfortune.config import Settings

log = structlog.get_logger()

NOT_LOADED = "You are destined to not have loaded any fortunes yet."
LOAD_FAILED = (
    "You are destined to encounter errors with the Misfortune plugin.\nSee log for details."
)
NO_MATCH = "You are destined to find no fortunes matching your filter."
READ_FAILED = "You are destined to lose a fortune to a read error.\nSee log for details."


class Measure:
    """Keeps the current fortune for a host that refreshes on a timer."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng
        self.index: FortuneIndex | None = None
        self.matcher: FileMatcher = match_all
        self.current_fortune = NOT_LOADED

    def reload(self, settings: Settings) -> None:
        """Apply *settings*, building or refreshing the index."""
        fortunes = settings.fortunes
        try:
            self.matcher = build_matcher(fortunes.prefixes, fortunes.regex)
            directory = Path(fortunes.directory).expanduser()
            if (
                self.index is not None
                and directory.is_dir()
                and directory.resolve() == self.index.root_directory
                and settings.index.prune_deleted == self.index.prune_deleted
            ):
                self.index.refresh()
            else:
                self.index = FortuneIndex(
                    directory,
                    rng=self._rng,
                    prune_deleted=settings.index.prune_deleted,
                )
        except MisfortuneError as exc:
            log.error("reload_failed", code=exc.code.value, error=exc.message)
            self.index = None
            self.current_fortune = LOAD_FAILED

    def update(self) -> str:
        """Draw a new fortune and return it."""
        if self.index is None:
            return self.current_fortune

        try:
            self.current_fortune = self.index.random_matching(self.matcher)
        except NoMatchError:
            log.warning("no_matching_fortunes", root=str(self.index.root_directory))
            self.current_fortune = NO_MATCH
        except FileReadError as exc:
            log.error("fortune_read_failed", path=exc.path, error=exc.message)
            self.current_fortune = READ_FAILED
        return self.current_fortune

    def get_string(self) -> str:
        return self.current_fortune
