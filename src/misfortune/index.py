"""In-memory fortune index: refresh, count and random selection.

The index maps each fortune file (by path relative to the root directory) to
the byte offsets and lengths of its fortunes. Files are only re-read when
their modification time is newer than the cached tokenization, so repeated
refreshes of an unchanged directory cost one ``stat`` per file.

Random selection treats every matching file as one logical sequence of
fortunes: a single uniform draw over the total count is mapped back to a
(file, index) pair by a running-total scan, then only that fortune's bytes
are read from disk.

The index is not thread safe. Callers that refresh and select from different
threads must guard the whole instance with their own lock.
"""

from __future__ import annotations

import os
import random
import stat
from collections.abc import Callable, Iterator, Mapping
from datetime import UTC, datetime
from pathlib import Path
from types import MappingProxyType

import structlog

from misfortune.errors import (
    DirectoryNotFoundError,
    FileReadError,
    InternalConsistencyError,
    NoMatchError,
)
from misfortune.models.index import FileEntry
from misfortune.tokenizer import tokenize_fortunes

log = structlog.get_logger()

FileMatcher = Callable[[str], bool]
"""Decides whether fortunes are drawn from a file, given its relative path."""


class FortuneIndex:
    """Tokenization cache for every fortune file under a directory."""

    def __init__(
        self,
        root_directory: str | os.PathLike[str],
        *,
        rng: random.Random | None = None,
        prune_deleted: bool = False,
    ) -> None:
        root = Path(root_directory).expanduser()
        if not root.is_dir():
            raise DirectoryNotFoundError(str(root))

        self._root = root.resolve()
        self._rng = rng if rng is not None else random.Random()
        self._prune_deleted = prune_deleted
        self._files: dict[str, FileEntry] = {}

        log.info("index_loading", root=str(self._root))
        self.refresh()

    @property
    def root_directory(self) -> Path:
        return self._root

    @property
    def prune_deleted(self) -> bool:
        return self._prune_deleted

    @property
    def files(self) -> Mapping[str, FileEntry]:
        """Read-only view of the indexed files."""
        return MappingProxyType(self._files)

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Re-scan the directory and re-tokenize files changed since last seen.

        A file that cannot be read is logged and skipped; whatever was cached
        for it before stays in place.
        """
        log.info("index_refresh_started", root=str(self._root))
        seen: set[str] = set()
        for relative_path in self._discover():
            seen.add(relative_path)
            try:
                self.refresh_file(relative_path)
            except FileReadError:
                log.warning("file_refresh_failed", path=relative_path, exc_info=True)

        if self._prune_deleted:
            for relative_path in sorted(self._files.keys() - seen):
                del self._files[relative_path]
                log.info("file_pruned", path=relative_path)

        log.info(
            "index_total_size",
            files=len(self._files),
            fortunes=sum(entry.count for entry in self._files.values()),
            total_bytes=self.total_size(),
        )

    def refresh_file(self, relative_path: str) -> None:
        """Re-tokenize one file if it changed on disk after the cached copy."""
        entry = self._files.get(relative_path)
        full_path = self._root / relative_path

        try:
            modified_at = datetime.fromtimestamp(full_path.stat().st_mtime, UTC)
            if entry is not None and modified_at <= entry.updated_at:
                log.debug("file_refresh_skipped", path=relative_path)
                return

            log.info("file_refreshing", path=relative_path)
            # Before the read, so a write during it leaves mtime > updated_at.
            now = datetime.now(UTC)
            data = full_path.read_bytes()
        except OSError as exc:
            raise FileReadError(relative_path, str(exc)) from exc

        offsets, lengths = tokenize_fortunes(data)

        if entry is None:
            self._files[relative_path] = FileEntry(updated_at=now, offsets=offsets, lengths=lengths)
        else:
            entry.offsets = offsets
            entry.lengths = lengths
            entry.updated_at = now

        log.debug("file_refreshed", path=relative_path, fortunes=len(offsets))

    def total_size(self) -> int:
        """Total bytes of fortune text across every indexed file."""
        return sum(entry.size for entry in self._files.values())

    def _discover(self) -> Iterator[str]:
        """Yield relative paths of visible regular files, in sorted order."""
        stack: list[Path] = [self._root]
        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as it:
                    entries = sorted(it, key=lambda item: item.name)
            except OSError:
                log.warning("directory_scan_failed", path=str(current), exc_info=True)
                continue

            directories: list[Path] = []
            for dir_entry in entries:
                if dir_entry.name.startswith("."):
                    continue
                try:
                    if dir_entry.is_dir(follow_symlinks=False):
                        directories.append(Path(dir_entry.path))
                        continue
                    st = dir_entry.stat()
                except OSError:
                    log.warning("file_stat_failed", path=dir_entry.path, exc_info=True)
                    continue
                if not stat.S_ISREG(st.st_mode) or _is_hidden(st):
                    continue
                yield Path(dir_entry.path).relative_to(self._root).as_posix()

            # Visit subdirectories in name order.
            stack.extend(reversed(directories))

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def count_matching(self, matcher: FileMatcher) -> int:
        """Number of fortunes in files whose relative path satisfies *matcher*."""
        return sum(entry.count for _, entry in self._matching(matcher))

    def random_matching(self, matcher: FileMatcher) -> str:
        """Return a uniformly random fortune from files satisfying *matcher*."""
        matching = self._matching(matcher)
        total = sum(entry.count for _, entry in matching)
        if total == 0:
            raise NoMatchError()

        selected = self._rng.randrange(total)
        log.debug("fortune_selected", index=selected, total=total)

        current_start = 0
        for relative_path, entry in matching:
            if selected < current_start + entry.count:
                return self.get_entry(relative_path, selected - current_start)
            current_start += entry.count

        raise InternalConsistencyError(
            f"Fortune {selected} of {total} was not contained in any matching file."
        )

    def get_entry(self, relative_path: str, index: int) -> str:
        """Read fortune number *index* of *relative_path* from disk."""
        entry = self._files.get(relative_path)
        if entry is None:
            raise InternalConsistencyError(f"File {relative_path!r} is not indexed.")
        if not 0 <= index < entry.count:
            raise InternalConsistencyError(
                f"Fortune index {index} out of range for {relative_path!r} ({entry.count} fortunes)."
            )

        offset = entry.offsets[index]
        length = entry.lengths[index]
        log.debug("fortune_read", path=relative_path, index=index, offset=offset, length=length)

        try:
            with open(self._root / relative_path, "rb") as f:
                f.seek(offset)
                data = f.read(length)
        except OSError as exc:
            raise FileReadError(relative_path, str(exc)) from exc

        if len(data) != length:
            raise FileReadError(
                relative_path, f"expected {length} bytes at offset {offset}, got {len(data)}"
            )
        return data.decode("utf-8", errors="replace")

    def _matching(self, matcher: FileMatcher) -> list[tuple[str, FileEntry]]:
        return [(path, entry) for path, entry in self._files.items() if matcher(path)]


def _is_hidden(st: os.stat_result) -> bool:
    # st_file_attributes only exists on Windows.
    attributes = getattr(st, "st_file_attributes", 0)
    return bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)
