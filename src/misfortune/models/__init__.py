from __future__ import annotations

from misfortune.models.index import FileEntry

__all__ = [
    "FileEntry",
]
