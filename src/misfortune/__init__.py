"""Random fortunes from a directory of ``%``-delimited fortune files."""

from __future__ import annotations

from misfortune.errors import (
    DirectoryNotFoundError,
    ErrorCode,
    FileReadError,
    InternalConsistencyError,
    InvalidPatternError,
    MisfortuneError,
    NoMatchError,
)
from misfortune.index import FileMatcher, FortuneIndex
from misfortune.matchers import build_matcher
from misfortune.tokenizer import tokenize_fortunes

__version__ = "0.1.0"

__all__ = [
    # index
    "FortuneIndex",
    "FileMatcher",
    "tokenize_fortunes",
    "build_matcher",
    # errors
    "ErrorCode",
    "MisfortuneError",
    "DirectoryNotFoundError",
    "FileReadError",
    "NoMatchError",
    "InternalConsistencyError",
    "InvalidPatternError",
]
