"""Typed errors raised by the fortune index and its host adapter.

Every error carries an ``ErrorCode`` and a ``recoverable`` flag so the
embedding system can decide fallback behaviour (retry with a broader filter,
show a placeholder) without the index making UX decisions.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    DIRECTORY_NOT_FOUND = "DIRECTORY_NOT_FOUND"
    FILE_READ_FAILED = "FILE_READ_FAILED"
    NO_MATCHING_FORTUNES = "NO_MATCHING_FORTUNES"
    INTERNAL_CONSISTENCY = "INTERNAL_CONSISTENCY"
    INVALID_PATTERN = "INVALID_PATTERN"


class MisfortuneError(Exception):
    """Base error with a machine-readable code."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str = "",
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code.value,
            "message": self.message,
            "suggestion": self.suggestion,
            "recoverable": self.recoverable,
        }


class DirectoryNotFoundError(MisfortuneError):
    """The fortunes directory does not exist or is not a directory."""

    def __init__(self, path: str) -> None:
        super().__init__(
            ErrorCode.DIRECTORY_NOT_FOUND,
            f"Fortunes directory not found: {path}",
            suggestion="Check the configured fortunes directory.",
        )
        self.path = path


class FileReadError(MisfortuneError):
    """A single fortune file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            ErrorCode.FILE_READ_FAILED,
            f"Could not read fortune file {path!r}: {reason}",
            recoverable=True,
        )
        self.path = path


class NoMatchError(MisfortuneError):
    """No indexed file matches the filter, or every matching file is empty."""

    def __init__(self) -> None:
        super().__init__(
            ErrorCode.NO_MATCHING_FORTUNES,
            "No matching fortune files found.",
            suggestion="Broaden the prefixes or regex, or add fortune files.",
            recoverable=True,
        )


class InternalConsistencyError(MisfortuneError):
    """Selection arithmetic disagrees with the index contents."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INTERNAL_CONSISTENCY, message)


class InvalidPatternError(MisfortuneError):
    """The configured file pattern could not be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(
            ErrorCode.INVALID_PATTERN,
            f"Invalid file pattern {pattern!r}: {reason}",
            suggestion="Fix the regular expression in the configuration.",
        )
        self.pattern = pattern
