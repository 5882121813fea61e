"""Unit tests for misfortune.models."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from misfortune.models import FileEntry


class TestFileEntry:
    def test_count_and_size(self) -> None:
        entry = FileEntry(updated_at=datetime.now(UTC), offsets=[0, 6, 12], lengths=[3, 3, 4])
        assert entry.count == 3
        assert entry.size == 10

    def test_defaults_are_empty(self) -> None:
        entry = FileEntry(updated_at=datetime.now(UTC))
        assert entry.count == 0
        assert entry.size == 0

    def test_mismatched_tables_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FileEntry(updated_at=datetime.now(UTC), offsets=[0, 4], lengths=[3])

    def test_negative_values_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FileEntry(updated_at=datetime.now(UTC), offsets=[-1], lengths=[3])
