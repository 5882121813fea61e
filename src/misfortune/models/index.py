from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class FileEntry(BaseModel):
    """Tokenization results for one fortune file."""

    updated_at: datetime  # UTC time of the last successful tokenization
    offsets: list[int] = Field(default_factory=list)  # Byte offset of each fortune
    lengths: list[int] = Field(default_factory=list)  # Byte length of each fortune

    @model_validator(mode="after")
    def validate_tables(self) -> FileEntry:
        if len(self.offsets) != len(self.lengths):
            raise ValueError(
                f"offsets and lengths differ in size: {len(self.offsets)} != {len(self.lengths)}"
            )
        if any(v < 0 for v in self.offsets) or any(v < 0 for v in self.lengths):
            raise ValueError("offsets and lengths must be non-negative")
        return self

    @property
    def count(self) -> int:
        return len(self.offsets)

    @property
    def size(self) -> int:
        return sum(self.lengths)
