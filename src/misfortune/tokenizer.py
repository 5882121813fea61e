"""Locate fortune boundaries inside a byte buffer.

Fortunes are separated by a line holding a single ``%``. Any of ``\\r``,
``\\n`` and ``\\f`` counts as a line break, each on its own, so ``\\n%\\n``,
``\\r\\n%\\r\\n``, ``\\r\\n%\\n`` and ``\\n%\\r\\n`` are all delimiters.

The scan works on raw bytes so offsets and lengths are byte-accurate and can
be used directly with ``seek``/``read``. Valid UTF-8 never contains these
bytes inside a multi-byte sequence, so entries always decode cleanly.
"""

from __future__ import annotations

from enum import IntEnum

_LINE_BREAKS = frozenset(b"\r\n\f")
_PERCENT = ord("%")


class _State(IntEnum):
    TEXT = 0
    NEWLINE_BEFORE_PERCENT = 1
    PERCENT = 2
    NEWLINE_AFTER_PERCENT = 3


def tokenize_fortunes(data: bytes | bytearray | memoryview) -> tuple[list[int], list[int]]:
    """Return ``(offsets, lengths)`` of every fortune in *data*, in file order."""
    offsets: list[int] = []
    lengths: list[int] = []

    if not data:
        return offsets, lengths

    entry_start = 0
    newline_start = 0
    state = _State.TEXT

    for i, byte in enumerate(data):
        if byte in _LINE_BREAKS:
            if state is _State.TEXT:
                state = _State.NEWLINE_BEFORE_PERCENT
                newline_start = i
            elif state is _State.PERCENT:
                state = _State.NEWLINE_AFTER_PERCENT
        elif byte == _PERCENT:
            # A repeated "%" or one not preceded by a line break is text.
            if state in (_State.NEWLINE_BEFORE_PERCENT, _State.NEWLINE_AFTER_PERCENT):
                state = _State.PERCENT
        elif state is _State.NEWLINE_BEFORE_PERCENT:
            state = _State.TEXT
        elif state is _State.NEWLINE_AFTER_PERCENT:
            offsets.append(entry_start)
            lengths.append(newline_start - entry_start)
            entry_start = i
            state = _State.TEXT

    if state is _State.TEXT:
        offsets.append(entry_start)
        lengths.append(len(data) - entry_start)
    elif (
        state in (_State.NEWLINE_BEFORE_PERCENT, _State.NEWLINE_AFTER_PERCENT)
        and entry_start != newline_start
    ):
        offsets.append(entry_start)
        lengths.append(newline_start - entry_start)

    return offsets, lengths
