"""Sparse position index ("skip list") for normalized text.

Normalization may drop or rewrite source bytes (folded whitespace, glued line
breaks, ``\\r\\n`` pairs), so offsets in the normalized text no longer line up
with source lines and columns.  Rather than storing a position for every
character, :class:`PositionIndex` keeps *checkpoints* only where the mapping
changes: after each emitted or glued line break and where a folded whitespace
run ends.  Any other offset is resolved by :func:`replay`, which starts at the
nearest checkpoint at or before the offset and walks the normalized text
forward, counting code points and line breaks.

Between two checkpoints the normalized text and the source advance in step, so
the replay is exact for every offset that starts a code point.  An offset that
falls inside a multi-byte code point, or past the end of the text, has the
remaining byte delta added to ``char_offset`` as is.

Offsets are inserted in increasing order by construction, which lets the index
be two parallel lists searched with :func:`bisect.bisect_right`.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterator

from textreflow.utils.utf8 import byte_length

from .positions import Position, Profile, initial_position

__all__ = ["PositionIndex", "replay"]

_LF = 0x0A
_CR = 0x0D


def replay(
    text: bytes | bytearray | memoryview,
    start: int,
    position: Position,
    offset: int,
) -> Position:
    """Advance ``position`` located at ``start`` through ``text`` up to ``offset``.

    ``\\n`` and ``\\r`` each start a new line, except that the second byte of a
    ``\\r\\n`` or ``\\n\\r`` pair does not count again.  Every other code point
    moves the column by one.
    """

    line = position.line if position.line is not None else 1
    char = position.char_offset if position.char_offset is not None else 1
    pos = start
    size = len(text)
    prev_break: int | None = None
    while pos < offset and pos < size:
        c = text[pos]
        pos += byte_length(c)
        if c == _LF or c == _CR:
            if prev_break is not None and prev_break != c:
                prev_break = None
                continue
            line += 1
            char = 1
            prev_break = c
        else:
            char += 1
            prev_break = None

    if pos != offset:
        char += offset - pos

    return position.with_fields(byte_offset=offset, line=line, char_offset=char)


class PositionIndex:
    """Ordered checkpoints mapping normalized offsets to positions."""

    def __init__(self, profile: Profile, *, resource_name: str | None = None) -> None:
        self.profile = profile
        self.initial = initial_position(profile, resource_name)
        self._offsets: list[int] = []
        self._positions: list[Position] = []

    def __len__(self) -> int:
        return len(self._offsets)

    def __iter__(self) -> Iterator[tuple[int, Position]]:
        return iter(zip(self._offsets, self._positions, strict=True))

    def __repr__(self) -> str:
        return f"PositionIndex(profile={self.profile.name}, checkpoints={len(self)})"

    def checkpoints(self) -> dict[int, Position]:
        """Return a snapshot of all checkpoints keyed by offset."""

        return dict(self)

    def insert(self, offset: int, position: Position) -> None:
        """Record ``position`` at normalized ``offset``.

        Offsets must not decrease.  Inserting again at the most recent offset
        replaces that checkpoint.
        """

        if self._offsets:
            last = self._offsets[-1]
            if offset == last:
                self._positions[-1] = position
                return
            if offset < last:
                raise ValueError(f"checkpoint offset {offset} precedes {last}")
        self._offsets.append(offset)
        self._positions.append(position)

    def floor(self, offset: int) -> tuple[int, Position] | None:
        """Return the checkpoint with the greatest offset ``<= offset``."""

        idx = bisect_right(self._offsets, offset) - 1
        if idx < 0:
            return None
        return self._offsets[idx], self._positions[idx]

    def query(self, offset: int, text: bytes | bytearray | memoryview) -> Position:
        """Return the exact position of normalized ``offset`` within ``text``."""

        if offset < 0:
            raise ValueError("offset must be non-negative")
        found = self.floor(offset)
        if found is None:
            start, position = 0, self.initial
        else:
            start, position = found
            if start == offset:
                return position
        return replay(text, start, position, offset)
