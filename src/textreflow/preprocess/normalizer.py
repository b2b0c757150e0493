"""Streaming text normalization with sparse position tracking.

:func:`normalize` reads raw UTF-8 bytes from a source in a single pass and
produces the normalized text.  Three independent switches control the
transform:

``fold_whitespace``
    A run of space-like code points (see :mod:`textreflow.utils.utf8`) other
    than line breaks collapses to its first code point.
``glue_lines``
    A single line break between two lines becomes one space.  Two or more
    consecutive breaks become exactly one ``\\n`` (a paragraph break).  A
    single break directly after a folded whitespace run disappears, since the
    run already provides the separating space.
``track_position``
    Checkpoints are recorded in a :class:`~textreflow.locate.PositionIndex`
    so that offsets into the normalized text can be mapped back to source
    lines and columns.

Whenever any switch is on, ``\\r\\n`` and lone ``\\r`` are written as ``\\n``.
With every switch off the remaining input is copied in one chunk and returned
untouched.

Malformed UTF-8 is never an error: a lead byte is copied together with however
many continuation bytes it announces, or fewer at the end of input.

Example
-------

>>> normalize(b"Hello\\nWorld", glue_lines=True).text
b'Hello World'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from textreflow.io import Source, make_source
from textreflow.locate import Position, PositionIndex, Profile
from textreflow.utils.errors import ConfigurationError
from textreflow.utils.logging import get_logger
from textreflow.utils.utf8 import byte_length, is_space

__all__ = ["NormalizationResult", "normalize"]

logger = get_logger(__name__)

_LF = 0x0A
_CR = 0x0D
_SPACE = 0x20


@dataclass(slots=True, frozen=True)
class NormalizationResult:
    """Result of :func:`normalize`.

    Attributes
    ----------
    text:
        The normalized UTF-8 bytes.
    index:
        Checkpoints recorded while normalizing.  Empty unless
        ``track_position`` was requested.
    changed:
        ``True`` if any input byte was dropped or rewritten.
    """

    text: bytes
    index: PositionIndex
    changed: bool

    def locate(self, offset: int) -> Position:
        """Resolve normalized ``offset`` through :attr:`index`."""

        return self.index.query(offset, self.text)


class _Normalizer:
    """Mutable state of one normalization pass."""

    def __init__(
        self,
        src: Source,
        *,
        track_position: bool,
        fold_whitespace: bool,
        glue_lines: bool,
        profile: Profile,
    ) -> None:
        self.src = src
        self.track = track_position
        self.fold = fold_whitespace
        self.glue = glue_lines
        self.profile = profile
        self.resource_name = src.resource_name()
        self.index = PositionIndex(profile, resource_name=self.resource_name)
        self.out = bytearray()
        self.changed = False
        self.line = 1
        self.char = 1
        # consecutive source line breaks since the last other code point
        self.pending = 0
        # a folded whitespace run is open
        self.has_space = False

    def _peek(self, n: int) -> int | None:
        return self.src.try_peek_ahead(n - 1)

    def _checkpoint(self) -> None:
        if not self.track:
            return
        offset = len(self.out)
        self.index.insert(
            offset,
            Position.make(
                self.profile,
                byte_offset=offset,
                line=self.line,
                char_offset=self.char,
                resource_name=self.resource_name,
            ),
        )

    def _new_line(self) -> None:
        self.line += 1
        self.char = 1
        self._checkpoint()

    def _emit_break(self) -> None:
        self.out.append(_LF)
        self.has_space = False
        self._new_line()

    def _copy(self, lead: int) -> None:
        self.out.append(lead)
        extra = byte_length(lead) - 1
        if extra:
            self.out += self.src.read_chunk(extra)

    def _skip(self, lead: int) -> None:
        self.src.advance(byte_length(lead) - 1)
        self.changed = True

    def _line_break(self, c: int) -> None:
        if c == _CR:
            self.changed = True
            if self.src.try_peek() == _LF:
                self.src.advance(1)

        if not self.glue:
            self._emit_break()
            return

        if self.pending == 0:
            # deferred: becomes a space, nothing, or part of a paragraph break
            self.changed = True
        elif self.pending == 1:
            self.line += 1
            self._emit_break()
        else:
            self._new_line()
        self.pending += 1

    def _resolve_pending(self, space: bool) -> None:
        if self.pending == 1:
            if not self.has_space:
                self.out.append(_SPACE)
            self._new_line()
            self.has_space = space
        self.pending = 0

    def run(self) -> NormalizationResult:
        src = self.src
        while True:
            c = src.try_read_one()
            if c is None:
                break

            newline = c == _LF or c == _CR
            space = self.fold and not newline and is_space(c, self._peek)

            if not newline:
                self._resolve_pending(space)
                if not space and self.has_space:
                    self._checkpoint()
                    self.has_space = False

            if newline:
                self._line_break(c)
            elif space:
                if self.has_space:
                    self._skip(c)
                else:
                    self._copy(c)
                self.char += 1
                self.has_space = True
            else:
                self._copy(c)
                self.char += 1

        return NormalizationResult(bytes(self.out), self.index, self.changed)


def normalize(
    source: Any,
    *,
    track_position: bool = False,
    fold_whitespace: bool = False,
    glue_lines: bool = False,
    profile: Profile = Profile.LINE_AND_CHAR,
) -> NormalizationResult:
    """Normalize ``source`` and return a :class:`NormalizationResult`.

    Parameters
    ----------
    source:
        Anything accepted by :func:`textreflow.io.make_source`.
    track_position:
        Record checkpoints for offset-to-position queries.  Requires a
        ``profile`` with line and column fields.
    fold_whitespace:
        Collapse runs of space-like code points to their first member.
    glue_lines:
        Join single line breaks with a space, keep paragraph breaks.
    profile:
        Shape of the recorded positions.

    Raises
    ------
    ConfigurationError
        If ``track_position`` is requested for a profile without a skip list.
    """

    if track_position and not profile.has_skip_list:
        raise ConfigurationError(f"profile {profile.value!r} cannot track positions")

    src = make_source(source)

    if not (track_position or fold_whitespace or glue_lines):
        text = src.read_chunk(None)
        index = PositionIndex(profile, resource_name=src.resource_name())
        logger.debug("bulk copied %d bytes", len(text))
        return NormalizationResult(text, index, False)

    result = _Normalizer(
        src,
        track_position=track_position,
        fold_whitespace=fold_whitespace,
        glue_lines=glue_lines,
        profile=profile,
    ).run()
    logger.debug(
        "normalized %d -> %d bytes (fold=%s glue=%s), %d checkpoints",
        src.current_offset(),
        len(result.text),
        fold_whitespace,
        glue_lines,
        len(result.index),
    )
    return result
