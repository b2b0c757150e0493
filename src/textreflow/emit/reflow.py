"""Greedy word wrapping of normalized text.

:func:`reflow` writes text to a sink, inserting ``\\n`` so that lines stay
within ``width`` visible code points.  Lines are broken only at the last
space-like code point that fits; the space itself is dropped.  A word longer
than ``width`` is written unbroken.  Existing ``\\n`` characters are paragraph
breaks and always pass through.

Output is assembled one line at a time in an accumulator, so a multi-byte
code point is never split across lines.  No trailing newline is added.

Example
-------

>>> wrap_text(b"Hello world here I am.", 10)
b'Hello\\nworld here\\nI am.'
"""

from __future__ import annotations

from textreflow.io import BufferSink, Sink
from textreflow.utils.errors import ConfigurationError
from textreflow.utils.utf8 import byte_length, count_code_points, is_space_at

__all__ = ["reflow", "wrap_text"]

_LF = 0x0A


def reflow(text: bytes | bytearray | memoryview, sink: Sink, width: int) -> None:
    """Write ``text`` to ``sink`` wrapped at ``width`` code points."""

    if width < 1:
        raise ConfigurationError("wrap width must be a positive integer")

    data = memoryview(text)
    size = len(data)
    acc = bytearray()
    # offset in acc of the latest space-like code point; 0 means none
    last_break = 0
    chars = 0
    pos = 0
    while pos < size:
        c = data[pos]
        end = min(size, pos + byte_length(c))

        if c == _LF:
            acc.append(c)
            sink.write(bytes(acc))
            acc.clear()
            last_break = 0
            chars = 0
        elif is_space_at(data, pos):
            last_break = len(acc)
            acc += data[pos:end]
            chars += 1
        else:
            acc += data[pos:end]
            chars += 1
            if chars > width:
                if last_break == 0:
                    sink.write(bytes(acc))
                    acc.clear()
                    chars = 0
                else:
                    sink.write_slice(acc, 0, last_break)
                    sink.write_one(_LF)
                    del acc[: last_break + byte_length(acc[last_break])]
                    last_break = 0
                    chars = count_code_points(acc)
        pos = end

    if acc:
        sink.write(bytes(acc))


def wrap_text(text: bytes | bytearray | memoryview | str, width: int) -> bytes:
    """Return ``text`` wrapped at ``width``; strings are UTF-8 encoded first."""

    if isinstance(text, str):
        text = text.encode("utf-8")
    sink = BufferSink()
    reflow(text, sink, width)
    return sink.getvalue()
