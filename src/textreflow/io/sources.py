"""Pull-based byte sources.

A source hands out bytes one at a time with bounded lookahead, or in chunks.
Two adapters are provided:

* :class:`BufferSource` over any bytes-like object held in memory.
* :class:`StreamSource` over a blocking binary stream (files, pipes,
  ``sys.stdin.buffer``).  Only the bytes needed for lookahead are held beyond
  the current read position.

Reading past the end with :meth:`~Source.read_one` or :meth:`~Source.peek`
raises :class:`EOFError`; the ``try_`` variants return ``None`` instead and
:meth:`~Source.advance` silently stops at the end.  Errors raised by the
underlying stream propagate unchanged.
"""

from __future__ import annotations

import io
from typing import BinaryIO, Optional, Protocol, runtime_checkable

__all__ = ["Source", "BufferSource", "StreamSource"]

_READ_SIZE = 64 * 1024


@runtime_checkable
class Source(Protocol):
    """Protocol implemented by byte sources consumed by the engine."""

    def read_one(self) -> int:
        """Consume and return the next byte."""
        ...

    def try_read_one(self) -> Optional[int]:
        """Consume and return the next byte, or ``None`` at the end."""
        ...

    def peek(self) -> int:
        """Return the next byte without consuming it."""
        ...

    def try_peek(self) -> Optional[int]:
        ...

    def peek_ahead(self, n: int) -> int:
        """Return the byte ``n`` positions after the next unread byte."""
        ...

    def try_peek_ahead(self, n: int) -> Optional[int]:
        ...

    def read_chunk(self, max_len: Optional[int] = None) -> bytes:
        """Consume up to ``max_len`` bytes (everything when ``None``)."""
        ...

    def is_at_end(self) -> bool:
        ...

    def current_offset(self) -> int:
        """Number of bytes consumed so far."""
        ...

    def remaining_length(self) -> Optional[int]:
        ...

    def total_length(self) -> Optional[int]:
        ...

    def advance(self, n: int = 1) -> None:
        ...

    def resource_name(self) -> Optional[str]:
        ...


class BufferSource:
    """Source over an in-memory buffer."""

    def __init__(
        self,
        data: bytes | bytearray | memoryview,
        *,
        resource_name: str | None = None,
    ) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._name = resource_name

    def read_one(self) -> int:
        if self._pos >= len(self._data):
            raise EOFError("read past end of source")
        byte = self._data[self._pos]
        self._pos += 1
        return byte

    def try_read_one(self) -> int | None:
        if self._pos >= len(self._data):
            return None
        byte = self._data[self._pos]
        self._pos += 1
        return byte

    def peek(self) -> int:
        return self.peek_ahead(0)

    def try_peek(self) -> int | None:
        return self.try_peek_ahead(0)

    def peek_ahead(self, n: int) -> int:
        byte = self.try_peek_ahead(n)
        if byte is None:
            raise EOFError("peek past end of source")
        return byte

    def try_peek_ahead(self, n: int) -> int | None:
        idx = self._pos + n
        if idx >= len(self._data):
            return None
        return self._data[idx]

    def read_chunk(self, max_len: int | None = None) -> bytes:
        end = len(self._data) if max_len is None else min(len(self._data), self._pos + max_len)
        chunk = self._data[self._pos : end]
        self._pos = end
        return chunk

    def is_at_end(self) -> bool:
        return self._pos >= len(self._data)

    def current_offset(self) -> int:
        return self._pos

    def remaining_length(self) -> int | None:
        return len(self._data) - self._pos

    def total_length(self) -> int | None:
        return len(self._data)

    def advance(self, n: int = 1) -> None:
        self._pos = min(len(self._data), self._pos + n)

    def resource_name(self) -> str | None:
        return self._name

    def set_resource_name(self, name: str | None) -> None:
        self._name = name


class StreamSource:
    """Source over a blocking binary stream.

    ``total_length`` and ``remaining_length`` are only known for seekable
    streams; they are measured once from the position the stream had when the
    source was created.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        resource_name: str | None = None,
        read_size: int = _READ_SIZE,
    ) -> None:
        self._stream = stream
        self._read_size = read_size
        self._buf = bytearray()
        self._pos = 0
        self._consumed = 0
        self._eof = False
        if resource_name is None:
            name = getattr(stream, "name", None)
            resource_name = name if isinstance(name, str) else None
        self._name = resource_name
        self._total = self._measure()

    def _measure(self) -> int | None:
        try:
            if not self._stream.seekable():
                return None
            start = self._stream.tell()
            end = self._stream.seek(0, io.SEEK_END)
            self._stream.seek(start)
        except (AttributeError, OSError, io.UnsupportedOperation):
            return None
        return end - start

    def _fill(self, need: int) -> bool:
        """Buffer at least ``need`` unread bytes; return ``False`` if impossible."""

        while len(self._buf) - self._pos < need:
            if self._eof:
                return False
            chunk = self._stream.read(self._read_size)
            if not chunk:
                self._eof = True
                return False
            if self._pos:
                del self._buf[: self._pos]
                self._pos = 0
            self._buf += chunk
        return True

    def read_one(self) -> int:
        byte = self.try_read_one()
        if byte is None:
            raise EOFError("read past end of source")
        return byte

    def try_read_one(self) -> int | None:
        if not self._fill(1):
            return None
        byte = self._buf[self._pos]
        self._pos += 1
        self._consumed += 1
        return byte

    def peek(self) -> int:
        return self.peek_ahead(0)

    def try_peek(self) -> int | None:
        return self.try_peek_ahead(0)

    def peek_ahead(self, n: int) -> int:
        byte = self.try_peek_ahead(n)
        if byte is None:
            raise EOFError("peek past end of source")
        return byte

    def try_peek_ahead(self, n: int) -> int | None:
        if not self._fill(n + 1):
            return None
        return self._buf[self._pos + n]

    def read_chunk(self, max_len: int | None = None) -> bytes:
        end = len(self._buf) if max_len is None else min(len(self._buf), self._pos + max_len)
        out = bytearray(self._buf[self._pos : end])
        self._pos = end
        while not self._eof and (max_len is None or len(out) < max_len):
            want = self._read_size if max_len is None else max_len - len(out)
            chunk = self._stream.read(want)
            if not chunk:
                self._eof = True
                break
            out += chunk
        self._consumed += len(out)
        return bytes(out)

    def is_at_end(self) -> bool:
        return not self._fill(1)

    def current_offset(self) -> int:
        return self._consumed

    def remaining_length(self) -> int | None:
        if self._total is None:
            return None
        return max(0, self._total - self._consumed)

    def total_length(self) -> int | None:
        return self._total

    def advance(self, n: int = 1) -> None:
        for _ in range(n):
            if self.try_read_one() is None:
                break

    def resource_name(self) -> str | None:
        return self._name

    def set_resource_name(self, name: str | None) -> None:
        self._name = name
