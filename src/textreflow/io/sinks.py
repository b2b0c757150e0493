"""Push-based byte sinks.

:class:`BufferSink` collects output in memory; :class:`StreamSink` forwards
every write to a blocking binary stream.  Neither adapter buffers on its own
and write failures propagate to the caller.
"""

from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable

__all__ = ["Sink", "BufferSink", "StreamSink"]


@runtime_checkable
class Sink(Protocol):
    """Protocol implemented by byte sinks fed by the emitter."""

    def write(self, data: bytes | bytearray | memoryview) -> None:
        ...

    def write_slice(self, data: bytes | bytearray | memoryview, start: int, length: int) -> None:
        """Write ``data[start:start + length]``."""
        ...

    def write_one(self, byte: int) -> None:
        ...

    def current_offset(self) -> int:
        """Number of bytes written so far."""
        ...


class BufferSink:
    """Sink appending to a ``bytearray``."""

    def __init__(self, buffer: bytearray | None = None) -> None:
        self._buf = buffer if buffer is not None else bytearray()

    def write(self, data: bytes | bytearray | memoryview) -> None:
        self._buf += data

    def write_slice(self, data: bytes | bytearray | memoryview, start: int, length: int) -> None:
        self._buf += memoryview(data)[start : start + length]

    def write_one(self, byte: int) -> None:
        self._buf.append(byte)

    def current_offset(self) -> int:
        return len(self._buf)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class StreamSink:
    """Sink writing through to a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._written = 0

    def write(self, data: bytes | bytearray | memoryview) -> None:
        self._stream.write(data)
        self._written += len(data)

    def write_slice(self, data: bytes | bytearray | memoryview, start: int, length: int) -> None:
        self.write(memoryview(data)[start : start + length])

    def write_one(self, byte: int) -> None:
        self.write(bytes((byte,)))

    def current_offset(self) -> int:
        return self._written

    def flush(self) -> None:
        self._stream.flush()
