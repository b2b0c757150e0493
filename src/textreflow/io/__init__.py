"""Source and sink adapters plus argument translation.

:func:`make_source` and :func:`make_sink` accept the loose argument types the
engine's public API takes and wrap them in the matching adapter:

========================  ==========================================
argument                  adapter
========================  ==========================================
``Source`` / ``Sink``     returned unchanged
``bytes``-like            :class:`BufferSource` / :class:`BufferSink`
``str``                   UTF-8 encoded :class:`BufferSource`
``os.PathLike``           file contents in a :class:`BufferSource`
binary stream             :class:`StreamSource` / :class:`StreamSink`
text stream               its ``.buffer`` when present
========================  ==========================================

No content normalization happens here.  ``TypeError`` is raised for anything
else.
"""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Any

from .sinks import BufferSink, Sink, StreamSink
from .sources import BufferSource, Source, StreamSource


def make_source(obj: Any, *, resource_name: str | None = None) -> Source:
    """Return a :class:`Source` reading from ``obj``.

    Parameters
    ----------
    obj:
        Bytes-like object, string, path, binary or text stream, or an existing
        source.
    resource_name:
        Name reported by the source; defaults to the path or stream name when
        one is available.

    Raises
    ------
    TypeError
        If ``obj`` cannot be read from.
    """

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BufferSource(obj, resource_name=resource_name)
    if isinstance(obj, str):
        return BufferSource(obj.encode("utf-8"), resource_name=resource_name)
    if isinstance(obj, os.PathLike):
        path = Path(obj)
        return BufferSource(path.read_bytes(), resource_name=resource_name or str(path))
    if isinstance(obj, io.TextIOBase):
        buffer = getattr(obj, "buffer", None)
        if buffer is not None:
            return StreamSource(buffer, resource_name=resource_name)
        return BufferSource(obj.read().encode("utf-8"), resource_name=resource_name)
    if isinstance(obj, Source):
        return obj
    if hasattr(obj, "read"):
        return StreamSource(obj, resource_name=resource_name)
    raise TypeError(f"cannot read text from {type(obj).__name__}")


def make_sink(obj: Any) -> Sink:
    """Return a :class:`Sink` writing to ``obj``.

    A ``bytearray`` is appended to in place.  Text streams are written through
    their binary ``.buffer``.
    """

    if isinstance(obj, bytearray):
        return BufferSink(obj)
    if isinstance(obj, io.TextIOBase):
        buffer = getattr(obj, "buffer", None)
        if buffer is None:
            raise TypeError("text stream without a binary buffer")
        obj.flush()
        return StreamSink(buffer)
    if isinstance(obj, Sink):
        return obj
    if hasattr(obj, "write"):
        return StreamSink(obj)
    raise TypeError(f"cannot write text to {type(obj).__name__}")


__all__ = [
    "BufferSink",
    "BufferSource",
    "Sink",
    "Source",
    "StreamSink",
    "StreamSource",
    "make_sink",
    "make_source",
]
