"""Tests for byte sources, sinks and argument translation."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from textreflow.io import (
    BufferSink,
    BufferSource,
    StreamSink,
    StreamSource,
    make_sink,
    make_source,
)


class _Pipe(io.BytesIO):
    """A stream that cannot seek, like a pipe."""

    def seekable(self) -> bool:
        return False


def test_buffer_source_reads_and_peeks() -> None:
    src = BufferSource(b"abc")
    assert src.peek() == ord("a")
    assert src.peek_ahead(2) == ord("c")
    assert src.try_peek_ahead(3) is None
    assert src.read_one() == ord("a")
    assert src.current_offset() == 1
    assert src.remaining_length() == 2
    assert src.total_length() == 3
    assert src.read_chunk(10) == b"bc"
    assert src.is_at_end() is True
    assert src.try_read_one() is None
    assert src.try_peek() is None


def test_buffer_source_eof_errors() -> None:
    src = BufferSource(b"")
    with pytest.raises(EOFError):
        src.read_one()
    with pytest.raises(EOFError):
        src.peek()


def test_buffer_source_advance_stops_at_end() -> None:
    src = BufferSource(b"abc", resource_name="mem")
    src.advance(10)
    assert src.is_at_end() is True
    assert src.current_offset() == 3
    assert src.resource_name() == "mem"


def test_stream_source_lookahead_across_refills() -> None:
    src = StreamSource(io.BytesIO(b"abcdef"), read_size=2)
    assert src.peek_ahead(3) == ord("d")
    assert src.read_one() == ord("a")
    assert src.read_chunk(3) == b"bcd"
    assert src.current_offset() == 4
    assert src.remaining_length() == 2
    assert src.read_chunk(None) == b"ef"
    assert src.is_at_end() is True
    with pytest.raises(EOFError):
        src.read_one()


def test_stream_source_read_everything() -> None:
    src = StreamSource(io.BytesIO(b"x" * 10_000), read_size=7)
    src.advance(3)
    assert src.read_chunk() == b"x" * 9_997
    assert src.current_offset() == 10_000


def test_stream_source_unknown_length_for_pipes() -> None:
    src = StreamSource(_Pipe(b"abc"))
    assert src.total_length() is None
    assert src.remaining_length() is None
    assert src.read_chunk() == b"abc"


def test_stream_source_takes_file_name(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_bytes(b"data")
    with path.open("rb") as fh:
        src = StreamSource(fh)
        assert src.resource_name() == str(path)
        assert src.total_length() == 4


def test_make_source_variants(tmp_path: Path) -> None:
    path = tmp_path / "doc.txt"
    path.write_bytes(b"from file")
    assert make_source(b"abc").read_chunk() == b"abc"
    assert make_source(bytearray(b"abc")).read_chunk() == b"abc"
    assert make_source("\u00e2").read_chunk() == b"\xc3\xa2"
    from_path = make_source(path)
    assert from_path.resource_name() == str(path)
    assert from_path.read_chunk() == b"from file"
    assert make_source(io.BytesIO(b"stream")).read_chunk() == b"stream"
    assert make_source(io.StringIO("text")).read_chunk() == b"text"
    existing = BufferSource(b"x")
    assert make_source(existing) is existing


def test_make_source_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        make_source(tmp_path / "missing.txt")


def test_make_source_rejects_unknown_types() -> None:
    with pytest.raises(TypeError):
        make_source(42)


def test_buffer_sink() -> None:
    sink = BufferSink()
    sink.write(b"ab")
    sink.write_slice(b"xcdx", 1, 2)
    sink.write_one(ord("e"))
    assert sink.getvalue() == b"abcde"
    assert sink.current_offset() == 5


def test_stream_sink_counts_bytes() -> None:
    stream = io.BytesIO()
    sink = StreamSink(stream)
    sink.write(b"ab")
    sink.write_slice(bytearray(b"_cd_"), 1, 2)
    sink.write_one(0x0A)
    sink.flush()
    assert stream.getvalue() == b"abcd\n"
    assert sink.current_offset() == 5


def test_make_sink_variants() -> None:
    buf = bytearray(b">")
    make_sink(buf).write(b"x")
    assert buf == b">x"
    stream = io.BytesIO()
    make_sink(stream).write(b"y")
    assert stream.getvalue() == b"y"
    wrapper = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    make_sink(wrapper).write(b"z")
    assert wrapper.buffer.getvalue() == b"z"  # type: ignore[attr-defined]
    with pytest.raises(TypeError):
        make_sink(io.StringIO())
    with pytest.raises(TypeError):
        make_sink(3.5)
