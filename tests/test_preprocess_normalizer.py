"""Tests for streaming text normalization."""

from __future__ import annotations

import io

import pytest

from textreflow.io import BufferSource, StreamSource
from textreflow.locate import Position, Profile
from textreflow.preprocess.normalizer import normalize
from textreflow.utils.errors import ConfigurationError


def _lc(line: int, char: int) -> Position:
    return Position(line=line, char_offset=char)


def test_noop_is_bulk_copy() -> None:
    text = b"a\r\nb  c\rd"
    result = normalize(text)
    assert result.text == text
    assert result.changed is False
    assert len(result.index) == 0


def test_glue_single_break_becomes_space() -> None:
    assert normalize(b"Hello\nWorld", glue_lines=True).text == b"Hello World"


def test_glue_keeps_paragraph_break() -> None:
    assert normalize(b"Hello\n\nWorld", glue_lines=True).text == b"Hello\nWorld"


@pytest.mark.parametrize("breaks", [b"\n\n\n", b"\n\n\n\n", b"\r\n\r\n\r\n"])
def test_glue_collapses_long_break_runs(breaks: bytes) -> None:
    assert normalize(b"a" + breaks + b"b", glue_lines=True).text == b"a\nb"


def test_glue_with_crlf() -> None:
    result = normalize(b"one\r\ntwo\r\n\r\nthree", glue_lines=True)
    assert result.text == b"one two\nthree"
    assert result.changed is True


def test_glue_drops_trailing_single_break() -> None:
    assert normalize(b"abc\n", glue_lines=True).text == b"abc"
    assert normalize(b"abc\n\n", glue_lines=True).text == b"abc\n"


def test_fold_keeps_first_space() -> None:
    assert normalize(b"Hello  world", fold_whitespace=True).text == b"Hello world"
    text = "a\u3000 \t\u00a0b".encode("utf-8")
    assert normalize(text, fold_whitespace=True).text == "a\u3000b".encode("utf-8")


def test_fold_runs_end_at_line_breaks() -> None:
    assert normalize(b"a \n b", fold_whitespace=True).text == b"a \n b"


def test_fold_wins_over_glue() -> None:
    assert normalize(b"a \nb", fold_whitespace=True, glue_lines=True).text == b"a b"
    assert normalize(b"a\n  b", fold_whitespace=True, glue_lines=True).text == b"a b"


def test_glue_without_fold_keeps_both_spaces() -> None:
    assert normalize(b"a \nb", glue_lines=True).text == b"a  b"


def test_tracking_canonicalizes_newlines() -> None:
    result = normalize(b"a\r\nb\rc", track_position=True)
    assert result.text == b"a\nb\nc"
    assert result.changed is True
    assert result.index.checkpoints() == {2: _lc(2, 1), 4: _lc(3, 1)}


def test_tracking_without_changes() -> None:
    result = normalize(b"plain\ntext", track_position=True)
    assert result.text == b"plain\ntext"
    assert result.changed is False


def test_glued_positions() -> None:
    result = normalize("abc\n\u00e2bc", track_position=True, glue_lines=True)
    assert result.text == "abc \u00e2bc".encode("utf-8")
    assert result.locate(0) == _lc(1, 1)
    assert result.locate(3) == _lc(1, 4)
    assert result.locate(4) == _lc(2, 1)
    assert result.locate(6) == _lc(2, 2)


def test_paragraph_break_positions() -> None:
    result = normalize(b"Hello\n\nWorld", track_position=True, glue_lines=True)
    assert result.locate(6) == _lc(3, 1)
    assert result.locate(8) == _lc(3, 3)


def test_folded_positions() -> None:
    result = normalize(b"ab   cd\n  e", track_position=True, fold_whitespace=True)
    assert result.text == b"ab cd\n e"
    assert result.locate(2) == _lc(1, 3)
    assert result.locate(3) == _lc(1, 6)
    assert result.locate(4) == _lc(1, 7)
    assert result.locate(6) == _lc(2, 1)
    assert result.locate(7) == _lc(2, 3)


def test_fold_and_glue_positions() -> None:
    result = normalize(b"a \nb", track_position=True, fold_whitespace=True, glue_lines=True)
    assert result.text == b"a b"
    assert result.locate(1) == _lc(1, 2)
    assert result.locate(2) == _lc(2, 1)


def test_checkpoints_round_trip() -> None:
    source = b"one  two\nthree\n\n four\r\nfive\tsix"
    result = normalize(source, track_position=True, fold_whitespace=True, glue_lines=True)
    assert len(result.index) > 0
    for offset, position in result.index:
        assert result.locate(offset) == position


def test_resource_name_in_checkpoints() -> None:
    src = BufferSource(b"a\nb", resource_name="doc.txt")
    result = normalize(src, track_position=True, profile=Profile.LINE_CHAR_AND_RESOURCE)
    assert result.locate(2) == Position(line=2, char_offset=1, resource_name="doc.txt")
    assert result.locate(0).resource_name == "doc.txt"


def test_stream_and_buffer_agree() -> None:
    data = "x  y\nz\n\n\u00e9\u3000\u3000w\r\n".encode("utf-8")
    flags = {"track_position": True, "fold_whitespace": True, "glue_lines": True}
    from_buffer = normalize(BufferSource(data), **flags)
    from_stream = normalize(StreamSource(io.BytesIO(data), read_size=3), **flags)
    assert from_stream.text == from_buffer.text
    assert from_stream.index.checkpoints() == from_buffer.index.checkpoints()


def test_malformed_utf8_passes_through() -> None:
    data = b"\xff\xfe a\x80 \xc3"
    result = normalize(data, fold_whitespace=True, track_position=True)
    assert result.text == data


def test_tracking_requires_line_profile() -> None:
    with pytest.raises(ConfigurationError):
        normalize(b"x", track_position=True, profile=Profile.BYTE_ONLY)
    with pytest.raises(ConfigurationError):
        normalize(b"x", track_position=True, profile=Profile.NONE)


def test_idempotent_newline_canonicalization() -> None:
    once = normalize(b"a\r\nb\r\rc\n", track_position=True).text
    assert normalize(once, track_position=True).text == once
