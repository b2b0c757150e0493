"""UTF-8 lead-byte helpers shared by the normalizer, skip list and emitter.

Everything here is permissive: continuation bytes are never validated and a
truncated sequence at the end of input is simply shorter than its lead byte
announces.  Callers copy whatever bytes exist.

Space-like code points
----------------------
ASCII ``\\t \\n \\v \\f \\r`` and space, plus the multi-byte code points in
:data:`MULTIBYTE_SPACES`.  Classification looks at most two bytes past the
lead byte through a ``peek`` callable so that streaming sources are never
consumed while deciding.
"""

from __future__ import annotations

from typing import Callable, Final, Optional

__all__ = [
    "ASCII_SPACES",
    "MULTIBYTE_SPACES",
    "Peek",
    "byte_length",
    "count_code_points",
    "is_space",
    "is_space_at",
]

Peek = Callable[[int], Optional[int]]
"""``peek(n)`` returns the byte ``n`` positions past the lead byte or ``None``."""

ASCII_SPACES: Final[frozenset[int]] = frozenset({0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x20})

MULTIBYTE_SPACES: Final[frozenset[str]] = frozenset(
    {
        "\u0085",  # NEXT LINE
        "\u00a0",  # NO-BREAK SPACE
        "\u1680",  # OGHAM SPACE MARK
        "\u180e",  # MONGOLIAN VOWEL SEPARATOR
        *(chr(cp) for cp in range(0x2000, 0x200E)),  # EN QUAD .. ZERO WIDTH JOINER
        "\u2028",  # LINE SEPARATOR
        "\u2029",  # PARAGRAPH SEPARATOR
        "\u202f",  # NARROW NO-BREAK SPACE
        "\u205f",  # MEDIUM MATHEMATICAL SPACE
        "\u2060",  # WORD JOINER
        "\u3000",  # IDEOGRAPHIC SPACE
        "\ufeff",  # ZERO WIDTH NO-BREAK SPACE
    }
)

# lead byte -> set of continuation tails (1 or 2 bytes) that complete a space
_SPACE_TAILS: Final[dict[int, frozenset[bytes]]] = {}
for _ch in MULTIBYTE_SPACES:
    _encoded = _ch.encode("utf-8")
    _SPACE_TAILS[_encoded[0]] = _SPACE_TAILS.get(_encoded[0], frozenset()) | {_encoded[1:]}
del _ch, _encoded


def byte_length(lead: int) -> int:
    """Return the number of bytes announced by UTF-8 lead byte ``lead``."""

    return 1 + (lead >= 0xC0) + (lead >= 0xE0) + (lead >= 0xF0)


def is_space(lead: int, peek: Peek) -> bool:
    """Return ``True`` if the code point starting with ``lead`` is space-like.

    ``peek`` is only consulted for lead bytes that can start a multi-byte
    space, and never more than two bytes ahead.
    """

    if lead in ASCII_SPACES:
        return True
    tails = _SPACE_TAILS.get(lead)
    if tails is None:
        return False
    first = peek(1)
    if first is None:
        return False
    if lead == 0xC2:
        return bytes((first,)) in tails
    second = peek(2)
    if second is None:
        return False
    return bytes((first, second)) in tails


def is_space_at(data: bytes | bytearray | memoryview, pos: int) -> bool:
    """Classify the code point starting at ``data[pos]``."""

    size = len(data)

    def peek(n: int) -> int | None:
        idx = pos + n
        return data[idx] if idx < size else None

    return is_space(data[pos], peek)


def count_code_points(data: bytes | bytearray | memoryview) -> int:
    """Count code points in ``data`` by walking lead bytes."""

    count = 0
    pos = 0
    size = len(data)
    while pos < size:
        pos += byte_length(data[pos])
        count += 1
    return count
