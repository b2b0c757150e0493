"""Position values and the capability profiles that shape them.

A :class:`Profile` fixes which fields an engine tracks.  Every
:class:`Position` produced by that engine has exactly those fields set; the
others stay ``None``.  ``line`` and ``char_offset`` are 1-based,
``byte_offset`` is 0-based into the normalized text.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

__all__ = ["Profile", "Position", "initial_position"]


class Profile(Enum):
    """Capability profile of an engine's positions."""

    NONE = "none"
    BYTE_ONLY = "byte_only"
    BYTE_AND_CHAR = "byte_and_char"
    LINE_AND_CHAR = "line_and_char"
    LINE_CHAR_AND_RESOURCE = "line_char_and_resource"

    @property
    def has_byte_offset(self) -> bool:
        return self in (Profile.BYTE_ONLY, Profile.BYTE_AND_CHAR)

    @property
    def has_char_offset(self) -> bool:
        return self in (Profile.BYTE_AND_CHAR, Profile.LINE_AND_CHAR, Profile.LINE_CHAR_AND_RESOURCE)

    @property
    def has_line(self) -> bool:
        return self in (Profile.LINE_AND_CHAR, Profile.LINE_CHAR_AND_RESOURCE)

    @property
    def has_resource_name(self) -> bool:
        return self is Profile.LINE_CHAR_AND_RESOURCE

    @property
    def has_skip_list(self) -> bool:
        """Whether positions can be recorded while normalizing."""

        return self.has_line and self.has_char_offset


@dataclass(slots=True, frozen=True)
class Position:
    """A location in the source text.

    Attributes
    ----------
    byte_offset:
        Offset into the normalized text, for byte-tracking profiles.
    char_offset:
        1-based code point column within the current line.
    line:
        1-based source line.
    resource_name:
        Name of the source (usually a path), for resource-tracking profiles.
    """

    byte_offset: int | None = None
    char_offset: int | None = None
    line: int | None = None
    resource_name: str | None = None

    @classmethod
    def make(
        cls,
        profile: Profile,
        *,
        byte_offset: int = 0,
        char_offset: int = 1,
        line: int = 1,
        resource_name: str | None = None,
    ) -> Position:
        """Build a position holding only the fields ``profile`` tracks."""

        return cls(
            byte_offset=byte_offset if profile.has_byte_offset else None,
            char_offset=char_offset if profile.has_char_offset else None,
            line=line if profile.has_line else None,
            resource_name=resource_name if profile.has_resource_name else None,
        )

    def with_fields(self, **changes: int | str | None) -> Position:
        """Return a copy with ``changes`` applied to fields that are present."""

        kept = {key: value for key, value in changes.items() if getattr(self, key) is not None}
        return replace(self, **kept) if kept else self


def initial_position(profile: Profile, resource_name: str | None = None) -> Position:
    """Return the position of the first byte: line 1, char 1, byte 0."""

    return Position.make(profile, resource_name=resource_name)
