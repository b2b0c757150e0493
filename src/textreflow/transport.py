"""Text transport: a configured engine for parsing, locating and emitting text.

A :class:`TextTransport` binds a :class:`~textreflow.config.TextSettings`
value.  Each capability toggle is either fixed (``yes``/``no``) when the
transport is built, or left ``runtime`` and switched with the matching setter
between operations.  A runtime flag is read once when an operation starts.

Typical use::

    transport = TextTransport(TextSettings(glue_lines="yes", word_wrap="yes", wrap_width=72))
    parsed = transport.parse(path)
    transport.emit(parsed, sys.stdout.buffer)
    transport.locate(parsed, 120)

Settings are checked at construction: a profile that has no line and column
fields cannot track positions, and setting a fixed toggle raises
:class:`~textreflow.utils.errors.ConfigurationError`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Callable

from textreflow.config import ConfigModel, TextSettings, Toggle
from textreflow.emit import reflow
from textreflow.io import make_sink, make_source
from textreflow.locate import Position, Profile, replay
from textreflow.preprocess import NormalizationResult, normalize
from textreflow.utils.errors import ConfigurationError
from textreflow.utils.logging import get_logger

__all__ = ["TextTransport", "default_transport"]

logger = get_logger(__name__)

_CAPABILITIES = ("track_position", "fold_whitespace", "glue_lines", "word_wrap")

# initial values of runtime flags
_RUNTIME_DEFAULTS = {
    "track_position": False,
    "fold_whitespace": True,
    "glue_lines": True,
    "word_wrap": True,
}

Locator = Callable[[NormalizationResult, int], Position]


def _locate_nothing(parsed: NormalizationResult, offset: int) -> Position:
    return Position()


def _locate_byte(parsed: NormalizationResult, offset: int) -> Position:
    return Position(byte_offset=offset)


def _locate_from_start(parsed: NormalizationResult, offset: int) -> Position:
    return replay(parsed.text, 0, parsed.index.initial, offset)


def _locate_indexed(parsed: NormalizationResult, offset: int) -> Position:
    return parsed.index.query(offset, parsed.text)


def _pick_locator(profile: Profile) -> Locator:
    if profile is Profile.NONE:
        return _locate_nothing
    if profile is Profile.BYTE_ONLY:
        return _locate_byte
    if not profile.has_skip_list:
        return _locate_from_start
    return _locate_indexed


class TextTransport:
    """Engine normalizing text, answering position queries and reflowing output."""

    def __init__(self, settings: TextSettings | None = None, **overrides: Any) -> None:
        if settings is None:
            settings = TextSettings()
        if overrides:
            settings = TextSettings.model_validate({**settings.model_dump(), **overrides})
        if settings.track_position is not Toggle.NO and not settings.profile.has_skip_list:
            raise ConfigurationError(
                f"profile {settings.profile.value!r} has no line/char fields to track positions"
            )
        self.settings = settings
        self.profile = settings.profile
        self._wrap_width: int = settings.wrap_width
        self._fixed: dict[str, bool] = {}
        self._runtime: dict[str, bool] = {}
        for name in _CAPABILITIES:
            toggle: Toggle = getattr(settings, name)
            if toggle is Toggle.RUNTIME:
                self._runtime[name] = _RUNTIME_DEFAULTS[name]
            else:
                self._fixed[name] = toggle is Toggle.YES
        self._locate = _pick_locator(settings.profile)
        logger.debug("built transport fixed=%s runtime=%s", self._fixed, sorted(self._runtime))

    @classmethod
    def from_config(cls, cfg: ConfigModel) -> TextTransport:
        return cls(cfg.text)

    def __repr__(self) -> str:
        flags = ", ".join(f"{name}={self.flag(name)}" for name in _CAPABILITIES)
        return f"TextTransport(profile={self.profile.name}, {flags}, wrap_width={self._wrap_width})"

    # ------------------------------------------------------------------
    # Toggles
    # ------------------------------------------------------------------

    def flag(self, name: str) -> bool:
        """Return the current value of capability ``name``."""

        if name in self._fixed:
            return self._fixed[name]
        return self._runtime[name]

    def _set_runtime(self, name: str, value: bool) -> None:
        if name not in self._runtime:
            toggle: Toggle = getattr(self.settings, name)
            raise ConfigurationError(f"{name} is fixed to {toggle.value!r}")
        self._runtime[name] = bool(value)

    def set_skip_list(self, value: bool) -> None:
        """Switch position tracking for later :meth:`parse` calls."""

        self._set_runtime("track_position", value)

    def set_folding(self, value: bool) -> None:
        self._set_runtime("fold_whitespace", value)

    def set_glue(self, value: bool) -> None:
        self._set_runtime("glue_lines", value)

    def set_word_wrap(self, value: bool) -> None:
        self._set_runtime("word_wrap", value)

    @property
    def wrap_width(self) -> int:
        return self._wrap_width

    def set_wrap_width(self, width: int) -> None:
        if isinstance(width, bool) or not isinstance(width, int) or width < 1:
            raise ConfigurationError("wrap width must be a positive integer")
        self._wrap_width = width

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def parse(self, source: Any, *, resource_name: str | None = None) -> NormalizationResult:
        """Normalize ``source`` with the current capabilities.

        ``source`` is anything :func:`textreflow.io.make_source` accepts.
        """

        return normalize(
            make_source(source, resource_name=resource_name),
            track_position=self.flag("track_position"),
            fold_whitespace=self.flag("fold_whitespace"),
            glue_lines=self.flag("glue_lines"),
            profile=self.profile,
        )

    def locate(self, parsed: NormalizationResult, offset: int) -> Position:
        """Map ``offset`` in ``parsed.text`` back to a source position.

        Without position tracking, offsets are replayed from the start of the
        text, which is exact only when nothing was folded or glued.
        """

        return self._locate(parsed, offset)

    def emit(self, parsed: NormalizationResult | bytes | str, target: Any) -> None:
        """Write ``parsed`` to ``target``, word wrapped when enabled."""

        if isinstance(parsed, NormalizationResult):
            text = parsed.text
        elif isinstance(parsed, str):
            text = parsed.encode("utf-8")
        else:
            text = bytes(parsed)
        sink = make_sink(target)
        if self.flag("word_wrap"):
            reflow(text, sink, self._wrap_width)
        else:
            sink.write(text)

    def render(self, parsed: NormalizationResult | bytes | str) -> bytes:
        """Return what :meth:`emit` would write."""

        out = bytearray()
        self.emit(parsed, out)
        return bytes(out)


@lru_cache(maxsize=None)
def default_transport() -> TextTransport:
    """Return the shared transport with every capability left at runtime."""

    return TextTransport()
