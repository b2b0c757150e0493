"""Typed configuration schema and loader for the textreflow package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, conint, field_validator

from textreflow.locate import Profile

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class Toggle(str, Enum):
    """How a capability is decided: fixed on, fixed off, or per operation."""

    YES = "yes"
    NO = "no"
    RUNTIME = "runtime"

    @classmethod
    def coerce(cls, value: Any) -> Any:
        # YAML 1.1 reads bare yes/no as booleans
        if isinstance(value, bool):
            return cls.YES if value else cls.NO
        return value


class TextSettings(BaseModel):
    """Capabilities of a text transport."""

    profile: Profile = Profile.LINE_AND_CHAR
    track_position: Toggle = Toggle.RUNTIME
    fold_whitespace: Toggle = Toggle.RUNTIME
    glue_lines: Toggle = Toggle.RUNTIME
    word_wrap: Toggle = Toggle.RUNTIME
    wrap_width: conint(ge=1) = 80  # type: ignore[valid-type]

    model_config = ConfigDict(extra="forbid")

    @field_validator(
        "track_position", "fold_whitespace", "glue_lines", "word_wrap", mode="before"
    )
    @classmethod
    def _bool_to_toggle(cls, value: Any) -> Any:
        return Toggle.coerce(value)


class ReflowDefaults(BaseModel):
    """Normalization switches used by the ``reflow`` command."""

    fold_whitespace: bool
    glue_lines: bool

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)  # type: ignore[valid-type]
    wrap_width_env: str
    text: TextSettings
    reflow: ReflowDefaults

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    environment variable named by ``wrap_width_env`` for ``text.wrap_width``.
    """

    with (
        importlib_resources.files("textreflow.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    environ = env if env is not None else os.environ
    width_env = merged.get("wrap_width_env")
    if isinstance(width_env, str) and width_env in environ:
        merged = deep_merge_dicts(merged, {"text": {"wrap_width": environ[width_env]}})

    return ConfigModel.model_validate(merged)


__all__ = [
    "ConfigModel",
    "ReflowDefaults",
    "TextSettings",
    "Toggle",
    "deep_merge_dicts",
    "load_config",
]
