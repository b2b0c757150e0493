"""Configuration loading utilities.

Precedence of configuration sources:
    1. Package defaults (``defaults.yml``)
    2. Optional user-provided YAML passed to :func:`load_config`
    3. Environment variable named by ``wrap_width_env`` for ``text.wrap_width``
"""

from .schema import ConfigModel, TextSettings, Toggle, load_config

__all__ = ["ConfigModel", "TextSettings", "Toggle", "load_config"]
