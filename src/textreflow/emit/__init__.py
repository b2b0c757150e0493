"""Emission of normalized text, optionally word wrapped."""

from .reflow import reflow, wrap_text

__all__ = ["reflow", "wrap_text"]
