"""Source-to-normalized-text transforms."""

from .normalizer import NormalizationResult, normalize

__all__ = ["NormalizationResult", "normalize"]
