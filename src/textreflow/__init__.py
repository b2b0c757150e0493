"""Position-tracking text normalization and reflow.

The package normalizes raw UTF-8 text (canonical newlines, optional whitespace
folding and line glueing) while recording a sparse index that maps offsets in
the normalized text back to source lines and columns, and re-flows text into
width-limited lines on output.  :class:`TextTransport` bundles both directions
behind one configuration; the ``reflow`` command line tool lives in
:mod:`textreflow.cli`.
"""

from .config import ConfigModel, TextSettings, Toggle, load_config
from .emit import reflow, wrap_text
from .locate import Position, PositionIndex, Profile
from .preprocess import NormalizationResult, normalize
from .transport import TextTransport, default_transport

__version__ = "0.1.0"

__all__ = [
    "ConfigModel",
    "NormalizationResult",
    "Position",
    "PositionIndex",
    "Profile",
    "TextSettings",
    "TextTransport",
    "Toggle",
    "default_transport",
    "load_config",
    "normalize",
    "reflow",
    "wrap_text",
]
