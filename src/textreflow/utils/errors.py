"""Typed exceptions for engine configuration and command line usage.

I/O failures have no class here: ``OSError`` and ``EOFError`` raised by
sources and sinks propagate to the caller unchanged.  Malformed UTF-8 is not an
error anywhere in the package.
"""


class TextReflowError(Exception):
    """Base class for errors raised by the package."""


class ConfigurationError(TextReflowError, ValueError):
    """Raised when an engine is built or reconfigured with unsupported settings."""


class UsageError(TextReflowError, ValueError):
    """Raised for malformed command line arguments."""
