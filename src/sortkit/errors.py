"""
Exception taxonomy for sortkit.

Each error also derives from the matching built-in exception so callers that
already catch ValueError / IndexError / LookupError keep working.
"""

from __future__ import annotations

__all__ = [
    "SortKitError",
    "ConfigError",
    "SortRangeError",
    "VariantUnavailableError",
]


class SortKitError(Exception):
    """Base class for every error raised by sortkit."""


class ConfigError(SortKitError, ValueError):
    """A tuning constant or feature flag was rejected at configuration time."""


class SortRangeError(SortKitError, IndexError):
    """A non-empty (first, last) range does not fit inside the buffer or index."""


class VariantUnavailableError(SortKitError, LookupError):
    """The requested algorithm/mode/width combination was not built."""
