"""Error taxonomy for identifier construction, parsing, and generation.

Each error also derives from the builtin it refines so callers that only
catch ``ValueError`` or ``OverflowError`` keep working.
"""

from __future__ import annotations


class LexidError(Exception):
    """Base class for all identifier errors."""

    pass


class RangeError(LexidError, ValueError):
    """Raised when a timestamp falls outside the 48-bit millisecond range."""

    pass


class LengthError(LexidError, ValueError):
    """Raised when a byte sequence or buffer has the wrong size."""

    pass


class FormatError(LexidError, ValueError):
    """Raised when text is not a canonical 26-character identifier."""

    pass


class RandomnessOverflowError(LexidError, OverflowError):
    """Raised when a same-millisecond increment would exceed 80 bits."""

    pass


__all__ = [
    "FormatError",
    "LengthError",
    "LexidError",
    "RandomnessOverflowError",
    "RangeError",
]
