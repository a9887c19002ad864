"""Sortable 128-bit identifiers: 48-bit ms timestamp + 80-bit randomness."""  # noqa: N999

from .base32 import ALPHABET, decode_base32, encode_base32, is_canonical
from .errors import (
    FormatError,
    LengthError,
    LexidError,
    RandomnessOverflowError,
    RangeError,
)
from .generator import MonotonicGenerator, generate, get_generator
from .ulid import MAX_TIMESTAMP, MIN_TIMESTAMP, NULL, Ulid, compare

__all__ = [
    "ALPHABET",
    "FormatError",
    "LengthError",
    "LexidError",
    "MAX_TIMESTAMP",
    "MIN_TIMESTAMP",
    "MonotonicGenerator",
    "NULL",
    "RandomnessOverflowError",
    "RangeError",
    "Ulid",
    "compare",
    "decode_base32",
    "encode_base32",
    "generate",
    "get_generator",
    "is_canonical",
]
