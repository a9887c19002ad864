"""Immutable 128-bit lexicographically sortable identifier.

Binary layout (16 bytes):
- bytes 0..5: 48-bit timestamp, milliseconds since the UNIX epoch, big-endian
- bytes 6..15: 80-bit randomness, kept in the order it was supplied

Ordering is plain unsigned byte comparison, which matches both the canonical
text ordering and timestamp-then-randomness ordering.
"""

from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from typing import Final

from Lexid import metrics
from Lexid.base32 import decode_base32, encode_base32
from Lexid.errors import FormatError, LengthError, RangeError

MIN_TIMESTAMP: Final[int] = 0
MAX_TIMESTAMP: Final[int] = (1 << 48) - 1
TIMESTAMP_SIZE: Final[int] = 6
RANDOMNESS_SIZE: Final[int] = 10
ULID_SIZE: Final[int] = TIMESTAMP_SIZE + RANDOMNESS_SIZE

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
_FNV_OFFSET_BASIS = 0x811C9DC5
_FNV_PRIME = 0x01000193


def fnv1a_32(data: bytes) -> int:
    """32-bit FNV-1a digest of ``data``; stable across processes."""
    h = _FNV_OFFSET_BASIS
    for b in data:
        h ^= b
        h = (h * _FNV_PRIME) & 0xFFFFFFFF
    return h


def check_timestamp(timestamp: int) -> int:
    """Validate a millisecond timestamp and return it unchanged.

    Raises:
        TypeError: If ``timestamp`` is not an int (bools are rejected too).
        RangeError: If it falls outside [MIN_TIMESTAMP, MAX_TIMESTAMP].
    """
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise TypeError(f"Timestamp must be an int, got {type(timestamp).__name__}.")
    if timestamp < MIN_TIMESTAMP or timestamp > MAX_TIMESTAMP:
        raise RangeError(
            f"Timestamp {timestamp} outside [{MIN_TIMESTAMP}, {MAX_TIMESTAMP}]."
        )
    return timestamp


def _require_bytes_like(value: object, what: str) -> bytes:
    # bytes(int) would silently build a zero buffer; only accept real buffers
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes-like, got {type(value).__name__}.")
    return bytes(value)


@dataclass(frozen=True, order=True, repr=False)
class Ulid:
    """A 16-byte identifier value.

    Construct with ``Ulid(data)`` / ``Ulid.from_bytes(data)`` for raw bytes,
    ``Ulid.new(timestamp, randomness)`` for parts, or ``Ulid.parse(text)`` for
    the canonical 26-character form.
    """

    data: bytes

    def __post_init__(self) -> None:
        data = _require_bytes_like(self.data, "Binary value")
        if len(data) != ULID_SIZE:
            raise LengthError(f"The value must be {ULID_SIZE} bytes exactly, got {len(data)}.")
        object.__setattr__(self, "data", data)

    @classmethod
    def new(cls, timestamp: int, randomness: bytes) -> Ulid:
        """Pack a timestamp and 10 bytes of randomness.

        Raises:
            RangeError: timestamp outside the 48-bit range.
            LengthError: randomness is not exactly 10 bytes.
        """
        check_timestamp(timestamp)
        rnd = _require_bytes_like(randomness, "Randomness")
        if len(rnd) != RANDOMNESS_SIZE:
            raise LengthError(
                f"Randomness must be {RANDOMNESS_SIZE} bytes exactly, got {len(rnd)}."
            )
        return cls(timestamp.to_bytes(TIMESTAMP_SIZE, "big") + rnd)

    @classmethod
    def from_bytes(cls, data: bytes) -> Ulid:
        return cls(data)

    @classmethod
    def parse(cls, text: str) -> Ulid:
        """Parse the canonical text form (case-insensitive)."""
        try:
            data = decode_base32(text)
        except FormatError:
            metrics.inc_counter("ulid.parse.rejected")
            raise
        return cls(data)

    @property
    def timestamp(self) -> int:
        return int.from_bytes(self.data[:TIMESTAMP_SIZE], "big")

    @property
    def randomness(self) -> bytes:
        return self.data[TIMESTAMP_SIZE:]

    @property
    def datetime(self) -> dt.datetime:
        """UTC datetime of the timestamp part.

        Timestamps past 9999-12-31 raise ``OverflowError``.
        """
        return _EPOCH + dt.timedelta(milliseconds=self.timestamp)

    @property
    def is_null(self) -> bool:
        return not any(self.data)

    def to_bytes(self) -> bytes:
        return self.data

    def write_into(self, buffer: bytearray | memoryview, offset: int = 0) -> None:
        """Copy the binary form into ``buffer`` starting at ``offset``.

        Raises:
            LengthError: Fewer than 16 bytes are available after ``offset``.
        """
        view = memoryview(buffer).cast("B")
        if view.readonly:
            raise TypeError("Buffer is read-only.")
        if offset < 0 or len(view) - offset < ULID_SIZE:
            raise LengthError("The size of buffer is not enough.")
        view[offset : offset + ULID_SIZE] = self.data

    def compare_to(self, other: Ulid | None) -> int:
        """Return -1, 0 or 1. ``None`` sorts before every value."""
        if other is None:
            return 1
        if not isinstance(other, Ulid):
            raise TypeError(f"Cannot compare Ulid with {type(other).__name__}.")
        return (self.data > other.data) - (self.data < other.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return encode_base32(self.data)

    def __repr__(self) -> str:
        return f"Ulid({str(self)!r})"

    def __hash__(self) -> int:
        return fnv1a_32(self.data)


def compare(a: Ulid, b: Ulid) -> int:
    """Byte-wise big-endian comparison: -1, 0 or 1."""
    return a.compare_to(b)


NULL: Final[Ulid] = Ulid(bytes(ULID_SIZE))


__all__ = [
    "MAX_TIMESTAMP",
    "MIN_TIMESTAMP",
    "NULL",
    "RANDOMNESS_SIZE",
    "TIMESTAMP_SIZE",
    "ULID_SIZE",
    "Ulid",
    "check_timestamp",
    "compare",
    "fnv1a_32",
]
