"""Monotonic identifier generation.

Within one generator, identifiers are strictly increasing:
- a new millisecond draws fresh 80-bit randomness from a CSPRNG
- the same millisecond adds 1 to the previous randomness (full carry)
- incrementing past 2**80 - 1 raises instead of wrapping around

The read-decide-write step runs under a per-instance lock. One shared
instance per process is available through ``get_generator()``.
"""

from __future__ import annotations

import logging
import secrets
import threading
import time
from collections.abc import Callable

import structlog

from Lexid.errors import RandomnessOverflowError
from Lexid.metrics import inc_counter
from Lexid.ulid import RANDOMNESS_SIZE, TIMESTAMP_SIZE, Ulid, check_timestamp

# Routed through stdlib logging so an unconfigured process stays quiet
log = structlog.wrap_logger(
    logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger
)

MAX_RANDOMNESS = (1 << (RANDOMNESS_SIZE * 8)) - 1


def wall_clock_ms() -> int:
    """Current wall-clock time in milliseconds since the UNIX epoch."""
    return time.time_ns() // 1_000_000


class MonotonicGenerator:
    def __init__(
        self,
        clock: Callable[[], int] | None = None,
        random_bytes: Callable[[int], bytes] = secrets.token_bytes,
    ):
        self._clock = clock or wall_clock_ms
        self._random_bytes = random_bytes
        self._lock = threading.Lock()
        self._last_timestamp: int | None = None
        self._last_randomness = 0

    @property
    def last_timestamp(self) -> int | None:
        return self._last_timestamp

    def generate(self, timestamp: int | None = None) -> Ulid:
        """Return the next identifier for ``timestamp`` (defaults to now).

        Raises:
            RangeError: timestamp outside [0, 2**48 - 1].
            RandomnessOverflowError: the same millisecond has exhausted the
                80-bit randomness space; generator state is left unchanged.
        """
        if timestamp is None:
            timestamp = self._clock()
        try:
            check_timestamp(timestamp)
        except ValueError:
            inc_counter("ulid.generate.rejected")
            raise

        with self._lock:
            if timestamp == self._last_timestamp:
                if self._last_randomness >= MAX_RANDOMNESS:
                    inc_counter("ulid.generate.overflow")
                    log.warning("generator.randomness.overflow", timestamp=timestamp)
                    raise RandomnessOverflowError(
                        f"Randomness exhausted for timestamp {timestamp}."
                    )
                self._last_randomness += 1
                inc_counter("ulid.generate.same_ms")
            else:
                raw = self._random_bytes(RANDOMNESS_SIZE)
                if len(raw) != RANDOMNESS_SIZE:
                    raise ValueError(
                        f"Random source returned {len(raw)} bytes, expected {RANDOMNESS_SIZE}."
                    )
                self._last_timestamp = timestamp
                self._last_randomness = int.from_bytes(raw, "big")
            data = timestamp.to_bytes(TIMESTAMP_SIZE, "big") + self._last_randomness.to_bytes(
                RANDOMNESS_SIZE, "big"
            )
        inc_counter("ulid.generated")
        return Ulid(data)


_generator: MonotonicGenerator | None = None
_generator_guard = threading.Lock()


def get_generator() -> MonotonicGenerator:
    """Return the process-wide generator, creating it on first use."""
    global _generator
    if _generator is None:
        with _generator_guard:
            if _generator is None:
                _generator = MonotonicGenerator()
    return _generator


def generate(timestamp: int | None = None) -> Ulid:
    return get_generator().generate(timestamp)


__all__ = [
    "MAX_RANDOMNESS",
    "MonotonicGenerator",
    "generate",
    "get_generator",
    "wall_clock_ms",
]
