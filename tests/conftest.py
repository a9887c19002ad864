# tests/conftest.py

import logging
import os

import pytest
import structlog

# Keep log setup in CLI tests from attaching handlers to the runner's stderr.
os.environ.setdefault("LOGGING_CONSOLE", "NONE")

from Lexid import generator as _generator  # noqa: E402
from Lexid.metrics import reset_counters  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_process_state():
    """Fresh counters and a fresh shared generator for every test."""
    reset_counters()
    _generator._generator = None
    yield
    reset_counters()
    _generator._generator = None


@pytest.fixture
def restore_logging():
    """Undo setup_logging() so handlers do not leak into later tests."""
    yield
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    structlog.reset_defaults()


class FixedRandom:
    """Deterministic stand-in for secrets.token_bytes."""

    def __init__(self, *chunks: bytes):
        self.chunks = list(chunks)
        self.calls = 0

    def __call__(self, n: int) -> bytes:
        self.calls += 1
        if self.chunks:
            return self.chunks.pop(0)
        return bytes(n)


@pytest.fixture
def fixed_random():
    return FixedRandom
