"""Source of randomness, replaceable once by a custom reader."""

from __future__ import annotations

import secrets
import threading
from typing import BinaryIO, Optional


class InsufficientRandomError(RuntimeError):
    """Raised when the random source delivers fewer bytes than requested."""


class _SystemRandom:
    """Reader returning bytes from the operating system's secure RNG."""

    def read(self, n: int = -1) -> bytes:
        return secrets.token_bytes(max(n, 0))


_system_reader = _SystemRandom()
_custom_reader: Optional[BinaryIO] = None
_lock = threading.Lock()


def random_reader():
    """Return the reader for randomness (custom if set, system RNG otherwise)."""
    if _custom_reader is not None:
        return _custom_reader
    return _system_reader


def random_bytes(n: int) -> bytes:
    """Return n random bytes."""
    if n < 0:
        raise ValueError("cannot read a negative number of bytes")
    data = random_reader().read(n)
    if data is None or len(data) != n:
        raise InsufficientRandomError(
            f"requested {n} random bytes, got {0 if data is None else len(data)}"
        )
    return bytes(data)


def set_custom_rng(reader: BinaryIO) -> None:
    """Set a custom random reader; only the first call takes effect."""
    global _custom_reader
    with _lock:
        if _custom_reader is None:
            _custom_reader = reader