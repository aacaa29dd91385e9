"""
Randomness Source

All key generation draws from a single process-wide CSPRNG backed by the
kernel (``secrets.token_bytes``). It keeps no state of its own, so any
number of threads may call it without locking.

There is no way to seed ``SystemRandomness``. The deterministic source in
this module is named ``InsecureDeterministicRandomness`` and is meant for
tests and reproducible vectors only.
"""

import hashlib
import secrets
from abc import ABC, abstractmethod
from threading import Lock

from .errors import RandomnessError


class Randomness(ABC):
    """Entropy source contract used by key generation."""

    @abstractmethod
    def fill_bytes(self, buffer: bytearray) -> None:
        """Fill ``buffer`` in place with random bytes."""
        pass

    def gen_bytes(self, length: int) -> bytes:
        """Return ``length`` random bytes."""
        if length < 0:
            raise ValueError("Length must be non-negative")
        buffer = bytearray(length)
        self.fill_bytes(buffer)
        return bytes(buffer)


class SystemRandomness(Randomness):
    """Kernel CSPRNG. Stateless and safe for concurrent use."""

    def fill_bytes(self, buffer: bytearray) -> None:
        try:
            buffer[:] = secrets.token_bytes(len(buffer))
        except OSError as e:
            raise RandomnessError(f"system entropy source failed: {e}") from e

    def __repr__(self) -> str:
        return "SystemRandomness()"


class NoRandomness(Randomness):
    """Entropy source that always fails. For builds that must not generate keys."""

    def fill_bytes(self, buffer: bytearray) -> None:
        raise RandomnessError("randomness is disabled")


class InsecureDeterministicRandomness(Randomness):
    """
    Reproducible byte stream for tests. NOT FOR PRODUCTION.

    Output block ``i`` is ``SHA-256(seed || i)`` with ``i`` as an 8-byte
    big-endian counter. Two instances with the same seed produce the same
    stream.
    """

    def __init__(self, seed: bytes):
        self._seed = bytes(seed)
        self._counter = 0
        self._pending = b""
        self._lock = Lock()

    def fill_bytes(self, buffer: bytearray) -> None:
        with self._lock:
            out = self._pending
            while len(out) < len(buffer):
                block = hashlib.sha256(self._seed + self._counter.to_bytes(8, "big")).digest()
                self._counter += 1
                out += block
            buffer[:] = out[:len(buffer)]
            self._pending = out[len(buffer):]

    def __repr__(self) -> str:
        return "InsecureDeterministicRandomness(<seeded>)"


SYSTEM_RANDOM = SystemRandomness()


def random_bytes(length: int) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Raises:
        ValueError: If length is negative
    """
    return SYSTEM_RANDOM.gen_bytes(length)
