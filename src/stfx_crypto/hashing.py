"""
Hash Functions

SHA-256 and BLAKE2b-256 behind the ``Hasher`` contract, plus free functions
for the common case. Every call is a pure function of its input; there is
no shared state.
"""

import hashlib
from enum import Enum
from typing import Dict, Optional, Union

from .traits import Hasher
from .types import Digest

DIGEST_SIZE = 32


class HashAlgorithm(Enum):
    """Supported hash algorithms."""
    SHA256 = "sha256"
    BLAKE2B_256 = "blake2b256"


class Sha256Hasher(Hasher):
    """SHA-256."""

    name = HashAlgorithm.SHA256.value

    def hash(self, data: bytes) -> Digest:
        return Digest(hashlib.sha256(data).digest())


class Blake2b256Hasher(Hasher):
    """BLAKE2b with a 32-byte digest (unkeyed, no personalization)."""

    name = HashAlgorithm.BLAKE2B_256.value

    def hash(self, data: bytes) -> Digest:
        return Digest(hashlib.blake2b(data, digest_size=DIGEST_SIZE).digest())


_HASHERS: Dict[HashAlgorithm, Hasher] = {
    HashAlgorithm.SHA256: Sha256Hasher(),
    HashAlgorithm.BLAKE2B_256: Blake2b256Hasher(),
}


def sha256(data: bytes) -> Digest:
    """SHA-256 digest of ``data``."""
    return _HASHERS[HashAlgorithm.SHA256].hash(data)


def blake2b256(data: bytes) -> Digest:
    """BLAKE2b-256 digest of ``data``."""
    return _HASHERS[HashAlgorithm.BLAKE2B_256].hash(data)


def get_hasher(algorithm: Optional[Union[HashAlgorithm, str]] = None) -> Hasher:
    """
    Return the hasher for ``algorithm``.

    With no argument, returns the hasher named by the configured default
    (``STFX_CRYPTO_HASH``).

    Raises:
        ValueError: for an unknown algorithm name
    """
    if algorithm is None:
        from .config import get_config
        algorithm = get_config().default_hash_algorithm
    return _HASHERS[HashAlgorithm(algorithm)]
