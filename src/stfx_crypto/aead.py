"""
ChaCha20-Poly1305 AEAD (RFC 8439, IETF variant)

Key 32 bytes, nonce 12 bytes, tag 16 bytes appended to the ciphertext.
Both operations work in place on a caller-owned ``bytearray``.

NONCE REUSE: the caller must never encrypt two messages under the same
(key, nonce). Doing so reveals the XOR of the two plaintexts and lets an
attacker forge tags. This module cannot detect it: it never generates,
stores or compares nonces.
"""

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

from .errors import AuthenticationError, InvalidLengthError
from .traits import Aead
from .types import as_bytes

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16


def _check_inputs(key, nonce, aad, buffer):
    key = as_bytes(key, "key")
    nonce = as_bytes(nonce, "nonce")
    aad = as_bytes(aad, "aad")
    if len(key) != KEY_SIZE:
        raise InvalidLengthError("AEAD key", KEY_SIZE, len(key))
    if len(nonce) != NONCE_SIZE:
        raise InvalidLengthError("AEAD nonce", NONCE_SIZE, len(nonce))
    if not isinstance(buffer, bytearray):
        raise TypeError(f"buffer must be a bytearray, got {type(buffer).__name__}")
    return key, nonce, aad


def _wipe(buffer: bytearray) -> None:
    for i in range(len(buffer)):
        buffer[i] = 0
    del buffer[:]


class ChaCha20Poly1305Cipher(Aead):
    """ChaCha20-Poly1305 with caller-supplied key and nonce."""

    key_size = KEY_SIZE
    nonce_size = NONCE_SIZE
    tag_size = TAG_SIZE

    def encrypt(self, key: bytes, nonce: bytes, aad: bytes, buffer: bytearray) -> None:
        key, nonce, aad = _check_inputs(key, nonce, aad, buffer)
        sealed = ChaCha20Poly1305(key).encrypt(nonce, bytes(buffer), aad)
        buffer[:] = sealed

    def decrypt(self, key: bytes, nonce: bytes, aad: bytes, buffer: bytearray) -> None:
        key, nonce, aad = _check_inputs(key, nonce, aad, buffer)
        if len(buffer) < TAG_SIZE:
            _wipe(buffer)
            raise AuthenticationError()
        try:
            opened = ChaCha20Poly1305(key).decrypt(nonce, bytes(buffer), aad)
        except InvalidTag:
            _wipe(buffer)
            raise AuthenticationError() from None
        buffer[:] = opened


_DEFAULT_CIPHER = ChaCha20Poly1305Cipher()


def encrypt(key: bytes, nonce: bytes, aad: bytes, buffer: bytearray) -> None:
    """Encrypt ``buffer`` in place with ChaCha20-Poly1305."""
    _DEFAULT_CIPHER.encrypt(key, nonce, aad, buffer)


def decrypt(key: bytes, nonce: bytes, aad: bytes, buffer: bytearray) -> None:
    """
    Decrypt ``buffer`` in place with ChaCha20-Poly1305.

    Raises:
        AuthenticationError: tag mismatch; ``buffer`` has been emptied
    """
    _DEFAULT_CIPHER.decrypt(key, nonce, aad, buffer)
