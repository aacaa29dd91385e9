"""
X25519 Key Agreement

Secret scalars are clamped per RFC 7748 at construction. ``diffie_hellman``
rejects the identity and the other low-order points of Curve25519 before
touching the backend, and rejects an all-zero result after it.
"""

import hmac
from typing import Optional, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import x25519

from ..errors import InvalidLengthError, KeyAgreementError
from ..hashing import sha256
from ..log import get_logger
from ..randomness import SYSTEM_RANDOM, Randomness
from ..traits import KeyAgreement, KeyPair
from ..types import BytesLike, FixedBytes, SharedSecret, as_bytes

logger = get_logger(__name__)

SECRET_KEY_SIZE = 32
PUBLIC_KEY_SIZE = 32

# Little-endian u-coordinates whose multiples stay in the small subgroup
# (same list libsodium rejects). The top bit of byte 31 is masked off before
# comparison, which also covers the non-canonical encodings.
LOW_ORDER_POINTS = tuple(bytes.fromhex(h) for h in (
    # 0
    "0000000000000000000000000000000000000000000000000000000000000000",
    # 1
    "0100000000000000000000000000000000000000000000000000000000000000",
    # order 8
    "e0eb7a7c3b41b8ae1656e3faf19fc46ada098deb9c32b1fd866205165f49b800",
    # order 8
    "5f9c95bca3508c24b1d0b1559c83ef5b04445cc4581c8e86d8224eddd09f1157",
    # p - 1
    "ecffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff7f",
    # p (== 0)
    "edffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff7f",
    # p + 1 (== 1)
    "eeffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff7f",
))

_ZERO = bytes(32)


def clamp(scalar: bytes) -> bytes:
    """Apply RFC 7748 section 5 clamping to a 32-byte scalar."""
    k = bytearray(scalar)
    k[0] &= 248
    k[31] &= 127
    k[31] |= 64
    return bytes(k)


def is_low_order(point: bytes) -> bool:
    """True if ``point`` is one of the known low-order u-coordinates."""
    masked = point[:31] + bytes([point[31] & 0x7F])
    found = False
    for candidate in LOW_ORDER_POINTS:
        # Check every entry so timing does not depend on which one matched.
        found |= hmac.compare_digest(masked, candidate)
    return found


class X25519PublicKey(FixedBytes):
    """32-byte X25519 public key (Montgomery u-coordinate)."""

    SIZE = PUBLIC_KEY_SIZE

    @property
    def key_id(self) -> str:
        return sha256(self.to_bytes()).hex()[:16]


class X25519Keypair(KeyPair, KeyAgreement[X25519PublicKey]):
    """X25519 key pair. Immutable; the public key is cached."""

    algorithm = "X25519"
    secret_size = SECRET_KEY_SIZE

    def __init__(self, secret: BytesLike):
        raw = as_bytes(secret, "secret")
        if len(raw) != SECRET_KEY_SIZE:
            raise InvalidLengthError("X25519 secret key", SECRET_KEY_SIZE, len(raw))

        self._private_key = x25519.X25519PrivateKey.from_private_bytes(clamp(raw))
        self._public_key = X25519PublicKey(
            self._private_key.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        )

    @classmethod
    def generate(cls, rng: Optional[Randomness] = None) -> "X25519Keypair":
        keypair = cls((rng or SYSTEM_RANDOM).gen_bytes(SECRET_KEY_SIZE))
        logger.debug("x25519_keypair_generated", key_id=keypair.key_id)
        return keypair

    @classmethod
    def from_secret_bytes(cls, secret: BytesLike) -> "X25519Keypair":
        keypair = cls(secret)
        logger.debug("x25519_keypair_restored", key_id=keypair.key_id)
        return keypair

    @property
    def public_key(self) -> X25519PublicKey:
        return self._public_key

    @property
    def key_id(self) -> str:
        return self._public_key.key_id

    def secret_bytes(self) -> bytes:
        """The clamped secret scalar."""
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def diffie_hellman(self, their_public: Union[X25519PublicKey, BytesLike]) -> SharedSecret:
        if isinstance(their_public, FixedBytes) and not isinstance(their_public, X25519PublicKey):
            raise TypeError(f"expected X25519PublicKey, got {type(their_public).__name__}")

        if isinstance(their_public, X25519PublicKey):
            point = their_public.to_bytes()
        else:
            point = as_bytes(their_public, "public key")
            if len(point) != PUBLIC_KEY_SIZE:
                raise KeyAgreementError("invalid X25519 public key")

        if is_low_order(point):
            raise KeyAgreementError("low-order X25519 public key")

        try:
            peer = x25519.X25519PublicKey.from_public_bytes(point)
            shared = self._private_key.exchange(peer)
        except ValueError:
            # The backend refuses to return an all-zero shared secret.
            raise KeyAgreementError("invalid X25519 public key") from None

        if hmac.compare_digest(shared, _ZERO):
            raise KeyAgreementError("low-order X25519 public key")

        return SharedSecret(shared)
