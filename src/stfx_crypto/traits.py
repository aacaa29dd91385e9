"""
Capability Contracts

One abstract base class per cryptographic capability. Concrete algorithm
types implement the subset that applies to them, and generic code is
written against these classes rather than a concrete algorithm.

Each contract names its error class in the ``error`` attribute and, where
the output is algorithm-specific, is parametrised by that output type
(``Signer[Ed25519Signature]``, ``KeyAgreement[X25519PublicKey]``).
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, Optional, Type, TypeVar

from .errors import (
    AeadError,
    CryptoError,
    KeyAgreementError,
    SigningError,
    VerificationError,
)
from .randomness import Randomness
from .types import Digest, SharedSecret

SignatureT = TypeVar("SignatureT")
PublicKeyT = TypeVar("PublicKeyT")
KeyPairT = TypeVar("KeyPairT", bound="KeyPair")


class Signer(ABC, Generic[SignatureT]):
    """Produces signatures over arbitrary byte messages."""

    error: ClassVar[Type[CryptoError]] = SigningError

    @abstractmethod
    def sign(self, message: bytes) -> SignatureT:
        """
        Sign ``message``.

        Any byte sequence is a valid message. Raises ``SigningError`` only
        if the backend itself fails.
        """
        pass


class Verifier(ABC, Generic[SignatureT]):
    """Checks signatures. Needs public material only."""

    error: ClassVar[Type[CryptoError]] = VerificationError

    @abstractmethod
    def verify(self, message: bytes, signature: SignatureT) -> None:
        """
        Verify ``signature`` over ``message``.

        Raises ``VerificationError`` for a mismatched, malformed or
        wrong-length signature, without saying which.
        """
        pass

    def is_valid(self, message: bytes, signature: SignatureT) -> bool:
        """Non-raising form of :meth:`verify`."""
        try:
            self.verify(message, signature)
        except VerificationError:
            return False
        return True


class Hasher(ABC):
    """Pure 256-bit hash function."""

    name: ClassVar[str] = ""

    @abstractmethod
    def hash(self, data: bytes) -> Digest:
        """Hash ``data`` into a 32-byte digest. Never fails."""
        pass


class KeyAgreement(ABC, Generic[PublicKeyT]):
    """Diffie-Hellman key agreement."""

    error: ClassVar[Type[CryptoError]] = KeyAgreementError

    @abstractmethod
    def diffie_hellman(self, their_public: PublicKeyT) -> SharedSecret:
        """
        Derive the shared secret with the holder of ``their_public``.

        Raises ``KeyAgreementError`` if the key is not a usable curve point,
        including the identity and other low-order points.
        """
        pass


class Aead(ABC):
    """
    Authenticated encryption with associated data, operating in place.

    The caller owns the nonce: it must never repeat under the same key.
    Implementations do not generate, track or check nonces.
    """

    error: ClassVar[Type[CryptoError]] = AeadError

    key_size: ClassVar[int] = 32
    nonce_size: ClassVar[int] = 12
    tag_size: ClassVar[int] = 16

    @abstractmethod
    def encrypt(self, key: bytes, nonce: bytes, aad: bytes, buffer: bytearray) -> None:
        """Replace plaintext in ``buffer`` with ciphertext followed by the tag."""
        pass

    @abstractmethod
    def decrypt(self, key: bytes, nonce: bytes, aad: bytes, buffer: bytearray) -> None:
        """
        Replace ciphertext||tag in ``buffer`` with plaintext.

        On failure ``buffer`` is emptied before ``AuthenticationError`` is
        raised, so no partial plaintext reaches the caller.
        """
        pass


class KeyPair(ABC):
    """
    A complete key pair of one algorithm.

    Instances are immutable. The public key is derived once at construction
    and the same object is returned on every access.
    """

    algorithm: ClassVar[str] = ""
    secret_size: ClassVar[int] = 32

    @classmethod
    @abstractmethod
    def generate(cls: Type[KeyPairT], rng: Optional[Randomness] = None) -> KeyPairT:
        """Generate a new key pair from ``rng`` (system CSPRNG by default)."""
        pass

    @classmethod
    @abstractmethod
    def from_secret_bytes(cls: Type[KeyPairT], secret: bytes) -> KeyPairT:
        """Rebuild a key pair from raw secret bytes."""
        pass

    @property
    @abstractmethod
    def public_key(self):
        """The algorithm-specific public key value."""
        pass

    @abstractmethod
    def secret_bytes(self) -> bytes:
        """Raw secret key bytes. Handle with care."""
        pass

    def public_key_bytes(self) -> bytes:
        return bytes(self.public_key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(public_key={self.public_key!r})"
