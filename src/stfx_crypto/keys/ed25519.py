"""
Ed25519 Signatures

Key generation draws 32 bytes from the randomness source and derives the
public key once. Signing is deterministic per RFC 8032 and uses no
randomness. Verification lives on ``Ed25519PublicKey`` so any party holding
only the public key can verify.
"""

from typing import Optional, Union

from cryptography.exceptions import InternalError, InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from ..encoding import base64url_decode, base64url_encode
from ..errors import DecodeError, InvalidLengthError, SigningError, VerificationError
from ..hashing import sha256
from ..log import get_logger
from ..randomness import SYSTEM_RANDOM, Randomness
from ..traits import KeyPair, Signer, Verifier
from ..types import BytesLike, FixedBytes, as_bytes

logger = get_logger(__name__)

SECRET_KEY_SIZE = 32
PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64


class Ed25519Signature(FixedBytes):
    """64-byte Ed25519 signature (R || S)."""
    SIZE = SIGNATURE_SIZE


class Ed25519PublicKey(FixedBytes, Verifier[Ed25519Signature]):
    """32-byte Ed25519 verifying key."""

    SIZE = PUBLIC_KEY_SIZE

    def __init__(self, value: BytesLike):
        super().__init__(value)
        object.__setattr__(self, "_backend", None)

    def _backend_key(self) -> ed25519.Ed25519PublicKey:
        if self._backend is None:
            object.__setattr__(
                self, "_backend", ed25519.Ed25519PublicKey.from_public_bytes(self.to_bytes())
            )
        return self._backend

    @property
    def key_id(self) -> str:
        """Short fingerprint: first 16 hex chars of SHA-256(public key)."""
        return sha256(self.to_bytes()).hex()[:16]

    def verify(self, message: bytes, signature: Union[Ed25519Signature, BytesLike]) -> None:
        if isinstance(signature, FixedBytes) and not isinstance(signature, Ed25519Signature):
            raise TypeError(f"expected Ed25519Signature, got {type(signature).__name__}")
        message = as_bytes(message, "message")
        try:
            if not isinstance(signature, Ed25519Signature):
                signature = Ed25519Signature(signature)
            self._backend_key().verify(signature.to_bytes(), message)
        except (InvalidSignature, ValueError):
            # Length, encoding and mismatch failures are indistinguishable.
            raise VerificationError() from None

    def verify_b64(self, message: bytes, signature_b64: str) -> None:
        """Verify a base64url-encoded signature."""
        try:
            signature = base64url_decode(signature_b64)
        except DecodeError:
            raise VerificationError() from None
        self.verify(message, signature)


class Ed25519Keypair(KeyPair, Signer[Ed25519Signature], Verifier[Ed25519Signature]):
    """
    Ed25519 signing key pair.

    Immutable after construction. ``public_key`` is computed once and the
    same object is returned on every access.
    """

    algorithm = "Ed25519"
    secret_size = SECRET_KEY_SIZE

    def __init__(self, secret: BytesLike):
        seed = as_bytes(secret, "secret")
        if len(seed) != SECRET_KEY_SIZE:
            raise InvalidLengthError("Ed25519 secret key", SECRET_KEY_SIZE, len(seed))

        self._private_key = ed25519.Ed25519PrivateKey.from_private_bytes(seed)
        self._public_key = Ed25519PublicKey(
            self._private_key.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        )

    @classmethod
    def generate(cls, rng: Optional[Randomness] = None) -> "Ed25519Keypair":
        keypair = cls((rng or SYSTEM_RANDOM).gen_bytes(SECRET_KEY_SIZE))
        logger.debug("ed25519_keypair_generated", key_id=keypair.key_id)
        return keypair

    @classmethod
    def from_secret_bytes(cls, secret: BytesLike) -> "Ed25519Keypair":
        keypair = cls(secret)
        logger.debug("ed25519_keypair_restored", key_id=keypair.key_id)
        return keypair

    @property
    def public_key(self) -> Ed25519PublicKey:
        return self._public_key

    @property
    def key_id(self) -> str:
        return self._public_key.key_id

    def secret_bytes(self) -> bytes:
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def sign(self, message: bytes) -> Ed25519Signature:
        message = as_bytes(message, "message")
        try:
            return Ed25519Signature(self._private_key.sign(message))
        except InternalError as e:
            raise SigningError("Ed25519 signing failed in backend") from e

    def verify(self, message: bytes, signature: Union[Ed25519Signature, BytesLike]) -> None:
        self._public_key.verify(message, signature)

    def sign_b64(self, message: bytes) -> str:
        """Sign and return the base64url-encoded signature."""
        return base64url_encode(self.sign(message).to_bytes())

    def verify_b64(self, message: bytes, signature_b64: str) -> None:
        """Verify a base64url-encoded signature."""
        self._public_key.verify_b64(message, signature_b64)
