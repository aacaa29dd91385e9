"""
Key pairs for Ed25519 (signing) and X25519 (key agreement), plus factory
functions and algorithm-generic helpers written against the capability
contracts only.
"""

from enum import Enum
from typing import Optional, TypeVar, Union

from ..traits import KeyAgreement, Signer, Verifier
from ..types import BytesLike
from .ed25519 import Ed25519Keypair, Ed25519PublicKey, Ed25519Signature
from .x25519 import X25519Keypair, X25519PublicKey

SignatureT = TypeVar("SignatureT")


class SignatureAlgorithm(Enum):
    """Supported signature algorithms."""
    ED25519 = "Ed25519"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class KeyAgreementAlgorithm(Enum):
    """Supported key agreement algorithms."""
    X25519 = "X25519"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


_SIGNERS = {
    SignatureAlgorithm.ED25519: Ed25519Keypair,
}

_KEY_AGREEMENTS = {
    KeyAgreementAlgorithm.X25519: X25519Keypair,
}


def get_signer(
    algorithm: Optional[Union[SignatureAlgorithm, str]] = None,
    secret: Optional[BytesLike] = None,
) -> Signer:
    """
    Factory function to get a signer instance.

    Args:
        algorithm: Which algorithm to use; the configured default if omitted
        secret: Optional existing secret key bytes; a new key is generated
            if omitted

    Returns:
        A key pair implementing Signer and Verifier
    """
    if algorithm is None:
        from ..config import get_config
        algorithm = get_config().default_signature_algorithm
    cls = _SIGNERS[SignatureAlgorithm(algorithm)]
    if secret is not None:
        return cls.from_secret_bytes(secret)
    return cls.generate()


def get_key_agreement(
    algorithm: Union[KeyAgreementAlgorithm, str] = KeyAgreementAlgorithm.X25519,
    secret: Optional[BytesLike] = None,
) -> KeyAgreement:
    """Factory for key agreement key pairs; mirrors :func:`get_signer`."""
    cls = _KEY_AGREEMENTS[KeyAgreementAlgorithm(algorithm)]
    if secret is not None:
        return cls.from_secret_bytes(secret)
    return cls.generate()


def sign(signer: Signer[SignatureT], message: bytes) -> SignatureT:
    """Sign with whatever signer is supplied."""
    return signer.sign(message)


def verify(verifier: Verifier[SignatureT], message: bytes, signature: SignatureT) -> None:
    """Verify with whatever verifier is supplied. Raises VerificationError."""
    verifier.verify(message, signature)


__all__ = [
    "SignatureAlgorithm",
    "KeyAgreementAlgorithm",
    "Ed25519Keypair",
    "Ed25519PublicKey",
    "Ed25519Signature",
    "X25519Keypair",
    "X25519PublicKey",
    "get_signer",
    "get_key_agreement",
    "sign",
    "verify",
]
