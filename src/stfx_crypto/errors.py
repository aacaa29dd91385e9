"""
Error Taxonomy

Each capability raises its own exception class. They share ``CryptoError``
as a common root so callers can catch the whole family in one clause, but
no capability ever raises another capability's error.

Nothing in this package logs on a failure path. Errors carry only what the
caller needs and never include key, plaintext or signature material.
"""

from typing import Optional


class CryptoError(Exception):
    """Base class for all errors raised by stfx_crypto."""
    pass


class SigningError(CryptoError):
    """Signing failed inside the backend. Never raised for message content."""
    pass


class VerificationError(CryptoError):
    """
    Signature did not verify.

    Malformed, wrong-length and mismatched signatures all produce this
    exact error with the same message.
    """

    def __init__(self, message: str = "signature verification failed"):
        super().__init__(message)


class KeyAgreementError(CryptoError):
    """The peer public key is invalid or of low order."""
    pass


class AeadError(CryptoError):
    """Base class for authenticated-encryption failures."""
    pass


class AuthenticationError(AeadError):
    """Authentication tag did not verify on decrypt."""

    def __init__(self, message: str = "authentication tag mismatch"):
        super().__init__(message)


class DecodeError(CryptoError):
    """Text could not be decoded (bad character, bad length, non-canonical)."""
    pass


class RandomnessError(CryptoError):
    """The entropy source failed or is disabled."""
    pass


class InvalidLengthError(CryptoError, ValueError):
    """A fixed-size input had the wrong number of bytes."""

    def __init__(self, what: str, expected: int, actual: int, message: Optional[str] = None):
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(message or f"{what} must be {expected} bytes, got {actual}")
