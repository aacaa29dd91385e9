"""
Fixed-size byte values.

Every artifact that crosses the API (digest, shared secret, public key,
signature) is wrapped in its own type so one algorithm's bytes cannot be
passed where another's are expected. Values are immutable and compare in
constant time.
"""

import hmac
from typing import ClassVar, Type, TypeVar, Union

from .encoding import base64url_decode, base64url_encode
from .errors import InvalidLengthError

T = TypeVar("T", bound="FixedBytes")

BytesLike = Union[bytes, bytearray, memoryview]


def as_bytes(data: BytesLike, what: str = "data") -> bytes:
    """Copy a bytes-like value to ``bytes``. Anything else is a TypeError."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"{what} must be bytes-like, got {type(data).__name__}")


class FixedBytes:
    """Immutable wrapper around exactly ``SIZE`` bytes."""

    SIZE: ClassVar[int] = 0
    SECRET: ClassVar[bool] = False

    __slots__ = ("_value",)

    def __init__(self, value: BytesLike):
        raw = as_bytes(value, type(self).__name__)
        if len(raw) != self.SIZE:
            raise InvalidLengthError(type(self).__name__, self.SIZE, len(raw))
        object.__setattr__(self, "_value", raw)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_bytes(cls: Type[T], value: BytesLike) -> T:
        return cls(value)

    @classmethod
    def from_b64(cls: Type[T], text: str) -> T:
        """Decode from unpadded base64url."""
        return cls(base64url_decode(text))

    def to_bytes(self) -> bytes:
        return self._value

    def to_b64(self) -> str:
        return base64url_encode(self._value)

    def hex(self) -> str:
        return self._value.hex()

    def __bytes__(self) -> bytes:
        return self._value

    def __len__(self) -> int:
        return self.SIZE

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return hmac.compare_digest(self._value, other._value)

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))

    def __repr__(self) -> str:
        if self.SECRET:
            return f"{type(self).__name__}(<redacted>)"
        return f"{type(self).__name__}({self.to_b64()!r})"


class Digest(FixedBytes):
    """32-byte hash output. Identity is its value."""
    SIZE = 32


class SharedSecret(FixedBytes):
    """
    32-byte Diffie-Hellman output.

    Run it through a KDF before using it as a symmetric key; this package
    does not do that derivation.
    """
    SIZE = 32
    SECRET = True
