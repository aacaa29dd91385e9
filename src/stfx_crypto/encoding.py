"""
Canonical Text Encoding

Base64url without padding (RFC 4648 section 5). Decoding is strict so that
every byte string has exactly one textual form:

- only ``A-Z a-z 0-9 - _`` are accepted, ``=`` included in the reject set
- a length of 1 (mod 4) is rejected
- unused trailing bits in the final character must be zero

Also provides the multibase ``u`` prefix and multicodec varint prefixes used
by identifier layers to tag raw public keys.
"""

import base64
import binascii
import re
from enum import Enum
from typing import Tuple, Union

from .errors import DecodeError

_ALPHABET_RE = re.compile(r"\A[A-Za-z0-9_-]*\Z")

MULTIBASE_BASE64URL = "u"


def base64url_encode(data: Union[bytes, bytearray, memoryview]) -> str:
    """Encode bytes as unpadded base64url."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected bytes-like, got {type(data).__name__}")
    return base64.urlsafe_b64encode(bytes(data)).rstrip(b"=").decode("ascii")


def base64url_decode(text: str) -> bytes:
    """
    Decode unpadded base64url.

    Raises:
        DecodeError: on any invalid character, impossible length, or
            non-canonical trailing bits.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("ascii")
        except UnicodeDecodeError:
            raise DecodeError("invalid base64url character") from None
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")

    if not _ALPHABET_RE.match(text):
        raise DecodeError("invalid base64url character")

    remainder = len(text) % 4
    if remainder == 1:
        raise DecodeError(f"invalid base64url length: {len(text)}")

    padded = text + "=" * ((4 - remainder) % 4)
    try:
        data = base64.b64decode(padded, altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise DecodeError(f"invalid base64url input: {e}") from None

    # Reject inputs whose unused low bits are set; they would decode to the
    # same bytes as the canonical form.
    if base64url_encode(data) != text:
        raise DecodeError("non-canonical base64url encoding")

    return data


# ============================================================================
# Multibase
# ============================================================================

def multibase_encode(data: bytes) -> str:
    """Encode as multibase base64url (``u`` prefix)."""
    return MULTIBASE_BASE64URL + base64url_encode(data)


def multibase_decode(text: str) -> bytes:
    """Decode a multibase string. Only the base64url variant is supported."""
    if not text:
        raise DecodeError("empty multibase string")
    if text[0] != MULTIBASE_BASE64URL:
        raise DecodeError(f"unsupported multibase prefix: {text[0]!r}")
    return base64url_decode(text[1:])


# ============================================================================
# Multicodec
# ============================================================================

class Multicodec(Enum):
    """Multicodec codes for the key types this package produces."""
    ED25519_PUB = 0xED
    X25519_PUB = 0xEC


def _encode_varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _decode_varint(data: bytes) -> Tuple[int, int]:
    value = 0
    shift = 0
    for i, byte in enumerate(data[:9]):
        value |= (byte & 0x7F) << shift
        if not byte & 0x80:
            # A zero final byte after the first adds nothing: non-minimal.
            if byte == 0 and i > 0:
                raise DecodeError("non-minimal varint")
            return value, i + 1
        shift += 7
    raise DecodeError("truncated or oversized varint")


def multicodec_encode(codec: Multicodec, data: bytes) -> bytes:
    """Prefix ``data`` with the varint of ``codec``."""
    return _encode_varint(codec.value) + bytes(data)


def multicodec_decode(data: bytes) -> Tuple[Multicodec, bytes]:
    """Split a multicodec-prefixed value into ``(codec, payload)``."""
    code, consumed = _decode_varint(bytes(data))
    try:
        codec = Multicodec(code)
    except ValueError:
        raise DecodeError(f"unknown multicodec: 0x{code:x}") from None
    return codec, bytes(data[consumed:])
