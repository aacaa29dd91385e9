"""
stfx-crypto - Cryptographic Foundation Layer

Algorithm-agnostic capability contracts with concrete bindings:
- Signer / Verifier: Ed25519
- KeyAgreement: X25519 (low-order points rejected)
- Hasher: SHA-256, BLAKE2b-256
- Aead: ChaCha20-Poly1305 (in place, caller-managed nonces)
- Canonical base64url (unpadded) for every artifact that leaves the process
"""

from .errors import (
    CryptoError,
    SigningError,
    VerificationError,
    KeyAgreementError,
    AeadError,
    AuthenticationError,
    DecodeError,
    RandomnessError,
    InvalidLengthError,
)
from .types import Digest, SharedSecret
from .traits import Signer, Verifier, Hasher, KeyAgreement, Aead, KeyPair
from .randomness import Randomness, SystemRandomness, NoRandomness, SYSTEM_RANDOM, random_bytes
from .encoding import (
    base64url_encode,
    base64url_decode,
    multibase_encode,
    multibase_decode,
    Multicodec,
    multicodec_encode,
    multicodec_decode,
)
from .hashing import HashAlgorithm, Sha256Hasher, Blake2b256Hasher, sha256, blake2b256, get_hasher
from .keys import (
    SignatureAlgorithm,
    KeyAgreementAlgorithm,
    Ed25519Keypair,
    Ed25519PublicKey,
    Ed25519Signature,
    X25519Keypair,
    X25519PublicKey,
    get_signer,
    get_key_agreement,
)
from .aead import ChaCha20Poly1305Cipher
from . import aead
from .config import CryptoConfig, get_config
from .log import configure_logging, reset_logging

__version__ = "0.1.0"

__all__ = [
    # Errors
    "CryptoError",
    "SigningError",
    "VerificationError",
    "KeyAgreementError",
    "AeadError",
    "AuthenticationError",
    "DecodeError",
    "RandomnessError",
    "InvalidLengthError",
    # Values
    "Digest",
    "SharedSecret",
    # Contracts
    "Signer",
    "Verifier",
    "Hasher",
    "KeyAgreement",
    "Aead",
    "KeyPair",
    # Randomness
    "Randomness",
    "SystemRandomness",
    "NoRandomness",
    "SYSTEM_RANDOM",
    "random_bytes",
    # Encoding
    "base64url_encode",
    "base64url_decode",
    "multibase_encode",
    "multibase_decode",
    "Multicodec",
    "multicodec_encode",
    "multicodec_decode",
    # Hashing
    "HashAlgorithm",
    "Sha256Hasher",
    "Blake2b256Hasher",
    "sha256",
    "blake2b256",
    "get_hasher",
    # Keys
    "SignatureAlgorithm",
    "KeyAgreementAlgorithm",
    "Ed25519Keypair",
    "Ed25519PublicKey",
    "Ed25519Signature",
    "X25519Keypair",
    "X25519PublicKey",
    "get_signer",
    "get_key_agreement",
    # AEAD
    "aead",
    "ChaCha20Poly1305Cipher",
    # Config / logging
    "CryptoConfig",
    "get_config",
    "configure_logging",
    "reset_logging",
]
