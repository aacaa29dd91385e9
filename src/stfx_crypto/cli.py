"""
stfx-crypto CLI

Commands:
  keygen    - Generate an Ed25519 or X25519 key pair
  sign      - Sign a message with an Ed25519 secret key
  verify    - Verify an Ed25519 signature
  hash      - Hash a message (sha256 | blake2b256)
  demo      - Sign/verify, X25519 agreement and AEAD round trip

All binary values are read and printed as unpadded base64url.
"""

import argparse
import json
import os
import sys

from .aead import NONCE_SIZE, decrypt, encrypt
from .encoding import base64url_decode, base64url_encode
from .errors import CryptoError, VerificationError
from .hashing import HashAlgorithm, get_hasher, sha256
from .keys import Ed25519Keypair, Ed25519PublicKey, X25519Keypair
from .log import configure_logging

KEYPAIR_TYPES = {
    "ed25519": Ed25519Keypair,
    "x25519": X25519Keypair,
}


def _message(args) -> bytes:
    if args.b64:
        return base64url_decode(args.message)
    return args.message.encode("utf-8")


def cmd_keygen(args):
    """Generate a key pair."""
    keypair = KEYPAIR_TYPES[args.algorithm].generate()

    print(json.dumps({
        "algorithm": keypair.algorithm,
        "key_id": keypair.key_id,
        "public_key": base64url_encode(keypair.public_key_bytes()),
        "secret_key": base64url_encode(keypair.secret_bytes()),
    }, indent=2))


def cmd_sign(args):
    """Sign a message."""
    secret = args.secret or os.environ.get("STFX_CRYPTO_SECRET_KEY")
    if not secret:
        print("Error: --secret or STFX_CRYPTO_SECRET_KEY required", file=sys.stderr)
        sys.exit(1)

    keypair = Ed25519Keypair.from_secret_bytes(base64url_decode(secret))
    print(keypair.sign_b64(_message(args)))


def cmd_verify(args):
    """Verify a signature."""
    public_key = Ed25519PublicKey.from_b64(args.public)
    try:
        public_key.verify_b64(_message(args), args.signature)
    except VerificationError as e:
        print(f"Invalid: {e}")
        sys.exit(1)
    print("Valid")


def cmd_hash(args):
    """Hash a message."""
    hasher = get_hasher(args.algorithm)
    print(hasher.hash(_message(args)).to_b64())


def cmd_demo(args):
    """Exercise every capability once and print the artifacts."""
    signer = Ed25519Keypair.generate()
    message = b"hello TSP"
    signature = signer.sign(message)
    signer.public_key.verify(message, signature)

    alice = X25519Keypair.generate()
    bob = X25519Keypair.generate()
    shared_a = alice.diffie_hellman(bob.public_key)
    shared_b = bob.diffie_hellman(alice.public_key)

    key = sha256(b"key material").to_bytes()
    nonce = bytes(NONCE_SIZE)
    aad = b"envelope metadata"
    buffer = bytearray(b"secret payload")
    encrypt(key, nonce, aad, buffer)
    ciphertext = base64url_encode(buffer)
    decrypt(key, nonce, aad, buffer)

    print(json.dumps({
        "ed25519": {
            "msg_b64u": base64url_encode(message),
            "pub_b64u": signer.public_key.to_b64(),
            "sig_b64u": signature.to_b64(),
        },
        "x25519": {
            "shared_secret_b64u": shared_a.to_b64(),
            "agreed": shared_a == shared_b,
        },
        "chacha20poly1305": {
            "ciphertext_b64u": ciphertext,
            "decrypted": bytes(buffer).decode("utf-8"),
        },
    }, indent=2))


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="stfx-crypto",
        description="stfx-crypto - Cryptographic foundation layer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Defaults to STFX_CRYPTO_LOG_LEVEL",
    )
    parser.add_argument("--log-format", choices=["console", "json"])

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # keygen
    keygen_parser = subparsers.add_parser("keygen", help="Generate a key pair")
    keygen_parser.add_argument("algorithm", choices=sorted(KEYPAIR_TYPES))

    # sign
    sign_parser = subparsers.add_parser("sign", help="Sign a message")
    sign_parser.add_argument("message")
    sign_parser.add_argument("--secret", help="Ed25519 secret key (base64url)")
    sign_parser.add_argument("--b64", action="store_true", help="Message is base64url")

    # verify
    verify_parser = subparsers.add_parser("verify", help="Verify a signature")
    verify_parser.add_argument("message")
    verify_parser.add_argument("--public", required=True, help="Ed25519 public key (base64url)")
    verify_parser.add_argument("--signature", required=True, help="Signature (base64url)")
    verify_parser.add_argument("--b64", action="store_true", help="Message is base64url")

    # hash
    hash_parser = subparsers.add_parser("hash", help="Hash a message")
    hash_parser.add_argument("message")
    hash_parser.add_argument(
        "--algorithm",
        choices=[a.value for a in HashAlgorithm],
        help="Defaults to STFX_CRYPTO_HASH",
    )
    hash_parser.add_argument("--b64", action="store_true", help="Message is base64url")

    # demo
    subparsers.add_parser("demo", help="Run every capability once")

    args = parser.parse_args(argv)

    commands = {
        "keygen": cmd_keygen,
        "sign": cmd_sign,
        "verify": cmd_verify,
        "hash": cmd_hash,
        "demo": cmd_demo,
    }

    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return

    try:
        configure_logging(level=args.log_level, fmt=args.log_format)
        command(args)
    except (CryptoError, ValueError) as e:
        # ValueError covers invalid STFX_CRYPTO_* settings (pydantic ValidationError)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
