"""
Tests for Ed25519 Signing and Verification

Covers generation, deterministic signing, published vectors, and the
single-outcome verification failure.
"""

import threading

import pytest

from stfx_crypto.errors import InvalidLengthError, RandomnessError, VerificationError
from stfx_crypto.keys import (
    Ed25519Keypair,
    Ed25519PublicKey,
    Ed25519Signature,
    SignatureAlgorithm,
    X25519Keypair,
    get_signer,
    sign,
    verify,
)
from stfx_crypto.randomness import InsecureDeterministicRandomness, NoRandomness
from stfx_crypto.traits import KeyPair, Signer, Verifier

# RFC 8032 section 7.1, TEST 1 and TEST 2
RFC8032_VECTORS = [
    (
        "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60",
        "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a",
        "",
        "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555f"
        "b8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b",
    ),
    (
        "4ccd089b28ff96da9db6c346ec114e0f5b8a319f35aba624da8cf6ed4fb8a6fb",
        "3d4017c3e843895a92b70aa74d1b7ebc9c982ccf2ec4968cc0cd55f12af4660c",
        "72",
        "92a009a9f0d4cab8720e820b5f642540a2b27b5416503f8fb3762223ebdb69da08"
        "5ac1e43e15996e458f3613d0f11d8c387b2eaeb4302aeeb00d291612bb0c00",
    ),
]

# Secret 0x01..0x20 signing b"test"
FIXED_SEED_TEST_SIGNATURE = (
    "72b0ebbddb0bbdd7e59fb4bf624653e33435b837201de94f134fa13d2293c4d9"
    "e93af966c167d5ddb0aeca4269dd43593aee44eb061124459a1288cb682e3602"
)


class TestEd25519Keypair:
    """Test Ed25519 key pair lifecycle."""

    def test_generate_key_pair(self):
        """Should generate a valid key pair."""
        keypair = Ed25519Keypair.generate()

        assert len(keypair.public_key_bytes()) == 32
        assert len(keypair.secret_bytes()) == 32
        assert len(keypair.key_id) == 16
        assert keypair.algorithm == "Ed25519"

    def test_implements_contracts(self):
        """Key pair is a KeyPair, Signer and Verifier."""
        keypair = Ed25519Keypair.generate()

        assert isinstance(keypair, KeyPair)
        assert isinstance(keypair, Signer)
        assert isinstance(keypair, Verifier)
        assert isinstance(keypair.public_key, Verifier)

    def test_generate_draws_32_bytes_from_rng(self):
        """Generation consumes exactly 32 bytes of the supplied source."""
        seed = b"generation-test"
        from_rng = Ed25519Keypair.generate(InsecureDeterministicRandomness(seed))
        expected_seed = InsecureDeterministicRandomness(seed).gen_bytes(32)

        assert from_rng.secret_bytes() == expected_seed

    def test_generate_fails_without_randomness(self):
        """A disabled source surfaces as RandomnessError."""
        with pytest.raises(RandomnessError):
            Ed25519Keypair.generate(NoRandomness())

    def test_fresh_keys_differ(self):
        assert Ed25519Keypair.generate().public_key != Ed25519Keypair.generate().public_key

    def test_public_key_is_cached(self):
        """The same public key object comes back on every access."""
        keypair = Ed25519Keypair.generate()

        assert keypair.public_key is keypair.public_key

    def test_restore_from_secret_bytes(self):
        """Should restore key pair from secret bytes."""
        original = Ed25519Keypair.generate()
        restored = Ed25519Keypair.from_secret_bytes(original.secret_bytes())

        assert restored.public_key == original.public_key
        assert restored.key_id == original.key_id

        # Both should produce same signature
        data = b"test data"
        assert original.sign(data) == restored.sign(data)

    @pytest.mark.parametrize("length", [0, 16, 31, 33, 64])
    def test_wrong_secret_length_rejected(self, length):
        with pytest.raises(InvalidLengthError) as exc_info:
            Ed25519Keypair.from_secret_bytes(bytes(length))

        assert exc_info.value.expected == 32
        assert exc_info.value.actual == length

    def test_repr_hides_secret(self, seeded_ed25519):
        text = repr(seeded_ed25519)

        assert seeded_ed25519.secret_bytes().hex() not in text
        assert "Ed25519Keypair" in text


class TestEd25519Signing:
    """Test sign/verify behaviour."""

    @pytest.mark.parametrize("message", [b"", b"hello world", bytes(range(256)) * 4])
    def test_sign_and_verify(self, message):
        """Signature should verify correctly with the key pair's own public key."""
        keypair = Ed25519Keypair.generate()

        signature = keypair.sign(message)

        assert isinstance(signature, Ed25519Signature)
        assert len(signature.to_bytes()) == 64
        keypair.public_key.verify(message, signature)

    def test_signing_is_deterministic(self, seeded_ed25519):
        """Same key and message always give the same signature."""
        assert seeded_ed25519.sign(b"test") == seeded_ed25519.sign(b"test")

    def test_fixed_seed_regression(self, fixed_seed):
        """Seed 0x01..0x20 signing b"test" reproduces the recorded signature."""
        keypair = Ed25519Keypair.from_secret_bytes(fixed_seed)

        signature = keypair.sign(b"test")

        assert signature.hex() == FIXED_SEED_TEST_SIGNATURE
        Ed25519PublicKey(keypair.public_key_bytes()).verify(
            b"test", bytes.fromhex(FIXED_SEED_TEST_SIGNATURE)
        )
        with pytest.raises(VerificationError):
            Ed25519Keypair.generate().public_key.verify(b"test", signature)

    @pytest.mark.parametrize("secret_hex,public_hex,message_hex,signature_hex", RFC8032_VECTORS)
    def test_rfc8032_vectors(self, secret_hex, public_hex, message_hex, signature_hex):
        """Published vectors reproduce byte for byte."""
        keypair = Ed25519Keypair.from_secret_bytes(bytes.fromhex(secret_hex))
        message = bytes.fromhex(message_hex)

        assert keypair.public_key.hex() == public_hex
        assert keypair.sign(message).hex() == signature_hex
        Ed25519PublicKey(bytes.fromhex(public_hex)).verify(message, bytes.fromhex(signature_hex))

    def test_wrong_data_fails_verification(self):
        """Wrong data should fail verification."""
        keypair = Ed25519Keypair.generate()
        signature = keypair.sign(b"original message")

        with pytest.raises(VerificationError):
            keypair.public_key.verify(b"different message", signature)

    def test_wrong_key_fails_verification(self):
        signature = Ed25519Keypair.generate().sign(b"message")

        with pytest.raises(VerificationError):
            Ed25519Keypair.generate().public_key.verify(b"message", signature)

    def test_tampered_signature_fails(self):
        """Tampered signature should fail."""
        keypair = Ed25519Keypair.generate()
        data = b"test message"
        tampered = bytearray(keypair.sign(data).to_bytes())
        tampered[10] ^= 0x01

        with pytest.raises(VerificationError):
            keypair.public_key.verify(data, bytes(tampered))

    def test_failures_are_indistinguishable(self):
        """Malformed, short and mismatched signatures give the same error."""
        keypair = Ed25519Keypair.generate()
        good = keypair.sign(b"message").to_bytes()
        bad_inputs = [
            (b"other", good),
            (b"message", good[:63]),
            (b"message", good + b"\x00"),
            (b"message", b""),
            (b"message", b"\xff" * 64),
        ]

        messages = set()
        for message, signature in bad_inputs:
            with pytest.raises(VerificationError) as exc_info:
                keypair.public_key.verify(message, signature)
            messages.add((type(exc_info.value), str(exc_info.value)))

        assert messages == {(VerificationError, "signature verification failed")}

    def test_concurrent_signing(self, seeded_ed25519):
        """One key pair shared across threads signs and verifies consistently."""
        expected = seeded_ed25519.sign(b"shared")
        results = []

        def work():
            signature = seeded_ed25519.sign(b"shared")
            seeded_ed25519.public_key.verify(b"shared", signature)
            results.append(signature)

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == [expected] * 8

    def test_is_valid(self):
        keypair = Ed25519Keypair.generate()
        signature = keypair.sign(b"message")

        assert keypair.public_key.is_valid(b"message", signature) is True
        assert keypair.public_key.is_valid(b"massage", signature) is False

    def test_raw_bytes_signature_accepted(self):
        keypair = Ed25519Keypair.generate()
        keypair.verify(b"message", keypair.sign(b"message").to_bytes())

    def test_cross_algorithm_value_rejected(self):
        """An X25519 public key cannot be passed off as a signature."""
        keypair = Ed25519Keypair.generate()

        with pytest.raises(TypeError):
            keypair.public_key.verify(b"message", X25519Keypair.generate().public_key)

    def test_non_bytes_message_rejected(self):
        with pytest.raises(TypeError):
            Ed25519Keypair.generate().sign("text")

    def test_base64_sign_verify(self):
        """Test base64url convenience methods."""
        keypair = Ed25519Keypair.generate()
        data = b"test message"

        sig_b64 = keypair.sign_b64(data)

        assert "=" not in sig_b64
        keypair.verify_b64(data, sig_b64)

    def test_base64_garbage_is_verification_error(self):
        keypair = Ed25519Keypair.generate()

        with pytest.raises(VerificationError):
            keypair.verify_b64(b"data", "not*base64")


class TestGenericSigning:
    """Generic code written against the contracts only."""

    def test_generic_helpers(self):
        signer = get_signer(SignatureAlgorithm.ED25519)

        signature = sign(signer, b"generic")
        verify(signer.public_key, b"generic", signature)

    def test_get_signer_defaults_from_config(self):
        signer = get_signer()

        assert isinstance(signer, Ed25519Keypair)

    def test_get_signer_by_name(self, fixed_seed):
        signer = get_signer("ed25519", secret=fixed_seed)

        assert signer.public_key == Ed25519Keypair.from_secret_bytes(fixed_seed).public_key

    def test_get_signer_unknown_algorithm(self):
        with pytest.raises(ValueError):
            get_signer("rsa")
