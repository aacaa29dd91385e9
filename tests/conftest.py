"""
Pytest Configuration and Fixtures
"""

import os
import sys
import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), 'src'))

# Set test environment
os.environ.pop("STFX_CRYPTO_HASH", None)
os.environ.pop("STFX_CRYPTO_SIGNATURE", None)
os.environ["STFX_CRYPTO_LOG_LEVEL"] = "WARNING"

from stfx_crypto.config import reset_config  # noqa: E402
from stfx_crypto.log import reset_logging  # noqa: E402
from stfx_crypto.keys import Ed25519Keypair, X25519Keypair  # noqa: E402

# Seed bytes 0x01..0x20, the fixed deterministic test key.
FIXED_SEED = bytes(range(1, 33))


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts from the environment and the silent logging default."""
    reset_config()
    yield
    reset_config()
    reset_logging()


@pytest.fixture
def fixed_seed():
    return FIXED_SEED


@pytest.fixture
def seeded_ed25519():
    """Ed25519 key pair restored from the fixed seed."""
    return Ed25519Keypair.from_secret_bytes(FIXED_SEED)


@pytest.fixture
def alice():
    return X25519Keypair.generate()


@pytest.fixture
def bob():
    return X25519Keypair.generate()


@pytest.fixture
def aead_key():
    return bytes([1]) * 32


@pytest.fixture
def aead_nonce():
    return bytes([2]) * 12
