"""
Configuration

Process-wide defaults read from environment variables:

- STFX_CRYPTO_HASH: default hash algorithm (sha256 | blake2b256)
- STFX_CRYPTO_SIGNATURE: default signature algorithm (Ed25519)
- STFX_CRYPTO_LOG_LEVEL: level applied by configure_logging() (default WARNING;
  until then the library logger stays at WARNING with a NullHandler)
- STFX_CRYPTO_LOG_FORMAT: console | json
"""

import os
from threading import Lock
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .hashing import HashAlgorithm
from .keys import SignatureAlgorithm
from .log import DEFAULT_LOG_LEVEL

ENV_PREFIX = "STFX_CRYPTO_"


class CryptoConfig(BaseModel):
    """Validated package configuration."""

    model_config = ConfigDict(frozen=True)

    default_hash_algorithm: HashAlgorithm = Field(
        default=HashAlgorithm.SHA256,
        description="Algorithm returned by get_hasher() with no argument",
    )
    default_signature_algorithm: SignatureAlgorithm = Field(
        default=SignatureAlgorithm.ED25519,
        description="Algorithm returned by get_signer() with no argument",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default=DEFAULT_LOG_LEVEL)
    log_format: Literal["console", "json"] = Field(default="console")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CryptoConfig":
        """Build a config from ``environ`` (``os.environ`` by default)."""
        env = os.environ if environ is None else environ
        values = {}

        if env.get(ENV_PREFIX + "HASH"):
            values["default_hash_algorithm"] = env[ENV_PREFIX + "HASH"].strip().lower()
        if env.get(ENV_PREFIX + "SIGNATURE"):
            values["default_signature_algorithm"] = env[ENV_PREFIX + "SIGNATURE"].strip()
        if env.get(ENV_PREFIX + "LOG_LEVEL"):
            values["log_level"] = env[ENV_PREFIX + "LOG_LEVEL"].strip().upper()
        if env.get(ENV_PREFIX + "LOG_FORMAT"):
            values["log_format"] = env[ENV_PREFIX + "LOG_FORMAT"].strip().lower()

        return cls(**values)


_config: Optional[CryptoConfig] = None
_config_lock = Lock()


def get_config() -> CryptoConfig:
    """Return the process-wide config, reading the environment on first use."""
    global _config
    with _config_lock:
        if _config is None:
            _config = CryptoConfig.from_env()
        return _config


def reset_config() -> None:
    """Forget the cached config so the next call re-reads the environment."""
    global _config
    with _config_lock:
        _config = None
