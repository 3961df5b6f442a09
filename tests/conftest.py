"""Test configuration and fixtures for tokenseal.

Provides shared key material (an HMAC secret and RSA key pairs), a fixed
clock value and settings isolation for the configuration tests.
"""

from collections.abc import Generator
from typing import Any

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from tokenseal.core.config import clear_settings_cache
from tokenseal.services.signer import jwk_from_public_key
from tokenseal.services.token_service import reset_token_service

FIXED_NOW = 1_700_000_000


@pytest.fixture
def now() -> int:
    """Fixed epoch seconds used as the current time."""
    return FIXED_NOW


@pytest.fixture
def hmac_secret() -> bytes:
    """Shared HS256 secret."""
    return b"test-hmac-secret-for-testing-only"


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """RSA signing key shared across the session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_private_key() -> rsa.RSAPrivateKey:
    """Second, unrelated RSA signing key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def rsa_jwk(rsa_private_key: rsa.RSAPrivateKey) -> dict[str, Any]:
    """Public JWK matching ``rsa_private_key``."""
    return jwk_from_public_key(rsa_private_key.public_key())


@pytest.fixture
def other_rsa_jwk(other_rsa_private_key: rsa.RSAPrivateKey) -> dict[str, Any]:
    """Public JWK matching ``other_rsa_private_key``."""
    return jwk_from_public_key(other_rsa_private_key.public_key())


@pytest.fixture
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate the global settings and token service from the environment."""
    for name in (
        "TOKENSEAL_DEFAULT_ALGORITHM",
        "TOKENSEAL_DEFAULT_EXPIRATION_SECONDS",
        "TOKENSEAL_HMAC_SECRET",
        "TOKENSEAL_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    reset_token_service()
    yield
    clear_settings_cache()
    reset_token_service()
