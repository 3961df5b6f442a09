"""Unit tests for settings and the configured token service."""

import pytest
from pydantic import ValidationError

from tokenseal.core.config import Settings, get_settings
from tokenseal.core.result_types import Err
from tokenseal.models.token import Algorithm, TokenError
from tokenseal.services.codec import decode_token
from tokenseal.services.token_service import TokenService, get_token_service

pytestmark = pytest.mark.usefixtures("clean_settings")


class TestSettings:
    """Test settings defaults, validation and environment overrides."""

    def test_defaults(self) -> None:
        """Test the defaults issue HS256 tokens without expiry."""
        settings = Settings()
        assert settings.default_algorithm == "HS256"
        assert settings.default_expiration_seconds is None
        assert settings.hmac_secret is None
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test TOKENSEAL_ variables are read and normalized."""
        monkeypatch.setenv("TOKENSEAL_DEFAULT_ALGORITHM", "rs256")
        monkeypatch.setenv("TOKENSEAL_DEFAULT_EXPIRATION_SECONDS", "900")
        monkeypatch.setenv("TOKENSEAL_LOG_LEVEL", "debug")

        settings = get_settings()

        assert settings.default_algorithm == "RS256"
        assert settings.default_expiration_seconds == 900
        assert settings.log_level == "DEBUG"

    def test_settings_are_cached(self) -> None:
        """Test get_settings returns one instance."""
        assert get_settings() is get_settings()

    def test_settings_are_frozen(self) -> None:
        """Test settings cannot be changed after construction."""
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.log_level = "ERROR"  # type: ignore[misc]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"default_algorithm": "ES256"},
            {"default_expiration_seconds": 0},
            {"log_level": "TRACE"},
            {"hmac_secret": ""},
            {"unknown_field": 1},
        ],
    )
    def test_invalid_values_rejected(self, overrides: dict[str, object]) -> None:
        """Test out-of-range and unknown settings fail validation."""
        with pytest.raises(ValidationError):
            Settings(**overrides)  # type: ignore[arg-type]


class TestTokenService:
    """Test the settings-driven service facade."""

    def test_issue_and_verify_with_configured_secret(self) -> None:
        """Test the configured secret is used on both sides."""
        service = TokenService(Settings(hmac_secret="configured-secret"))

        token = service.issue({"sub": "alice"}).unwrap()

        assert service.verify(token).unwrap().claims == {"sub": "alice"}
        assert service.verify(f"Bearer {token}").is_ok()

    def test_default_lifetime_applied(self) -> None:
        """Test the configured lifetime becomes an exp claim."""
        service = TokenService(
            Settings(hmac_secret="configured-secret", default_expiration_seconds=60)
        )

        claims = decode_token(service.issue({"sub": "alice"}).unwrap()).unwrap().claims

        assert isinstance(claims["exp"], int)

    def test_explicit_arguments_override_defaults(self) -> None:
        """Test per-call algorithm and key take precedence."""
        service = TokenService(Settings(hmac_secret="configured-secret"))

        token = service.issue(
            {"sub": "alice"}, b"call-secret", algorithm="none", key_id="k1"
        ).unwrap()

        assert decode_token(token).unwrap().header == {
            "alg": "none",
            "typ": "JWT",
            "kid": "k1",
        }

    def test_missing_key_reported(self) -> None:
        """Test issuing without any key is not_found."""
        service = TokenService(Settings())
        assert service.algorithm is Algorithm.HS256
        assert service.issue({"sub": "alice"}) == Err(TokenError.NOT_FOUND)

    def test_verify_without_keys_or_secret(self) -> None:
        """Test verifying an HS256 token with nothing configured fails."""
        token = TokenService(Settings(hmac_secret="configured-secret")).issue({}).unwrap()
        assert TokenService(Settings()).verify(token) == Err(TokenError.TOO_MANY_KEYS)

    def test_global_service_reads_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test get_token_service builds from the environment once."""
        monkeypatch.setenv("TOKENSEAL_HMAC_SECRET", "env-secret")

        service = get_token_service()

        assert service is get_token_service()
        assert service.verify(service.issue({"n": 1}).unwrap()).is_ok()
