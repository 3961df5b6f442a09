# tokenseal - Compact Signed Token Issuing and Verification
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Configuration management using Pydantic Settings."""

from typing import Any

from beartype import beartype
from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ALGORITHM_NAMES = {"hs256": "HS256", "rs256": "RS256", "none": "none"}


class Settings(BaseSettings):
    """Library settings with immutable configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TOKENSEAL_",
        env_file=None,
        env_file_encoding="utf-8",
        frozen=True,  # Immutable settings
        validate_default=True,
        extra="forbid",
    )

    # Token issuing
    default_algorithm: str = Field(
        default="HS256",
        pattern="^(HS256|RS256|none)$",
        description="Algorithm used by TokenService.issue when none is given",
    )
    default_expiration_seconds: int | None = Field(
        default=None,
        ge=1,
        le=31_536_000,  # One year
        description="Lifetime added as the exp claim, None for no expiry",
    )
    hmac_secret: SecretStr | None = Field(
        default=None,
        description="HS256 secret used when the caller supplies no key",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR)$",
        description="Level applied to the root logger on first use",
    )

    @field_validator("default_algorithm", mode="before")
    @classmethod
    def normalize_algorithm(cls: type["Settings"], v: Any) -> Any:
        """Accept algorithm names in any case."""
        if isinstance(v, str):
            return _ALGORITHM_NAMES.get(v.strip().lower(), v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls: type["Settings"], v: Any) -> Any:
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("hmac_secret")
    @classmethod
    def validate_hmac_secret(
        cls: type["Settings"], v: SecretStr | None, info: ValidationInfo
    ) -> SecretStr | None:
        """Ensure a configured HMAC secret is not empty."""
        if v is not None and not v.get_secret_value():
            raise ValueError("hmac_secret must not be empty when set")
        return v


# Global settings instance
_settings: Settings | None = None


@beartype
def get_settings() -> Settings:
    """Get settings instance, building it on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


@beartype
def clear_settings_cache() -> None:
    """Drop the cached settings so the environment is read again."""
    global _settings
    _settings = None
