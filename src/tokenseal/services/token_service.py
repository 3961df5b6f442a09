# tokenseal - Compact Signed Token Issuing and Verification
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Token creation and parsing.

``create`` builds and signs a token; ``parse`` decodes it, selects a key,
verifies the signature and checks expiry. Neither raises for bad tokens or
keys: the outcome is always ``Ok`` or ``Err(TokenError)``.
"""

import logging
from collections.abc import Mapping
from typing import Any

from beartype import beartype
from cryptography.hazmat.primitives.asymmetric import rsa

from ..core.config import Settings, get_settings
from ..core.result_types import Err, Ok
from ..models.token import Algorithm, TokenError, ValidatedToken
from .claims import add_expiry, epoch, still_valid
from .codec import decode_token, encode_segment, join_payload
from .key_selector import select_key
from .signer import jwk_from_public_key, sign, verify

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@beartype
def to_jwk(key: Any) -> Any:
    """Convert an RSA public key object to its JWK mapping.

    Every other key (secrets, JWK mappings, private keys) is returned as is.
    """
    if isinstance(key, rsa.RSAPublicKey):
        return jwk_from_public_key(key)
    return key


def _exposes_key_set(keys: Any) -> bool:
    if isinstance(keys, (Mapping, str, bytes)):
        return False
    members = getattr(keys, "keys", None)
    return members is not None and not callable(members)


@beartype
def normalize_keys(keys: Any) -> list[Any]:
    """Flatten a key, a list of keys or a key set into one candidate list."""
    if isinstance(keys, Mapping) and "keys" in keys:
        return normalize_keys(keys["keys"])
    if _exposes_key_set(keys):
        return normalize_keys(keys.keys)
    if isinstance(keys, (list, tuple)):
        return [to_jwk(key) for key in keys]
    return [to_jwk(keys)]


@beartype
def create(
    algorithm: Algorithm | str,
    claims: Mapping[str, Any],
    key: Any,
    expiration_seconds: int | None = None,
    *,
    key_id: str | None = None,
    now: int | None = None,
) -> Ok[str] | Err[TokenError]:
    """Encode ``claims`` and sign them with ``key``.

    Args:
        algorithm: ``HS256``, ``RS256`` or ``none`` (an Algorithm or a name)
        claims: Claim set to carry
        key: Shared secret for HS256, RSA private key for RS256, ignored for none
        expiration_seconds: When given, ``exp`` is set this many seconds ahead
        key_id: Optional ``kid`` header value
        now: Epoch seconds to use instead of the current time

    Returns:
        Ok with the compact token, or Err(ALG_NOT_SUPPORTED)
    """
    alg = Algorithm.coerce(algorithm)
    if expiration_seconds is not None:
        claims = add_expiry(claims, expiration_seconds, epoch() if now is None else now)

    header: dict[str, Any] = alg.header()
    if key_id is not None:
        header["kid"] = key_id

    payload = join_payload(encode_segment(header), encode_segment(dict(claims)))
    signed = sign(alg, payload, key).map(
        lambda signature: f"{payload.decode('ascii')}.{signature}"
    )
    if isinstance(signed, Err):
        logger.debug("Token not created: %s", signed.error.value)
    return signed


@beartype
def parse(
    token: str | bytes, keys: Any, *, now: int | None = None
) -> Ok[ValidatedToken] | Err[TokenError]:
    """Decode and verify ``token`` against ``keys``.

    Args:
        token: Compact token
        keys: A key, a list of keys, a ``{"keys": [...]}`` mapping, a JwkSet
            or an RSA public key object
        now: Epoch seconds to use instead of the current time

    Returns:
        Ok with the validated header, claims and signature; Err(EXPIRED) for a
        correctly signed but stale token; another Err for anything untrusted
    """
    candidates = normalize_keys(keys)

    decoded = decode_token(token)
    if isinstance(decoded, Err):
        logger.debug("Token rejected: %s", decoded.error.value)
        return decoded
    jwt = decoded.value

    if not isinstance(jwt.algorithm_name, str):
        logger.debug("Token rejected: missing or non-string alg header")
        return Err(TokenError.INVALID)
    algorithm = Algorithm.from_name(jwt.algorithm_name)

    selected = select_key(algorithm, jwt.key_id, candidates)
    key = selected.unwrap_or(selected)
    checked = verify(jwt.signature, algorithm, jwt.payload, key)
    if isinstance(checked, Err):
        logger.debug(
            "Token rejected: %s (alg=%s, candidates=%d)",
            checked.error.value,
            algorithm.value,
            len(candidates),
        )
        return checked

    if not still_valid(jwt.claims.get("exp"), epoch() if now is None else now):
        logger.debug("Token rejected: expired")
        return Err(TokenError.EXPIRED)

    return Ok(
        ValidatedToken(header=jwt.header, claims=jwt.claims, signature=jwt.signature)
    )


class TokenService:
    """Token issuing and verification with configured defaults."""

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize from ``settings`` or the global settings."""
        settings = settings or get_settings()
        self._algorithm = Algorithm.coerce(settings.default_algorithm)
        self._expiration_seconds = settings.default_expiration_seconds
        self._secret = (
            settings.hmac_secret.get_secret_value()
            if settings.hmac_secret is not None
            else None
        )

    @property
    def algorithm(self) -> Algorithm:
        """Algorithm used when ``issue`` is not given one."""
        return self._algorithm

    @beartype
    def issue(
        self,
        claims: Mapping[str, Any],
        key: Any = None,
        *,
        algorithm: Algorithm | str | None = None,
        expiration_seconds: int | None = None,
        key_id: str | None = None,
    ) -> Ok[str] | Err[TokenError]:
        """Create a token, filling in configured defaults."""
        alg = self._algorithm if algorithm is None else Algorithm.coerce(algorithm)
        if key is None:
            key = self._default_key(alg)
            if key is None:
                logger.warning("No key supplied and no HMAC secret configured")
                return Err(TokenError.NOT_FOUND)

        if expiration_seconds is None:
            expiration_seconds = self._expiration_seconds
        return create(alg, claims, key, expiration_seconds, key_id=key_id)

    @beartype
    def verify(self, token: str, keys: Any = None) -> Ok[ValidatedToken] | Err[TokenError]:
        """Parse a token, tolerating a ``Bearer`` prefix."""
        if token.startswith(BEARER_PREFIX):
            token = token[len(BEARER_PREFIX) :]
        if keys is None:
            keys = self._secret if self._secret is not None else []
        return parse(token, keys)

    def _default_key(self, algorithm: Algorithm) -> Any:
        if algorithm is Algorithm.NONE:
            return b""
        if algorithm is Algorithm.HS256:
            return self._secret
        return None


# Global token service instance
_token_service: TokenService | None = None


@beartype
def get_token_service() -> TokenService:
    """Get global token service instance."""
    global _token_service
    if _token_service is None:
        _token_service = TokenService()
    return _token_service


@beartype
def reset_token_service() -> None:
    """Drop the global token service so settings are read again."""
    global _token_service
    _token_service = None
