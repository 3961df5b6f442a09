# tokenseal - Compact Signed Token Issuing and Verification
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Signature computation and verification for HS256, RS256 and none."""

import hashlib
import hmac
from collections.abc import Mapping
from typing import Any

from beartype import beartype
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..core.result_types import Err, Ok
from ..models.token import Algorithm, TokenError
from .codec import b64url_decode, b64url_encode


def _secret_bytes(key: Any) -> bytes | None:
    if isinstance(key, bytes):
        return key
    if isinstance(key, str):
        return key.encode("utf-8")
    return None


def _int_to_b64url(value: int) -> str:
    length = max(1, (value.bit_length() + 7) // 8)
    return b64url_encode(value.to_bytes(length, "big"))


@beartype
def jwk_from_public_key(public_key: rsa.RSAPublicKey) -> dict[str, str]:
    """Describe an RSA public key as a JWK mapping."""
    numbers = public_key.public_numbers()
    return {
        "kty": "RSA",
        "e": _int_to_b64url(numbers.e),
        "n": _int_to_b64url(numbers.n),
    }


@beartype
def public_key_from_jwk(jwk: Mapping[str, Any]) -> Ok[rsa.RSAPublicKey] | Err[TokenError]:
    """Rebuild an RSA public key from the ``n``/``e`` members of a JWK."""
    modulus, exponent = jwk.get("n"), jwk.get("e")
    if not isinstance(modulus, str) or not isinstance(exponent, str):
        return Err(TokenError.INVALID)

    n_bytes = b64url_decode(modulus)
    if isinstance(n_bytes, Err):
        return n_bytes
    e_bytes = b64url_decode(exponent)
    if isinstance(e_bytes, Err):
        return e_bytes

    try:
        numbers = rsa.RSAPublicNumbers(
            e=int.from_bytes(e_bytes.value, "big"),
            n=int.from_bytes(n_bytes.value, "big"),
        )
        return Ok(numbers.public_key())
    except (ValueError, UnsupportedAlgorithm):
        return Err(TokenError.INVALID)


@beartype
def sign(algorithm: Algorithm, payload: bytes, key: Any) -> Ok[str] | Err[TokenError]:
    """Compute the base64url signature segment for ``payload``."""
    if algorithm is Algorithm.HS256:
        secret = _secret_bytes(key)
        if secret is None:
            return Err(TokenError.ALG_NOT_SUPPORTED)
        digest = hmac.new(secret, payload, hashlib.sha256).digest()
        return Ok(b64url_encode(digest))
    if algorithm is Algorithm.RS256:
        if not isinstance(key, rsa.RSAPrivateKey):
            return Err(TokenError.ALG_NOT_SUPPORTED)
        try:
            signature = key.sign(payload, padding.PKCS1v15(), hashes.SHA256())
        except (ValueError, UnsupportedAlgorithm):
            return Err(TokenError.ALG_NOT_SUPPORTED)
        return Ok(b64url_encode(signature))
    if algorithm is Algorithm.NONE:
        return Ok("")
    return Err(TokenError.ALG_NOT_SUPPORTED)


def _verify_rs256(signature: str, payload: bytes, jwk: Mapping[str, Any]) -> Ok[None] | Err[TokenError]:
    raw_signature = b64url_decode(signature)
    if isinstance(raw_signature, Err):
        return raw_signature
    public_key = public_key_from_jwk(jwk)
    if isinstance(public_key, Err):
        return public_key

    try:
        public_key.value.verify(
            raw_signature.value, payload, padding.PKCS1v15(), hashes.SHA256()
        )
    except (InvalidSignature, ValueError):
        return Err(TokenError.INVALID)
    return Ok(None)


@beartype
def verify(
    signature: str, algorithm: Algorithm, payload: bytes, key: Any
) -> Ok[None] | Err[TokenError]:
    """Check ``signature`` over ``payload``.

    ``key`` may be the ``Err`` produced by key selection, in which case that
    error is handed back unchanged.
    """
    if isinstance(key, Err):
        return key

    if algorithm is Algorithm.NONE:
        return Ok(None) if signature == "" else Err(TokenError.INVALID)

    if algorithm is Algorithm.HS256:
        secret = _secret_bytes(key)
        if secret is None or not signature.isascii():
            return Err(TokenError.INVALID)
        expected = sign(Algorithm.HS256, payload, secret)
        if isinstance(expected, Ok) and hmac.compare_digest(
            expected.value.encode("ascii"), signature.encode("ascii")
        ):
            return Ok(None)
        return Err(TokenError.INVALID)

    if algorithm is Algorithm.RS256:
        if not isinstance(key, Mapping) or key.get("kty") != "RSA":
            return Err(TokenError.INVALID)
        return _verify_rs256(signature, payload, key)

    return Err(TokenError.INVALID)
