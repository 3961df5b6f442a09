"""Token pipeline services: codec, claims, key selection, signing."""

from .claims import add_expiry, epoch, still_valid
from .codec import decode_segment, decode_token, encode_segment, split_token
from .key_selector import select_key
from .signer import jwk_from_public_key, public_key_from_jwk, sign, verify
from .token_service import (
    TokenService,
    create,
    get_token_service,
    normalize_keys,
    parse,
    reset_token_service,
    to_jwk,
)

__all__ = [
    "TokenService",
    "add_expiry",
    "create",
    "decode_segment",
    "decode_token",
    "encode_segment",
    "epoch",
    "get_token_service",
    "jwk_from_public_key",
    "normalize_keys",
    "parse",
    "public_key_from_jwk",
    "reset_token_service",
    "select_key",
    "sign",
    "split_token",
    "still_valid",
    "to_jwk",
    "verify",
]
