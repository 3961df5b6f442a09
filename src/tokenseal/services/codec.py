# tokenseal - Compact Signed Token Issuing and Verification
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Wire codec for the three-segment compact token format.

A token is ``base64url(JSON(header)) "." base64url(JSON(claims)) "."
base64url(signature)``. Decoding never raises: every structural problem is
reported as ``Err(TokenError.INVALID)``.
"""

import base64
import binascii
import json
import re
from typing import Any

from beartype import beartype

from ..core.result_types import Err, Ok
from ..models.token import DecodedToken, TokenError

_B64URL_SEGMENT = re.compile(r"[A-Za-z0-9_-]*")


class DuplicateKeyError(ValueError):
    """Raised while decoding JSON that repeats a key inside one object."""


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj = dict(pairs)
    if len(obj) != len(pairs):
        raise DuplicateKeyError("duplicate key in JSON object")
    return obj


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


@beartype
def b64url_encode(data: bytes) -> str:
    """Encode bytes with the URL-safe alphabet, padding stripped."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


@beartype
def b64url_decode(segment: str) -> Ok[bytes] | Err[TokenError]:
    """Decode an unpadded base64url segment.

    Trailing padding is tolerated. Non-canonical input, where the final
    character carries stray low bits, is rejected so that two different
    segments never decode to the same bytes.
    """
    stripped = segment.rstrip("=")
    if len(stripped) % 4 == 1 or not _B64URL_SEGMENT.fullmatch(stripped):
        return Err(TokenError.INVALID)

    padded = stripped + "=" * (-len(stripped) % 4)
    try:
        data = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError):
        return Err(TokenError.INVALID)

    if b64url_encode(data) != stripped:
        return Err(TokenError.INVALID)
    return Ok(data)


@beartype
def encode_segment(value: Any) -> str:
    """JSON-encode ``value`` compactly and base64url the UTF-8 bytes."""
    raw = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return b64url_encode(raw.encode("utf-8"))


@beartype
def decode_segment(segment: str) -> Ok[dict[str, Any]] | Err[TokenError]:
    """Decode a segment into a JSON object with no duplicate keys."""
    raw = b64url_decode(segment)
    if isinstance(raw, Err):
        return raw

    try:
        value = json.loads(
            raw.value.decode("utf-8"),
            object_pairs_hook=_reject_duplicate_keys,
            parse_constant=_reject_constant,
        )
    except (UnicodeDecodeError, ValueError, RecursionError):
        # NaN/Infinity, duplicate keys and syntax errors are all ValueErrors
        return Err(TokenError.INVALID)

    if not isinstance(value, dict):
        return Err(TokenError.INVALID)
    return Ok(value)


@beartype
def split_token(token: str) -> Ok[list[str]] | Err[TokenError]:
    """Split a token into exactly three segments."""
    segments = token.split(".")
    if len(segments) != 3:
        return Err(TokenError.INVALID)
    return Ok(segments)


@beartype
def join_payload(header_segment: str, claims_segment: str) -> bytes:
    """Return the exact bytes covered by the signature."""
    return f"{header_segment}.{claims_segment}".encode("ascii")


@beartype
def decode_token(token: str | bytes) -> Ok[DecodedToken] | Err[TokenError]:
    """Split and decode a token without checking its signature."""
    if isinstance(token, bytes):
        try:
            token = token.decode("ascii")
        except UnicodeDecodeError:
            return Err(TokenError.INVALID)

    return split_token(token).and_then(_decode_segments)


def _decode_segments(segments: list[str]) -> Ok[DecodedToken] | Err[TokenError]:
    header_segment, claims_segment, signature = segments
    header = decode_segment(header_segment)
    if isinstance(header, Err):
        return header
    claims = decode_segment(claims_segment)
    if isinstance(claims, Err):
        return claims

    return Ok(
        DecodedToken(
            header=header.value,
            claims=claims.value,
            signature=signature,
            payload=join_payload(header_segment, claims_segment),
        )
    )
