# tokenseal - Compact Signed Token Issuing and Verification
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Token domain types: algorithms, error kinds and decoded tokens."""

from enum import Enum
from typing import Any

from attrs import field, frozen


class Algorithm(str, Enum):
    """Signing algorithms understood by the token pipeline."""

    HS256 = "HS256"
    RS256 = "RS256"
    NONE = "none"
    UNKNOWN = "unknown"

    @classmethod
    def from_name(cls, name: object) -> "Algorithm":
        """Map a header ``alg`` value to an algorithm, exact match only."""
        for member in (cls.HS256, cls.RS256, cls.NONE):
            if name == member.value:
                return member
        return cls.UNKNOWN

    @classmethod
    def coerce(cls, value: "Algorithm | str") -> "Algorithm":
        """Accept an Algorithm or a caller-side name in any case."""
        if isinstance(value, Algorithm):
            return value
        wanted = value.strip().lower()
        for member in (cls.HS256, cls.RS256, cls.NONE):
            if wanted == member.value.lower():
                return member
        return cls.UNKNOWN

    def header(self) -> dict[str, str]:
        """Return the JOSE header announcing this algorithm."""
        if self is Algorithm.UNKNOWN:
            return {"typ": "JWT"}
        return {"alg": self.value, "typ": "JWT"}


class TokenError(str, Enum):
    """Reasons a token cannot be created or trusted."""

    INVALID = "invalid"
    EXPIRED = "expired"
    UNKNOWN_ALGORITHM = "unknown_algorithm"
    ALG_NOT_SUPPORTED = "alg_not_supported"
    NOT_FOUND = "not_found"
    TOO_MANY = "too_many"
    TOO_MANY_KEYS = "too_many_keys"


@frozen
class DecodedToken:
    """Structurally valid token whose signature has not been checked yet."""

    header: dict[str, Any] = field()
    claims: dict[str, Any] = field()
    signature: str = field()  # Raw signature segment
    payload: bytes = field()  # header_seg + b"." + claims_seg, the signed bytes

    @property
    def algorithm_name(self) -> Any:
        """Raw ``alg`` header value."""
        return self.header.get("alg")

    @property
    def key_id(self) -> Any:
        """Raw ``kid`` header value."""
        return self.header.get("kid")


@frozen
class ValidatedToken:
    """Token whose signature and expiry have both been checked."""

    header: dict[str, Any] = field()
    claims: dict[str, Any] = field()
    signature: str = field()

    @property
    def expires_at(self) -> int | float | None:
        """Value of the ``exp`` claim, if declared."""
        exp = self.claims.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            return None
        return exp
