# tokenseal - Compact Signed Token Issuing and Verification
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Selection of the one verification key a token is checked against.

Rules per algorithm:

- ``none``: no key material is needed.
- ``HS256``: exactly one shared secret must be supplied. The header ``kid``
  is not consulted, so callers holding several secrets must pick one
  themselves.
- ``RS256``: a candidate whose ``kid`` equals the header ``kid`` wins
  outright. Otherwise the usable RSA keys without a ``kid`` (``use`` absent
  or ``"sig"``) must narrow down to exactly one.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from beartype import beartype

from ..core.result_types import Err, Ok
from ..models.token import Algorithm, TokenError

NO_KEY = b""


def _select_rsa_key(key_id: Any, candidates: Sequence[Any]) -> Ok[Any] | Err[TokenError]:
    usable: list[Mapping[str, Any]] = []
    for candidate in candidates:
        if not isinstance(candidate, Mapping) or candidate.get("kty") != "RSA":
            continue
        if "kid" in candidate:
            if key_id is not None and candidate["kid"] == key_id:
                return Ok(candidate)
            continue
        if "use" in candidate:
            if candidate["use"] == "sig":
                usable.append(candidate)
            continue
        usable.append(candidate)

    if not usable:
        return Err(TokenError.NOT_FOUND)
    if len(usable) > 1:
        return Err(TokenError.TOO_MANY)
    return Ok(usable[0])


@beartype
def select_key(
    algorithm: Algorithm, key_id: Any, candidates: Sequence[Any]
) -> Ok[Any] | Err[TokenError]:
    """Pick the key a token signed with ``algorithm`` must verify against."""
    if algorithm is Algorithm.NONE:
        return Ok(NO_KEY)
    if algorithm is Algorithm.HS256:
        if len(candidates) != 1:
            return Err(TokenError.TOO_MANY_KEYS)
        return Ok(candidates[0])
    if algorithm is Algorithm.RS256:
        return _select_rsa_key(key_id, candidates)
    return Err(TokenError.UNKNOWN_ALGORITHM)
