# tokenseal - Compact Signed Token Issuing and Verification
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Issue and verify compact signed tokens (HS256, RS256 and none)."""

from .core.result_types import Err, Ok
from .models import Algorithm, JwkSet, TokenError, ValidatedToken
from .services.token_service import (
    TokenService,
    create,
    get_token_service,
    parse,
    to_jwk,
)

__version__ = "0.1.0"

__all__ = [
    "Algorithm",
    "Err",
    "JwkSet",
    "Ok",
    "TokenError",
    "TokenService",
    "ValidatedToken",
    "create",
    "get_token_service",
    "parse",
    "to_jwk",
]
