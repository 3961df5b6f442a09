"""Domain models for tokenseal."""

from .base import BaseModelConfig
from .keys import JwkSet
from .token import Algorithm, DecodedToken, TokenError, ValidatedToken

__all__ = [
    "Algorithm",
    "BaseModelConfig",
    "DecodedToken",
    "JwkSet",
    "TokenError",
    "ValidatedToken",
]
