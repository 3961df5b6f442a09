"""Expiration claim handling."""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from beartype import beartype

EXPIRATION_CLAIM = "exp"


@beartype
def epoch() -> int:
    """Current UTC time in whole seconds since the Unix epoch."""
    return int(datetime.now(timezone.utc).timestamp())


@beartype
def add_expiry(
    claims: Mapping[str, Any], seconds: int | float, now: int | float
) -> dict[str, Any]:
    """Return a copy of ``claims`` with ``exp`` set ``seconds`` after ``now``.

    An existing ``exp`` is overwritten.
    """
    expiring = dict(claims)
    expiring[EXPIRATION_CLAIM] = now + seconds
    return expiring


@beartype
def still_valid(exp: Any, now: int | float) -> bool:
    """Check an ``exp`` claim value against ``now``.

    A missing claim (``None``) never expires. A numeric claim is valid only
    while strictly in the future. Anything else is treated as expired.
    """
    if exp is None:
        return True
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return False
    return exp - now > 0
