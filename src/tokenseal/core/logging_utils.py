"""Central logging utilities for tokenseal.

Key Features
------------
1. configure_logging(): idempotent initialization of the root logger.
2. get_logger(name): typed helper returning a named logger.

Nothing here runs on import; applications call configure_logging() themselves.

Token contents are never passed to these loggers: callers log rejection
reasons and algorithm names only, not secrets, signatures or claim values.
"""

from __future__ import annotations

import logging
from typing import Final

from beartype import beartype

from .config import get_settings

__all__: Final = [
    "configure_logging",
    "get_logger",
]

_DEFAULT_LOG_FORMAT: Final = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_is_configured: bool = False


@beartype
def configure_logging(
    *, level: int | str | None = None, fmt: str = _DEFAULT_LOG_FORMAT
) -> None:
    """Configure the root logger exactly once.

    Calling this function multiple times is safe – configuration will only
    be applied on the first invocation. When ``level`` is omitted the
    configured ``log_level`` setting is used.
    """
    global _is_configured
    if _is_configured:
        return

    if level is None:
        level = get_settings().log_level
    logging.basicConfig(level=level, format=fmt)
    _is_configured = True


@beartype
def get_logger(name: str | None = None, *, level: int | None = None) -> logging.Logger:
    """Return a named logger without touching the root logger."""
    logger = logging.getLogger(name or "tokenseal")
    if level is not None:
        logger.setLevel(level)
    return logger
