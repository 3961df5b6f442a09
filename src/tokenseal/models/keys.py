"""Key set document accepted wherever verification keys are expected."""

from typing import Any

from pydantic import Field

from .base import BaseModelConfig


class JwkSet(BaseModelConfig):
    """Parsed JWKS document (``{"keys": [...]}``)."""

    keys: list[dict[str, Any]] = Field(
        default_factory=list, description="JSON Web Keys in document order"
    )
