"""Domain entities for authbase.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from authbase.domain.entities.session import (
    REFRESH_TOKEN_KEY_PREFIX,
    TokenPair,
    TokenPayload,
    TokenType,
    refresh_token_key,
)
from authbase.domain.entities.user import USER_STATUS_ACTIVE, User

__all__ = [
    "REFRESH_TOKEN_KEY_PREFIX",
    "TokenPair",
    "TokenPayload",
    "TokenType",
    "USER_STATUS_ACTIVE",
    "User",
    "refresh_token_key",
]
