"""Authentication infrastructure components.

This module provides password hashing, JWT signing and the session token
service.
"""

from authbase.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
)
from authbase.infrastructure.auth.password_hasher import (
    BcryptPasswordHasher,
    hash_password,
    normalize_hash,
    verify_password,
)
from authbase.infrastructure.auth.token_service import (
    TokenService,
    fingerprint_token,
    utc_now,
)

__all__ = [
    "BcryptPasswordHasher",
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "TokenExpiredError",
    "TokenService",
    "fingerprint_token",
    "hash_password",
    "normalize_hash",
    "utc_now",
    "verify_password",
]
