"""API request and response schemas."""

from authbase.infrastructure.api.schemas.auth_schemas import (
    ErrorResponse,
    RefreshTokenRequest,
    SignInRequest,
    SignUpRequest,
    TokensResponse,
    ValidateResponse,
    ValidationErrorResponse,
)

__all__ = [
    "ErrorResponse",
    "RefreshTokenRequest",
    "SignInRequest",
    "SignUpRequest",
    "TokensResponse",
    "ValidateResponse",
    "ValidationErrorResponse",
]
