"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignUpRequest(BaseModel):
    """Request body for user registration."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="User's email address")
    # bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=6, max_length=72, description="User's password")


class SignInRequest(BaseModel):
    """Request body for signing in."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class RefreshTokenRequest(BaseModel):
    """Request body carrying a refresh token (sign-out and refresh)."""

    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str = Field(
        ...,
        min_length=1,
        alias="refreshToken",
        description="Refresh token issued by signup, signin or refresh",
    )


class TokensResponse(BaseModel):
    """Token pair returned on signup, signin and refresh."""

    access: str = Field(..., description="Access token (15 minutes)")
    refresh: str = Field(..., description="Refresh token (7 days, single use)")


class ValidateResponse(BaseModel):
    """Response for access token validation."""

    valid: bool = Field(..., description="Whether the access token is valid")


class ErrorResponse(BaseModel):
    """Response for authentication and registration failures."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")


class ValidationErrorResponse(BaseModel):
    """Response for request body validation errors."""

    message: str = Field(..., description="Always 'invalid body'")
    issues: list[dict] = Field(..., description="List of validation issues")
