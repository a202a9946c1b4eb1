"""Authentication API routes.

Provides endpoints for sign-up, sign-in, sign-out, token refresh and access
token validation. Domain errors raised by the service are mapped to HTTP
responses by the handlers registered in ``app.py``.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from authbase.application.services import AuthService
from authbase.core.logging import get_logger
from authbase.infrastructure.api.dependencies import CurrentSession, get_auth_service
from authbase.infrastructure.api.schemas import (
    ErrorResponse,
    RefreshTokenRequest,
    SignInRequest,
    SignUpRequest,
    TokensResponse,
    ValidateResponse,
    ValidationErrorResponse,
)
from authbase.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)

router = APIRouter()

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]

_VALIDATION_ERROR = {"model": ValidationErrorResponse, "description": "Validation error"}
_AUTH_ERROR = {"model": ErrorResponse, "description": "Authentication failed"}


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=TokensResponse,
    responses={400: _VALIDATION_ERROR},
)
async def sign_up(
    request: SignUpRequest,
    auth_service: AuthServiceDep,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> TokensResponse:
    """Register a new user and open a session.

    Returns a fresh access/refresh token pair.
    """
    tokens = await auth_service.sign_up(
        name=request.name,
        email=request.email,
        password=request.password,
    )
    await session.commit()
    return TokensResponse(**tokens.to_dict())


@router.post(
    "/signin",
    response_model=TokensResponse,
    responses={400: _VALIDATION_ERROR, 401: _AUTH_ERROR},
)
async def sign_in(request: SignInRequest, auth_service: AuthServiceDep) -> TokensResponse:
    """Authenticate with email and password and open a new session.

    Unknown email and wrong password produce the same 401 response.
    """
    tokens = await auth_service.sign_in(email=request.email, password=request.password)
    return TokensResponse(**tokens.to_dict())


@router.post(
    "/signout",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: _VALIDATION_ERROR, 401: _AUTH_ERROR},
)
async def sign_out(request: RefreshTokenRequest, auth_service: AuthServiceDep) -> Response:
    """Revoke the session of the given refresh token."""
    await auth_service.sign_out(request.refresh_token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/refresh",
    response_model=TokensResponse,
    responses={400: _VALIDATION_ERROR, 401: _AUTH_ERROR},
)
async def refresh(request: RefreshTokenRequest, auth_service: AuthServiceDep) -> TokensResponse:
    """Rotate the token pair of a session.

    The presented refresh token stops working as soon as the new pair is issued.
    """
    tokens = await auth_service.refresh(request.refresh_token)
    return TokensResponse(**tokens.to_dict())


@router.get(
    "/validate",
    response_model=ValidateResponse,
    responses={401: _AUTH_ERROR},
)
async def validate(current_session: CurrentSession) -> ValidateResponse:
    """Check the bearer access token."""
    return ValidateResponse(valid=True)
