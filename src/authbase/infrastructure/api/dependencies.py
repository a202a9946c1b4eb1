"""FastAPI dependencies for authentication.

Application-scoped services are read from ``app.state``, where the lifespan
(or a test) placed them; request-scoped ones are built per request.
"""

from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from authbase.application.ports import PasswordHasherPort, TokenServicePort
from authbase.application.services import AuthService
from authbase.core.logging import get_logger
from authbase.domain.entities import TokenPayload, TokenType
from authbase.domain.exceptions import AccessTokenInvalid
from authbase.infrastructure.persistence.database import get_db_session
from authbase.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


def get_token_service(request: Request) -> TokenServicePort:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasherPort:
    return request.app.state.password_hasher


async def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    token_service: Annotated[TokenServicePort, Depends(get_token_service)],
    password_hasher: Annotated[PasswordHasherPort, Depends(get_password_hasher)],
) -> AuthService:
    """Build an AuthService bound to the request's database session."""
    return AuthService(
        user_repository=UserRepository(session),
        token_service=token_service,
        password_hasher=password_hasher,
    )


async def get_current_session(
    token_service: Annotated[TokenServicePort, Depends(get_token_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> TokenPayload:
    """Extract and verify the access token from the Authorization header.

    Args:
        authorization: The Authorization header value (e.g., "Bearer <token>").

    Returns:
        TokenPayload: Claims of the verified access token.

    Raises:
        AccessTokenInvalid: If the header is missing, malformed, or the token fails verification.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise AccessTokenInvalid()

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise AccessTokenInvalid()

    return await token_service.verify(parts[1], TokenType.ACCESS)


CurrentSession = Annotated[TokenPayload, Depends(get_current_session)]
