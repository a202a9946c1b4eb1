"""Session orchestration: sign-up, sign-in, sign-out and refresh.

Session lifecycle:
    unauthenticated -> active -> (refreshed ->) active -> revoked

Sign-up and sign-in open a new session id. Refresh rotates the token pair
under the same session id, which makes the presented refresh token unusable
because the stored fingerprint no longer matches it. Sign-out deletes the
session entry and is the only revocation path.
"""

import asyncio

from authbase.application.ports import (
    PasswordHasherPort,
    TokenServicePort,
    UserRepositoryPort,
)
from authbase.core.logging import get_logger
from authbase.domain.entities import USER_STATUS_ACTIVE, TokenPair, TokenPayload, TokenType
from authbase.domain.exceptions import PasswordIncorrect, UserNotCreated, UserNotFound

logger = get_logger(__name__)


class AuthService:
    """Coordinates credential checks, token issuance and session revocation.

    Domain errors propagate unchanged; nothing is retried here.
    """

    def __init__(
        self,
        user_repository: UserRepositoryPort,
        token_service: TokenServicePort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self.user_repository = user_repository
        self.token_service = token_service
        self.password_hasher = password_hasher

    async def sign_up(self, name: str, email: str, password: str) -> TokenPair:
        """Create a user and open a session for them.

        Raises:
            UserNotCreated: If persistence did not yield a user.
        """
        password_hash = await asyncio.to_thread(self.password_hasher.hash, password)
        user = await self.user_repository.create_user(
            name=name,
            email=email,
            password_hash=password_hash,
            status=USER_STATUS_ACTIVE,
        )
        if user is None:
            raise UserNotCreated(email=email)

        session_id = self.token_service.new_session_id()
        tokens = await self.token_service.issue(user.id, session_id)
        logger.info("User signed up", subject_id=user.id, session_id=session_id)
        return tokens

    async def sign_in(self, email: str, password: str) -> TokenPair:
        """Check credentials and open a new session.

        Raises:
            UserNotFound: If no active user has this email.
            PasswordIncorrect: If the password does not match.
        """
        user = await self.user_repository.get_user_by_email(email)
        if user is None:
            # Spend the same bcrypt work as a real check so timing doesn't reveal the email
            await asyncio.to_thread(
                self.password_hasher.verify, password, self.password_hasher.dummy_hash
            )
            raise UserNotFound(email=email)

        matches = await asyncio.to_thread(
            self.password_hasher.verify, password, user.password_hash
        )
        if not matches:
            raise PasswordIncorrect(subject_id=user.id)

        session_id = self.token_service.new_session_id()
        tokens = await self.token_service.issue(user.id, session_id)
        logger.info("User signed in", subject_id=user.id, session_id=session_id)
        return tokens

    async def sign_out(self, refresh_token: str) -> None:
        """Revoke the session the refresh token belongs to.

        Raises:
            RefreshTokenInvalid: If the token is not the live refresh token of a session.
        """
        payload = await self.token_service.verify(refresh_token, TokenType.REFRESH)
        await self.token_service.revoke(payload)
        logger.info(
            "User signed out",
            subject_id=payload.subject_id,
            session_id=payload.session_id,
        )

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Rotate the token pair of a live session.

        Raises:
            RefreshTokenInvalid: If the token is not the live refresh token of a session.
            UserNotFound: If the session's user no longer exists.
        """
        payload = await self.token_service.verify(refresh_token, TokenType.REFRESH)

        user = await self.user_repository.get_user_by_id(payload.subject_id)
        if user is None:
            raise UserNotFound(subject_id=payload.subject_id, session_id=payload.session_id)

        tokens = await self.token_service.issue(user.id, payload.session_id)
        logger.info(
            "Session refreshed",
            subject_id=user.id,
            session_id=payload.session_id,
        )
        return tokens

    async def validate(self, access_token: str) -> TokenPayload:
        """Verify an access token.

        Raises:
            AccessTokenInvalid: If the token is malformed, tampered or expired.
        """
        return await self.token_service.verify(access_token, TokenType.ACCESS)
