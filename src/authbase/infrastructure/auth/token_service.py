"""Token issuance and verification for sessions.

Access tokens are stateless: a valid signature and an unexpired ``exp`` are
enough. Refresh tokens are stateful: the session store must also hold the
SHA-256 fingerprint of the exact token string under the session key.
Overwriting that fingerprint (rotation) or deleting it (sign-out) invalidates
the previous refresh token immediately.
"""

import asyncio
import hashlib
import hmac
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from authbase.application.ports import SessionStore, TokenServicePort
from authbase.core.config import Settings
from authbase.core.logging import get_logger
from authbase.domain.entities import TokenPair, TokenPayload, TokenType, refresh_token_key
from authbase.domain.exceptions import AccessTokenInvalid, RefreshTokenInvalid
from authbase.infrastructure.auth.jwt_service import JWTError, JWTService

logger = get_logger(__name__)

Clock = Callable[[], datetime]

# Smallest step between two issuances; keeps every token string unique
ISSUANCE_STEP = 1e-6

ACCESS_TOKEN_TTL = timedelta(minutes=15)
REFRESH_TOKEN_TTL = timedelta(days=7)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def fingerprint_token(token: str) -> str:
    """One-way fingerprint stored in place of the raw refresh token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class TokenService(TokenServicePort):
    """Issues token pairs and verifies access and refresh tokens.

    ``exp`` is signed as a NumericDate with microsecond precision, and
    issuance times are strictly increasing within the process, so a reissue
    for the same session always yields new token strings, even when the
    clock has not moved.

    The clock only drives issuance. Expiry is checked by PyJWT against the
    wall clock, so an expired token is one issued with a clock set far
    enough in the past.
    """

    def __init__(
        self,
        jwt_service: JWTService,
        session_store: SessionStore,
        access_token_ttl: timedelta = ACCESS_TOKEN_TTL,
        refresh_token_ttl: timedelta = REFRESH_TOKEN_TTL,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize the token service.

        Args:
            jwt_service: Signer shared by both token types.
            session_store: Store for refresh-token fingerprints.
            access_token_ttl: Lifetime of access tokens.
            refresh_token_ttl: Lifetime of refresh tokens and of their store entries.
            clock: Source of the issuance time.
        """
        self.jwt_service = jwt_service
        self.session_store = session_store
        self.access_token_ttl = access_token_ttl
        self.refresh_token_ttl = refresh_token_ttl
        self.clock = clock
        self._last_issued_at = 0.0

    @classmethod
    def from_settings(
        cls, settings: Settings, session_store: SessionStore, clock: Clock = utc_now
    ) -> "TokenService":
        return cls(
            jwt_service=JWTService(settings.jwt_secret, algorithm=settings.jwt_algorithm),
            session_store=session_store,
            access_token_ttl=timedelta(seconds=settings.access_token_ttl_seconds),
            refresh_token_ttl=timedelta(seconds=settings.refresh_token_ttl_seconds),
            clock=clock,
        )

    def new_session_id(self) -> str:
        return str(uuid.uuid4())

    def _issued_at(self) -> float:
        issued_at = self.clock().timestamp()
        last = self._last_issued_at
        if last - 1 < issued_at <= last:
            issued_at = last + ISSUANCE_STEP
        self._last_issued_at = issued_at
        return issued_at

    def _sign(self, subject_id: int, session_id: str, expires_at: float) -> str:
        return self.jwt_service.sign(
            {"sub": str(subject_id), "jti": session_id, "exp": expires_at}
        )

    async def issue(self, subject_id: int, session_id: str) -> TokenPair:
        """Mint an access/refresh pair and record the refresh fingerprint.

        Any previous fingerprint for the session is overwritten. A failed
        store write fails the whole issuance.

        Args:
            subject_id: The user id.
            session_id: The session the pair belongs to.

        Returns:
            The new token pair.
        """
        issued_at = self._issued_at()
        access_exp = issued_at + self.access_token_ttl.total_seconds()
        refresh_exp = issued_at + self.refresh_token_ttl.total_seconds()
        access, refresh = await asyncio.gather(
            asyncio.to_thread(self._sign, subject_id, session_id, access_exp),
            asyncio.to_thread(self._sign, subject_id, session_id, refresh_exp),
        )

        await self.session_store.set(
            refresh_token_key(subject_id, session_id),
            fingerprint_token(refresh),
            int(self.refresh_token_ttl.total_seconds()),
        )
        logger.debug("Token pair issued", subject_id=subject_id, session_id=session_id)
        return TokenPair(access=access, refresh=refresh)

    async def verify(self, token: str, token_type: TokenType) -> TokenPayload:
        """Verify a token of the given type.

        Raises:
            AccessTokenInvalid: For any failure verifying an access token.
            RefreshTokenInvalid: For any failure verifying a refresh token,
                whether expired, revoked, rotated or tampered.
        """
        if token_type is TokenType.ACCESS:
            return self._verify_access(token)
        return await self._verify_refresh(token)

    async def revoke(self, payload: TokenPayload) -> None:
        """Delete the session entry, invalidating its refresh token."""
        await self.session_store.delete(payload.session_key)

    def _decode(self, token: str) -> TokenPayload:
        return TokenPayload.from_claims(self.jwt_service.verify(token))

    def _verify_access(self, token: str) -> TokenPayload:
        try:
            return self._decode(token)
        except (JWTError, ValueError) as e:
            raise AccessTokenInvalid() from e

    async def _verify_refresh(self, token: str) -> TokenPayload:
        try:
            payload = self._decode(token)
        except (JWTError, ValueError) as e:
            raise RefreshTokenInvalid() from e

        stored = await self.session_store.get(payload.session_key)
        if stored is None or not hmac.compare_digest(stored, fingerprint_token(token)):
            raise RefreshTokenInvalid(
                subject_id=payload.subject_id, session_id=payload.session_id
            )
        return payload
