"""Exceptions raised by the authentication flow.

Authentication failures form a closed set of variants, each tagged with an
``AuthErrorCode``. The structured context they carry is for logging and is
never rendered into HTTP responses.
"""

from enum import Enum
from typing import Any


class AuthErrorCode(str, Enum):
    """Machine-readable tags for authentication failures."""

    USER_NOT_FOUND = "USER_NOT_FOUND"
    PASSWORD_INCORRECT = "PASSWORD_INCORRECT"
    USER_NOT_CREATED = "USER_NOT_CREATED"
    ACCESS_TOKEN_INVALID = "ACCESS_TOKEN_INVALID"
    REFRESH_TOKEN_INVALID = "REFRESH_TOKEN_INVALID"


class AuthError(Exception):
    """Base class for authentication failures."""

    code: AuthErrorCode

    def __init__(
        self,
        *,
        subject_id: int | None = None,
        session_id: str | None = None,
        email: str | None = None,
    ) -> None:
        self.subject_id = subject_id
        self.session_id = session_id
        self.email = email
        super().__init__(self.code.value)

    @property
    def context(self) -> dict[str, Any]:
        """Non-empty context fields, suitable for structured logging."""
        fields = {
            "subject_id": self.subject_id,
            "session_id": self.session_id,
            "email": self.email,
        }
        return {key: value for key, value in fields.items() if value is not None}


class UserNotFound(AuthError):
    """Raised when no active user matches the lookup."""

    code = AuthErrorCode.USER_NOT_FOUND


class PasswordIncorrect(AuthError):
    """Raised when the submitted password does not match the stored hash."""

    code = AuthErrorCode.PASSWORD_INCORRECT


class UserNotCreated(AuthError):
    """Raised when persistence does not yield a new user."""

    code = AuthErrorCode.USER_NOT_CREATED


class AccessTokenInvalid(AuthError):
    """Raised when an access token is malformed, tampered or expired."""

    code = AuthErrorCode.ACCESS_TOKEN_INVALID


class RefreshTokenInvalid(AuthError):
    """Raised when a refresh token is expired, revoked, rotated or tampered.

    These cases are deliberately indistinguishable to the caller.
    """

    code = AuthErrorCode.REFRESH_TOKEN_INVALID


class JwtSecretUndefined(RuntimeError):
    """Raised when no token signing secret is configured.

    This is a configuration error, not an authentication failure: it aborts
    startup and is never mapped to a 401.
    """

    def __init__(self) -> None:
        super().__init__("JWT_SECRET_ENV_UNDEFINED: set AUTHBASE_JWT_SECRET")
