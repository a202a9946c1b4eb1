"""Unit tests for authentication exceptions."""

import pytest

from authbase.domain.exceptions import (
    AccessTokenInvalid,
    AuthError,
    AuthErrorCode,
    JwtSecretUndefined,
    PasswordIncorrect,
    RefreshTokenInvalid,
    UserNotCreated,
    UserNotFound,
)


@pytest.mark.parametrize(
    "exc_class, code",
    [
        (UserNotFound, AuthErrorCode.USER_NOT_FOUND),
        (PasswordIncorrect, AuthErrorCode.PASSWORD_INCORRECT),
        (UserNotCreated, AuthErrorCode.USER_NOT_CREATED),
        (AccessTokenInvalid, AuthErrorCode.ACCESS_TOKEN_INVALID),
        (RefreshTokenInvalid, AuthErrorCode.REFRESH_TOKEN_INVALID),
    ],
)
def test_auth_error_codes(exc_class, code):
    """Test that every variant is an AuthError tagged with its code."""
    exc = exc_class()
    assert isinstance(exc, AuthError)
    assert exc.code is code
    assert str(exc) == code.value


def test_context_drops_empty_fields():
    exc = RefreshTokenInvalid(subject_id=3, session_id="s-1")
    assert exc.context == {"subject_id": 3, "session_id": "s-1"}


def test_context_with_email():
    exc = UserNotFound(email="ghost@example.com")
    assert exc.context == {"email": "ghost@example.com"}


def test_jwt_secret_undefined_is_not_auth_error():
    """Test that a missing secret is a configuration error."""
    exc = JwtSecretUndefined()
    assert isinstance(exc, RuntimeError)
    assert not isinstance(exc, AuthError)
    assert "JWT_SECRET_ENV_UNDEFINED" in str(exc)
