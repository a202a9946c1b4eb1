"""JWT signing service.

Signs and verifies HMAC JWTs with the server secret. Access and refresh
tokens share the secret and the algorithm; nothing in the signature binds a
token to its type.
"""

from typing import Any

import jwt

from authbase.domain.exceptions import JwtSecretUndefined


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTService:
    """Signer for session tokens."""

    REQUIRED_CLAIMS = ["sub", "jti", "exp"]

    def __init__(self, secret_key: str | None, algorithm: str = "HS256") -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens. A missing secret is
                only reported when a token is signed or verified.
            algorithm: HMAC algorithm name.
        """
        self._secret_key = secret_key
        self.algorithm = algorithm

    @property
    def secret_key(self) -> str:
        """Get the secret key for signing tokens.

        Raises:
            JwtSecretUndefined: If no secret is configured.
        """
        if not self._secret_key:
            raise JwtSecretUndefined()
        return self._secret_key

    def sign(self, claims: dict[str, Any]) -> str:
        """Encode and sign a set of claims.

        Args:
            claims: JWT claims; ``exp`` may be a datetime or a NumericDate.

        Returns:
            Encoded JWT.
        """
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """Decode and validate a JWT token.

        Args:
            token: The encoded JWT token.

        Returns:
            Decoded token payload.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is malformed, tampered or lacks a required claim.
            JwtSecretUndefined: If no secret is configured.
        """
        secret_key = self.secret_key
        try:
            return jwt.decode(
                token,
                secret_key,
                algorithms=[self.algorithm],
                options={"require": self.REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e
