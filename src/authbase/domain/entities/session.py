"""Token and session value objects.

A session has no row of its own. It exists only as the key
``refresh_token:{subject_id}:{session_id}`` in the session store, holding the
fingerprint of the session's current refresh token.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

REFRESH_TOKEN_KEY_PREFIX = "refresh_token"


class TokenType(str, Enum):
    """Kinds of token minted for a session."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True, slots=True)
class TokenPair:
    """An access token and a refresh token sharing one session id."""

    access: str
    refresh: str

    def to_dict(self) -> dict[str, str]:
        return {"access": self.access, "refresh": self.refresh}


@dataclass(frozen=True, slots=True)
class TokenPayload:
    """Decoded claims of a verified token.

    Attributes:
        subject_id: The user id carried in ``sub``.
        session_id: The session id carried in ``jti``.
        expires_at: Expiry carried in ``exp``.
    """

    subject_id: int
    session_id: str
    expires_at: datetime

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "TokenPayload":
        """Build a payload from raw JWT claims.

        Raises:
            ValueError: If ``sub``, ``jti`` or ``exp`` is missing or malformed.
        """
        try:
            subject_id = int(claims["sub"])
            session_id = str(claims["jti"])
            expires_at = datetime.fromtimestamp(float(claims["exp"]), tz=timezone.utc)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError("Malformed token claims") from e
        if not session_id:
            raise ValueError("Malformed token claims")
        return cls(subject_id=subject_id, session_id=session_id, expires_at=expires_at)

    @property
    def session_key(self) -> str:
        return refresh_token_key(self.subject_id, self.session_id)


def refresh_token_key(subject_id: int | str, session_id: str) -> str:
    """Build the session store key for a (subject, session) pair."""
    return f"{REFRESH_TOKEN_KEY_PREFIX}:{subject_id}:{session_id}"
