"""User entity: the credential record read by the token subsystem.

Users are uniquely identified by email. The authentication flow only reads
users (by id or email) and never mutates them after creation.
"""

from dataclasses import dataclass
from datetime import datetime

USER_STATUS_ACTIVE = "active"


@dataclass
class User:
    """Credential record owned by the persistence layer.

    Attributes:
        id: Integer primary key.
        name: Display name.
        email: Email address (unique).
        password_hash: bcrypt hash (never store plaintext).
        status: Account status, "active" for new users.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
        deleted_at: Soft-delete marker; deleted users are invisible to lookups.
    """

    id: int
    name: str
    email: str
    password_hash: str
    status: str = USER_STATUS_ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if self.id is None:
            raise ValueError("User ID is required")
        if not self.email:
            raise ValueError("Email is required")
        if not self.password_hash:
            raise ValueError("Password hash is required")
