"""Contracts the authentication flow depends on.

Infrastructure provides the implementations; the application service only
sees these abstract interfaces.
"""

from abc import ABC, abstractmethod

from authbase.domain.entities import TokenPair, TokenPayload, TokenType, User


class UserRepositoryPort(ABC):
    """Read and create credential records."""

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None:
        """Get an active user by email."""
        ...

    @abstractmethod
    async def get_user_by_id(self, user_id: int) -> User | None:
        """Get an active user by id."""
        ...

    @abstractmethod
    async def create_user(
        self, name: str, email: str, password_hash: str, status: str
    ) -> User | None:
        """Persist a new user, returning None if no row was created."""
        ...


class SessionStore(ABC):
    """TTL-bound key-value store holding refresh-token fingerprints.

    Writes are last-write-wins. Implementations must not serialize
    concurrent writers and must let client failures propagate.
    """

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value, replacing any previous one and resetting its TTL."""
        ...

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Get a live value, or None if absent or expired."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key. Deleting a missing key is not an error."""
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the store is reachable."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release client resources."""
        ...


class PasswordHasherPort(ABC):
    """One-way password hashing. Implementations may block on CPU."""

    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, hashed: str) -> bool:
        ...

    @property
    @abstractmethod
    def dummy_hash(self) -> str:
        """A valid hash of a random secret, used to equalize failure timing."""
        ...


class TokenServicePort(ABC):
    """Issue, verify and revoke session tokens."""

    @abstractmethod
    def new_session_id(self) -> str:
        ...

    @abstractmethod
    async def issue(self, subject_id: int, session_id: str) -> TokenPair:
        ...

    @abstractmethod
    async def verify(self, token: str, token_type: TokenType) -> TokenPayload:
        ...

    @abstractmethod
    async def revoke(self, payload: TokenPayload) -> None:
        ...
