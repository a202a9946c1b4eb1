"""Password hashing utility using bcrypt.

Hashes are stored with the ``$2y$`` identifier so they stay interchangeable
with PHP-generated hashes. The bcrypt library expects ``$2b$``, so stored
hashes are normalized before comparison.
"""

import re
import secrets
from functools import cached_property

import bcrypt

from authbase.application.ports import PasswordHasherPort

DEFAULT_ROUNDS = 12

# bcrypt ignores everything past the first 72 bytes; newer releases raise instead
MAX_PASSWORD_BYTES = 72

_LEGACY_PREFIX = re.compile(r"^\$2y\$")
_MODERN_PREFIX = re.compile(r"^\$2[ab]\$")


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def normalize_hash(hashed: str) -> str:
    """Rewrite a ``$2y$`` hash to the equivalent ``$2b$`` form.

    Example:
        >>> normalize_hash("$2y$12$abc")
        '$2b$12$abc'
    """
    return _LEGACY_PREFIX.sub("$2b$", hashed, count=1)


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password using bcrypt.

    Args:
        password: The plaintext password to hash.
        rounds: bcrypt cost factor.

    Returns:
        The hashed password string, with a ``$2y$`` prefix.

    Example:
        >>> hashed = hash_password("secret1", rounds=4)
        >>> hashed.startswith("$2y$04$")
        True
    """
    hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds))
    return _MODERN_PREFIX.sub("$2y$", hashed.decode("ascii"), count=1)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a hash.

    Uses bcrypt's constant-time comparison.

    Args:
        password: The plaintext password to verify.
        hashed: The stored hash, ``$2y$`` or ``$2b$``.

    Returns:
        True if the password matches, False otherwise.

    Raises:
        ValueError: If ``hashed`` is not a bcrypt hash.

    Example:
        >>> hashed = hash_password("secret1", rounds=4)
        >>> verify_password("secret1", hashed)
        True
        >>> verify_password("wrong", hashed)
        False
    """
    return bcrypt.checkpw(
        _encode(password),
        normalize_hash(hashed).encode("ascii"),
    )


class BcryptPasswordHasher(PasswordHasherPort):
    """bcrypt hasher with a configurable cost factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return hash_password(password, rounds=self.rounds)

    def verify(self, password: str, hashed: str) -> bool:
        return verify_password(password, hashed)

    @cached_property
    def dummy_hash(self) -> str:
        # Same cost as real hashes, so a check against it takes as long
        return self.hash(secrets.token_urlsafe(16))
