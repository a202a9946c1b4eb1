"""Unit tests for password hashing utilities."""

import bcrypt
import pytest

from authbase.infrastructure.auth.password_hasher import (
    BcryptPasswordHasher,
    hash_password,
    normalize_hash,
    verify_password,
)


class TestHashPassword:
    """Tests for hash_password function."""

    def test_hash_password_uses_2y_prefix(self):
        """Test that stored hashes carry the $2y$ identifier and the cost."""
        hashed = hash_password("secret1", rounds=4)
        assert hashed.startswith("$2y$04$")
        assert len(hashed) == 60

    def test_hash_password_different_for_same_input(self):
        """Test that hashing the same password twice produces different hashes (due to salt)."""
        assert hash_password("secret1", rounds=4) != hash_password("secret1", rounds=4)


class TestVerifyPassword:
    """Tests for verify_password function."""

    def test_verify_correct_password(self):
        hashed = hash_password("secret1", rounds=4)
        assert verify_password("secret1", hashed) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("secret1", rounds=4)
        assert verify_password("secret2", hashed) is False

    def test_verify_2b_hash(self):
        """Test that hashes produced by other bcrypt implementations verify too."""
        hashed = bcrypt.hashpw(b"secret1", bcrypt.gensalt(rounds=4)).decode("ascii")
        assert hashed.startswith("$2b$")
        assert verify_password("secret1", hashed) is True

    def test_verify_2y_hash_made_from_2b(self):
        """Test the $2y$ and $2b$ forms of one hash are interchangeable."""
        hashed = bcrypt.hashpw(b"secret1", bcrypt.gensalt(rounds=4)).decode("ascii")
        legacy = "$2y$" + hashed[4:]
        assert verify_password("secret1", legacy) is True

    def test_verify_unicode_password(self):
        hashed = hash_password("pässwörd🔒", rounds=4)
        assert verify_password("pässwörd🔒", hashed) is True
        assert verify_password("passwort", hashed) is False

    def test_verify_long_multibyte_password(self):
        """Test that passwords over 72 bytes are truncated rather than rejected."""
        password = "ü" * 60
        hashed = hash_password(password, rounds=4)
        assert verify_password(password, hashed) is True
        assert verify_password("ü" * 36, hashed) is True

    def test_verify_malformed_hash(self):
        with pytest.raises(ValueError):
            verify_password("secret1", "not-a-bcrypt-hash")


def test_normalize_hash():
    assert normalize_hash("$2y$12$abc") == "$2b$12$abc"
    assert normalize_hash("$2b$12$abc") == "$2b$12$abc"
    assert normalize_hash("$2a$12$abc") == "$2a$12$abc"


class TestBcryptPasswordHasher:
    """Tests for the PasswordHasherPort implementation."""

    def test_hash_and_verify(self, password_hasher):
        hashed = password_hasher.hash("secret1")
        assert hashed.startswith("$2y$04$")
        assert password_hasher.verify("secret1", hashed)
        assert not password_hasher.verify("wrong", hashed)

    def test_dummy_hash_is_stable_and_matches_nothing_obvious(self, password_hasher):
        """Test that the dummy hash is computed once with the configured cost."""
        dummy = password_hasher.dummy_hash
        assert dummy is password_hasher.dummy_hash
        assert dummy.startswith("$2y$04$")
        assert not password_hasher.verify("", dummy)

    def test_default_rounds(self):
        assert BcryptPasswordHasher().rounds == 12
