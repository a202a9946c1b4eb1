"""Unit tests for token and session value objects."""

from datetime import datetime, timezone

import pytest

from authbase.domain.entities import TokenPair, TokenPayload, TokenType, refresh_token_key


class TestRefreshTokenKey:
    """Tests for session store key construction."""

    def test_key_format(self):
        assert refresh_token_key(42, "abc") == "refresh_token:42:abc"

    def test_string_subject(self):
        assert refresh_token_key("42", "abc") == "refresh_token:42:abc"


class TestTokenPayload:
    """Tests for TokenPayload.from_claims."""

    def test_from_claims(self):
        """Test that string and numeric claims are converted."""
        payload = TokenPayload.from_claims({"sub": "7", "jti": "s-1", "exp": 1_700_000_000})

        assert payload.subject_id == 7
        assert payload.session_id == "s-1"
        assert payload.expires_at == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
        assert payload.session_key == "refresh_token:7:s-1"

    def test_from_claims_fractional_exp(self):
        payload = TokenPayload.from_claims({"sub": "7", "jti": "s-1", "exp": 1_700_000_000.25})

        assert payload.expires_at == datetime.fromtimestamp(1_700_000_000.25, tz=timezone.utc)

    @pytest.mark.parametrize(
        "claims",
        [
            {"jti": "s-1", "exp": 1_700_000_000},
            {"sub": "7", "exp": 1_700_000_000},
            {"sub": "7", "jti": "s-1"},
            {"sub": "not-a-number", "jti": "s-1", "exp": 1_700_000_000},
            {"sub": "7", "jti": "", "exp": 1_700_000_000},
            {"sub": None, "jti": "s-1", "exp": 1_700_000_000},
        ],
    )
    def test_malformed_claims(self, claims):
        with pytest.raises(ValueError):
            TokenPayload.from_claims(claims)


class TestTokenPair:
    def test_to_dict(self):
        pair = TokenPair(access="a", refresh="r")
        assert pair.to_dict() == {"access": "a", "refresh": "r"}

    def test_is_immutable(self):
        pair = TokenPair(access="a", refresh="r")
        with pytest.raises(AttributeError):
            pair.access = "b"


def test_token_type_values():
    assert TokenType.ACCESS.value == "access"
    assert TokenType.REFRESH.value == "refresh"
