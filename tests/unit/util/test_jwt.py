"""Unit tests for JWT helpers."""

from datetime import timedelta

import jwt
import pytest

from folio.util.jwt import (
    InvalidTokenError,
    TokenExpiredError,
    create_token,
    verify_token,
)

SECRET = "unit-test-secret-0123456789abcdef"


class TestCreateToken:
    """Tests for create_token."""

    def test_uses_camel_case_claims(self):
        """Should carry userId and email claims with iat and exp."""
        token = create_token("user-1", "a@example.com", SECRET, timedelta(minutes=5))

        claims = jwt.decode(token, SECRET, algorithms=["HS256"])

        assert claims["userId"] == "user-1"
        assert claims["email"] == "a@example.com"
        assert claims["exp"] > claims["iat"]


class TestVerifyToken:
    """Tests for verify_token."""

    def test_round_trips_payload(self):
        token = create_token("user-1", "a@example.com", SECRET, timedelta(minutes=5))

        payload = verify_token(token, SECRET)

        assert payload.user_id == "user-1"
        assert payload.email == "a@example.com"

    def test_expired_token_is_distinguished(self):
        """Should raise TokenExpiredError, not InvalidTokenError, when expired."""
        token = create_token("user-1", "a@example.com", SECRET, timedelta(minutes=-1))

        with pytest.raises(TokenExpiredError):
            verify_token(token, SECRET)

    def test_wrong_secret_is_invalid(self):
        token = create_token("user-1", "a@example.com", SECRET, timedelta(minutes=5))

        with pytest.raises(InvalidTokenError):
            verify_token(token, "another-secret-0123456789abcdef0")

    def test_garbage_is_invalid(self):
        with pytest.raises(InvalidTokenError):
            verify_token("not-a-jwt", SECRET)

    def test_missing_user_claim_is_invalid(self):
        """A signed token without userId is rejected."""
        token = jwt.encode({"email": "a@example.com", "exp": 9999999999}, SECRET)

        with pytest.raises(InvalidTokenError):
            verify_token(token, SECRET)
