"""Unit tests for authentication utilities."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from alumni_api.config import settings
from alumni_api.core.security import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_access_token,
    verify_password,
    verify_refresh_token,
)


class TestPasswordHashing:
    """Tests for password hashing utilities."""

    def test_hash_password_creates_hash(self):
        password = "securepassword123"
        hashed = hash_password(password)

        assert hashed != password
        assert hashed.startswith("$argon2")

    def test_verify_password_correct(self):
        hashed = hash_password("securepassword123")

        assert verify_password("securepassword123", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("securepassword123")

        assert verify_password("wrongpassword", hashed) is False

    def test_verify_password_rejects_garbage_hash(self):
        """A corrupt stored hash is a failed login, not a server error."""
        assert verify_password("whatever", "not-a-hash") is False


class TestJWTTokens:
    """Tests for JWT token creation and verification."""

    def test_access_token_carries_identity_claims(self):
        token = create_access_token("user-1", "admin", "Admin User")

        payload = verify_access_token(token)

        assert payload["sub"] == "user-1"
        assert payload["role"] == "admin"
        assert payload["name"] == "Admin User"
        assert payload["type"] == ACCESS_TOKEN_TYPE

    def test_refresh_token_type(self):
        token = create_refresh_token("alumni-1", "alumni")

        payload = verify_refresh_token(token)

        assert payload["sub"] == "alumni-1"
        assert payload["type"] == REFRESH_TOKEN_TYPE

    def test_access_token_rejected_as_refresh(self):
        token = create_access_token("user-1", "user")

        with pytest.raises(ValueError, match="Invalid token type"):
            verify_refresh_token(token)

    def test_refresh_token_rejected_as_access(self):
        token = create_refresh_token("user-1", "user")

        with pytest.raises(ValueError, match="Invalid token type"):
            verify_access_token(token)

    def test_expired_token(self):
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "sub": "user-1",
                "role": "user",
                "type": ACCESS_TOKEN_TYPE,
                "iat": now - timedelta(hours=2),
                "exp": now - timedelta(hours=1),
            },
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )

        with pytest.raises(ValueError, match="expired"):
            decode_token(token)

    def test_wrong_signature(self):
        token = jwt.encode(
            {"sub": "user-1", "role": "user", "type": ACCESS_TOKEN_TYPE},
            "some-other-secret",
            algorithm=settings.ALGORITHM,
        )

        with pytest.raises(ValueError, match="Invalid token"):
            decode_token(token)

    def test_missing_role_claim(self):
        token = jwt.encode(
            {"sub": "user-1", "type": ACCESS_TOKEN_TYPE},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )

        with pytest.raises(ValueError, match="missing claims"):
            decode_token(token)

    def test_malformed_token(self):
        with pytest.raises(ValueError):
            decode_token("not.a.token")
