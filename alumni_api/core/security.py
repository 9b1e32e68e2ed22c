"""Password hashing and JWTs for staff users and alumni.

Both kinds of account get the same token shape. ``sub`` is the account id,
``role`` is ``admin``, ``user`` or ``alumni`` and ``name`` is the display
name shown in uploads and reviews.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError

from alumni_api.config import settings

ph = PasswordHasher()

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"
REQUIRED_CLAIMS = ("sub", "role")


def hash_password(password: str) -> str:
    """Hash a password using Argon2."""
    return ph.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """False for a wrong password and for a stored value that is not an Argon2 hash."""
    try:
        return ph.verify(hashed_password, plain_password)
    except (VerifyMismatchError, InvalidHashError):
        return False


def _issue(subject: str, role: str, name: str, token_type: str, lifetime: timedelta) -> str:
    issued_at = datetime.now(UTC)
    claims = {
        "sub": str(subject),
        "role": role,
        "name": name,
        "type": token_type,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(subject: str, role: str, name: str = "") -> str:
    """Create a short-lived JWT access token."""
    return _issue(
        subject, role, name, ACCESS_TOKEN_TYPE,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(subject: str, role: str, name: str = "") -> str:
    """Create a JWT refresh token for obtaining new access tokens."""
    return _issue(
        subject, role, name, REFRESH_TOKEN_TYPE,
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def decode_token(token: str) -> dict[str, Any]:
    """Check signature, expiry and identity claims.

    Raises:
        ValueError: with a message safe to return to the client.
    """
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise ValueError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise ValueError(f"Invalid token: {e}")

    if not all(claims.get(claim) for claim in REQUIRED_CLAIMS):
        raise ValueError("Invalid token: missing claims")
    return claims


def _expect(token: str, token_type: str) -> dict[str, Any]:
    claims = decode_token(token)
    if claims.get("type") != token_type:
        raise ValueError("Invalid token type")
    return claims


def verify_access_token(token: str) -> dict[str, Any]:
    """Decode an access token. Raises ValueError for any other token type."""
    return _expect(token, ACCESS_TOKEN_TYPE)


def verify_refresh_token(token: str) -> dict[str, Any]:
    """Decode a refresh token. Raises ValueError for any other token type."""
    return _expect(token, REFRESH_TOKEN_TYPE)
