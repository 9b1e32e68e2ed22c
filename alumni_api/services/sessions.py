"""Token issuing and refresh-token sessions kept in Redis."""

from alumni_api.config import settings
from alumni_api.core.security import create_access_token, create_refresh_token
from alumni_api.db.redis import cache_delete, cache_get, cache_set


def _session_key(role: str, subject: str) -> str:
    return f"refresh_token:{role}:{subject}"


async def issue_tokens(subject: str, role: str, name: str) -> dict:
    """Create an access/refresh pair and remember the refresh token."""
    access_token = create_access_token(subject, role, name)
    refresh_token = create_refresh_token(subject, role, name)

    await cache_set(
        _session_key(role, subject),
        refresh_token,
        expire=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )

    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
        "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    }


async def is_current_refresh_token(role: str, subject: str, token: str) -> bool:
    return await cache_get(_session_key(role, subject)) == token


async def revoke_session(role: str, subject: str) -> None:
    await cache_delete(_session_key(role, subject))
