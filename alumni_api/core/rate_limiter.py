"""Request throttling backed by Redis sorted sets.

Every client gets ``RATE_LIMIT_REQUESTS`` per ``RATE_LIMIT_WINDOW`` seconds.
The staff and alumni login endpoints get a separate, smaller budget keyed by
client IP only, so rotating tokens does not buy extra password attempts.
"""

import hashlib
import logging
import time
import uuid
from typing import Callable, NamedTuple

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from alumni_api.config import settings
from alumni_api.db.redis import get_redis, namespaced

logger = logging.getLogger(__name__)

EXEMPT_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})
LOGIN_PATHS = frozenset(
    {
        f"{settings.API_V1_PREFIX}/auth/login",
        f"{settings.API_V1_PREFIX}/alumni/login",
    }
)


class Quota(NamedTuple):
    bucket: str
    limit: int


class Verdict(NamedTuple):
    allowed: bool
    remaining: int
    reset: int


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def quota_for(request: Request) -> Quota:
    if request.url.path in LOGIN_PATHS:
        return Quota(f"login:{client_ip(request)}", settings.LOGIN_RATE_LIMIT_REQUESTS)

    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        digest = hashlib.sha256(auth_header.encode()).hexdigest()[:32]
        return Quota(f"token:{digest}", settings.RATE_LIMIT_REQUESTS)
    return Quota(f"ip:{client_ip(request)}", settings.RATE_LIMIT_REQUESTS)


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        quota = quota_for(request)
        verdict = await self._consume(quota)
        headers = {
            "X-RateLimit-Limit": str(quota.limit),
            "X-RateLimit-Remaining": str(verdict.remaining),
            "X-RateLimit-Reset": str(verdict.reset),
        }

        if not verdict.allowed:
            logger.warning("Rate limit hit for %s on %s", quota.bucket, request.url.path)
            return JSONResponse(
                status_code=429,
                content={"detail": "Rate limit exceeded", "retry_after": verdict.reset},
                headers={**headers, "Retry-After": str(verdict.reset)},
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response

    async def _consume(self, quota: Quota) -> Verdict:
        """Record one request in the bucket's window.

        Redis being unreachable lets the request through.
        """
        window = settings.RATE_LIMIT_WINDOW
        try:
            redis = get_redis()
            key = namespaced(f"ratelimit:{quota.bucket}")
            now = time.time()
            member = f"{now}:{uuid.uuid4().hex[:8]}"

            pipe = redis.pipeline()
            pipe.zremrangebyscore(key, 0, now - window)
            pipe.zcard(key)
            pipe.zadd(key, {member: now})
            pipe.expire(key, window)
            _, seen, _, _ = await pipe.execute()

            if seen >= quota.limit:
                await redis.zrem(key, member)
                return Verdict(False, 0, window)
        except Exception as e:
            logger.warning("Rate limiter unavailable, allowing request: %s", e)
            return Verdict(True, quota.limit, window)

        return Verdict(True, max(0, quota.limit - seen - 1), window)
