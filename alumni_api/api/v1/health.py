"""Backing store connectivity check."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from alumni_api.config import settings
from alumni_api.db.mongodb import ping_mongodb
from alumni_api.db.postgres import ping_postgres
from alumni_api.db.redis import ping_redis

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/checkpoint", summary="Check database connections")
async def checkpoint() -> JSONResponse:
    """Ping PostgreSQL, MongoDB and Redis. Responds 503 when any is down."""
    stores = {"postgres": ping_postgres, "mongodb": ping_mongodb, "redis": ping_redis}
    checks = {}
    for name, ping in stores.items():
        try:
            await ping()
            checks[name] = "ok"
        except Exception as e:
            logger.error("%s health check failed: %s", name, e)
            checks[name] = "unavailable"

    healthy = all(state == "ok" for state in checks.values())
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "degraded",
            "storage_backend": settings.STORAGE_BACKEND,
            "databases": checks,
        },
    )
