"""FastAPI application for alumni records."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from alumni_api.api.legacy import router as legacy_router
from alumni_api.api.v1.router import api_router
from alumni_api.config import settings
from alumni_api.core.rate_limiter import RateLimitMiddleware
from alumni_api.db.mongodb import close_mongodb, init_mongodb
from alumni_api.db.postgres import close_postgres, init_postgres
from alumni_api.db.redis import close_redis, init_redis
from alumni_api.services.bootstrap import ensure_first_admin

API_VERSION = "1.0.0"

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Both stores are opened whatever the backend: achievements span them.
    logger.info("Starting Alumni Records API with %s storage", settings.STORAGE_BACKEND)
    await init_postgres()
    await init_mongodb()
    await init_redis()
    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
    await ensure_first_admin()

    yield

    logger.info("Shutting down Alumni Records API")
    await close_redis()
    await close_mongodb()
    await close_postgres()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Alumni Records API",
        description="Alumni, employment history, uploads and achievement verification",
        version=API_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RateLimitMiddleware)

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)
    app.include_router(legacy_router, tags=["Legacy"])

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Liveness only; ``/api/v1/checkpoint`` checks the stores."""
        return {"status": "healthy", "version": API_VERSION}

    return app


app = create_app()
