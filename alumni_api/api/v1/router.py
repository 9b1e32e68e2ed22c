"""API v1 router aggregation."""

from fastapi import APIRouter

from alumni_api.api.v1.achievements import router as achievements_router
from alumni_api.api.v1.alumni import router as alumni_router
from alumni_api.api.v1.auth import router as auth_router
from alumni_api.api.v1.employment import router as employment_router
from alumni_api.api.v1.files import router as files_router
from alumni_api.api.v1.health import router as health_router
from alumni_api.api.v1.reports import router as reports_router
from alumni_api.api.v1.users import router as users_router

api_router = APIRouter()

# Include all routers
api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users_router, prefix="/users", tags=["Users"])
api_router.include_router(alumni_router, prefix="/alumni", tags=["Alumni"])
api_router.include_router(employment_router, prefix="/employment", tags=["Employment"])
api_router.include_router(files_router, prefix="/files", tags=["Files"])
api_router.include_router(achievements_router, prefix="/achievements", tags=["Achievements"])
api_router.include_router(reports_router, prefix="/reports", tags=["Reports"])
api_router.include_router(health_router, tags=["Health"])
