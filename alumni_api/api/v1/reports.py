"""Reporting endpoints."""

from fastapi import APIRouter, Depends

from alumni_api.api.deps import (
    Principal,
    get_achievement_document_repository,
    get_achievement_reference_repository,
    get_alumni_repository,
    get_current_principal,
    require_report_read,
)
from alumni_api.core.exceptions import ForbiddenError
from alumni_api.repositories.base import (
    AchievementDocumentRepository,
    AchievementReferenceRepository,
    AlumniRepository,
)
from alumni_api.schemas.report import AchievementStatistics, AlumniAchievementStatistics
from alumni_api.services.report_service import ReportService

router = APIRouter()


async def get_report_service(
    references: AchievementReferenceRepository = Depends(get_achievement_reference_repository),
    documents: AchievementDocumentRepository = Depends(get_achievement_document_repository),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> ReportService:
    """Get report service instance."""
    return ReportService(references, documents, alumni)


@router.get(
    "/achievements",
    response_model=AchievementStatistics,
    summary="Overall achievement statistics",
)
async def achievement_statistics(
    _: Principal = Depends(require_report_read),
    service: ReportService = Depends(get_report_service),
) -> AchievementStatistics:
    """Achievement totals across all alumni, including the verification rate."""
    return await service.achievement_statistics()


@router.get(
    "/alumni/{alumni_id}",
    response_model=AlumniAchievementStatistics,
    summary="Achievement statistics of one alumni",
)
async def alumni_statistics(
    alumni_id: str,
    principal: Principal = Depends(get_current_principal),
    service: ReportService = Depends(get_report_service),
) -> AlumniAchievementStatistics:
    """Admins may read anyone's statistics, alumni only their own."""
    if not principal.is_admin and not (principal.is_alumni and principal.id == alumni_id):
        raise ForbiddenError("read these statistics")
    return await service.alumni_statistics(alumni_id)
