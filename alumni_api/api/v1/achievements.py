"""Achievement workflow endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from alumni_api.api.deps import (
    Principal,
    get_achievement_document_repository,
    get_achievement_reference_repository,
    require_achievement_read,
    require_achievement_submit,
    require_achievement_verify,
)
from alumni_api.core.exceptions import BadRequestError
from alumni_api.core.pagination import PaginationParams, pagination_params
from alumni_api.models.nosql.achievement import AchievementDocument
from alumni_api.models.sql.achievement import AchievementReference, AchievementStatus
from alumni_api.repositories.base import (
    AchievementDocumentRepository,
    AchievementReferenceRepository,
)
from alumni_api.repositories.sql.achievements import REFERENCE_SORT_FIELDS
from alumni_api.schemas.achievement import (
    AchievementCreate,
    AchievementDetailResponse,
    AchievementDocumentResponse,
    AchievementListResponse,
    AchievementReferenceResponse,
    AchievementReject,
    AchievementUpdate,
)
from alumni_api.services.achievement_service import AchievementService

router = APIRouter()


async def get_achievement_service(
    documents: AchievementDocumentRepository = Depends(get_achievement_document_repository),
    references: AchievementReferenceRepository = Depends(get_achievement_reference_repository),
) -> AchievementService:
    """Get achievement service instance."""
    return AchievementService(documents, references)


def _detail(
    reference: AchievementReference, document: Optional[AchievementDocument]
) -> AchievementDetailResponse:
    response = AchievementDetailResponse.model_validate(reference)
    if document is not None:
        response.achievement = AchievementDocumentResponse.model_validate(document)
    return response


@router.post(
    "",
    response_model=AchievementDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an achievement draft",
)
async def create_achievement(
    data: AchievementCreate,
    principal: Principal = Depends(require_achievement_submit),
    service: AchievementService = Depends(get_achievement_service),
) -> AchievementDetailResponse:
    """Start a new achievement as a draft."""
    return _detail(*await service.create_draft(principal.id, data))


@router.get("", response_model=AchievementListResponse, summary="List achievements")
async def list_achievements(
    params: PaginationParams = Depends(pagination_params),
    status_filter: Optional[str] = Query(None, alias="status"),
    principal: Principal = Depends(require_achievement_read),
    service: AchievementService = Depends(get_achievement_service),
) -> AchievementListResponse:
    """Alumni see their own achievements, admins see everyone's."""
    if status_filter is not None:
        try:
            status_filter = AchievementStatus(status_filter).value
        except ValueError:
            raise BadRequestError(f"Unknown achievement status '{status_filter}'")
        if status_filter == AchievementStatus.DELETED.value:
            raise BadRequestError("Deleted achievements cannot be listed")

    items, total = await service.list_achievements(params, principal, status=status_filter)
    return AchievementListResponse.build(
        [_detail(reference, document) for reference, document in items],
        total,
        params,
        params.resolve_sort(REFERENCE_SORT_FIELDS),
    )


@router.get(
    "/{reference_id}",
    response_model=AchievementDetailResponse,
    summary="Get an achievement",
)
async def get_achievement(
    reference_id: str,
    principal: Principal = Depends(require_achievement_read),
    service: AchievementService = Depends(get_achievement_service),
) -> AchievementDetailResponse:
    """Get an achievement with its document."""
    return _detail(*await service.get_detail(reference_id, principal))


@router.put(
    "/{reference_id}",
    response_model=AchievementDetailResponse,
    summary="Edit a draft",
)
async def update_achievement(
    reference_id: str,
    data: AchievementUpdate,
    principal: Principal = Depends(require_achievement_submit),
    service: AchievementService = Depends(get_achievement_service),
) -> AchievementDetailResponse:
    """Edit a draft. Only the owner can edit, and only before submitting."""
    return _detail(*await service.update_draft(reference_id, principal, data))


@router.post(
    "/{reference_id}/submit",
    response_model=AchievementReferenceResponse,
    summary="Submit a draft for verification",
)
async def submit_achievement(
    reference_id: str,
    principal: Principal = Depends(require_achievement_submit),
    service: AchievementService = Depends(get_achievement_service),
) -> AchievementReference:
    """Send a draft for review."""
    return await service.submit(reference_id, principal)


@router.post(
    "/{reference_id}/verify",
    response_model=AchievementReferenceResponse,
    summary="Verify a submitted achievement",
)
async def verify_achievement(
    reference_id: str,
    principal: Principal = Depends(require_achievement_verify),
    service: AchievementService = Depends(get_achievement_service),
) -> AchievementReference:
    """Mark a submitted achievement as verified."""
    return await service.verify(reference_id, principal)


@router.post(
    "/{reference_id}/reject",
    response_model=AchievementReferenceResponse,
    summary="Reject a submitted achievement",
)
async def reject_achievement(
    reference_id: str,
    data: AchievementReject,
    principal: Principal = Depends(require_achievement_verify),
    service: AchievementService = Depends(get_achievement_service),
) -> AchievementReference:
    """Reject a submitted achievement with a note for the alumni."""
    return await service.reject(reference_id, principal, data.note)


@router.delete(
    "/{reference_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a draft",
)
async def delete_achievement(
    reference_id: str,
    principal: Principal = Depends(require_achievement_submit),
    service: AchievementService = Depends(get_achievement_service),
) -> None:
    """Delete a draft. Submitted or reviewed achievements cannot be deleted."""
    await service.delete_draft(reference_id, principal)
