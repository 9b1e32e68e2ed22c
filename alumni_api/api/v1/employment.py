"""Employment history endpoints.

Alumni manage their own rows; admins may act on anyone's.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from alumni_api.api.deps import (
    Principal,
    get_alumni_repository,
    get_employment_repository,
    require_employment_manage,
    require_employment_read,
    require_employment_write,
)
from alumni_api.core.exceptions import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
)
from alumni_api.core.pagination import PaginationParams, pagination_params
from alumni_api.models.records import EmploymentRecord
from alumni_api.repositories.base import (
    EMPLOYMENT_SORT_FIELDS,
    AlumniRepository,
    EmploymentRepository,
)
from alumni_api.schemas.common import MessageResponse
from alumni_api.schemas.employment import (
    EmploymentCreate,
    EmploymentListResponse,
    EmploymentResponse,
    EmploymentUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_owner_or_admin(principal: Principal, record: EmploymentRecord, action: str) -> None:
    if principal.is_admin:
        return
    if principal.is_alumni and record.alumni_id == principal.id:
        return
    raise ForbiddenError(action, principal_id=principal.id, employment_id=record.id)


def _page(items: list[EmploymentRecord], total: int, params: PaginationParams, sort_by: str):
    return EmploymentListResponse.build(
        [EmploymentResponse.model_validate(item) for item in items], total, params, sort_by
    )


@router.get("", response_model=EmploymentListResponse, summary="List employment")
async def list_employment(
    params: PaginationParams = Depends(pagination_params),
    _: Principal = Depends(require_employment_read),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> EmploymentListResponse:
    """Active rows with search on company, position, industry, location and status."""
    items, total = await employment.paginate(params)
    return _page(items, total, params, params.resolve_sort(EMPLOYMENT_SORT_FIELDS))


@router.get("/trash", response_model=EmploymentListResponse, summary="List trashed employment")
async def list_trashed_employment(
    params: PaginationParams = Depends(pagination_params),
    principal: Principal = Depends(require_employment_write),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> EmploymentListResponse:
    """Admins see every trashed row, alumni only their own."""
    alumni_id = None if principal.is_admin else principal.id
    items, total = await employment.paginate_trashed(params, alumni_id=alumni_id)
    return _page(items, total, params, "deleted_at")


@router.get(
    "/alumni/{alumni_id}",
    response_model=list[EmploymentResponse],
    summary="List one alumni's employment",
)
async def list_alumni_employment(
    alumni_id: str,
    principal: Principal = Depends(require_employment_read),
    alumni: AlumniRepository = Depends(get_alumni_repository),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> list[EmploymentResponse]:
    """Active employment of one alumni, latest start date first."""
    if principal.is_alumni and principal.id != alumni_id:
        raise ForbiddenError("view another alumni's employment")
    if await alumni.get(alumni_id) is None:
        raise NotFoundError("Alumni", alumni_id)
    items = await employment.list_by_alumni(alumni_id)
    return [EmploymentResponse.model_validate(item) for item in items]


@router.get("/{employment_id}", response_model=EmploymentResponse, summary="Get employment")
async def get_employment(
    employment_id: str,
    _: Principal = Depends(require_employment_read),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> EmploymentResponse:
    """Get an employment record by ID."""
    record = await employment.get(employment_id)
    if record is None:
        raise NotFoundError("Employment", employment_id)
    return EmploymentResponse.model_validate(record)


@router.post(
    "",
    response_model=EmploymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add employment",
)
async def create_employment(
    data: EmploymentCreate,
    principal: Principal = Depends(require_employment_write),
    alumni: AlumniRepository = Depends(get_alumni_repository),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> EmploymentResponse:
    """Add employment. Alumni always add to their own history."""
    if principal.is_alumni:
        if data.alumni_id and data.alumni_id != principal.id:
            raise ForbiddenError("add employment for another alumni")
        alumni_id = principal.id
    else:
        if not data.alumni_id:
            raise BadRequestError("alumni_id is required")
        alumni_id = data.alumni_id

    if await alumni.get(alumni_id) is None:
        raise NotFoundError("Alumni", alumni_id)

    values = data.model_dump(exclude={"alumni_id"})
    values["status"] = data.status.value
    values["alumni_id"] = alumni_id
    record = await employment.create(values)
    logger.info("Employment %s created for alumni %s by %s", record.id, alumni_id, principal.id)
    return EmploymentResponse.model_validate(record)


@router.put("/{employment_id}", response_model=EmploymentResponse, summary="Update employment")
async def update_employment(
    employment_id: str,
    data: EmploymentUpdate,
    principal: Principal = Depends(require_employment_write),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> EmploymentResponse:
    """Update employment owned by the caller, or any record as admin."""
    current = await employment.get(employment_id)
    if current is None:
        raise NotFoundError("Employment", employment_id)
    _ensure_owner_or_admin(principal, current, "update this employment record")

    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in ("salary_range", "end_date", "description")
    }
    if "status" in changes:
        changes["status"] = data.status.value

    start_date = changes.get("start_date", current.start_date)
    end_date = changes.get("end_date", current.end_date)
    if end_date is not None and end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end_date must not be before start_date",
        )

    record = await employment.update(employment_id, changes)
    if record is None:
        raise NotFoundError("Employment", employment_id)
    logger.info("Employment %s updated by %s", employment_id, principal.id)
    return EmploymentResponse.model_validate(record)


@router.delete(
    "/{employment_id}/soft",
    response_model=MessageResponse,
    summary="Move employment to the trash",
)
async def soft_delete_employment(
    employment_id: str,
    principal: Principal = Depends(require_employment_write),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> MessageResponse:
    """Move an employment record to the trash."""
    record = await employment.get(employment_id)
    if record is None:
        raise NotFoundError("Employment", employment_id)
    _ensure_owner_or_admin(principal, record, "delete this employment record")

    if not await employment.soft_delete(employment_id, principal.id):
        raise NotFoundError("Employment", employment_id)
    logger.info("Employment %s trashed by %s", employment_id, principal.id)
    return MessageResponse(message="Employment moved to trash")


@router.post(
    "/{employment_id}/restore",
    response_model=EmploymentResponse,
    summary="Restore trashed employment",
)
async def restore_employment(
    employment_id: str,
    principal: Principal = Depends(require_employment_write),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> EmploymentResponse:
    """Restore a trashed employment record."""
    record = await employment.get(employment_id, include_deleted=True)
    if record is None or not record.is_deleted:
        raise NotFoundError("Trashed employment", employment_id)
    _ensure_owner_or_admin(principal, record, "restore this employment record")

    if not await employment.restore(employment_id):
        raise NotFoundError("Trashed employment", employment_id)
    logger.info("Employment %s restored by %s", employment_id, principal.id)
    return EmploymentResponse.model_validate(await employment.get(employment_id))


@router.delete(
    "/{employment_id}/permanent",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Permanently delete trashed employment",
)
async def purge_employment(
    employment_id: str,
    principal: Principal = Depends(require_employment_write),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> None:
    """Permanently delete a trashed employment record."""
    record = await employment.get(employment_id, include_deleted=True)
    if record is None:
        raise NotFoundError("Employment", employment_id)
    _ensure_owner_or_admin(principal, record, "delete this employment record")

    if not record.is_deleted or not await employment.purge(employment_id):
        raise BadRequestError("Permanent delete is only allowed for trashed employment")
    logger.info("Employment %s purged by %s", employment_id, principal.id)


@router.delete(
    "/{employment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete employment immediately",
)
async def delete_employment(
    employment_id: str,
    principal: Principal = Depends(require_employment_manage),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> None:
    """Delete an employment record without going through the trash."""
    if not await employment.delete(employment_id):
        raise NotFoundError("Employment", employment_id)
    logger.info("Employment %s deleted by %s", employment_id, principal.id)
