"""Alumni endpoints: self-service registration and login, listing, admin
maintenance and the trash lifecycle."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from alumni_api.api.deps import (
    Principal,
    get_alumni_repository,
    get_current_alumni,
    get_employment_repository,
    require_alumni_read,
    require_alumni_trash,
    require_alumni_write,
    require_report_read,
)
from alumni_api.core.exceptions import ConflictError, NotFoundError
from alumni_api.core.pagination import PaginationParams, pagination_params
from alumni_api.core.permissions import Role
from alumni_api.core.security import hash_password, verify_password
from alumni_api.repositories.base import (
    ALUMNI_SORT_FIELDS,
    AlumniRepository,
    EmploymentRepository,
)
from alumni_api.schemas.alumni import (
    AlumniCreate,
    AlumniListResponse,
    AlumniRegister,
    AlumniResponse,
    AlumniStatistics,
    AlumniUpdate,
)
from alumni_api.schemas.auth import AlumniLogin, AlumniProfileResponse, AlumniTokenResponse
from alumni_api.schemas.common import MessageResponse
from alumni_api.schemas.employment import EmploymentResponse
from alumni_api.services import alumni_service
from alumni_api.services.sessions import issue_tokens

logger = logging.getLogger(__name__)

router = APIRouter()


async def _create(alumni: AlumniRepository, data: AlumniCreate | AlumniRegister) -> AlumniResponse:
    duplicate = await alumni.find_duplicate(data.student_number, data.email)
    if duplicate:
        raise ConflictError(f"{duplicate.replace('_', ' ').capitalize()} already registered")

    values = data.model_dump(exclude={"password"})
    values["password_hash"] = hash_password(data.password) if data.password else None
    record = await alumni.create(values)
    return AlumniResponse.model_validate(record)


@router.post(
    "/register",
    response_model=AlumniResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register as an alumni",
)
async def register(
    data: AlumniRegister,
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> AlumniResponse:
    """Self-registration for alumni. The account can log in right away."""
    record = await _create(alumni, data)
    logger.info("Alumni %s registered", record.student_number)
    return record


@router.post(
    "/login",
    response_model=AlumniTokenResponse,
    summary="Login with student number",
)
async def login(
    credentials: AlumniLogin,
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> AlumniTokenResponse:
    """Authenticate an alumni by student number and return access tokens."""
    record = await alumni.get_by_student_number(credentials.student_number)

    if (
        record is None
        or not record.password_hash
        or not verify_password(credentials.password, record.password_hash)
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid student number or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    tokens = await issue_tokens(record.id, Role.ALUMNI.value, record.name)
    return AlumniTokenResponse(**tokens, alumni=AlumniResponse.model_validate(record))


@router.get(
    "/profile",
    response_model=AlumniProfileResponse,
    summary="Get own alumni profile with employment",
)
async def get_profile(
    principal: Principal = Depends(get_current_alumni),
    alumni: AlumniRepository = Depends(get_alumni_repository),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> AlumniProfileResponse:
    """Return the logged-in alumni with their employment history."""
    record = await alumni.get(principal.id)
    if record is None:
        raise NotFoundError("Alumni", principal.id)
    jobs = await employment.list_by_alumni(principal.id)
    return AlumniProfileResponse(
        **AlumniResponse.model_validate(record).model_dump(),
        employment=[EmploymentResponse.model_validate(job) for job in jobs],
    )


@router.get("", response_model=AlumniListResponse, summary="List alumni")
async def list_alumni(
    params: PaginationParams = Depends(pagination_params),
    _: Principal = Depends(require_alumni_read),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> AlumniListResponse:
    """Active alumni with search on name, student number, major and email."""
    items, total = await alumni.paginate(params)
    return AlumniListResponse.build(
        [AlumniResponse.model_validate(item) for item in items],
        total,
        params,
        params.resolve_sort(ALUMNI_SORT_FIELDS),
    )


@router.get("/statistics", response_model=AlumniStatistics, summary="Alumni statistics")
async def alumni_statistics(
    _: Principal = Depends(require_report_read),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> AlumniStatistics:
    """Alumni counts grouped by major and by year."""
    return AlumniStatistics(**await alumni.statistics())


@router.get("/trash", response_model=AlumniListResponse, summary="List trashed alumni")
async def list_trashed_alumni(
    params: PaginationParams = Depends(pagination_params),
    _: Principal = Depends(require_alumni_trash),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> AlumniListResponse:
    """Trashed alumni, most recently deleted first."""
    items, total = await alumni.paginate_trashed(params)
    return AlumniListResponse.build(
        [AlumniResponse.model_validate(item) for item in items],
        total,
        params,
        "deleted_at",
    )


@router.post(
    "",
    response_model=AlumniResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an alumni record",
)
async def create_alumni(
    data: AlumniCreate,
    principal: Principal = Depends(require_alumni_write),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> AlumniResponse:
    """Create an alumni record on their behalf."""
    record = await _create(alumni, data)
    logger.info("Alumni %s created by %s", record.id, principal.id)
    return record


@router.get("/{alumni_id}", response_model=AlumniResponse, summary="Get an alumni")
async def get_alumni(
    alumni_id: str,
    _: Principal = Depends(require_alumni_read),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> AlumniResponse:
    """Get an alumni by ID."""
    record = await alumni.get(alumni_id)
    if record is None:
        raise NotFoundError("Alumni", alumni_id)
    return AlumniResponse.model_validate(record)


@router.put("/{alumni_id}", response_model=AlumniResponse, summary="Update an alumni")
async def update_alumni(
    alumni_id: str,
    data: AlumniUpdate,
    principal: Principal = Depends(require_alumni_write),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> AlumniResponse:
    """Update an alumni record. Student number and email stay unique."""
    current = await alumni.get(alumni_id)
    if current is None:
        raise NotFoundError("Alumni", alumni_id)

    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in ("phone", "address")
    }
    entry_year = changes.get("entry_year", current.entry_year)
    graduation_year = changes.get("graduation_year", current.graduation_year)
    if graduation_year < entry_year:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="graduation_year must not be before entry_year",
        )

    duplicate = await alumni.find_duplicate(
        changes.get("student_number"), changes.get("email"), exclude_id=alumni_id
    )
    if duplicate:
        raise ConflictError(f"{duplicate.replace('_', ' ').capitalize()} already registered")

    if "password" in changes:
        changes["password_hash"] = hash_password(changes.pop("password"))

    record = await alumni.update(alumni_id, changes)
    if record is None:
        raise NotFoundError("Alumni", alumni_id)
    logger.info("Alumni %s updated by %s", alumni_id, principal.id)
    return AlumniResponse.model_validate(record)


@router.delete(
    "/{alumni_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an alumni immediately",
)
async def delete_alumni(
    alumni_id: str,
    principal: Principal = Depends(require_alumni_write),
    alumni: AlumniRepository = Depends(get_alumni_repository),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> None:
    """Delete an alumni and all their employment without going through the trash."""
    await alumni_service.delete_alumni(alumni, employment, alumni_id)
    logger.info("Alumni %s deleted by %s", alumni_id, principal.id)


@router.post(
    "/{alumni_id}/soft-delete",
    response_model=MessageResponse,
    summary="Move an alumni to the trash",
)
async def soft_delete_alumni(
    alumni_id: str,
    principal: Principal = Depends(require_alumni_trash),
    alumni: AlumniRepository = Depends(get_alumni_repository),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> MessageResponse:
    """Trash an alumni together with their active employment."""
    trashed = await alumni_service.trash_alumni(alumni, employment, alumni_id, principal.id)
    return MessageResponse(
        message=f"Alumni moved to trash together with {trashed} employment records"
    )


@router.post(
    "/{alumni_id}/restore",
    response_model=AlumniResponse,
    summary="Restore a trashed alumni",
)
async def restore_alumni(
    alumni_id: str,
    principal: Principal = Depends(require_alumni_trash),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> AlumniResponse:
    """Restore a trashed alumni. Their employment stays in the trash."""
    await alumni_service.restore_alumni(alumni, alumni_id)
    logger.info("Alumni %s restored by %s", alumni_id, principal.id)
    return AlumniResponse.model_validate(await alumni.get(alumni_id))


@router.delete(
    "/{alumni_id}/permanent",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Permanently delete a trashed alumni",
)
async def purge_alumni(
    alumni_id: str,
    principal: Principal = Depends(require_alumni_trash),
    alumni: AlumniRepository = Depends(get_alumni_repository),
    employment: EmploymentRepository = Depends(get_employment_repository),
) -> None:
    """Permanently delete a trashed alumni and their trashed employment."""
    await alumni_service.purge_alumni(alumni, employment, alumni_id)
    logger.info("Alumni %s purged by %s", alumni_id, principal.id)
