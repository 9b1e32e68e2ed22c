"""Photo and certificate uploads."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from alumni_api.api.deps import (
    Principal,
    get_alumni_repository,
    get_file_repository,
    get_user_repository,
    require_file_upload,
)
from alumni_api.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from alumni_api.core.permissions import Permission, has_permission
from alumni_api.models.nosql.file import FileCategory, FileRecord
from alumni_api.repositories.base import AlumniRepository, FileRepository, UserRepository
from alumni_api.schemas.common import MessageResponse
from alumni_api.schemas.file import FileListResponse, FileResponse, UploaderInfo
from alumni_api.services.file_service import FileService

logger = logging.getLogger(__name__)

router = APIRouter()


async def _account_exists(
    account_id: str, users: UserRepository, alumni: AlumniRepository
) -> bool:
    return (await users.get(account_id)) is not None or (
        await alumni.get(account_id)
    ) is not None


async def _uploader(
    account_id: str, users: UserRepository, alumni: AlumniRepository
) -> UploaderInfo:
    user = await users.get(account_id)
    if user is not None:
        return UploaderInfo(id=account_id, name=user.full_name or user.username, role=user.role)
    record = await alumni.get(account_id, include_deleted=True)
    if record is not None:
        return UploaderInfo(id=account_id, name=record.name, role="alumni")
    return UploaderInfo(id=account_id)


async def _upload(
    category: FileCategory,
    upload: UploadFile,
    owner_id: Optional[str],
    principal: Principal,
    files: FileRepository,
    users: UserRepository,
    alumni: AlumniRepository,
) -> FileResponse:
    owner_id = owner_id or principal.id
    if owner_id != principal.id:
        if not has_permission(principal.role, Permission.FILE_MANAGE):
            raise ForbiddenError("upload files for another account")
        if not await _account_exists(owner_id, users, alumni):
            raise NotFoundError("Owner", owner_id)

    record = await FileService(files).store(upload, category, owner_id, principal.id)
    response = FileResponse.model_validate(record)
    response.uploader = UploaderInfo(
        id=principal.id, name=principal.name, role=principal.role.value
    )
    return response


@router.post(
    "/photo",
    response_model=FileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a profile photo",
)
async def upload_photo(
    file: UploadFile = File(...),
    owner_id: Optional[str] = Form(None),
    principal: Principal = Depends(require_file_upload),
    files: FileRepository = Depends(get_file_repository),
    users: UserRepository = Depends(get_user_repository),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> FileResponse:
    """JPEG or PNG, at most ``MAX_PHOTO_SIZE`` bytes."""
    return await _upload(FileCategory.PHOTO, file, owner_id, principal, files, users, alumni)


@router.post(
    "/certificate",
    response_model=FileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a certificate",
)
async def upload_certificate(
    file: UploadFile = File(...),
    owner_id: Optional[str] = Form(None),
    principal: Principal = Depends(require_file_upload),
    files: FileRepository = Depends(get_file_repository),
    users: UserRepository = Depends(get_user_repository),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> FileResponse:
    """PDF, at most ``MAX_CERTIFICATE_SIZE`` bytes."""
    return await _upload(
        FileCategory.CERTIFICATE, file, owner_id, principal, files, users, alumni
    )


@router.get("", response_model=FileListResponse, summary="List files of an owner")
async def list_files(
    owner_id: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    principal: Principal = Depends(require_file_upload),
    files: FileRepository = Depends(get_file_repository),
    users: UserRepository = Depends(get_user_repository),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> FileListResponse:
    """Files of one owner and category, newest first, with uploader details."""
    if not owner_id or not category:
        raise BadRequestError("owner_id and category are required")
    try:
        file_category = FileCategory(category)
    except ValueError:
        raise BadRequestError("category must be 'photo' or 'certificate'")
    if owner_id != principal.id and not has_permission(principal.role, Permission.FILE_MANAGE):
        raise ForbiddenError("list files of another account")

    records = await files.list_for_owner(owner_id, file_category.value)
    uploaders: dict[str, UploaderInfo] = {}
    items = []
    for record in records:
        if record.uploaded_by not in uploaders:
            uploaders[record.uploaded_by] = await _uploader(record.uploaded_by, users, alumni)
        item = FileResponse.model_validate(record)
        item.uploader = uploaders[record.uploaded_by]
        items.append(item)
    return FileListResponse(items=items, total=len(items))


@router.delete("/{file_id}", response_model=MessageResponse, summary="Delete a file")
async def delete_file(
    file_id: str,
    principal: Principal = Depends(require_file_upload),
    files: FileRepository = Depends(get_file_repository),
) -> MessageResponse:
    """Soft delete. The owner or an admin may remove a file."""
    record: Optional[FileRecord] = await files.get(file_id)
    if record is None:
        raise NotFoundError("File", file_id)
    if record.owner_id != principal.id and not has_permission(
        principal.role, Permission.FILE_MANAGE
    ):
        raise ForbiddenError("delete this file")

    if not await files.soft_delete(file_id):
        raise NotFoundError("File", file_id)
    logger.info("File %s deleted by %s", file_id, principal.id)
    return MessageResponse(message="File deleted")
