"""API dependencies for dependency injection."""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from alumni_api.config import settings
from alumni_api.core.permissions import Permission, Role, ensure_permission
from alumni_api.core.security import verify_access_token
from alumni_api.db.mongodb import get_mongodb
from alumni_api.db.postgres import get_db
from alumni_api.repositories.base import (
    AchievementDocumentRepository,
    AchievementReferenceRepository,
    AlumniRepository,
    EmploymentRepository,
    FileRepository,
    UserRepository,
)
from alumni_api.repositories.mongo.achievements import MongoAchievementDocumentRepository
from alumni_api.repositories.mongo.alumni import MongoAlumniRepository
from alumni_api.repositories.mongo.employment import MongoEmploymentRepository
from alumni_api.repositories.mongo.files import MongoFileRepository
from alumni_api.repositories.mongo.users import MongoUserRepository
from alumni_api.repositories.sql.achievements import SqlAchievementReferenceRepository
from alumni_api.repositories.sql.alumni import SqlAlumniRepository
from alumni_api.repositories.sql.employment import SqlEmploymentRepository
from alumni_api.repositories.sql.users import SqlUserRepository

# Security scheme
security = HTTPBearer()


async def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    if settings.uses_mongo:
        return MongoUserRepository(get_mongodb())
    return SqlUserRepository(db)


async def get_alumni_repository(db: AsyncSession = Depends(get_db)) -> AlumniRepository:
    if settings.uses_mongo:
        return MongoAlumniRepository(get_mongodb())
    return SqlAlumniRepository(db)


async def get_employment_repository(
    db: AsyncSession = Depends(get_db),
) -> EmploymentRepository:
    if settings.uses_mongo:
        return MongoEmploymentRepository(get_mongodb())
    return SqlEmploymentRepository(db)


async def get_file_repository() -> FileRepository:
    return MongoFileRepository(get_mongodb())


async def get_achievement_document_repository() -> AchievementDocumentRepository:
    return MongoAchievementDocumentRepository(get_mongodb())


async def get_achievement_reference_repository(
    db: AsyncSession = Depends(get_db),
) -> AchievementReferenceRepository:
    return SqlAchievementReferenceRepository(db)


@dataclass(frozen=True)
class Principal:
    """Whoever holds the bearer token: a staff user or an alumni."""

    id: str
    role: Role
    name: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_alumni(self) -> bool:
        return self.role == Role.ALUMNI


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    users: UserRepository = Depends(get_user_repository),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> Principal:
    """Validate the access token and reload the account it names."""
    try:
        payload = verify_access_token(credentials.credentials)
        role = Role(payload["role"])
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    subject = payload["sub"]

    if role == Role.ALUMNI:
        record = await alumni.get(subject)
        if record is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Alumni not found",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return Principal(id=record.id, role=Role.ALUMNI, name=record.name)

    user = await users.get(subject)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    # Role comes from the stored account so demotions apply immediately
    return Principal(id=user.id, role=Role(user.role), name=user.full_name or user.username)


class RequirePermission:
    """Dependency that resolves the principal and checks one permission."""

    def __init__(self, permission: Permission):
        self.permission = permission

    async def __call__(
        self, principal: Principal = Depends(get_current_principal)
    ) -> Principal:
        ensure_permission(principal.role, self.permission)
        return principal


async def get_current_alumni(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """Only alumni tokens are accepted."""
    if not principal.is_alumni:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This endpoint is for alumni accounts",
        )
    return principal


# Common permission dependencies
require_alumni_read = RequirePermission(Permission.ALUMNI_READ)
require_alumni_write = RequirePermission(Permission.ALUMNI_WRITE)
require_alumni_trash = RequirePermission(Permission.ALUMNI_TRASH)
require_employment_read = RequirePermission(Permission.EMPLOYMENT_READ)
require_employment_write = RequirePermission(Permission.EMPLOYMENT_WRITE)
require_employment_manage = RequirePermission(Permission.EMPLOYMENT_MANAGE)
require_achievement_submit = RequirePermission(Permission.ACHIEVEMENT_SUBMIT)
require_achievement_read = RequirePermission(Permission.ACHIEVEMENT_READ)
require_achievement_verify = RequirePermission(Permission.ACHIEVEMENT_VERIFY)
require_file_upload = RequirePermission(Permission.FILE_UPLOAD)
require_user_manage = RequirePermission(Permission.USER_MANAGE)
require_report_read = RequirePermission(Permission.REPORT_READ)
