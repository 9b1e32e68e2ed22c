"""Role-based access control (RBAC) for the application."""

from enum import Enum

from fastapi import HTTPException, status


class Role(str, Enum):
    """Account roles. Admins and staff users log in with a username,
    alumni with their student number."""

    ADMIN = "admin"
    USER = "user"
    ALUMNI = "alumni"


# Permission definitions
class Permission(str, Enum):
    """Available permissions in the system."""

    # Alumni records
    ALUMNI_READ = "alumni:read"
    ALUMNI_WRITE = "alumni:write"
    ALUMNI_TRASH = "alumni:trash"

    # Employment history
    EMPLOYMENT_READ = "employment:read"
    EMPLOYMENT_WRITE = "employment:write"
    EMPLOYMENT_MANAGE = "employment:manage"

    # Achievements
    ACHIEVEMENT_SUBMIT = "achievement:submit"
    ACHIEVEMENT_READ = "achievement:read"
    ACHIEVEMENT_VERIFY = "achievement:verify"

    # Files
    FILE_UPLOAD = "file:upload"
    FILE_MANAGE = "file:manage"

    # Administration
    USER_MANAGE = "user:manage"
    REPORT_READ = "report:read"


# Role-permission mapping
ROLE_PERMISSIONS: dict[Role, set[Permission]] = {
    Role.ADMIN: {
        Permission.ALUMNI_READ,
        Permission.ALUMNI_WRITE,
        Permission.ALUMNI_TRASH,
        Permission.EMPLOYMENT_READ,
        Permission.EMPLOYMENT_WRITE,
        Permission.EMPLOYMENT_MANAGE,
        Permission.ACHIEVEMENT_READ,
        Permission.ACHIEVEMENT_VERIFY,
        Permission.FILE_UPLOAD,
        Permission.FILE_MANAGE,
        Permission.USER_MANAGE,
        Permission.REPORT_READ,
    },
    Role.USER: {
        Permission.ALUMNI_READ,
        Permission.ALUMNI_TRASH,
        Permission.EMPLOYMENT_READ,
        Permission.FILE_UPLOAD,
    },
    Role.ALUMNI: {
        Permission.ALUMNI_READ,
        Permission.EMPLOYMENT_READ,
        Permission.EMPLOYMENT_WRITE,
        Permission.ACHIEVEMENT_SUBMIT,
        Permission.ACHIEVEMENT_READ,
        Permission.FILE_UPLOAD,
    },
}


def has_permission(role: Role, permission: Permission) -> bool:
    """Check if a role has a specific permission."""
    return permission in ROLE_PERMISSIONS.get(role, set())


def has_any_permission(role: Role, permissions: list[Permission]) -> bool:
    """Check if a role has any of the specified permissions."""
    role_perms = ROLE_PERMISSIONS.get(role, set())
    return any(perm in role_perms for perm in permissions)


def has_all_permissions(role: Role, permissions: list[Permission]) -> bool:
    """Check if a role has all of the specified permissions."""
    role_perms = ROLE_PERMISSIONS.get(role, set())
    return all(perm in role_perms for perm in permissions)


def ensure_permission(role: Role, permission: Permission) -> None:
    """Raise 403 when the role lacks the permission."""
    if not has_permission(role, permission):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Permission denied: {permission.value} required",
        )
