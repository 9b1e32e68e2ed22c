"""User management schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from alumni_api.core.permissions import Role
from alumni_api.schemas.common import PaginatedResponse


def _check_username(v: str) -> str:
    if not v.replace("_", "").replace("-", "").replace(".", "").isalnum():
        raise ValueError(
            "Username can only contain letters, numbers, dots, underscores, and hyphens"
        )
    return v.lower()


class UserCreate(BaseModel):
    """Schema for creating a staff account."""

    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    full_name: str | None = Field(None, max_length=255)
    role: Role = Role.USER
    is_active: bool = True

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _check_username(v)

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: Role) -> Role:
        if v == Role.ALUMNI:
            raise ValueError("Alumni accounts are created through alumni registration")
        return v


class UserUpdate(BaseModel):
    """Schema for updating a staff account. Omitted fields stay unchanged."""

    username: str | None = Field(None, min_length=3, max_length=50)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=8, max_length=100)
    full_name: str | None = Field(None, max_length=255)
    role: Role | None = None
    is_active: bool | None = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _check_username(v)

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: Role | None) -> Role | None:
        if v == Role.ALUMNI:
            raise ValueError("Staff accounts cannot take the alumni role")
        return v


class UserResponse(BaseModel):
    """Schema for user response."""

    id: str
    username: str
    email: str
    full_name: str | None = None
    role: str
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserListResponse(PaginatedResponse):
    items: list[UserResponse]
