"""Authentication schemas."""

from pydantic import BaseModel, Field

from alumni_api.schemas.alumni import AlumniResponse
from alumni_api.schemas.employment import EmploymentResponse
from alumni_api.schemas.user import UserResponse


class UserLogin(BaseModel):
    """Schema for staff login. ``username`` may also be an email address."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AlumniLogin(BaseModel):
    """Schema for alumni login by student number."""

    student_number: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Schema for authentication token response."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class UserTokenResponse(TokenResponse):
    user: UserResponse


class AlumniTokenResponse(TokenResponse):
    alumni: AlumniResponse


class TokenRefresh(BaseModel):
    """Schema for token refresh request."""

    refresh_token: str


class ProfileResponse(BaseModel):
    """Profile of whoever holds the token."""

    id: str
    role: str
    name: str
    user: UserResponse | None = None
    alumni: AlumniResponse | None = None


class AlumniProfileResponse(AlumniResponse):
    """Alumni record with their current employment history."""

    employment: list[EmploymentResponse] = []
