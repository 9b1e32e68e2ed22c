"""Alumni schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, model_validator

from alumni_api.schemas.common import PaginatedResponse


class AlumniBase(BaseModel):
    student_number: str = Field(..., min_length=1, max_length=32)
    name: str = Field(..., min_length=1, max_length=255)
    major: str = Field(..., min_length=1, max_length=255)
    entry_year: int = Field(..., ge=1950, le=2100)
    graduation_year: int = Field(..., ge=1950, le=2100)
    email: EmailStr
    phone: str | None = Field(None, max_length=32)
    address: str | None = None

    @model_validator(mode="after")
    def check_years(self) -> "AlumniBase":
        if self.graduation_year < self.entry_year:
            raise ValueError("graduation_year must not be before entry_year")
        return self


class AlumniCreate(AlumniBase):
    """Schema for an admin creating an alumni record."""

    password: str | None = Field(None, min_length=8, max_length=100)


class AlumniRegister(AlumniBase):
    """Schema for alumni self-registration."""

    password: str = Field(..., min_length=8, max_length=100)


class AlumniUpdate(BaseModel):
    """Schema for updating an alumni record. Omitted fields stay unchanged."""

    student_number: str | None = Field(None, min_length=1, max_length=32)
    name: str | None = Field(None, min_length=1, max_length=255)
    major: str | None = Field(None, min_length=1, max_length=255)
    entry_year: int | None = Field(None, ge=1950, le=2100)
    graduation_year: int | None = Field(None, ge=1950, le=2100)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=32)
    address: str | None = None
    password: str | None = Field(None, min_length=8, max_length=100)


class AlumniResponse(BaseModel):
    """Schema for alumni response. The password hash is never included."""

    id: str
    student_number: str
    name: str
    major: str
    entry_year: int
    graduation_year: int
    email: str
    phone: str | None = None
    address: str | None = None
    role: str = "alumni"
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    deleted_by: str | None = None

    class Config:
        from_attributes = True


class AlumniListResponse(PaginatedResponse):
    items: list[AlumniResponse]


class AlumniStatistics(BaseModel):
    total: int
    by_major: dict[str, int]
    by_entry_year: dict[str, int]
    by_graduation_year: dict[str, int]


class AlumniCheckResponse(BaseModel):
    """Reply of the legacy alumni check endpoint."""

    student_number: str
    is_alumni: bool
    alumni: AlumniResponse | None = None
