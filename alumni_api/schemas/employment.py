"""Employment history schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from alumni_api.models.records import EmploymentStatus
from alumni_api.schemas.common import PaginatedResponse


class EmploymentCreate(BaseModel):
    """Schema for adding a job. Admins must say whose job it is."""

    alumni_id: str | None = None
    company_name: str = Field(..., min_length=1, max_length=255)
    position: str = Field(..., min_length=1, max_length=255)
    industry: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    salary_range: str | None = Field(None, max_length=100)
    start_date: date
    end_date: date | None = None
    status: EmploymentStatus = EmploymentStatus.ACTIVE
    description: str | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "EmploymentCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EmploymentUpdate(BaseModel):
    """Schema for updating a job. Omitted fields stay unchanged."""

    company_name: str | None = Field(None, min_length=1, max_length=255)
    position: str | None = Field(None, min_length=1, max_length=255)
    industry: str | None = Field(None, min_length=1, max_length=255)
    location: str | None = Field(None, min_length=1, max_length=255)
    salary_range: str | None = Field(None, max_length=100)
    start_date: date | None = None
    end_date: date | None = None
    status: EmploymentStatus | None = None
    description: str | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "EmploymentUpdate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EmploymentResponse(BaseModel):
    """Schema for employment response."""

    id: str
    alumni_id: str
    company_name: str
    position: str
    industry: str
    location: str
    salary_range: str | None = None
    start_date: date
    end_date: date | None = None
    status: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    deleted_by: str | None = None

    class Config:
        from_attributes = True


class EmploymentListResponse(PaginatedResponse):
    items: list[EmploymentResponse]
