"""Storage-neutral records returned by the user, alumni and employment
repositories. Both backends hand these back so routes never see ORM rows
or raw documents."""

from datetime import date, datetime
from enum import Enum
from typing import ClassVar, Optional

from alumni_api.models.base import MongoRecord


class EmploymentStatus(str, Enum):
    """Employment state of a job record."""

    ACTIVE = "active"
    FINISHED = "finished"
    RESIGNED = "resigned"


class UserRecord(MongoRecord):
    username: str
    email: str
    password_hash: str
    full_name: Optional[str] = None
    role: str
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class AlumniRecord(MongoRecord):
    student_number: str
    name: str
    major: str
    entry_year: int
    graduation_year: int
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    password_hash: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class EmploymentRecord(MongoRecord):
    date_fields: ClassVar[tuple[str, ...]] = ("start_date", "end_date")

    alumni_id: str
    company_name: str
    position: str
    industry: str
    location: str
    salary_range: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    status: EmploymentStatus = EmploymentStatus.ACTIVE
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
