"""Achievement schemas."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

from alumni_api.models.nosql.achievement import AchievementType
from alumni_api.schemas.common import PaginatedResponse


class AchievementCreate(BaseModel):
    """Schema for a new achievement draft."""

    title: str = Field(..., min_length=1, max_length=255)
    achievement_type: AchievementType
    description: str = Field("", max_length=5000)
    event_date: date | None = None
    organizer: str | None = Field(None, max_length=255)
    level: str | None = Field(None, max_length=100)
    details: dict[str, Any] = Field(default_factory=dict)
    attachments: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class AchievementUpdate(BaseModel):
    """Schema for editing a draft. Omitted fields stay unchanged."""

    title: str | None = Field(None, min_length=1, max_length=255)
    achievement_type: AchievementType | None = None
    description: str | None = Field(None, max_length=5000)
    event_date: date | None = None
    organizer: str | None = Field(None, max_length=255)
    level: str | None = Field(None, max_length=100)
    details: dict[str, Any] | None = None
    attachments: list[str] | None = None
    tags: list[str] | None = None


class AchievementReject(BaseModel):
    note: str = Field(..., min_length=1, max_length=2000)


class AchievementDocumentResponse(BaseModel):
    id: str
    alumni_id: str
    title: str
    achievement_type: str
    description: str = ""
    event_date: date | None = None
    organizer: str | None = None
    level: str | None = None
    details: dict[str, Any] = {}
    attachments: list[str] = []
    tags: list[str] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AchievementReferenceResponse(BaseModel):
    """Workflow status of one achievement."""

    id: str
    alumni_id: str
    document_id: str
    status: str
    submitted_at: datetime | None = None
    verified_at: datetime | None = None
    verified_by: str | None = None
    rejection_note: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AchievementDetailResponse(AchievementReferenceResponse):
    achievement: AchievementDocumentResponse | None = None


class AchievementListResponse(PaginatedResponse):
    items: list[AchievementDetailResponse]
