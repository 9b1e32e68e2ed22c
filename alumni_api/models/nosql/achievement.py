"""Achievement documents stored in MongoDB."""

from datetime import date, datetime
from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import Field

from alumni_api.models.base import MongoRecord, utcnow


class AchievementType(str, Enum):
    """Kinds of achievement an alumni can report."""

    COMPETITION = "competition"
    PUBLICATION = "publication"
    ORGANIZATION = "organization"
    CERTIFICATION = "certification"
    ACADEMIC = "academic"
    OTHER = "other"


class AchievementDocument(MongoRecord):
    """Full achievement payload. Review status is tracked in PostgreSQL."""

    date_fields: ClassVar[tuple[str, ...]] = ("event_date",)

    id: str = ""
    alumni_id: str
    title: str
    achievement_type: AchievementType
    description: str = ""
    event_date: Optional[date] = None
    organizer: Optional[str] = None
    level: Optional[str] = None
    details: dict[str, Any] = Field(default_factory=dict)
    attachments: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None
