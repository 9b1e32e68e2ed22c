"""Achievement status rows.

The achievement payload lives in MongoDB; this table only tracks where each
achievement is in the review workflow and who reviewed it.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from alumni_api.db.postgres import Base
from alumni_api.models.base import new_id, utcnow


class AchievementStatus(str, Enum):
    """Review status of an achievement."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    VERIFIED = "verified"
    REJECTED = "rejected"
    DELETED = "deleted"


class AchievementReference(Base):
    """Status row pointing at an achievement document."""

    __tablename__ = "achievement_references"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    # Plain string: the owner may live in either backend
    alumni_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    document_id: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), default=AchievementStatus.DRAFT.value, index=True, nullable=False
    )
    submitted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    verified_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    verified_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    rejection_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<AchievementReference(id={self.id}, status={self.status})>"
