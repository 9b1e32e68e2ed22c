"""Employment history SQLAlchemy model."""

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from alumni_api.db.postgres import Base
from alumni_api.models.base import new_id, utcnow

if TYPE_CHECKING:
    from alumni_api.models.sql.alumni import Alumni


class Employment(Base):
    """One job held by an alumni."""

    __tablename__ = "employment"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    alumni_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("alumni.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    industry: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    salary_range: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    deleted_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    # Relationships
    alumni: Mapped["Alumni"] = relationship("Alumni", back_populates="employment")

    def __repr__(self) -> str:
        return f"<Employment(id={self.id}, company={self.company_name})>"
