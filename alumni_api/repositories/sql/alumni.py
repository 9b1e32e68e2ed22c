"""Alumni repository backed by PostgreSQL."""

from typing import Any, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from alumni_api.core.pagination import PaginationParams
from alumni_api.models.base import utcnow
from alumni_api.models.records import AlumniRecord
from alumni_api.models.sql.alumni import Alumni
from alumni_api.repositories.base import (
    ALUMNI_SEARCH_FIELDS,
    ALUMNI_SORT_FIELDS,
    AlumniRepository,
)
from alumni_api.repositories.sql.common import fetch_page


class SqlAlumniRepository(AlumniRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _active(self, alumni_id: str) -> Optional[Alumni]:
        result = await self.db.execute(
            select(Alumni).where(Alumni.id == alumni_id, Alumni.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    async def get(self, alumni_id: str, include_deleted: bool = False) -> Optional[AlumniRecord]:
        if include_deleted:
            alumni = await self.db.get(Alumni, alumni_id)
        else:
            alumni = await self._active(alumni_id)
        return AlumniRecord.model_validate(alumni) if alumni else None

    async def get_by_student_number(self, student_number: str) -> Optional[AlumniRecord]:
        result = await self.db.execute(
            select(Alumni).where(
                Alumni.student_number == student_number,
                Alumni.deleted_at.is_(None),
            )
        )
        alumni = result.scalar_one_or_none()
        return AlumniRecord.model_validate(alumni) if alumni else None

    async def find_duplicate(
        self, student_number: str | None, email: str | None, exclude_id: str | None = None
    ) -> Optional[str]:
        for field, value in (("student_number", student_number), ("email", email)):
            if value is None:
                continue
            query = select(Alumni.id).where(getattr(Alumni, field) == value)
            if exclude_id:
                query = query.where(Alumni.id != exclude_id)
            if (await self.db.execute(query)).first():
                return field
        return None

    async def paginate(self, params: PaginationParams) -> tuple[list[AlumniRecord], int]:
        query = select(Alumni).where(Alumni.deleted_at.is_(None))
        rows, total = await fetch_page(
            self.db, query, Alumni, params, ALUMNI_SORT_FIELDS, ALUMNI_SEARCH_FIELDS
        )
        return [AlumniRecord.model_validate(row) for row in rows], total

    async def paginate_trashed(self, params: PaginationParams) -> tuple[list[AlumniRecord], int]:
        query = select(Alumni).where(Alumni.deleted_at.is_not(None))
        rows, total = await fetch_page(
            self.db,
            query,
            Alumni,
            params,
            ALUMNI_SORT_FIELDS,
            ALUMNI_SEARCH_FIELDS,
            ordering=Alumni.deleted_at.desc(),
        )
        return [AlumniRecord.model_validate(row) for row in rows], total

    async def create(self, data: dict[str, Any]) -> AlumniRecord:
        alumni = Alumni(**data)
        self.db.add(alumni)
        await self.db.flush()
        await self.db.refresh(alumni)
        return AlumniRecord.model_validate(alumni)

    async def update(self, alumni_id: str, data: dict[str, Any]) -> Optional[AlumniRecord]:
        alumni = await self._active(alumni_id)
        if alumni is None:
            return None
        for field, value in data.items():
            setattr(alumni, field, value)
        alumni.updated_at = utcnow()
        await self.db.flush()
        await self.db.refresh(alumni)
        return AlumniRecord.model_validate(alumni)

    async def delete(self, alumni_id: str) -> bool:
        result = await self.db.execute(delete(Alumni).where(Alumni.id == alumni_id))
        return result.rowcount > 0

    async def soft_delete(self, alumni_id: str, deleted_by: str) -> bool:
        now = utcnow()
        result = await self.db.execute(
            update(Alumni)
            .where(Alumni.id == alumni_id, Alumni.deleted_at.is_(None))
            .values(deleted_at=now, deleted_by=deleted_by, updated_at=now)
        )
        return result.rowcount > 0

    async def restore(self, alumni_id: str) -> bool:
        result = await self.db.execute(
            update(Alumni)
            .where(Alumni.id == alumni_id, Alumni.deleted_at.is_not(None))
            .values(deleted_at=None, deleted_by=None, updated_at=utcnow())
        )
        return result.rowcount > 0

    async def purge(self, alumni_id: str) -> bool:
        result = await self.db.execute(
            delete(Alumni).where(Alumni.id == alumni_id, Alumni.deleted_at.is_not(None))
        )
        return result.rowcount > 0

    async def statistics(self) -> dict[str, Any]:
        active = Alumni.deleted_at.is_(None)
        total = (
            await self.db.execute(select(func.count()).select_from(Alumni).where(active))
        ).scalar() or 0

        grouped: dict[str, dict[str, int]] = {}
        for key, column in (
            ("by_major", Alumni.major),
            ("by_entry_year", Alumni.entry_year),
            ("by_graduation_year", Alumni.graduation_year),
        ):
            result = await self.db.execute(
                select(column, func.count()).where(active).group_by(column).order_by(column)
            )
            grouped[key] = {str(value): count for value, count in result.all()}

        return {"total": total, **grouped}
