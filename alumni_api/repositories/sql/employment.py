"""Employment repository backed by PostgreSQL."""

from typing import Any, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from alumni_api.core.pagination import PaginationParams
from alumni_api.models.base import utcnow
from alumni_api.models.records import EmploymentRecord
from alumni_api.models.sql.employment import Employment
from alumni_api.repositories.base import (
    EMPLOYMENT_SEARCH_FIELDS,
    EMPLOYMENT_SORT_FIELDS,
    EmploymentRepository,
)
from alumni_api.repositories.sql.common import fetch_page


class SqlEmploymentRepository(EmploymentRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _active(self, employment_id: str) -> Optional[Employment]:
        result = await self.db.execute(
            select(Employment).where(
                Employment.id == employment_id,
                Employment.deleted_at.is_(None),
            )
        )
        return result.scalar_one_or_none()

    async def get(
        self, employment_id: str, include_deleted: bool = False
    ) -> Optional[EmploymentRecord]:
        if include_deleted:
            row = await self.db.get(Employment, employment_id)
        else:
            row = await self._active(employment_id)
        return EmploymentRecord.model_validate(row) if row else None

    async def paginate(
        self, params: PaginationParams, alumni_id: str | None = None
    ) -> tuple[list[EmploymentRecord], int]:
        query = select(Employment).where(Employment.deleted_at.is_(None))
        if alumni_id:
            query = query.where(Employment.alumni_id == alumni_id)
        rows, total = await fetch_page(
            self.db, query, Employment, params, EMPLOYMENT_SORT_FIELDS, EMPLOYMENT_SEARCH_FIELDS
        )
        return [EmploymentRecord.model_validate(row) for row in rows], total

    async def paginate_trashed(
        self, params: PaginationParams, alumni_id: str | None = None
    ) -> tuple[list[EmploymentRecord], int]:
        query = select(Employment).where(Employment.deleted_at.is_not(None))
        if alumni_id:
            query = query.where(Employment.alumni_id == alumni_id)
        rows, total = await fetch_page(
            self.db,
            query,
            Employment,
            params,
            EMPLOYMENT_SORT_FIELDS,
            EMPLOYMENT_SEARCH_FIELDS,
            ordering=Employment.deleted_at.desc(),
        )
        return [EmploymentRecord.model_validate(row) for row in rows], total

    async def list_by_alumni(self, alumni_id: str) -> list[EmploymentRecord]:
        result = await self.db.execute(
            select(Employment)
            .where(Employment.alumni_id == alumni_id, Employment.deleted_at.is_(None))
            .order_by(Employment.start_date.desc(), Employment.id)
        )
        return [EmploymentRecord.model_validate(row) for row in result.scalars().all()]

    async def create(self, data: dict[str, Any]) -> EmploymentRecord:
        row = Employment(**data)
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return EmploymentRecord.model_validate(row)

    async def update(
        self, employment_id: str, data: dict[str, Any]
    ) -> Optional[EmploymentRecord]:
        row = await self._active(employment_id)
        if row is None:
            return None
        for field, value in data.items():
            setattr(row, field, value)
        row.updated_at = utcnow()
        await self.db.flush()
        await self.db.refresh(row)
        return EmploymentRecord.model_validate(row)

    async def delete(self, employment_id: str) -> bool:
        result = await self.db.execute(delete(Employment).where(Employment.id == employment_id))
        return result.rowcount > 0

    async def soft_delete(self, employment_id: str, deleted_by: str) -> bool:
        now = utcnow()
        result = await self.db.execute(
            update(Employment)
            .where(Employment.id == employment_id, Employment.deleted_at.is_(None))
            .values(deleted_at=now, deleted_by=deleted_by, updated_at=now)
        )
        return result.rowcount > 0

    async def restore(self, employment_id: str) -> bool:
        result = await self.db.execute(
            update(Employment)
            .where(Employment.id == employment_id, Employment.deleted_at.is_not(None))
            .values(deleted_at=None, deleted_by=None, updated_at=utcnow())
        )
        return result.rowcount > 0

    async def purge(self, employment_id: str) -> bool:
        result = await self.db.execute(
            delete(Employment).where(
                Employment.id == employment_id,
                Employment.deleted_at.is_not(None),
            )
        )
        return result.rowcount > 0

    async def soft_delete_by_alumni(self, alumni_id: str, deleted_by: str) -> int:
        now = utcnow()
        result = await self.db.execute(
            update(Employment)
            .where(Employment.alumni_id == alumni_id, Employment.deleted_at.is_(None))
            .values(deleted_at=now, deleted_by=deleted_by, updated_at=now)
        )
        return result.rowcount

    async def purge_by_alumni(self, alumni_id: str) -> int:
        result = await self.db.execute(
            delete(Employment).where(
                Employment.alumni_id == alumni_id,
                Employment.deleted_at.is_not(None),
            )
        )
        return result.rowcount

    async def delete_by_alumni(self, alumni_id: str) -> int:
        result = await self.db.execute(
            delete(Employment).where(Employment.alumni_id == alumni_id)
        )
        return result.rowcount
