"""Achievement status rows in PostgreSQL."""

from typing import Any, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from alumni_api.core.pagination import PaginationParams
from alumni_api.models.base import utcnow
from alumni_api.models.sql.achievement import AchievementReference, AchievementStatus
from alumni_api.repositories.base import AchievementReferenceRepository
from alumni_api.repositories.sql.common import fetch_page

REFERENCE_SORT_FIELDS = frozenset(
    {"status", "submitted_at", "verified_at", "created_at", "updated_at"}
)

DELETED = AchievementStatus.DELETED.value


class SqlAchievementReferenceRepository(AchievementReferenceRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, alumni_id: str, document_id: str) -> AchievementReference:
        reference = AchievementReference(
            alumni_id=alumni_id,
            document_id=document_id,
            status=AchievementStatus.DRAFT.value,
        )
        self.db.add(reference)
        await self.db.flush()
        await self.db.refresh(reference)
        return reference

    async def get(self, reference_id: str) -> Optional[AchievementReference]:
        return await self.db.get(AchievementReference, reference_id)

    async def paginate(
        self,
        params: PaginationParams,
        alumni_id: str | None = None,
        status: str | None = None,
    ) -> tuple[list[AchievementReference], int]:
        query = select(AchievementReference)
        if status:
            query = query.where(AchievementReference.status == status)
        else:
            query = query.where(AchievementReference.status != DELETED)
        if alumni_id:
            query = query.where(AchievementReference.alumni_id == alumni_id)
        return await fetch_page(
            self.db,
            query,
            AchievementReference,
            params,
            REFERENCE_SORT_FIELDS,
            (),
        )

    async def transition(
        self, reference_id: str, from_status: str, to_status: str, **fields: Any
    ) -> Optional[AchievementReference]:
        result = await self.db.execute(
            update(AchievementReference)
            .where(
                AchievementReference.id == reference_id,
                AchievementReference.status == from_status,
            )
            .values(status=to_status, updated_at=utcnow(), **fields)
        )
        if result.rowcount == 0:
            return None
        reference = await self.db.get(AchievementReference, reference_id)
        await self.db.refresh(reference)
        return reference

    async def count_by_status(self, alumni_id: str | None = None) -> dict[str, int]:
        query = select(AchievementReference.status, func.count()).group_by(
            AchievementReference.status
        )
        if alumni_id:
            query = query.where(AchievementReference.alumni_id == alumni_id)
        result = await self.db.execute(query)
        return {status: count for status, count in result.all()}

    async def top_alumni(self, limit: int = 10) -> list[tuple[str, int]]:
        count = func.count().label("total")
        result = await self.db.execute(
            select(AchievementReference.alumni_id, count)
            .where(AchievementReference.status != DELETED)
            .group_by(AchievementReference.alumni_id)
            .order_by(count.desc(), AchievementReference.alumni_id)
            .limit(limit)
        )
        return [(alumni_id, total) for alumni_id, total in result.all()]
