"""User repository backed by PostgreSQL."""

from typing import Any, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from alumni_api.core.pagination import PaginationParams
from alumni_api.models.base import utcnow
from alumni_api.models.records import UserRecord
from alumni_api.models.sql.user import User
from alumni_api.repositories.base import USER_SEARCH_FIELDS, USER_SORT_FIELDS, UserRepository
from alumni_api.repositories.sql.common import fetch_page


class SqlUserRepository(UserRepository):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: str) -> Optional[UserRecord]:
        user = await self.db.get(User, user_id)
        return UserRecord.model_validate(user) if user else None

    async def get_by_login(self, identifier: str) -> Optional[UserRecord]:
        result = await self.db.execute(
            select(User).where(
                or_(
                    User.username == identifier.lower(),
                    func.lower(User.email) == identifier.lower(),
                )
            )
        )
        user = result.scalars().first()
        return UserRecord.model_validate(user) if user else None

    async def find_duplicate(
        self, username: str | None, email: str | None, exclude_id: str | None = None
    ) -> Optional[str]:
        for field, value in (("username", username), ("email", email)):
            if value is None:
                continue
            query = select(User.id).where(getattr(User, field) == value)
            if exclude_id:
                query = query.where(User.id != exclude_id)
            if (await self.db.execute(query)).first():
                return field
        return None

    async def paginate(self, params: PaginationParams) -> tuple[list[UserRecord], int]:
        rows, total = await fetch_page(
            self.db, select(User), User, params, USER_SORT_FIELDS, USER_SEARCH_FIELDS
        )
        return [UserRecord.model_validate(row) for row in rows], total

    async def create(self, data: dict[str, Any]) -> UserRecord:
        user = User(**data)
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return UserRecord.model_validate(user)

    async def update(self, user_id: str, data: dict[str, Any]) -> Optional[UserRecord]:
        user = await self.db.get(User, user_id)
        if user is None:
            return None
        for field, value in data.items():
            setattr(user, field, value)
        user.updated_at = utcnow()
        await self.db.flush()
        await self.db.refresh(user)
        return UserRecord.model_validate(user)

    async def delete(self, user_id: str) -> bool:
        user = await self.db.get(User, user_id)
        if user is None:
            return False
        await self.db.delete(user)
        await self.db.flush()
        return True
