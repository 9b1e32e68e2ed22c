"""User repository backed by MongoDB."""

import re
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from alumni_api.core.pagination import PaginationParams
from alumni_api.db.mongodb import USERS_COLLECTION
from alumni_api.models.base import utcnow
from alumni_api.models.records import UserRecord
from alumni_api.repositories.base import USER_SEARCH_FIELDS, USER_SORT_FIELDS, UserRepository
from alumni_api.repositories.mongo.common import fetch_page, parse_object_id


class MongoUserRepository(UserRepository):
    def __init__(self, database: AsyncIOMotorDatabase):
        self.collection = database[USERS_COLLECTION]

    async def get(self, user_id: str) -> Optional[UserRecord]:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        document = await self.collection.find_one({"_id": oid})
        return UserRecord.from_mongo(document) if document else None

    async def get_by_login(self, identifier: str) -> Optional[UserRecord]:
        document = await self.collection.find_one(
            {
                "$or": [
                    {"username": identifier.lower()},
                    {"email": {"$regex": f"^{re.escape(identifier)}$", "$options": "i"}},
                ]
            }
        )
        return UserRecord.from_mongo(document) if document else None

    async def find_duplicate(
        self, username: str | None, email: str | None, exclude_id: str | None = None
    ) -> Optional[str]:
        for field, value in (("username", username), ("email", email)):
            if value is None:
                continue
            query: dict[str, Any] = {field: value}
            if exclude_id and (oid := parse_object_id(exclude_id)):
                query["_id"] = {"$ne": oid}
            if await self.collection.find_one(query, {"_id": 1}):
                return field
        return None

    async def paginate(self, params: PaginationParams) -> tuple[list[UserRecord], int]:
        documents, total = await fetch_page(
            self.collection, {}, params, USER_SORT_FIELDS, USER_SEARCH_FIELDS
        )
        return [UserRecord.from_mongo(doc) for doc in documents], total

    async def create(self, data: dict[str, Any]) -> UserRecord:
        now = utcnow()
        document = {
            "full_name": None,
            "role": "user",
            "is_active": True,
            **data,
            "created_at": now,
            "updated_at": now,
        }
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return UserRecord.from_mongo(document)

    async def update(self, user_id: str, data: dict[str, Any]) -> Optional[UserRecord]:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        document = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {**data, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return UserRecord.from_mongo(document) if document else None

    async def delete(self, user_id: str) -> bool:
        oid = parse_object_id(user_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0
