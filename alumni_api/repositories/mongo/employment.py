"""Employment repository backed by MongoDB."""

from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from alumni_api.core.pagination import PaginationParams
from alumni_api.db.mongodb import EMPLOYMENT_COLLECTION
from alumni_api.models.base import mongo_dates, utcnow
from alumni_api.models.records import EmploymentRecord
from alumni_api.repositories.base import (
    EMPLOYMENT_SEARCH_FIELDS,
    EMPLOYMENT_SORT_FIELDS,
    EmploymentRepository,
)
from alumni_api.repositories.mongo.common import ACTIVE, TRASHED, fetch_page, parse_object_id


class MongoEmploymentRepository(EmploymentRepository):
    def __init__(self, database: AsyncIOMotorDatabase):
        self.collection = database[EMPLOYMENT_COLLECTION]

    async def get(
        self, employment_id: str, include_deleted: bool = False
    ) -> Optional[EmploymentRecord]:
        oid = parse_object_id(employment_id)
        if oid is None:
            return None
        query: dict[str, Any] = {"_id": oid}
        if not include_deleted:
            query.update(ACTIVE)
        document = await self.collection.find_one(query)
        return EmploymentRecord.from_mongo(document) if document else None

    async def paginate(
        self, params: PaginationParams, alumni_id: str | None = None
    ) -> tuple[list[EmploymentRecord], int]:
        query = dict(ACTIVE)
        if alumni_id:
            query["alumni_id"] = alumni_id
        documents, total = await fetch_page(
            self.collection, query, params, EMPLOYMENT_SORT_FIELDS, EMPLOYMENT_SEARCH_FIELDS
        )
        return [EmploymentRecord.from_mongo(doc) for doc in documents], total

    async def paginate_trashed(
        self, params: PaginationParams, alumni_id: str | None = None
    ) -> tuple[list[EmploymentRecord], int]:
        query = dict(TRASHED)
        if alumni_id:
            query["alumni_id"] = alumni_id
        documents, total = await fetch_page(
            self.collection,
            query,
            params,
            EMPLOYMENT_SORT_FIELDS,
            EMPLOYMENT_SEARCH_FIELDS,
            sort=[("deleted_at", DESCENDING)],
        )
        return [EmploymentRecord.from_mongo(doc) for doc in documents], total

    async def list_by_alumni(self, alumni_id: str) -> list[EmploymentRecord]:
        cursor = self.collection.find({"alumni_id": alumni_id, **ACTIVE}).sort(
            [("start_date", DESCENDING), ("_id", ASCENDING)]
        )
        return [EmploymentRecord.from_mongo(doc) async for doc in cursor]

    async def create(self, data: dict[str, Any]) -> EmploymentRecord:
        now = utcnow()
        document = {
            "salary_range": None,
            "end_date": None,
            "description": None,
            **mongo_dates(data),
            "created_at": now,
            "updated_at": now,
            "deleted_at": None,
            "deleted_by": None,
        }
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return EmploymentRecord.from_mongo(document)

    async def update(
        self, employment_id: str, data: dict[str, Any]
    ) -> Optional[EmploymentRecord]:
        oid = parse_object_id(employment_id)
        if oid is None:
            return None
        document = await self.collection.find_one_and_update(
            {"_id": oid, **ACTIVE},
            {"$set": {**mongo_dates(data), "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return EmploymentRecord.from_mongo(document) if document else None

    async def delete(self, employment_id: str) -> bool:
        oid = parse_object_id(employment_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def soft_delete(self, employment_id: str, deleted_by: str) -> bool:
        oid = parse_object_id(employment_id)
        if oid is None:
            return False
        now = utcnow()
        result = await self.collection.update_one(
            {"_id": oid, **ACTIVE},
            {"$set": {"deleted_at": now, "deleted_by": deleted_by, "updated_at": now}},
        )
        return result.modified_count > 0

    async def restore(self, employment_id: str) -> bool:
        oid = parse_object_id(employment_id)
        if oid is None:
            return False
        result = await self.collection.update_one(
            {"_id": oid, **TRASHED},
            {"$set": {"deleted_at": None, "deleted_by": None, "updated_at": utcnow()}},
        )
        return result.modified_count > 0

    async def purge(self, employment_id: str) -> bool:
        oid = parse_object_id(employment_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid, **TRASHED})
        return result.deleted_count > 0

    async def soft_delete_by_alumni(self, alumni_id: str, deleted_by: str) -> int:
        now = utcnow()
        result = await self.collection.update_many(
            {"alumni_id": alumni_id, **ACTIVE},
            {"$set": {"deleted_at": now, "deleted_by": deleted_by, "updated_at": now}},
        )
        return result.modified_count

    async def purge_by_alumni(self, alumni_id: str) -> int:
        result = await self.collection.delete_many({"alumni_id": alumni_id, **TRASHED})
        return result.deleted_count

    async def delete_by_alumni(self, alumni_id: str) -> int:
        result = await self.collection.delete_many({"alumni_id": alumni_id})
        return result.deleted_count
