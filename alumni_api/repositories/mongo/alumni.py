"""Alumni repository backed by MongoDB."""

from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument

from alumni_api.core.pagination import PaginationParams
from alumni_api.db.mongodb import ALUMNI_COLLECTION
from alumni_api.models.base import utcnow
from alumni_api.models.records import AlumniRecord
from alumni_api.repositories.base import (
    ALUMNI_SEARCH_FIELDS,
    ALUMNI_SORT_FIELDS,
    AlumniRepository,
)
from alumni_api.repositories.mongo.common import ACTIVE, TRASHED, fetch_page, parse_object_id


class MongoAlumniRepository(AlumniRepository):
    def __init__(self, database: AsyncIOMotorDatabase):
        self.collection = database[ALUMNI_COLLECTION]

    async def get(self, alumni_id: str, include_deleted: bool = False) -> Optional[AlumniRecord]:
        oid = parse_object_id(alumni_id)
        if oid is None:
            return None
        query: dict[str, Any] = {"_id": oid}
        if not include_deleted:
            query.update(ACTIVE)
        document = await self.collection.find_one(query)
        return AlumniRecord.from_mongo(document) if document else None

    async def get_by_student_number(self, student_number: str) -> Optional[AlumniRecord]:
        document = await self.collection.find_one({"student_number": student_number, **ACTIVE})
        return AlumniRecord.from_mongo(document) if document else None

    async def find_duplicate(
        self, student_number: str | None, email: str | None, exclude_id: str | None = None
    ) -> Optional[str]:
        for field, value in (("student_number", student_number), ("email", email)):
            if value is None:
                continue
            query: dict[str, Any] = {field: value}
            if exclude_id and (oid := parse_object_id(exclude_id)):
                query["_id"] = {"$ne": oid}
            if await self.collection.find_one(query, {"_id": 1}):
                return field
        return None

    async def paginate(self, params: PaginationParams) -> tuple[list[AlumniRecord], int]:
        documents, total = await fetch_page(
            self.collection, ACTIVE, params, ALUMNI_SORT_FIELDS, ALUMNI_SEARCH_FIELDS
        )
        return [AlumniRecord.from_mongo(doc) for doc in documents], total

    async def paginate_trashed(self, params: PaginationParams) -> tuple[list[AlumniRecord], int]:
        documents, total = await fetch_page(
            self.collection,
            TRASHED,
            params,
            ALUMNI_SORT_FIELDS,
            ALUMNI_SEARCH_FIELDS,
            sort=[("deleted_at", DESCENDING)],
        )
        return [AlumniRecord.from_mongo(doc) for doc in documents], total

    async def create(self, data: dict[str, Any]) -> AlumniRecord:
        now = utcnow()
        document = {
            "phone": None,
            "address": None,
            "password_hash": None,
            **data,
            "created_at": now,
            "updated_at": now,
            "deleted_at": None,
            "deleted_by": None,
        }
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return AlumniRecord.from_mongo(document)

    async def update(self, alumni_id: str, data: dict[str, Any]) -> Optional[AlumniRecord]:
        oid = parse_object_id(alumni_id)
        if oid is None:
            return None
        document = await self.collection.find_one_and_update(
            {"_id": oid, **ACTIVE},
            {"$set": {**data, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return AlumniRecord.from_mongo(document) if document else None

    async def delete(self, alumni_id: str) -> bool:
        oid = parse_object_id(alumni_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def soft_delete(self, alumni_id: str, deleted_by: str) -> bool:
        oid = parse_object_id(alumni_id)
        if oid is None:
            return False
        now = utcnow()
        result = await self.collection.update_one(
            {"_id": oid, **ACTIVE},
            {"$set": {"deleted_at": now, "deleted_by": deleted_by, "updated_at": now}},
        )
        return result.modified_count > 0

    async def restore(self, alumni_id: str) -> bool:
        oid = parse_object_id(alumni_id)
        if oid is None:
            return False
        result = await self.collection.update_one(
            {"_id": oid, **TRASHED},
            {"$set": {"deleted_at": None, "deleted_by": None, "updated_at": utcnow()}},
        )
        return result.modified_count > 0

    async def purge(self, alumni_id: str) -> bool:
        oid = parse_object_id(alumni_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid, **TRASHED})
        return result.deleted_count > 0

    async def statistics(self) -> dict[str, Any]:
        total = await self.collection.count_documents(ACTIVE)
        stats: dict[str, Any] = {"total": total}
        for key, field in (
            ("by_major", "major"),
            ("by_entry_year", "entry_year"),
            ("by_graduation_year", "graduation_year"),
        ):
            pipeline = [
                {"$match": ACTIVE},
                {"$group": {"_id": f"${field}", "count": {"$sum": 1}}},
                {"$sort": {"_id": 1}},
            ]
            rows = await self.collection.aggregate(pipeline).to_list(length=None)
            stats[key] = {str(row["_id"]): row["count"] for row in rows}
        return stats
