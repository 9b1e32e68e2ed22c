"""File metadata repository (MongoDB only)."""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from alumni_api.db.mongodb import FILES_COLLECTION
from alumni_api.models.base import utcnow
from alumni_api.models.nosql.file import FileRecord
from alumni_api.repositories.base import FileRepository
from alumni_api.repositories.mongo.common import ACTIVE, parse_object_id


class MongoFileRepository(FileRepository):
    def __init__(self, database: AsyncIOMotorDatabase):
        self.collection = database[FILES_COLLECTION]

    async def create(self, record: FileRecord) -> FileRecord:
        result = await self.collection.insert_one(record.to_mongo())
        return record.model_copy(update={"id": str(result.inserted_id)})

    async def get(self, file_id: str) -> Optional[FileRecord]:
        oid = parse_object_id(file_id)
        if oid is None:
            return None
        document = await self.collection.find_one({"_id": oid, **ACTIVE})
        return FileRecord.from_mongo(document) if document else None

    async def list_for_owner(self, owner_id: str, category: str) -> list[FileRecord]:
        cursor = self.collection.find(
            {"owner_id": owner_id, "category": category, **ACTIVE}
        ).sort("uploaded_at", DESCENDING)
        return [FileRecord.from_mongo(doc) async for doc in cursor]

    async def soft_delete(self, file_id: str) -> bool:
        oid = parse_object_id(file_id)
        if oid is None:
            return False
        now = utcnow()
        result = await self.collection.update_one(
            {"_id": oid, **ACTIVE},
            {"$set": {"deleted_at": now, "updated_at": now}},
        )
        return result.modified_count > 0
