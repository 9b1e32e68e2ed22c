"""Achievement document repository (MongoDB only)."""

from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from alumni_api.db.mongodb import ACHIEVEMENTS_COLLECTION
from alumni_api.models.base import mongo_dates, utcnow
from alumni_api.models.nosql.achievement import AchievementDocument
from alumni_api.repositories.base import AchievementDocumentRepository
from alumni_api.repositories.mongo.common import ACTIVE, parse_object_id


class MongoAchievementDocumentRepository(AchievementDocumentRepository):
    def __init__(self, database: AsyncIOMotorDatabase):
        self.collection = database[ACHIEVEMENTS_COLLECTION]

    async def create(self, document: AchievementDocument) -> AchievementDocument:
        result = await self.collection.insert_one(document.to_mongo())
        return document.model_copy(update={"id": str(result.inserted_id)})

    async def get(self, document_id: str) -> Optional[AchievementDocument]:
        oid = parse_object_id(document_id)
        if oid is None:
            return None
        document = await self.collection.find_one({"_id": oid, **ACTIVE})
        return AchievementDocument.from_mongo(document) if document else None

    async def get_many(self, document_ids: list[str]) -> dict[str, AchievementDocument]:
        oids = [oid for oid in map(parse_object_id, document_ids) if oid is not None]
        if not oids:
            return {}
        cursor = self.collection.find({"_id": {"$in": oids}, **ACTIVE})
        documents = [AchievementDocument.from_mongo(doc) async for doc in cursor]
        return {document.id: document for document in documents}

    async def update(
        self, document_id: str, data: dict[str, Any]
    ) -> Optional[AchievementDocument]:
        oid = parse_object_id(document_id)
        if oid is None:
            return None
        document = await self.collection.find_one_and_update(
            {"_id": oid, **ACTIVE},
            {"$set": {**mongo_dates(data), "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return AchievementDocument.from_mongo(document) if document else None

    async def soft_delete(self, document_id: str) -> bool:
        oid = parse_object_id(document_id)
        if oid is None:
            return False
        now = utcnow()
        result = await self.collection.update_one(
            {"_id": oid, **ACTIVE},
            {"$set": {"deleted_at": now, "updated_at": now}},
        )
        return result.modified_count > 0

    async def count_by_type(self) -> dict[str, int]:
        pipeline = [
            {"$match": ACTIVE},
            {"$group": {"_id": "$achievement_type", "count": {"$sum": 1}}},
        ]
        rows = await self.collection.aggregate(pipeline).to_list(length=None)
        return {row["_id"]: row["count"] for row in rows}
