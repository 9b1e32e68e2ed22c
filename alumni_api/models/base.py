"""Helpers shared by the relational and document models."""

from datetime import UTC, date, datetime, time
from typing import Any, ClassVar
from uuid import uuid4

from bson import ObjectId
from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    return datetime.now(UTC)


def new_id() -> str:
    return str(uuid4())


class MongoRecord(BaseModel):
    """Pydantic record that can round-trip through a MongoDB document.

    ``id`` maps to ``_id`` and is an ObjectId on the wire. Calendar dates
    listed in ``date_fields`` are stored as midnight datetimes because BSON
    has no date-only type.
    """

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    date_fields: ClassVar[tuple[str, ...]] = ()

    id: str

    def to_mongo(self, include_id: bool = False) -> dict[str, Any]:
        """Convert to MongoDB document format."""
        data = self.model_dump(exclude={"id"})
        for field in self.date_fields:
            value = data.get(field)
            if isinstance(value, date) and not isinstance(value, datetime):
                data[field] = datetime.combine(value, time.min)
        if include_id and ObjectId.is_valid(self.id):
            data["_id"] = ObjectId(self.id)
        return data

    @classmethod
    def from_mongo(cls, data: dict[str, Any]):
        """Create from MongoDB document."""
        data = dict(data)
        data["id"] = str(data.pop("_id"))
        for field in cls.date_fields:
            value = data.get(field)
            if isinstance(value, datetime):
                data[field] = value.date()
        return cls(**data)


def mongo_dates(values: dict[str, Any]) -> dict[str, Any]:
    """Convert date values in a partial update to datetimes for BSON."""
    converted = {}
    for key, value in values.items():
        if isinstance(value, date) and not isinstance(value, datetime):
            value = datetime.combine(value, time.min)
        converted[key] = value
    return converted
