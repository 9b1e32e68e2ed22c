"""Uploaded file metadata stored in MongoDB."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from alumni_api.models.base import MongoRecord, utcnow


class FileCategory(str, Enum):
    """What an upload is for. Each category has its own size and type rules."""

    PHOTO = "photo"
    CERTIFICATE = "certificate"


class FileRecord(MongoRecord):
    """Metadata for one stored upload. The bytes live on disk at ``file_path``."""

    id: str = ""
    owner_id: str
    file_name: str
    original_name: str
    file_path: str
    file_size: int
    file_type: str
    category: FileCategory
    uploaded_by: str
    uploaded_at: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None
