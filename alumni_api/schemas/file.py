"""File upload schemas."""

from datetime import datetime

from pydantic import BaseModel


class UploaderInfo(BaseModel):
    """Who uploaded a file. Falls back to ``unknown`` for removed accounts."""

    id: str
    name: str = "unknown"
    role: str = "unknown"


class FileResponse(BaseModel):
    """Schema for stored file metadata."""

    id: str
    owner_id: str
    file_name: str
    original_name: str
    file_path: str
    file_size: int
    file_type: str
    category: str
    uploaded_by: str
    uploaded_at: datetime
    uploader: UploaderInfo | None = None

    class Config:
        from_attributes = True


class FileListResponse(BaseModel):
    items: list[FileResponse]
    total: int
