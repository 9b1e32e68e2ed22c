"""Validation and storage of uploaded photos and certificates."""

import logging
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from alumni_api.config import settings
from alumni_api.core.exceptions import BadRequestError
from alumni_api.models.nosql.file import FileCategory, FileRecord
from alumni_api.repositories.base import FileRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadRule:
    content_types: dict[str, str]  # content type -> extension used on disk
    extensions: frozenset[str]
    size_setting: str
    label: str

    @property
    def max_size(self) -> int:
        return getattr(settings, self.size_setting)


UPLOAD_RULES: dict[FileCategory, UploadRule] = {
    FileCategory.PHOTO: UploadRule(
        content_types={"image/jpeg": ".jpg", "image/jpg": ".jpg", "image/png": ".png"},
        extensions=frozenset({".jpg", ".jpeg", ".png"}),
        size_setting="MAX_PHOTO_SIZE",
        label="JPEG or PNG",
    ),
    FileCategory.CERTIFICATE: UploadRule(
        content_types={"application/pdf": ".pdf"},
        extensions=frozenset({".pdf"}),
        size_setting="MAX_CERTIFICATE_SIZE",
        label="PDF",
    ),
}


def _format_size(size: int) -> str:
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):g}MB"
    return f"{size / 1024:g}KB"


class FileService:
    """Checks an upload against its category rules, writes it under
    ``UPLOAD_DIR/<category>/`` and records its metadata."""

    def __init__(self, files: FileRepository):
        self.files = files

    async def store(
        self,
        upload: UploadFile,
        category: FileCategory,
        owner_id: str,
        uploaded_by: str,
    ) -> FileRecord:
        """Validate the upload, write it to disk and insert its metadata."""
        rule = UPLOAD_RULES[category]
        original_name = Path(upload.filename or "").name
        extension = Path(original_name).suffix.lower()
        content_type = (upload.content_type or "").split(";")[0].strip().lower()

        if content_type not in rule.content_types and extension not in rule.extensions:
            raise BadRequestError(f"Only {rule.label} files are allowed for {category.value}")

        content = await upload.read(rule.max_size + 1)
        if not content:
            raise BadRequestError("Uploaded file is empty")
        if len(content) > rule.max_size:
            raise BadRequestError(
                f"File too large, maximum size for {category.value} is {_format_size(rule.max_size)}"
            )

        if extension not in rule.extensions:
            extension = rule.content_types[content_type]

        directory = Path(settings.UPLOAD_DIR) / category.value
        directory.mkdir(parents=True, exist_ok=True)
        file_name = f"{uuid4()}{extension}"
        path = directory / file_name
        await run_in_threadpool(path.write_bytes, content)

        record = FileRecord(
            owner_id=owner_id,
            file_name=file_name,
            original_name=original_name or file_name,
            file_path=str(path),
            file_size=len(content),
            file_type=content_type or "application/octet-stream",
            category=category,
            uploaded_by=uploaded_by,
        )

        try:
            stored = await self.files.create(record)
        except Exception:
            path.unlink(missing_ok=True)
            logger.error("Removed %s after metadata insert failed", path)
            raise

        logger.info(
            "Stored %s %s for owner %s (%d bytes)", category.value, file_name, owner_id, len(content)
        )
        return stored
