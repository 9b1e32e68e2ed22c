"""Repository interfaces.

Users, alumni and employment have one implementation per backend and the
active one is picked from ``settings.STORAGE_BACKEND``. Achievement status
rows only live in PostgreSQL; achievement documents and file metadata only
live in MongoDB.

Lookups return ``None`` (or ``False`` for mutations) when nothing matches,
including when the id is not a valid id for the backend.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from alumni_api.core.pagination import PaginationParams
from alumni_api.models.nosql.achievement import AchievementDocument
from alumni_api.models.nosql.file import FileRecord
from alumni_api.models.records import AlumniRecord, EmploymentRecord, UserRecord
from alumni_api.models.sql.achievement import AchievementReference

ALUMNI_SORT_FIELDS = frozenset(
    {"student_number", "name", "major", "entry_year", "graduation_year", "email", "created_at"}
)
ALUMNI_SEARCH_FIELDS = ("name", "student_number", "major", "email")

EMPLOYMENT_SORT_FIELDS = frozenset(
    {"company_name", "position", "industry", "location", "status", "start_date", "created_at"}
)
EMPLOYMENT_SEARCH_FIELDS = ("company_name", "position", "industry", "location", "status")

USER_SORT_FIELDS = frozenset({"username", "email", "full_name", "role", "created_at"})
USER_SEARCH_FIELDS = ("username", "email", "full_name")


class UserRepository(ABC):
    @abstractmethod
    async def get(self, user_id: str) -> Optional[UserRecord]: ...

    @abstractmethod
    async def get_by_login(self, identifier: str) -> Optional[UserRecord]:
        """Find a user by username or email."""

    @abstractmethod
    async def find_duplicate(
        self, username: str | None, email: str | None, exclude_id: str | None = None
    ) -> Optional[str]:
        """Return the name of the first field already taken, if any."""

    @abstractmethod
    async def paginate(self, params: PaginationParams) -> tuple[list[UserRecord], int]: ...

    @abstractmethod
    async def create(self, data: dict[str, Any]) -> UserRecord: ...

    @abstractmethod
    async def update(self, user_id: str, data: dict[str, Any]) -> Optional[UserRecord]: ...

    @abstractmethod
    async def delete(self, user_id: str) -> bool: ...


class AlumniRepository(ABC):
    @abstractmethod
    async def get(self, alumni_id: str, include_deleted: bool = False) -> Optional[AlumniRecord]: ...

    @abstractmethod
    async def get_by_student_number(self, student_number: str) -> Optional[AlumniRecord]:
        """Active alumni with the given student number."""

    @abstractmethod
    async def find_duplicate(
        self, student_number: str | None, email: str | None, exclude_id: str | None = None
    ) -> Optional[str]: ...

    @abstractmethod
    async def paginate(self, params: PaginationParams) -> tuple[list[AlumniRecord], int]: ...

    @abstractmethod
    async def paginate_trashed(self, params: PaginationParams) -> tuple[list[AlumniRecord], int]: ...

    @abstractmethod
    async def create(self, data: dict[str, Any]) -> AlumniRecord: ...

    @abstractmethod
    async def update(self, alumni_id: str, data: dict[str, Any]) -> Optional[AlumniRecord]:
        """Update an active record."""

    @abstractmethod
    async def delete(self, alumni_id: str) -> bool:
        """Remove the record whatever its state."""

    @abstractmethod
    async def soft_delete(self, alumni_id: str, deleted_by: str) -> bool:
        """Move an active record to the trash."""

    @abstractmethod
    async def restore(self, alumni_id: str) -> bool:
        """Bring a trashed record back."""

    @abstractmethod
    async def purge(self, alumni_id: str) -> bool:
        """Remove a record that is already in the trash."""

    @abstractmethod
    async def statistics(self) -> dict[str, Any]:
        """Counts of active alumni: total, by major, by entry and graduation year."""


class EmploymentRepository(ABC):
    @abstractmethod
    async def get(self, employment_id: str, include_deleted: bool = False) -> Optional[EmploymentRecord]: ...

    @abstractmethod
    async def paginate(
        self, params: PaginationParams, alumni_id: str | None = None
    ) -> tuple[list[EmploymentRecord], int]: ...

    @abstractmethod
    async def paginate_trashed(
        self, params: PaginationParams, alumni_id: str | None = None
    ) -> tuple[list[EmploymentRecord], int]: ...

    @abstractmethod
    async def list_by_alumni(self, alumni_id: str) -> list[EmploymentRecord]:
        """Active rows for one alumni, latest start date first."""

    @abstractmethod
    async def create(self, data: dict[str, Any]) -> EmploymentRecord: ...

    @abstractmethod
    async def update(self, employment_id: str, data: dict[str, Any]) -> Optional[EmploymentRecord]: ...

    @abstractmethod
    async def delete(self, employment_id: str) -> bool: ...

    @abstractmethod
    async def soft_delete(self, employment_id: str, deleted_by: str) -> bool: ...

    @abstractmethod
    async def restore(self, employment_id: str) -> bool: ...

    @abstractmethod
    async def purge(self, employment_id: str) -> bool: ...

    @abstractmethod
    async def soft_delete_by_alumni(self, alumni_id: str, deleted_by: str) -> int: ...

    @abstractmethod
    async def purge_by_alumni(self, alumni_id: str) -> int:
        """Remove the alumni's trashed rows."""

    @abstractmethod
    async def delete_by_alumni(self, alumni_id: str) -> int:
        """Remove every row of the alumni."""


class FileRepository(ABC):
    @abstractmethod
    async def create(self, record: FileRecord) -> FileRecord: ...

    @abstractmethod
    async def get(self, file_id: str) -> Optional[FileRecord]: ...

    @abstractmethod
    async def list_for_owner(self, owner_id: str, category: str) -> list[FileRecord]: ...

    @abstractmethod
    async def soft_delete(self, file_id: str) -> bool: ...


class AchievementDocumentRepository(ABC):
    @abstractmethod
    async def create(self, document: AchievementDocument) -> AchievementDocument: ...

    @abstractmethod
    async def get(self, document_id: str) -> Optional[AchievementDocument]:
        """Document that has not been soft deleted."""

    @abstractmethod
    async def get_many(self, document_ids: list[str]) -> dict[str, AchievementDocument]: ...

    @abstractmethod
    async def update(self, document_id: str, data: dict[str, Any]) -> Optional[AchievementDocument]: ...

    @abstractmethod
    async def soft_delete(self, document_id: str) -> bool: ...

    @abstractmethod
    async def count_by_type(self) -> dict[str, int]: ...


class AchievementReferenceRepository(ABC):
    @abstractmethod
    async def create(self, alumni_id: str, document_id: str) -> AchievementReference: ...

    @abstractmethod
    async def get(self, reference_id: str) -> Optional[AchievementReference]: ...

    @abstractmethod
    async def paginate(
        self,
        params: PaginationParams,
        alumni_id: str | None = None,
        status: str | None = None,
    ) -> tuple[list[AchievementReference], int]:
        """Rows that are not deleted unless ``status`` asks for them."""

    @abstractmethod
    async def transition(
        self, reference_id: str, from_status: str, to_status: str, **fields: Any
    ) -> Optional[AchievementReference]:
        """Change status only if the row is still in ``from_status``."""

    @abstractmethod
    async def count_by_status(self, alumni_id: str | None = None) -> dict[str, int]: ...

    @abstractmethod
    async def top_alumni(self, limit: int = 10) -> list[tuple[str, int]]:
        """Alumni ids with the most achievements that are not deleted."""
