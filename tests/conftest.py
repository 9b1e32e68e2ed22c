"""Pytest fixtures and configuration."""

from collections import Counter
from collections.abc import AsyncGenerator
from typing import Any, Optional
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from alumni_api.api.deps import (
    get_achievement_document_repository,
    get_file_repository,
)
from alumni_api.config import settings
from alumni_api.core.security import create_access_token, hash_password
from alumni_api.db.postgres import Base, get_db
from alumni_api.main import app
from alumni_api.models.base import utcnow
from alumni_api.models.nosql.achievement import AchievementDocument
from alumni_api.models.nosql.file import FileRecord
from alumni_api.models.sql import Alumni, User
from alumni_api.repositories.base import AchievementDocumentRepository, FileRepository

# Test database URL (use SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ALUMNI_PASSWORD = "alumnipass123"
ADMIN_PASSWORD = "adminpass123"


class InMemoryFileRepository(FileRepository):
    """Stand-in for the MongoDB file metadata collection."""

    def __init__(self):
        self.records: dict[str, FileRecord] = {}

    async def create(self, record: FileRecord) -> FileRecord:
        stored = record.model_copy(update={"id": str(ObjectId())})
        self.records[stored.id] = stored
        return stored

    async def get(self, file_id: str) -> Optional[FileRecord]:
        record = self.records.get(file_id)
        return record if record and record.deleted_at is None else None

    async def list_for_owner(self, owner_id: str, category: str) -> list[FileRecord]:
        return [
            record
            for record in self.records.values()
            if record.owner_id == owner_id
            and record.category == category
            and record.deleted_at is None
        ]

    async def soft_delete(self, file_id: str) -> bool:
        if await self.get(file_id) is None:
            return False
        self.records[file_id] = self.records[file_id].model_copy(
            update={"deleted_at": utcnow()}
        )
        return True


class InMemoryAchievementDocumentRepository(AchievementDocumentRepository):
    """Stand-in for the MongoDB achievement collection."""

    def __init__(self):
        self.documents: dict[str, AchievementDocument] = {}

    async def create(self, document: AchievementDocument) -> AchievementDocument:
        stored = document.model_copy(update={"id": str(ObjectId())})
        self.documents[stored.id] = stored
        return stored

    async def get(self, document_id: str) -> Optional[AchievementDocument]:
        document = self.documents.get(document_id)
        return document if document and document.deleted_at is None else None

    async def get_many(self, document_ids: list[str]) -> dict[str, AchievementDocument]:
        found = {}
        for document_id in document_ids:
            document = await self.get(document_id)
            if document is not None:
                found[document_id] = document
        return found

    async def update(
        self, document_id: str, data: dict[str, Any]
    ) -> Optional[AchievementDocument]:
        if await self.get(document_id) is None:
            return None
        self.documents[document_id] = AchievementDocument.model_validate(
            {**self.documents[document_id].model_dump(), **data, "updated_at": utcnow()}
        )
        return self.documents[document_id]

    async def soft_delete(self, document_id: str) -> bool:
        if await self.get(document_id) is None:
            return False
        self.documents[document_id] = self.documents[document_id].model_copy(
            update={"deleted_at": utcnow()}
        )
        return True

    async def count_by_type(self) -> dict[str, int]:
        return dict(
            Counter(
                str(document.achievement_type)
                for document in self.documents.values()
                if document.deleted_at is None
            )
        )


@pytest.fixture(autouse=True)
def test_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep tests on the SQL backend and write uploads to a temp dir."""
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "postgres")
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setattr(settings, "API_KEY", "test-api-key")


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session on a fresh in-memory database."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def file_repository() -> InMemoryFileRepository:
    return InMemoryFileRepository()


@pytest.fixture
def achievement_documents() -> InMemoryAchievementDocumentRepository:
    return InMemoryAchievementDocumentRepository()


@pytest.fixture
def session_store() -> dict[str, str]:
    """Refresh tokens the app would keep in Redis."""
    return {}


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    file_repository: InMemoryFileRepository,
    achievement_documents: InMemoryAchievementDocumentRepository,
    session_store: dict[str, str],
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with overridden dependencies."""

    async def override_get_db():
        yield db_session

    async def fake_cache_get(key: str) -> Optional[str]:
        return session_store.get(key)

    async def fake_cache_set(key: str, value: str, expire: int = 300) -> None:
        session_store[key] = value

    async def fake_cache_delete(key: str) -> None:
        session_store.pop(key, None)

    with (
        patch("alumni_api.services.sessions.cache_get", AsyncMock(side_effect=fake_cache_get)),
        patch("alumni_api.services.sessions.cache_set", AsyncMock(side_effect=fake_cache_set)),
        patch(
            "alumni_api.services.sessions.cache_delete",
            AsyncMock(side_effect=fake_cache_delete),
        ),
    ):
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_file_repository] = lambda: file_repository
        app.dependency_overrides[get_achievement_document_repository] = (
            lambda: achievement_documents
        )

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac

        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """Create an administrator."""
    user = User(
        username="admin",
        email="admin@example.com",
        password_hash=hash_password(ADMIN_PASSWORD),
        full_name="Admin User",
        role="admin",
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def staff_user(db_session: AsyncSession) -> User:
    """Create a regular staff account."""
    user = User(
        username="staff",
        email="staff@example.com",
        password_hash=hash_password("staffpass123"),
        full_name="Staff User",
        role="user",
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def make_alumni(db_session: AsyncSession, student_number: str, **fields) -> Alumni:
    values = {
        "name": f"Alumni {student_number}",
        "major": "Computer Science",
        "entry_year": 2015,
        "graduation_year": 2019,
        "email": f"{student_number}@example.com",
        "password_hash": hash_password(ALUMNI_PASSWORD),
    }
    values.update(fields)
    alumni = Alumni(student_number=student_number, **values)
    db_session.add(alumni)
    await db_session.commit()
    await db_session.refresh(alumni)
    return alumni


@pytest.fixture
def alumni_factory(db_session: AsyncSession):
    """Insert alumni rows: ``await alumni_factory("20160001", major="Biology")``."""

    async def factory(student_number: str, **fields) -> Alumni:
        return await make_alumni(db_session, student_number, **fields)

    return factory


@pytest_asyncio.fixture
async def alumni(db_session: AsyncSession) -> Alumni:
    """Create an alumni who can log in."""
    return await make_alumni(db_session, "20150001", name="Siti Rahma")


@pytest_asyncio.fixture
async def other_alumni(db_session: AsyncSession) -> Alumni:
    return await make_alumni(db_session, "20150002", name="Budi Santoso", major="Physics")


def bearer(subject: str, role: str, name: str = "") -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject, role, name)}"}


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return bearer(admin_user.id, "admin", admin_user.full_name)


@pytest.fixture
def staff_headers(staff_user: User) -> dict:
    return bearer(staff_user.id, "user", staff_user.full_name)


@pytest.fixture
def alumni_headers(alumni: Alumni) -> dict:
    return bearer(alumni.id, "alumni", alumni.name)


@pytest.fixture
def other_alumni_headers(other_alumni: Alumni) -> dict:
    return bearer(other_alumni.id, "alumni", other_alumni.name)
