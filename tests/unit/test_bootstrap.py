"""Unit tests for first admin seeding."""

from unittest.mock import AsyncMock

import pytest

from alumni_api.config import settings
from alumni_api.core.security import verify_password
from alumni_api.services.bootstrap import create_first_admin


@pytest.fixture
def configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "FIRST_ADMIN_USERNAME", "root")
    monkeypatch.setattr(settings, "FIRST_ADMIN_EMAIL", "root@example.com")
    monkeypatch.setattr(settings, "FIRST_ADMIN_PASSWORD", "rootpass123")


@pytest.mark.asyncio
class TestCreateFirstAdmin:
    async def test_creates_admin(self, configured):
        users = AsyncMock()
        users.find_duplicate.return_value = None

        assert await create_first_admin(users) is True

        data = users.create.await_args.args[0]
        assert data["username"] == "root"
        assert data["role"] == "admin"
        assert verify_password("rootpass123", data["password_hash"])

    async def test_username_stored_lowercase(self, configured, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(settings, "FIRST_ADMIN_USERNAME", "Root")
        users = AsyncMock()
        users.find_duplicate.return_value = None

        assert await create_first_admin(users) is True

        users.find_duplicate.assert_awaited_once_with("root", "root@example.com")
        assert users.create.await_args.args[0]["username"] == "root"

    async def test_existing_account_left_alone(self, configured):
        users = AsyncMock()
        users.find_duplicate.return_value = "username"

        assert await create_first_admin(users) is False
        users.create.assert_not_awaited()

    async def test_skipped_when_not_configured(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(settings, "FIRST_ADMIN_PASSWORD", None)
        users = AsyncMock()

        assert await create_first_admin(users) is False
        users.find_duplicate.assert_not_awaited()
