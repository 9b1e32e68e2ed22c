"""Integration tests for staff account management."""

import pytest
from httpx import AsyncClient

from alumni_api.models.sql import User


@pytest.mark.asyncio
class TestUsersAPI:
    async def test_create_user(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/api/v1/users",
            headers=admin_headers,
            json={
                "username": "New.Staff",
                "email": "newstaff@example.com",
                "password": "staffpass123",
                "full_name": "New Staff",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "new.staff"
        assert data["role"] == "user"
        assert "password_hash" not in data

    async def test_create_duplicate_username(
        self, client: AsyncClient, admin_headers: dict, staff_user: User
    ):
        response = await client.post(
            "/api/v1/users",
            headers=admin_headers,
            json={"username": "staff", "email": "other@example.com", "password": "staffpass123"},
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Username already registered"

    async def test_create_alumni_role_rejected(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/api/v1/users",
            headers=admin_headers,
            json={
                "username": "sneaky",
                "email": "sneaky@example.com",
                "password": "staffpass123",
                "role": "alumni",
            },
        )

        assert response.status_code == 422

    async def test_staff_cannot_manage_users(self, client: AsyncClient, staff_headers: dict):
        response = await client.get("/api/v1/users", headers=staff_headers)

        assert response.status_code == 403

    async def test_list_users_with_search(
        self, client: AsyncClient, admin_headers: dict, staff_user: User
    ):
        response = await client.get(
            "/api/v1/users", headers=admin_headers, params={"search": "staff"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["username"] == "staff"

    async def test_update_user(self, client: AsyncClient, admin_headers: dict, staff_user: User):
        response = await client.put(
            f"/api/v1/users/{staff_user.id}",
            headers=admin_headers,
            json={"full_name": "Renamed", "role": "admin"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["full_name"] == "Renamed"
        assert data["role"] == "admin"

    async def test_admin_cannot_demote_self(
        self, client: AsyncClient, admin_headers: dict, admin_user: User
    ):
        response = await client.put(
            f"/api/v1/users/{admin_user.id}",
            headers=admin_headers,
            json={"role": "user"},
        )

        assert response.status_code == 400

    async def test_admin_cannot_delete_self(
        self, client: AsyncClient, admin_headers: dict, admin_user: User
    ):
        response = await client.delete(f"/api/v1/users/{admin_user.id}", headers=admin_headers)

        assert response.status_code == 400

    async def test_delete_user(self, client: AsyncClient, admin_headers: dict, staff_user: User):
        response = await client.delete(f"/api/v1/users/{staff_user.id}", headers=admin_headers)
        assert response.status_code == 204

        response = await client.get(f"/api/v1/users/{staff_user.id}", headers=admin_headers)
        assert response.status_code == 404

    async def test_disabled_user_token_rejected(
        self, client: AsyncClient, admin_headers: dict, staff_user: User, staff_headers: dict
    ):
        await client.put(
            f"/api/v1/users/{staff_user.id}",
            headers=admin_headers,
            json={"is_active": False},
        )

        response = await client.get("/api/v1/alumni", headers=staff_headers)

        assert response.status_code == 403
