"""Integration tests for the achievement workflow API."""

import pytest
from httpx import AsyncClient

from alumni_api.models.sql import Alumni

ACHIEVEMENT = {
    "title": "National Programming Contest - 1st place",
    "achievement_type": "competition",
    "description": "Team event, 120 teams",
    "event_date": "2021-11-20",
    "organizer": "Ministry of Education",
    "level": "national",
    "tags": ["programming"],
}


async def create_draft(client: AsyncClient, headers: dict, **fields) -> dict:
    response = await client.post(
        "/api/v1/achievements", headers=headers, json={**ACHIEVEMENT, **fields}
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
class TestDrafts:
    async def test_create_draft(
        self, client: AsyncClient, alumni: Alumni, alumni_headers: dict, achievement_documents
    ):
        data = await create_draft(client, alumni_headers)

        assert data["status"] == "draft"
        assert data["alumni_id"] == alumni.id
        assert data["achievement"]["title"] == ACHIEVEMENT["title"]
        assert data["achievement"]["event_date"] == "2021-11-20"
        assert data["document_id"] in achievement_documents.documents

    async def test_admin_cannot_create(self, client: AsyncClient, admin_headers: dict):
        response = await client.post("/api/v1/achievements", headers=admin_headers, json=ACHIEVEMENT)

        assert response.status_code == 403

    async def test_invalid_type(self, client: AsyncClient, alumni_headers: dict):
        response = await client.post(
            "/api/v1/achievements",
            headers=alumni_headers,
            json={**ACHIEVEMENT, "achievement_type": "hobby"},
        )

        assert response.status_code == 422

    async def test_edit_draft(self, client: AsyncClient, alumni_headers: dict):
        draft = await create_draft(client, alumni_headers)

        response = await client.put(
            f"/api/v1/achievements/{draft['id']}",
            headers=alumni_headers,
            json={"title": "Updated title", "event_date": "2021-11-21"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["achievement"]["title"] == "Updated title"
        assert data["achievement"]["event_date"] == "2021-11-21"
        assert data["achievement"]["organizer"] == ACHIEVEMENT["organizer"]

    async def test_null_leaves_required_fields_alone(
        self, client: AsyncClient, alumni_headers: dict
    ):
        draft = await create_draft(client, alumni_headers)

        response = await client.put(
            f"/api/v1/achievements/{draft['id']}",
            headers=alumni_headers,
            json={"title": None, "achievement_type": None, "tags": None, "organizer": None},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["achievement"]["title"] == ACHIEVEMENT["title"]
        assert data["achievement"]["achievement_type"] == ACHIEVEMENT["achievement_type"]
        assert data["achievement"]["tags"] == ACHIEVEMENT["tags"]
        assert data["achievement"]["organizer"] is None
        assert data["achievement"]["level"] == ACHIEVEMENT["level"]

    async def test_cannot_edit_after_submit(self, client: AsyncClient, alumni_headers: dict):
        draft = await create_draft(client, alumni_headers)
        await client.post(f"/api/v1/achievements/{draft['id']}/submit", headers=alumni_headers)

        response = await client.put(
            f"/api/v1/achievements/{draft['id']}",
            headers=alumni_headers,
            json={"title": "Sneaky edit"},
        )

        assert response.status_code == 409

    async def test_delete_draft(
        self, client: AsyncClient, alumni_headers: dict, achievement_documents
    ):
        draft = await create_draft(client, alumni_headers)

        response = await client.delete(f"/api/v1/achievements/{draft['id']}", headers=alumni_headers)
        assert response.status_code == 204

        assert achievement_documents.documents[draft["document_id"]].deleted_at is not None
        response = await client.get(f"/api/v1/achievements/{draft['id']}", headers=alumni_headers)
        assert response.status_code == 404

    async def test_other_alumni_cannot_see_draft(
        self, client: AsyncClient, alumni_headers: dict, other_alumni_headers: dict
    ):
        draft = await create_draft(client, alumni_headers)

        response = await client.get(
            f"/api/v1/achievements/{draft['id']}", headers=other_alumni_headers
        )

        assert response.status_code == 403


@pytest.mark.asyncio
class TestReview:
    async def test_submit_then_verify(
        self, client: AsyncClient, alumni_headers: dict, admin_headers: dict, admin_user
    ):
        draft = await create_draft(client, alumni_headers)

        response = await client.post(
            f"/api/v1/achievements/{draft['id']}/submit", headers=alumni_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "submitted"
        assert response.json()["submitted_at"] is not None

        response = await client.post(
            f"/api/v1/achievements/{draft['id']}/verify", headers=admin_headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "verified"
        assert data["verified_by"] == admin_user.id
        assert data["verified_at"] is not None

    async def test_verify_draft_conflicts(
        self, client: AsyncClient, alumni_headers: dict, admin_headers: dict
    ):
        draft = await create_draft(client, alumni_headers)

        response = await client.post(
            f"/api/v1/achievements/{draft['id']}/verify", headers=admin_headers
        )

        assert response.status_code == 409

    async def test_reject_with_note(
        self, client: AsyncClient, alumni_headers: dict, admin_headers: dict
    ):
        draft = await create_draft(client, alumni_headers)
        await client.post(f"/api/v1/achievements/{draft['id']}/submit", headers=alumni_headers)

        response = await client.post(
            f"/api/v1/achievements/{draft['id']}/reject",
            headers=admin_headers,
            json={"note": "Please attach the certificate"},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "rejected"
        assert response.json()["rejection_note"] == "Please attach the certificate"

    async def test_reject_requires_note(
        self, client: AsyncClient, alumni_headers: dict, admin_headers: dict
    ):
        draft = await create_draft(client, alumni_headers)
        await client.post(f"/api/v1/achievements/{draft['id']}/submit", headers=alumni_headers)

        response = await client.post(
            f"/api/v1/achievements/{draft['id']}/reject", headers=admin_headers, json={}
        )

        assert response.status_code == 422

    async def test_verified_cannot_be_rejected(
        self, client: AsyncClient, alumni_headers: dict, admin_headers: dict
    ):
        draft = await create_draft(client, alumni_headers)
        await client.post(f"/api/v1/achievements/{draft['id']}/submit", headers=alumni_headers)
        await client.post(f"/api/v1/achievements/{draft['id']}/verify", headers=admin_headers)

        response = await client.post(
            f"/api/v1/achievements/{draft['id']}/reject",
            headers=admin_headers,
            json={"note": "Changed my mind"},
        )

        assert response.status_code == 409

    async def test_alumni_cannot_verify(self, client: AsyncClient, alumni_headers: dict):
        draft = await create_draft(client, alumni_headers)
        await client.post(f"/api/v1/achievements/{draft['id']}/submit", headers=alumni_headers)

        response = await client.post(
            f"/api/v1/achievements/{draft['id']}/verify", headers=alumni_headers
        )

        assert response.status_code == 403

    async def test_submitted_cannot_be_deleted(self, client: AsyncClient, alumni_headers: dict):
        draft = await create_draft(client, alumni_headers)
        await client.post(f"/api/v1/achievements/{draft['id']}/submit", headers=alumni_headers)

        response = await client.delete(f"/api/v1/achievements/{draft['id']}", headers=alumni_headers)

        assert response.status_code == 409


@pytest.mark.asyncio
class TestListing:
    async def test_alumni_sees_only_own(
        self,
        client: AsyncClient,
        alumni_headers: dict,
        other_alumni_headers: dict,
        admin_headers: dict,
    ):
        await create_draft(client, alumni_headers)
        await create_draft(client, alumni_headers, title="Second")
        await create_draft(client, other_alumni_headers)

        response = await client.get("/api/v1/achievements", headers=alumni_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert all(item["achievement"] is not None for item in data["items"])

        response = await client.get("/api/v1/achievements", headers=admin_headers)
        assert response.json()["total"] == 3

    async def test_filter_by_status(
        self, client: AsyncClient, alumni_headers: dict, admin_headers: dict
    ):
        first = await create_draft(client, alumni_headers)
        await create_draft(client, alumni_headers)
        await client.post(f"/api/v1/achievements/{first['id']}/submit", headers=alumni_headers)

        response = await client.get(
            "/api/v1/achievements", headers=admin_headers, params={"status": "submitted"}
        )

        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["id"] == first["id"]

    async def test_deleted_drafts_hidden(self, client: AsyncClient, alumni_headers: dict):
        draft = await create_draft(client, alumni_headers)
        await client.delete(f"/api/v1/achievements/{draft['id']}", headers=alumni_headers)

        response = await client.get("/api/v1/achievements", headers=alumni_headers)

        assert response.json()["total"] == 0

    async def test_unknown_status_filter(self, client: AsyncClient, admin_headers: dict):
        response = await client.get(
            "/api/v1/achievements", headers=admin_headers, params={"status": "archived"}
        )

        assert response.status_code == 400
