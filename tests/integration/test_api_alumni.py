"""Integration tests for alumni API."""

import pytest
from httpx import AsyncClient

from alumni_api.models.sql import Alumni

NEW_ALUMNI = {
    "student_number": "20160042",
    "name": "Dewi Lestari",
    "major": "Mathematics",
    "entry_year": 2016,
    "graduation_year": 2020,
    "email": "dewi@example.com",
    "password": "dewipass123",
}


async def add_job(client: AsyncClient, headers: dict, alumni_id: str, **fields) -> dict:
    payload = {
        "alumni_id": alumni_id,
        "company_name": "Acme",
        "position": "Engineer",
        "industry": "Software",
        "location": "Jakarta",
        "start_date": "2020-02-01",
    }
    payload.update(fields)
    response = await client.post("/api/v1/employment", headers=headers, json=payload)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
class TestRegistration:
    async def test_register_and_login(self, client: AsyncClient):
        response = await client.post("/api/v1/alumni/register", json=NEW_ALUMNI)

        assert response.status_code == 201
        data = response.json()
        assert data["student_number"] == "20160042"
        assert data["role"] == "alumni"
        assert "password_hash" not in data

        response = await client.post(
            "/api/v1/alumni/login",
            json={"student_number": "20160042", "password": "dewipass123"},
        )
        assert response.status_code == 200
        assert response.json()["alumni"]["name"] == "Dewi Lestari"

    async def test_register_duplicate_student_number(self, client: AsyncClient, alumni: Alumni):
        response = await client.post(
            "/api/v1/alumni/register",
            json={**NEW_ALUMNI, "student_number": alumni.student_number},
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Student number already registered"

    async def test_register_graduation_before_entry(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/alumni/register",
            json={**NEW_ALUMNI, "entry_year": 2020, "graduation_year": 2018},
        )

        assert response.status_code == 422

    async def test_login_wrong_password(self, client: AsyncClient, alumni: Alumni):
        response = await client.post(
            "/api/v1/alumni/login",
            json={"student_number": alumni.student_number, "password": "wrongpassword"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid student number or password"

    async def test_alumni_without_password_cannot_login(
        self, client: AsyncClient, alumni_factory
    ):
        record = await alumni_factory("20170001", password_hash=None)

        response = await client.post(
            "/api/v1/alumni/login",
            json={"student_number": record.student_number, "password": "anything123"},
        )

        assert response.status_code == 401


@pytest.mark.asyncio
class TestListing:
    async def test_search_sort_and_paging(
        self, client: AsyncClient, staff_headers: dict, alumni_factory
    ):
        await alumni_factory("20150011", name="Citra", major="Biology")
        await alumni_factory("20150012", name="Agus", major="Biology")
        await alumni_factory("20150013", name="Bayu", major="Chemistry")

        response = await client.get(
            "/api/v1/alumni",
            headers=staff_headers,
            params={"search": "bio", "sortBy": "name", "order": "asc"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [item["name"] for item in data["items"]] == ["Agus", "Citra"]
        assert data["sort_by"] == "name"
        assert data["order"] == "asc"

    async def test_out_of_range_params_are_clamped(
        self, client: AsyncClient, staff_headers: dict, alumni: Alumni
    ):
        response = await client.get(
            "/api/v1/alumni",
            headers=staff_headers,
            params={"page": 0, "limit": 500, "sortBy": "password_hash", "order": "up"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 1
        assert data["page_size"] == 10
        assert data["sort_by"] == "created_at"
        assert data["order"] == "desc"
        assert data["pages"] == 1

    async def test_search_treats_wildcards_literally(
        self, client: AsyncClient, staff_headers: dict, alumni: Alumni
    ):
        response = await client.get(
            "/api/v1/alumni", headers=staff_headers, params={"search": "%"}
        )

        assert response.json()["total"] == 0

    async def test_requires_authentication(self, client: AsyncClient):
        response = await client.get("/api/v1/alumni")

        assert response.status_code in (401, 403)

    async def test_statistics(self, client: AsyncClient, admin_headers: dict, alumni_factory):
        await alumni_factory("20150021", major="Biology", entry_year=2015)
        await alumni_factory("20150022", major="Biology", entry_year=2016, graduation_year=2020)

        response = await client.get("/api/v1/alumni/statistics", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["by_major"] == {"Biology": 2}
        assert data["by_entry_year"] == {"2015": 1, "2016": 1}

    async def test_statistics_forbidden_for_staff(self, client: AsyncClient, staff_headers: dict):
        response = await client.get("/api/v1/alumni/statistics", headers=staff_headers)

        assert response.status_code == 403


@pytest.mark.asyncio
class TestMaintenance:
    async def test_admin_creates_alumni_without_password(
        self, client: AsyncClient, admin_headers: dict
    ):
        payload = {key: value for key, value in NEW_ALUMNI.items() if key != "password"}

        response = await client.post("/api/v1/alumni", headers=admin_headers, json=payload)

        assert response.status_code == 201

    async def test_alumni_cannot_create_records(self, client: AsyncClient, alumni_headers: dict):
        response = await client.post("/api/v1/alumni", headers=alumni_headers, json=NEW_ALUMNI)

        assert response.status_code == 403

    async def test_update(self, client: AsyncClient, admin_headers: dict, alumni: Alumni):
        response = await client.put(
            f"/api/v1/alumni/{alumni.id}",
            headers=admin_headers,
            json={"major": "Data Science", "phone": "+62 811 000"},
        )

        assert response.status_code == 200
        assert response.json()["major"] == "Data Science"
        assert response.json()["phone"] == "+62 811 000"

    async def test_update_year_mismatch(
        self, client: AsyncClient, admin_headers: dict, alumni: Alumni
    ):
        response = await client.put(
            f"/api/v1/alumni/{alumni.id}",
            headers=admin_headers,
            json={"graduation_year": alumni.entry_year - 1},
        )

        assert response.status_code == 422

    async def test_update_duplicate_email(
        self, client: AsyncClient, admin_headers: dict, alumni: Alumni, other_alumni: Alumni
    ):
        response = await client.put(
            f"/api/v1/alumni/{alumni.id}",
            headers=admin_headers,
            json={"email": other_alumni.email},
        )

        assert response.status_code == 409

    async def test_get_unknown(self, client: AsyncClient, admin_headers: dict):
        response = await client.get("/api/v1/alumni/does-not-exist", headers=admin_headers)

        assert response.status_code == 404

    async def test_profile_lists_employment(
        self, client: AsyncClient, admin_headers: dict, alumni: Alumni, alumni_headers: dict
    ):
        await add_job(client, admin_headers, alumni.id)

        response = await client.get("/api/v1/alumni/profile", headers=alumni_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["student_number"] == alumni.student_number
        assert len(data["employment"]) == 1

    async def test_profile_rejects_staff(self, client: AsyncClient, staff_headers: dict):
        response = await client.get("/api/v1/alumni/profile", headers=staff_headers)

        assert response.status_code == 403


@pytest.mark.asyncio
class TestTrashLifecycle:
    async def test_soft_delete_cascades_to_employment(
        self, client: AsyncClient, admin_headers: dict, staff_headers: dict, alumni: Alumni
    ):
        job = await add_job(client, admin_headers, alumni.id)

        response = await client.post(
            f"/api/v1/alumni/{alumni.id}/soft-delete", headers=staff_headers
        )

        assert response.status_code == 200
        assert "1 employment" in response.json()["message"]

        response = await client.get(f"/api/v1/alumni/{alumni.id}", headers=staff_headers)
        assert response.status_code == 404
        response = await client.get(f"/api/v1/employment/{job['id']}", headers=staff_headers)
        assert response.status_code == 404

        response = await client.get("/api/v1/alumni/trash", headers=staff_headers)
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["deleted_at"] is not None
        assert data["items"][0]["deleted_by"] is not None

    async def test_soft_delete_twice(
        self, client: AsyncClient, staff_headers: dict, alumni: Alumni
    ):
        await client.post(f"/api/v1/alumni/{alumni.id}/soft-delete", headers=staff_headers)

        response = await client.post(
            f"/api/v1/alumni/{alumni.id}/soft-delete", headers=staff_headers
        )

        assert response.status_code == 404

    async def test_trashed_alumni_cannot_log_in(
        self, client: AsyncClient, staff_headers: dict, alumni: Alumni
    ):
        await client.post(f"/api/v1/alumni/{alumni.id}/soft-delete", headers=staff_headers)

        response = await client.post(
            "/api/v1/alumni/login",
            json={"student_number": alumni.student_number, "password": "alumnipass123"},
        )

        assert response.status_code == 401

    async def test_restore(self, client: AsyncClient, staff_headers: dict, alumni: Alumni):
        await client.post(f"/api/v1/alumni/{alumni.id}/soft-delete", headers=staff_headers)

        response = await client.post(f"/api/v1/alumni/{alumni.id}/restore", headers=staff_headers)

        assert response.status_code == 200
        assert response.json()["deleted_at"] is None
        response = await client.get(f"/api/v1/alumni/{alumni.id}", headers=staff_headers)
        assert response.status_code == 200

    async def test_restore_active_alumni(
        self, client: AsyncClient, staff_headers: dict, alumni: Alumni
    ):
        response = await client.post(f"/api/v1/alumni/{alumni.id}/restore", headers=staff_headers)

        assert response.status_code == 404

    async def test_permanent_delete_requires_trash(
        self, client: AsyncClient, admin_headers: dict, alumni: Alumni
    ):
        response = await client.delete(
            f"/api/v1/alumni/{alumni.id}/permanent", headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Permanent delete is only allowed for trashed alumni"

    async def test_permanent_delete_after_trash(
        self, client: AsyncClient, admin_headers: dict, alumni: Alumni
    ):
        job = await add_job(client, admin_headers, alumni.id)
        await client.post(f"/api/v1/alumni/{alumni.id}/soft-delete", headers=admin_headers)

        response = await client.delete(
            f"/api/v1/alumni/{alumni.id}/permanent", headers=admin_headers
        )

        assert response.status_code == 204
        response = await client.get("/api/v1/alumni/trash", headers=admin_headers)
        assert response.json()["total"] == 0
        response = await client.get("/api/v1/employment/trash", headers=admin_headers)
        assert job["id"] not in [item["id"] for item in response.json()["items"]]

    async def test_staff_can_purge(
        self, client: AsyncClient, staff_headers: dict, alumni: Alumni
    ):
        response = await client.post(
            f"/api/v1/alumni/{alumni.id}/soft-delete", headers=staff_headers
        )
        assert response.status_code == 200

        response = await client.delete(
            f"/api/v1/alumni/{alumni.id}/permanent", headers=staff_headers
        )

        assert response.status_code == 204
        response = await client.get("/api/v1/alumni/trash", headers=staff_headers)
        assert response.json()["total"] == 0

    async def test_alumni_cannot_purge(
        self, client: AsyncClient, admin_headers: dict, alumni_headers: dict, other_alumni: Alumni
    ):
        await client.post(f"/api/v1/alumni/{other_alumni.id}/soft-delete", headers=admin_headers)

        response = await client.delete(
            f"/api/v1/alumni/{other_alumni.id}/permanent", headers=alumni_headers
        )

        assert response.status_code == 403

    async def test_immediate_delete_removes_employment(
        self, client: AsyncClient, admin_headers: dict, alumni: Alumni
    ):
        job = await add_job(client, admin_headers, alumni.id)

        response = await client.delete(f"/api/v1/alumni/{alumni.id}", headers=admin_headers)

        assert response.status_code == 204
        response = await client.get(f"/api/v1/employment/{job['id']}", headers=admin_headers)
        assert response.status_code == 404
