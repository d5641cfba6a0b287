"""
Tests for Jobs API endpoints.

Tests listing, filtering, detail, creation and the view counter over HTTP.
"""

import pytest
from httpx import AsyncClient

from app.core.container import container

PROFILE = {
    "name": "Sita Gurung",
    "age": "26-35",
    "visa": "Work Permit",
    "nationality": "Nepal",
    "experience": "1-2 years",
    "job": "Cleaner/Housekeeper",
    "skills": "Hotel housekeeping and laundry",
    "phone": "01123456789",
    "location": "Kuala Lumpur",
}


async def post_job(client: AsyncClient, **overrides):
    response = await client.post("/api/v1/jobs", json={**PROFILE, **overrides})
    assert response.status_code == 201
    return response.json()


@pytest.mark.api
class TestJobsAPI:
    """Test Jobs API endpoints."""

    async def test_get_jobs_empty(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/jobs")

        assert response.status_code == 200
        assert response.json() == {"jobs": [], "total": 0}

    async def test_create_job(self, test_client: AsyncClient):
        response = await test_client.post("/api/v1/jobs", json=PROFILE)

        assert response.status_code == 201
        job = response.json()
        assert job["id"].startswith("job_")
        assert job["views"] == 0
        assert job["status"] == "active"
        assert job["phone"] == PROFILE["phone"]
        assert job["daysUntilExpiry"] == 7
        assert job["isExpiring"] is False
        assert job["postedAgo"] == "Just now"
        assert job["initials"] == "SG"

    async def test_create_job_validation(self, test_client: AsyncClient):
        response = await test_client.post("/api/v1/jobs", json={**PROFILE, "skills": "short"})
        assert response.status_code == 422

        response = await test_client.post("/api/v1/jobs", json={**PROFILE, "phone": "12345"})
        assert response.status_code == 422

    async def test_listing_hides_phone(self, test_client: AsyncClient):
        created = await post_job(test_client)

        response = await test_client.get("/api/v1/jobs")

        data = response.json()
        assert data["total"] == 1
        assert data["jobs"][0]["id"] == created["id"]
        assert "phone" not in data["jobs"][0]

        detail = await test_client.get(f"/api/v1/jobs/{created['id']}")
        assert detail.status_code == 200
        assert "phone" not in detail.json()

    async def test_stored_long_fields_still_list(self, test_client: AsyncClient):
        job_service = container.get("job_service")
        job = await job_service.create_job({**PROFILE, "name": "x" * 300, "location": "y" * 300})

        response = await test_client.get("/api/v1/jobs")
        assert response.status_code == 200
        assert response.json()["jobs"][0]["name"] == "x" * 300

        detail = await test_client.get(f"/api/v1/jobs/{job.id}")
        assert detail.status_code == 200

    async def test_filter_by_category_and_search(self, test_client: AsyncClient):
        await post_job(test_client)
        driver = await post_job(test_client, name="Ali", job="Driver", location="Klang")

        response = await test_client.get("/api/v1/jobs", params={"category": "Driver"})
        assert [job["id"] for job in response.json()["jobs"]] == [driver["id"]]

        response = await test_client.get("/api/v1/jobs", params={"category": "all", "search": "KLANG"})
        assert [job["id"] for job in response.json()["jobs"]] == [driver["id"]]

    async def test_newest_first(self, test_client: AsyncClient):
        first = await post_job(test_client)
        second = await post_job(test_client)

        response = await test_client.get("/api/v1/jobs")

        ids = [job["id"] for job in response.json()["jobs"]]
        if first["timestamp"] != second["timestamp"]:
            assert ids == [second["id"], first["id"]]
        else:
            assert sorted(ids) == sorted([first["id"], second["id"]])

    async def test_stats_and_categories(self, test_client: AsyncClient):
        await post_job(test_client)

        stats = await test_client.get("/api/v1/jobs/stats")
        assert stats.json() == {"total": 1, "newToday": 1}

        categories = await test_client.get("/api/v1/jobs/categories")
        assert "Factory Worker" in categories.json()

    async def test_get_job_not_found(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/jobs/job_missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "Job not found"
        assert response.json()["error"]["error_code"] == "JOB_NOT_FOUND"

    async def test_register_view(self, test_client: AsyncClient):
        created = await post_job(test_client)

        response = await test_client.post(f"/api/v1/jobs/{created['id']}/views")
        assert response.json() == {"id": created["id"], "views": 1}

        response = await test_client.post(f"/api/v1/jobs/{created['id']}/views")
        assert response.json()["views"] == 2

        missing = await test_client.post("/api/v1/jobs/job_missing/views")
        assert missing.status_code == 404

    async def test_health(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/health")
        assert response.json()["status"] == "healthy"

        response = await test_client.get("/api/v1/health/status")
        assert response.status_code == 200
        assert response.json()["services"]["database"] == "healthy"
        assert response.json()["services"]["wizard_sessions"] == "memory"

    async def test_metrics_count_created_profiles(self, test_client: AsyncClient):
        await post_job(test_client)

        response = await test_client.get("/metrics")

        assert response.status_code == 200
        assert 'profiles_created_total{job_category="Cleaner/Housekeeper"} 1.0' in response.text
