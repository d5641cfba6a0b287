"""
Tests for Contact Request API endpoints.

Tests submission, both portals and approve/reject over HTTP.
"""

import pytest
from httpx import AsyncClient

SEEKER_PHONE = {"X-Phone-Number": "+60 12-345 6789"}
EMPLOYER_PHONE = {"X-Phone-Number": "0198887777"}


@pytest.fixture
async def job_id(test_client: AsyncClient):
    response = await test_client.post("/api/v1/jobs", json={
        "name": "Rahim Uddin",
        "age": "26-35",
        "visa": "Work Permit",
        "nationality": "Bangladesh",
        "experience": "3-5 years",
        "job": "Factory Worker",
        "skills": "Forklift operation and machine maintenance",
        "phone": "0123456789",
        "location": "Shah Alam",
    })
    return response.json()["id"]


async def submit(client: AsyncClient, job_id: str, **overrides):
    payload = {"jobId": job_id, "employerName": "Syarikat Maju", "employerPhone": "019-888 7777"}
    payload.update(overrides)
    return await client.post("/api/v1/contact-requests", json=payload)


@pytest.mark.api
class TestContactRequestsAPI:
    """Test contact request endpoints."""

    async def test_submit_request(self, test_client: AsyncClient, job_id):
        response = await submit(test_client, job_id)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "pending"
        assert data["jobId"] == job_id
        assert data["jobSeekerName"] == "Rahim Uddin"
        assert data["employerPhoneNormalized"] == "198887777"
        assert data["jobSeekerPhoneNormalized"] == "123456789"

    async def test_submit_for_unknown_job(self, test_client: AsyncClient):
        response = await submit(test_client, "job_missing")
        assert response.status_code == 404

    async def test_submit_blank_name(self, test_client: AsyncClient, job_id):
        response = await submit(test_client, job_id, employerName="  ")

        assert response.status_code == 400
        assert response.json()["detail"] == "Please fill in both fields."

    async def test_portals_require_phone_header(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/contact-requests/job-seeker")
        assert response.status_code == 422

        response = await test_client.get(
            "/api/v1/contact-requests/job-seeker", headers={"X-Phone-Number": "none"}
        )
        assert response.status_code == 400

    async def test_approval_flow(self, test_client: AsyncClient, job_id):
        request_id = (await submit(test_client, job_id)).json()["id"]

        seeker = await test_client.get("/api/v1/contact-requests/job-seeker", headers=SEEKER_PHONE)
        assert seeker.status_code == 200
        assert [r["id"] for r in seeker.json()["requests"]] == [request_id]
        assert seeker.json()["stats"] == {"total": 1, "pending": 1, "approved": 0, "rejected": 0}

        employer = await test_client.get("/api/v1/contact-requests/employer", headers=EMPLOYER_PHONE)
        assert employer.json()["requests"][0]["jobData"] is None

        approved = await test_client.post(
            f"/api/v1/contact-requests/{request_id}/approve", headers=SEEKER_PHONE
        )
        assert approved.status_code == 200
        assert approved.json()["status"] == "approved"
        assert approved.json()["approvedAt"] is not None

        employer = await test_client.get("/api/v1/contact-requests/employer", headers=EMPLOYER_PHONE)
        request = employer.json()["requests"][0]
        assert request["jobData"]["phone"] == "0123456789"
        assert request["whatsappUrl"] == "https://wa.me/60123456789"
        assert employer.json()["stats"]["approved"] == 1

    async def test_reject_then_approve_conflicts(self, test_client: AsyncClient, job_id):
        request_id = (await submit(test_client, job_id)).json()["id"]

        rejected = await test_client.post(
            f"/api/v1/contact-requests/{request_id}/reject", headers=SEEKER_PHONE
        )
        assert rejected.json()["status"] == "rejected"
        assert rejected.json()["rejectedAt"] is not None

        again = await test_client.post(
            f"/api/v1/contact-requests/{request_id}/approve", headers=SEEKER_PHONE
        )
        assert again.status_code == 409

    async def test_employer_cannot_approve(self, test_client: AsyncClient, job_id):
        request_id = (await submit(test_client, job_id)).json()["id"]

        response = await test_client.post(
            f"/api/v1/contact-requests/{request_id}/approve", headers=EMPLOYER_PHONE
        )
        assert response.status_code == 403

    async def test_unknown_request(self, test_client: AsyncClient):
        response = await test_client.post(
            "/api/v1/contact-requests/req_missing/approve", headers=SEEKER_PHONE
        )
        assert response.status_code == 404
