"""
Tests for Profile Wizard API endpoints.
"""

import pytest
from httpx import AsyncClient

ANSWERS = [
    "Kyaw Min",
    "18-25",
    "Work Permit",
    "Myanmar",
    "No experience",
    "Security Guard",
    "Night shift patrol and CCTV monitoring",
    "+60123456789",
    "Johor Bahru",
]


@pytest.mark.api
class TestProfileWizardAPI:
    """Test the chat-style profile wizard over HTTP."""

    async def test_start_session(self, test_client: AsyncClient):
        response = await test_client.post("/api/v1/profile-wizard")

        assert response.status_code == 201
        data = response.json()
        assert data["progress"] == 0
        assert data["currentQuestion"]["key"] == "name"
        assert data["currentQuestion"]["skippable"] is True
        assert [entry["kind"] for entry in data["state"]["transcript"]] == ["prompt", "input"]

    async def test_unknown_session(self, test_client: AsyncClient):
        response = await test_client.get("/api/v1/profile-wizard/missing")
        assert response.status_code == 404

    async def test_invalid_answer_keeps_state(self, test_client: AsyncClient, scheduler):
        session_id = (await test_client.post("/api/v1/profile-wizard")).json()["sessionId"]
        await test_client.post(f"/api/v1/profile-wizard/{session_id}/skip")
        await scheduler.run_pending()

        response = await test_client.post(
            f"/api/v1/profile-wizard/{session_id}/answer", json={"value": "99"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["error_code"] == "INVALID_ANSWER"
        state = (await test_client.get(f"/api/v1/profile-wizard/{session_id}")).json()
        assert state["currentQuestion"]["key"] == "age"
        assert state["state"]["answers"] == {"name": "Anonymous"}

    async def test_answer_while_typing_conflicts(self, test_client: AsyncClient):
        session_id = (await test_client.post("/api/v1/profile-wizard")).json()["sessionId"]
        await test_client.post(f"/api/v1/profile-wizard/{session_id}/answer", json={"value": "Kyaw"})

        response = await test_client.post(
            f"/api/v1/profile-wizard/{session_id}/answer", json={"value": "18-25"}
        )
        assert response.status_code == 409

    async def test_full_session_posts_job(self, test_client: AsyncClient, scheduler):
        session_id = (await test_client.post("/api/v1/profile-wizard")).json()["sessionId"]

        data = None
        for value in ANSWERS:
            response = await test_client.post(
                f"/api/v1/profile-wizard/{session_id}/answer", json={"value": value}
            )
            assert response.status_code == 200
            data = response.json()
            await scheduler.run_pending()

        assert data["progress"] == 100
        assert data["currentQuestion"] is None
        assert data["state"]["finished"] is True
        success = data["state"]["transcript"][-1]
        assert success["kind"] == "success"

        job = await test_client.get(f"/api/v1/jobs/{success['jobId']}")
        assert job.status_code == 200
        assert job.json()["name"] == "Kyaw Min"
        assert job.json()["job"] == "Security Guard"

    async def test_overlong_name_keeps_board_listable(self, test_client: AsyncClient, scheduler):
        session_id = (await test_client.post("/api/v1/profile-wizard")).json()["sessionId"]

        response = await test_client.post(
            f"/api/v1/profile-wizard/{session_id}/answer", json={"value": "x" * 300}
        )

        assert response.status_code == 400
        assert response.json()["error"]["details"]["field_errors"] == {
            "name": "Please use at most 255 characters."
        }

        for value in ANSWERS:
            await test_client.post(f"/api/v1/profile-wizard/{session_id}/answer", json={"value": value})
            await scheduler.run_pending()

        board = await test_client.get("/api/v1/jobs")
        assert board.status_code == 200
        assert [job["name"] for job in board.json()["jobs"]] == ["Kyaw Min"]
