"""
Tests for ContactRequestService.

Covers submission, the phone-scoped portals and one-way resolution.
"""

import asyncio

import pytest

from app.core.events import EventNames
from app.core.exceptions import (
    AuthorizationException,
    ContactRequestNotFoundException,
    InvalidPhoneNumberException,
    JobNotFoundException,
    MissingJobSeekerPhoneException,
    RequestAlreadyResolvedException,
    ValidationException,
)
from app.core.security import PhoneSession
from app.schemas.contact_request import ContactRequestCreate

NOW = 1_718_000_000_000

SEEKER = PhoneSession.from_phone("+60 12-345 6789")
EMPLOYER = PhoneSession.from_phone("019-888 7777")


def request_for(job_id, **overrides):
    data = {"job_id": job_id, "employer_name": "Syarikat Maju", "employer_phone": "019-888 7777"}
    data.update(overrides)
    return ContactRequestCreate(**data)


@pytest.mark.database
@pytest.mark.unit
class TestSubmitRequest:
    """Test contact request submission."""

    async def test_submit_stores_pending_request(self, contact_service, sample_job):
        request = await contact_service.submit_request(request_for(sample_job.id), now=NOW)

        assert request.id.startswith(f"req_{NOW}_")
        assert request.status == "pending"
        assert request.job_seeker_name == sample_job.name
        assert request.employer_phone == "019-888 7777"
        assert request.employer_phone_normalized == "198887777"
        assert request.job_seeker_phone_normalized == "123456789"
        assert request.approved_at is None
        assert request.rejected_at is None

    async def test_submit_emits_event(self, contact_service, event_manager, sample_job):
        seen = []
        event_manager.subscribe(EventNames.CONTACT_REQUEST_SUBMITTED, seen.append)

        request = await contact_service.submit_request(request_for(sample_job.id))

        assert seen[0].data == {"id": request.id, "job_id": sample_job.id}

    async def test_blank_fields_rejected(self, contact_service, sample_job):
        with pytest.raises(ValidationException) as exc_info:
            await contact_service.submit_request(request_for(sample_job.id, employer_name="   "))
        assert exc_info.value.user_message == "Please fill in both fields."

    async def test_phone_without_digits_rejected(self, contact_service, sample_job):
        with pytest.raises(InvalidPhoneNumberException):
            await contact_service.submit_request(request_for(sample_job.id, employer_phone="n/a"))

    async def test_unknown_job(self, contact_service):
        with pytest.raises(JobNotFoundException):
            await contact_service.submit_request(request_for("job_missing"))

    async def test_job_without_phone(self, contact_service, job_service, sample_profile):
        job = await job_service.create_job({**sample_profile, "phone": ""})

        with pytest.raises(MissingJobSeekerPhoneException):
            await contact_service.submit_request(request_for(job.id))


@pytest.mark.database
@pytest.mark.unit
class TestPortals:
    """Test the job seeker and employer portals."""

    async def test_job_seeker_sees_requests_by_phone(self, contact_service, sample_job):
        first = await contact_service.submit_request(request_for(sample_job.id), now=NOW)
        second = await contact_service.submit_request(
            request_for(sample_job.id, employer_name="Kedai Runcit", employer_phone="0177777777"),
            now=NOW + 1000,
        )

        requests = await contact_service.list_for_job_seeker(SEEKER)

        assert [r.id for r in requests] == [second.id, first.id]
        assert await contact_service.list_for_job_seeker(PhoneSession.from_phone("0100000000")) == []

    async def test_employer_sees_contact_only_after_approval(self, contact_service, sample_job):
        request = await contact_service.submit_request(request_for(sample_job.id))

        pending = await contact_service.list_for_employer(EMPLOYER)
        assert pending[0].job_data is None
        assert pending[0].whatsapp_url is None

        await contact_service.update_status(request.id, "approved", SEEKER)

        approved = await contact_service.list_for_employer(EMPLOYER)
        assert approved[0].status == "approved"
        assert approved[0].job_data.phone == "0123456789"
        assert approved[0].job_data.id == sample_job.id
        assert approved[0].whatsapp_url == "https://wa.me/60123456789"

    async def test_request_stats(self, contact_service, sample_job):
        first = await contact_service.submit_request(request_for(sample_job.id))
        await contact_service.submit_request(request_for(sample_job.id))
        await contact_service.update_status(first.id, "rejected", SEEKER)

        requests = await contact_service.list_for_job_seeker(SEEKER)
        stats = contact_service.request_stats(requests)

        assert (stats.total, stats.pending, stats.approved, stats.rejected) == (2, 1, 0, 1)


@pytest.mark.database
@pytest.mark.unit
class TestUpdateStatus:
    """Test approve/reject."""

    async def test_approve_stamps_time(self, contact_service, sample_job):
        request = await contact_service.submit_request(request_for(sample_job.id), now=NOW)

        updated = await contact_service.update_status(request.id, "approved", SEEKER, now=NOW + 5000)

        assert updated.status == "approved"
        assert updated.approved_at == NOW + 5000
        assert updated.rejected_at is None

    async def test_reject_stamps_time(self, contact_service, sample_job):
        request = await contact_service.submit_request(request_for(sample_job.id), now=NOW)

        updated = await contact_service.update_status(request.id, "rejected", SEEKER, now=NOW + 5000)

        assert updated.status == "rejected"
        assert updated.rejected_at == NOW + 5000
        assert updated.approved_at is None

    async def test_resolved_request_cannot_change(self, contact_service, sample_job):
        request = await contact_service.submit_request(request_for(sample_job.id))
        await contact_service.update_status(request.id, "approved", SEEKER)

        with pytest.raises(RequestAlreadyResolvedException) as exc_info:
            await contact_service.update_status(request.id, "rejected", SEEKER)
        assert exc_info.value.http_status == 409

    async def test_concurrent_resolution_happens_once(self, contact_service, sample_job):
        request = await contact_service.submit_request(request_for(sample_job.id))

        results = await asyncio.gather(
            contact_service.update_status(request.id, "approved", SEEKER),
            contact_service.update_status(request.id, "rejected", SEEKER),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, RequestAlreadyResolvedException)]
        assert len(failures) == 1

    async def test_only_the_job_seeker_may_resolve(self, contact_service, sample_job):
        request = await contact_service.submit_request(request_for(sample_job.id))

        with pytest.raises(AuthorizationException):
            await contact_service.update_status(request.id, "approved", EMPLOYER)

    async def test_unknown_request(self, contact_service):
        with pytest.raises(ContactRequestNotFoundException):
            await contact_service.update_status("req_missing", "approved", SEEKER)

    async def test_invalid_status(self, contact_service, sample_job):
        request = await contact_service.submit_request(request_for(sample_job.id))

        with pytest.raises(ValidationException):
            await contact_service.update_status(request.id, "pending", SEEKER)
