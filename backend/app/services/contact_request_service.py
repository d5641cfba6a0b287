"""
Contact Request Service Layer

Employers ask for a job seeker's phone number; the job seeker approves or
rejects. Approval is what reveals the number on the employer's side.
"""

from typing import List, Optional, Iterable

from app.core.events import EventManager, EventNames
from app.core.exceptions import (
    ContactRequestNotFoundException,
    InvalidPhoneNumberException,
    MissingJobSeekerPhoneException,
    RequestAlreadyResolvedException,
    JobNotFoundException,
    ValidationException,
)
from app.core.security import PhoneSession
from app.models.contact_request import ContactRequest
from app.repositories.contact_request_repository import ContactRequestRepository
from app.repositories.job_repository import JobRepository
from app.schemas.contact_request import (
    ContactRequestCreate,
    ContactRequestResponse,
    EmployerContactRequestResponse,
    JobData,
    RequestStats,
)
from app.utils import job_board
from app.utils.ids import generate_record_id
from app.utils.phone import normalize_phone, whatsapp_link
from app.utils.logger import get_logger

logger = get_logger(__name__)

RESOLUTION_STATUSES = ("approved", "rejected")


class ContactRequestService:
    """Service layer for contact requests."""

    def __init__(
        self,
        request_repo: ContactRequestRepository,
        job_repo: JobRepository,
        event_manager: EventManager
    ):
        self.request_repo = request_repo
        self.job_repo = job_repo
        self.event_manager = event_manager

    async def submit_request(
        self,
        data: ContactRequestCreate,
        now: Optional[int] = None
    ) -> ContactRequest:
        """
        Store a new pending contact request.

        The job seeker's phone is looked up on the referenced job and stored
        in normalised form on the request so the seeker portal can query it
        directly.

        Args:
            data: Employer details and the referenced job id
            now: Submission time in epoch ms (defaults to the current time)

        Returns:
            ContactRequest: The stored request

        Raises:
            ValidationException: If the employer name or phone is blank
            InvalidPhoneNumberException: If the employer phone has no digits left
            JobNotFoundException: If the referenced job does not exist
            MissingJobSeekerPhoneException: If the job has no phone number
        """
        if not data.employer_name.strip() or not data.employer_phone.strip():
            raise ValidationException(
                "Employer name and phone are required",
                user_message="Please fill in both fields.",
                field_errors={"employerName": "required", "employerPhone": "required"},
            )

        employer_phone_normalized = normalize_phone(data.employer_phone)
        if not employer_phone_normalized:
            raise InvalidPhoneNumberException(data.employer_phone, field="employerPhone")

        job = await self.job_repo.get_by_id(data.job_id)
        if job is None:
            raise JobNotFoundException(data.job_id)
        if not job.phone:
            raise MissingJobSeekerPhoneException(data.job_id)

        timestamp = now if now is not None else job_board.now_ms()
        request = await self.request_repo.create({
            "id": generate_record_id("req", timestamp),
            "job_id": data.job_id,
            "job_seeker_name": data.job_seeker_name or job.name,
            "employer_name": data.employer_name.strip(),
            "employer_phone": data.employer_phone,
            "employer_phone_normalized": employer_phone_normalized,
            "job_seeker_phone_normalized": normalize_phone(job.phone),
            "timestamp": timestamp,
            "status": "pending",
        })

        await self.event_manager.emit(EventNames.CONTACT_REQUEST_SUBMITTED, {
            "id": request.id,
            "job_id": request.job_id,
        })
        logger.info("Contact request submitted", request_id=request.id, job_id=request.job_id)
        return request

    async def list_for_job_seeker(self, session: PhoneSession) -> List[ContactRequestResponse]:
        requests = await self.request_repo.list_by_job_seeker_phone(session.normalized)
        return [ContactRequestResponse.model_validate(request) for request in requests]

    async def list_for_employer(self, session: PhoneSession) -> List[EmployerContactRequestResponse]:
        """
        Requests made from the session's phone.

        Approved requests are joined with their full job post (and a
        WhatsApp link) so the employer can reach the job seeker; other
        requests are returned as stored.
        """
        requests = await self.request_repo.list_by_employer_phone(session.normalized)

        results = []
        for request in requests:
            response = EmployerContactRequestResponse.model_validate(request)
            if request.status == "approved":
                job = await self.job_repo.get_by_id(request.job_id)
                if job is not None:
                    response.job_data = JobData.model_validate(job)
                    if job.phone:
                        response.whatsapp_url = whatsapp_link(job.phone)
            results.append(response)
        return results

    async def update_status(
        self,
        request_id: str,
        status: str,
        session: PhoneSession,
        now: Optional[int] = None
    ) -> ContactRequest:
        """
        Approve or reject a pending request on behalf of its job seeker.

        Resolution is one-way: a request that is no longer pending cannot be
        resolved again.

        Raises:
            ValidationException: If ``status`` is not approved/rejected
            ContactRequestNotFoundException: If the request does not exist
            AuthorizationException: If the session is not the request's job seeker
            RequestAlreadyResolvedException: If the request was already resolved
        """
        if status not in RESOLUTION_STATUSES:
            raise ValidationException(
                f"Unsupported status: {status}",
                field_errors={"status": "must be approved or rejected"},
            )

        request = await self.request_repo.get_by_id(request_id)
        if request is None:
            raise ContactRequestNotFoundException(request_id)
        session.require_owner(request.job_seeker_phone_normalized, f"contact request {request_id}")

        if not request.is_pending:
            raise RequestAlreadyResolvedException(request_id, request.status, status)

        at = now if now is not None else job_board.now_ms()
        if not await self.request_repo.resolve(request_id, status, at):
            # Lost a race with another resolution of the same request
            current = await self.request_repo.get_by_id(request_id)
            raise RequestAlreadyResolvedException(request_id, current.status, status)

        await self.event_manager.emit(EventNames.CONTACT_REQUEST_STATUS_CHANGED, {
            "id": request_id,
            "status": status,
        })
        logger.info("Contact request resolved", request_id=request_id, status=status)
        return await self.request_repo.get_by_id(request_id)

    @staticmethod
    def request_stats(requests: Iterable) -> RequestStats:
        stats = RequestStats()
        for request in requests:
            stats.total += 1
            setattr(stats, request.status, getattr(stats, request.status) + 1)
        return stats
