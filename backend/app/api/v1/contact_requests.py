"""
Contact Request API v1 Endpoints

Employers ask for a job seeker's contact; job seekers approve or reject from
their portal. Portal endpoints are scoped by the ``X-Phone-Number`` header.
"""

from fastapi import APIRouter, Depends, status

from app.api.deps import get_contact_request_service, get_phone_session
from app.core.security import PhoneSession
from app.services.contact_request_service import ContactRequestService
from app.schemas.contact_request import (
    ContactRequestCreate,
    ContactRequestResponse,
    EmployerRequestsResponse,
    JobSeekerRequestsResponse,
)

router = APIRouter(prefix="/contact-requests", tags=["contact-requests"])


@router.post("", response_model=ContactRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact_request(
    request_data: ContactRequestCreate,
    service: ContactRequestService = Depends(get_contact_request_service)
):
    request = await service.submit_request(request_data)
    return ContactRequestResponse.model_validate(request)


@router.get("/job-seeker", response_model=JobSeekerRequestsResponse)
async def job_seeker_requests(
    session: PhoneSession = Depends(get_phone_session),
    service: ContactRequestService = Depends(get_contact_request_service)
):
    """Requests made for the caller's profiles, newest first."""
    requests = await service.list_for_job_seeker(session)
    return JobSeekerRequestsResponse(requests=requests, stats=service.request_stats(requests))


@router.get("/employer", response_model=EmployerRequestsResponse)
async def employer_requests(
    session: PhoneSession = Depends(get_phone_session),
    service: ContactRequestService = Depends(get_contact_request_service)
):
    """Requests the caller made; approved ones include the job seeker's contact."""
    requests = await service.list_for_employer(session)
    return EmployerRequestsResponse(requests=requests, stats=service.request_stats(requests))


@router.post("/{request_id}/approve", response_model=ContactRequestResponse)
async def approve_request(
    request_id: str,
    session: PhoneSession = Depends(get_phone_session),
    service: ContactRequestService = Depends(get_contact_request_service)
):
    request = await service.update_status(request_id, "approved", session)
    return ContactRequestResponse.model_validate(request)


@router.post("/{request_id}/reject", response_model=ContactRequestResponse)
async def reject_request(
    request_id: str,
    session: PhoneSession = Depends(get_phone_session),
    service: ContactRequestService = Depends(get_contact_request_service)
):
    request = await service.update_status(request_id, "rejected", session)
    return ContactRequestResponse.model_validate(request)
