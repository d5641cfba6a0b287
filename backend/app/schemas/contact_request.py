"""
Contact Request Pydantic Schemas

Request/response models for the contact request endpoints and the two
request portals.
"""

from typing import List, Optional, Literal

from pydantic import Field

from app.schemas.job import CamelModel, StoredJob

RequestStatus = Literal["pending", "approved", "rejected"]
ResolutionStatus = Literal["approved", "rejected"]


class ContactRequestCreate(CamelModel):
    """Schema for an employer's contact request."""

    job_id: str = Field(..., min_length=1, description="Referenced job post ID")
    employer_name: str = Field(..., min_length=1, max_length=255, description="Employer name")
    employer_phone: str = Field(..., min_length=1, max_length=50, description="Employer phone, any format")
    job_seeker_name: Optional[str] = Field(
        None, max_length=255, description="Defaults to the name on the job post"
    )


class ContactRequestResponse(CamelModel):
    """Schema for contact request response."""

    id: str = Field(..., description="Request ID")
    job_id: str = Field(..., description="Referenced job post ID")
    job_seeker_name: str
    employer_name: str
    employer_phone: str
    employer_phone_normalized: str
    job_seeker_phone_normalized: str
    timestamp: int = Field(..., description="Submission time, epoch milliseconds")
    status: RequestStatus
    approved_at: Optional[int] = None
    rejected_at: Optional[int] = None


class JobData(StoredJob):
    """Full job post joined onto approved requests for the employer."""


class EmployerContactRequestResponse(ContactRequestResponse):
    """Employer view of a request; approved rows carry the seeker's contact."""

    job_data: Optional[JobData] = Field(None, description="Joined job post, approved requests only")
    whatsapp_url: Optional[str] = Field(None, description="WhatsApp link to the job seeker")


class RequestStats(CamelModel):
    """Counters shown in the portal header."""

    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0


class JobSeekerRequestsResponse(CamelModel):
    requests: List[ContactRequestResponse]
    stats: RequestStats


class EmployerRequestsResponse(CamelModel):
    requests: List[EmployerContactRequestResponse]
    stats: RequestStats
