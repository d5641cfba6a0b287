"""
Job Post Pydantic Schemas

Request/response models for job board endpoints. Field names are exposed in
camelCase on the wire.
"""

from typing import List, Optional, Literal

from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from app.core.config import Settings, get_settings
from app.utils.phone import is_valid_mobile
from app.utils import job_board

JobStatus = Literal["active", "expired"]

# Column widths of the free-text profile fields
NAME_MAX_LENGTH = 255
PHONE_MAX_LENGTH = 50
LOCATION_MAX_LENGTH = 255


class CamelModel(BaseModel):
    """Base schema serialising field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class JobProfile(CamelModel):
    """The answers collected by the profile wizard."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH, description="Display name")
    age: str = Field(..., min_length=1, max_length=50, description="Age bracket")
    visa: str = Field(..., min_length=1, max_length=100, description="Visa type")
    nationality: str = Field(..., min_length=1, max_length=100, description="Nationality")
    experience: str = Field(..., min_length=1, max_length=100, description="Years of experience")
    job: str = Field(..., min_length=1, max_length=100, description="Job category")
    skills: str = Field(..., description="Skills and experience description")
    phone: str = Field(..., max_length=PHONE_MAX_LENGTH, description="Contact phone number")
    location: str = Field(..., min_length=1, max_length=LOCATION_MAX_LENGTH, description="Preferred location")


class JobCreate(JobProfile):
    """Schema for creating a job post outside of the wizard."""

    @field_validator("skills")
    @classmethod
    def skills_long_enough(cls, value: str) -> str:
        minimum = get_settings().SKILLS_MIN_LENGTH
        if len(value) < minimum:
            raise ValueError(f"must be at least {minimum} characters")
        return value

    @field_validator("phone")
    @classmethod
    def phone_is_mobile(cls, value: str) -> str:
        if not is_valid_mobile(value):
            raise ValueError("must be a Malaysian mobile number")
        return value


class StoredJob(CamelModel):
    """A job post as stored; output models carry no input limits."""

    id: str = Field(..., description="Job ID")
    name: str
    age: str
    visa: str
    nationality: str
    experience: str
    job: str
    skills: str
    phone: Optional[str] = Field(None, description="Contact phone number")
    location: str
    timestamp: int = Field(..., description="Creation time, epoch milliseconds")
    views: int = Field(..., description="View count")
    status: JobStatus = Field(..., description="Listing status")


class JobResponse(StoredJob):
    """Schema for job response with derived board display fields."""

    days_until_expiry: int = Field(..., ge=0, description="Whole days left on the board")
    is_expiring: bool = Field(..., description="Whether the listing expires soon")
    posted_ago: str = Field(..., description="Human readable listing age")
    initials: Optional[str] = Field(None, description="Avatar initials")

    @classmethod
    def from_job(cls, job, now: int, settings: Settings) -> "JobResponse":
        ttl = settings.JOB_LISTING_TTL_DAYS
        return cls(
            id=job.id,
            name=job.name,
            age=job.age,
            visa=job.visa,
            nationality=job.nationality,
            experience=job.experience,
            job=job.job,
            skills=job.skills,
            phone=job.phone,
            location=job.location,
            timestamp=job.timestamp,
            views=job.views or 0,
            status=job.status,
            days_until_expiry=job_board.days_until_expiry(job.timestamp, now, ttl),
            is_expiring=job_board.is_expiring(
                job.timestamp, now, ttl, settings.EXPIRING_SOON_DAYS
            ),
            posted_ago=job_board.format_time_ago(job.timestamp, now),
            initials=job_board.display_initials(job.name, settings.ANONYMOUS_NAME),
        )


class JobPublicResponse(JobResponse):
    """Board listing entry; the phone stays hidden until a request is approved."""

    phone: Optional[str] = Field(None, exclude=True)


class JobListResponse(CamelModel):
    """Schema for the active job listing."""

    jobs: List[JobPublicResponse] = Field(..., description="Matching jobs, newest first")
    total: int = Field(..., description="Number of matching jobs")


class BoardStats(CamelModel):
    """Counters shown in the board header."""

    total: int = Field(..., description="Active profiles")
    new_today: int = Field(..., description="Profiles posted today")


class ViewCountResponse(CamelModel):
    id: str
    views: int
