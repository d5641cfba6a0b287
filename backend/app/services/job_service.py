"""
Job Service Layer

Business logic for the job board: the recency-bounded active listing,
profile creation, and the view counter.
"""

from typing import List, Optional, Dict, Any, Union

from app.core.config import Settings, get_settings
from app.core.events import EventManager, EventNames
from app.core.exceptions import JobNotFoundException
from app.repositories.job_repository import JobRepository
from app.models.job import JobPost
from app.schemas.job import JobProfile, BoardStats
from app.utils import job_board
from app.utils.ids import generate_record_id
from app.utils.logger import get_logger

logger = get_logger(__name__)


class JobService:
    """Service layer for job post operations."""

    def __init__(
        self,
        job_repo: JobRepository,
        event_manager: EventManager,
        settings: Optional[Settings] = None
    ):
        self.job_repo = job_repo
        self.event_manager = event_manager
        self.settings = settings or get_settings()

    async def list_active_jobs(self, now: Optional[int] = None) -> List[JobPost]:
        """
        Jobs posted within the listing window, newest first.

        Args:
            now: Reference time in epoch ms (defaults to the current time)

        Returns:
            List[JobPost]: Jobs with ``timestamp >= now - JOB_LISTING_TTL_DAYS``
        """
        now = now if now is not None else job_board.now_ms()
        cutoff = job_board.listing_cutoff(now, self.settings.JOB_LISTING_TTL_DAYS)
        jobs = await self.job_repo.list_since(cutoff)
        logger.info("Fetched active jobs", count=len(jobs), cutoff=cutoff)
        return jobs

    async def get_job(self, job_id: str) -> JobPost:
        job = await self.job_repo.get_by_id(job_id)
        if job is None:
            raise JobNotFoundException(job_id)
        return job

    async def create_job(
        self,
        profile: Union[JobProfile, Dict[str, Any]],
        now: Optional[int] = None
    ) -> JobPost:
        """
        Create a job post from a completed profile.

        The server assigns the timestamp, a zero view count and the
        ``active`` status; the id is derived from the timestamp.

        Args:
            profile: The nine profile answers
            now: Creation time in epoch ms (defaults to the current time)

        Returns:
            JobPost: The stored job post
        """
        if isinstance(profile, JobProfile):
            profile = profile.model_dump()

        timestamp = now if now is not None else job_board.now_ms()
        record = {
            **{key: profile[key] for key in JobProfile.model_fields},
            "id": generate_record_id("job", timestamp),
            "timestamp": timestamp,
            "views": 0,
            "status": "active",
        }

        job = await self.job_repo.create(record)

        await self.event_manager.emit(EventNames.JOB_CREATED, {
            "id": job.id,
            "job": job.job,
            "timestamp": job.timestamp,
        })
        logger.info("Job post created", job_id=job.id)
        return job

    async def increment_views(self, job_id: str) -> int:
        """Register one view; safe under concurrent viewers."""
        views = await self.job_repo.increment_views(job_id)
        if views is None:
            raise JobNotFoundException(job_id)

        await self.event_manager.emit(EventNames.JOB_VIEWED, {"id": job_id, "views": views})
        return views

    def board_stats(self, jobs: List[JobPost], now: Optional[int] = None) -> BoardStats:
        now = now if now is not None else job_board.now_ms()
        return BoardStats(
            total=len(jobs),
            new_today=sum(1 for job in jobs if job_board.is_same_day(job.timestamp, now)),
        )
