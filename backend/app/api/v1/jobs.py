"""
Job Board API v1 Endpoints

Active listing, board counters, profile detail, profile creation and the
view counter.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_job_service
from app.services.job_service import JobService
from app.schemas.job import (
    BoardStats,
    JobCreate,
    JobListResponse,
    JobPublicResponse,
    JobResponse,
    ViewCountResponse,
)
from app.utils import job_board
from app.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=JobListResponse)
async def list_jobs(
    category: Optional[str] = Query(job_board.ALL_CATEGORIES, description="Job category or 'all'"),
    search: Optional[str] = Query("", description="Matches name, skills, location, nationality"),
    job_service: JobService = Depends(get_job_service)
):
    """Active profiles from the last seven days, newest first."""
    now = job_board.now_ms()
    jobs = await job_service.list_active_jobs(now)
    matching = job_board.filter_jobs(jobs, category, search)
    logger.info("Listed jobs", category=category, search=search, total=len(matching))
    return JobListResponse(
        jobs=[JobPublicResponse.from_job(job, now, job_service.settings) for job in matching],
        total=len(matching),
    )


@router.get("/stats", response_model=BoardStats)
async def board_stats(job_service: JobService = Depends(get_job_service)):
    """Counters for the board header, ignoring any filter."""
    now = job_board.now_ms()
    jobs = await job_service.list_active_jobs(now)
    return job_service.board_stats(jobs, now)


@router.get("/categories", response_model=List[str])
async def list_categories():
    return job_board.JOB_CATEGORIES


@router.get("/{job_id}", response_model=JobPublicResponse)
async def get_job(job_id: str, job_service: JobService = Depends(get_job_service)):
    job = await job_service.get_job(job_id)
    return JobPublicResponse.from_job(job, job_board.now_ms(), job_service.settings)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(job_data: JobCreate, job_service: JobService = Depends(get_job_service)):
    """Post a completed profile to the board."""
    job = await job_service.create_job(job_data)
    return JobResponse.from_job(job, job.timestamp, job_service.settings)


@router.post("/{job_id}/views", response_model=ViewCountResponse)
async def register_view(job_id: str, job_service: JobService = Depends(get_job_service)):
    """Count one view of a profile."""
    views = await job_service.increment_views(job_id)
    return ViewCountResponse(id=job_id, views=views)
