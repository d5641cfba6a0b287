"""
Job Repository Implementation

Repository for job post database operations: the recency-bounded board
listing and the atomic view counter.
"""

from typing import List, Optional, Type
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from app.repositories.base_repository import BaseRepository
from app.models.job import JobPost
from app.utils.logger import get_logger

logger = get_logger(__name__)


class JobRepository(BaseRepository[JobPost]):
    """Repository for job post database operations."""

    @property
    def model(self) -> Type[JobPost]:
        return JobPost

    async def list_since(self, cutoff: int) -> List[JobPost]:
        """Jobs created at or after ``cutoff`` (epoch ms), newest first."""
        return await self.list_where(
            self.model.timestamp >= cutoff,
            order_by=self.model.timestamp.desc()
        )

    async def increment_views(self, job_id: str) -> Optional[int]:
        """
        Atomically add one view to a job.

        The increment runs as a single ``UPDATE ... SET views = views + 1``
        so concurrent viewers never overwrite each other.

        Returns:
            Optional[int]: The new view count, or None if the job does not exist
        """
        async with self.get_session() as session:
            try:
                result = await session.execute(
                    update(self.model)
                    .where(self.model.id == job_id)
                    .values(views=self.model.views + 1)
                )
                if result.rowcount == 0:
                    await session.rollback()
                    return None

                views = await session.scalar(
                    select(self.model.views).where(self.model.id == job_id)
                )
                await session.commit()
                return views
            except SQLAlchemyError as e:
                await session.rollback()
                raise self._database_error("incrementing views of", e) from e
