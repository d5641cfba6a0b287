"""
Contact Request Repository Implementation

Repository for contact requests: phone-indexed portal lookups and the
one-way status resolution.
"""

from typing import List, Type
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from app.repositories.base_repository import BaseRepository
from app.models.contact_request import ContactRequest
from app.utils.logger import get_logger, log_database_operation

logger = get_logger(__name__)

RESOLUTION_COLUMNS = {
    "approved": "approved_at",
    "rejected": "rejected_at",
}


class ContactRequestRepository(BaseRepository[ContactRequest]):
    """Repository for contact request database operations."""

    @property
    def model(self) -> Type[ContactRequest]:
        return ContactRequest

    async def list_by_job_seeker_phone(self, normalized_phone: str) -> List[ContactRequest]:
        return await self.list_where(
            self.model.job_seeker_phone_normalized == normalized_phone,
            order_by=self.model.timestamp.desc()
        )

    async def list_by_employer_phone(self, normalized_phone: str) -> List[ContactRequest]:
        return await self.list_where(
            self.model.employer_phone_normalized == normalized_phone,
            order_by=self.model.timestamp.desc()
        )

    async def resolve(self, request_id: str, status: str, at: int) -> bool:
        """
        Move a pending request to ``status`` and stamp the matching time.

        The update is conditional on the row still being pending, so a
        request is resolved at most once even under concurrent calls.

        Returns:
            bool: True if this call resolved the request
        """
        column = RESOLUTION_COLUMNS[status]
        async with self.get_session() as session:
            try:
                result = await session.execute(
                    update(self.model)
                    .where(self.model.id == request_id, self.model.status == "pending")
                    .values(status=status, **{column: at})
                )
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise self._database_error("resolving", e) from e

        resolved = result.rowcount == 1
        if resolved:
            log_database_operation("update", self.table_name, record_id=request_id, status=status)
        return resolved
