"""
Base Repository Pattern Implementation

Provides abstract base repository with common database operations
and transaction management using SQLAlchemy async sessions.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, List, Optional, Dict, Any, Type
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from app.core.database import DatabaseManager
from app.core.exceptions import DatabaseException
from app.utils.logger import get_logger, log_database_operation

ModelType = TypeVar("ModelType")

logger = get_logger(__name__)


class BaseRepository(Generic[ModelType], ABC):
    """
    Abstract base repository providing common CRUD operations.

    Database failures are logged and re-raised as ``DatabaseException`` so
    callers always get either a result or an explicit error.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    @property
    @abstractmethod
    def model(self) -> Type[ModelType]:
        """Return the SQLAlchemy model class."""
        pass

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    def get_session(self) -> AsyncSession:
        """Open a new database session."""
        return self.db_manager.session_factory()

    def _database_error(self, action: str, error: SQLAlchemyError) -> DatabaseException:
        logger.error(
            "Database operation failed",
            table=self.table_name,
            action=action,
            error=str(error)
        )
        return DatabaseException(
            f"Error {action} {self.model.__name__}: {error}",
            details={"table": self.table_name, "action": action}
        )

    async def get_by_id(self, id: str) -> Optional[ModelType]:
        """Get entity by ID."""
        async with self.get_session() as session:
            try:
                return await session.get(self.model, id)
            except SQLAlchemyError as e:
                raise self._database_error("getting", e) from e

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """Create new entity from a dict of column values."""
        async with self.get_session() as session:
            try:
                db_obj = self.model(**obj_in)
                session.add(db_obj)
                await session.commit()
                await session.refresh(db_obj)
                log_database_operation("create", self.table_name, record_id=db_obj.id)
                return db_obj
            except SQLAlchemyError as e:
                await session.rollback()
                raise self._database_error("creating", e) from e

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count entities with optional equality filters."""
        async with self.get_session() as session:
            try:
                query = select(func.count()).select_from(self.model)

                if filters:
                    for field, value in filters.items():
                        if hasattr(self.model, field):
                            column = getattr(self.model, field)
                            if isinstance(value, list):
                                query = query.where(column.in_(value))
                            else:
                                query = query.where(column == value)

                result = await session.execute(query)
                return result.scalar() or 0
            except SQLAlchemyError as e:
                raise self._database_error("counting", e) from e

    async def list_where(self, *criteria, order_by=None) -> List[ModelType]:
        """Fetch all entities matching the given SQLAlchemy criteria."""
        async with self.get_session() as session:
            try:
                query = select(self.model).where(*criteria)
                if order_by is not None:
                    query = query.order_by(order_by)
                result = await session.execute(query)
                return list(result.scalars().all())
            except SQLAlchemyError as e:
                raise self._database_error("listing", e) from e
