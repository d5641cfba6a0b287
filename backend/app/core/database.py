"""
Database Configuration and Session Management

Async SQLAlchemy engine/session management for the job and contact request
collections, plus the optional Redis connection used for wizard sessions.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
    AsyncEngine
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from sqlalchemy import text
import redis.asyncio as redis

from app.core.config import get_settings
from app.utils.logger import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""
    pass


class DatabaseManager:
    """Database connection and session management."""

    def __init__(self, database_url: Optional[str] = None, redis_url: Optional[str] = None) -> None:
        settings = get_settings()
        self.database_url = database_url or settings.DATABASE_URL
        self.redis_url = redis_url if redis_url is not None else settings.REDIS_URL
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._redis_client: Optional[redis.Redis] = None

    @property
    def engine(self) -> AsyncEngine:
        """Get database engine."""
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call init_database() first.")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get session factory."""
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call init_database() first.")
        return self._session_factory

    @property
    def redis(self) -> Optional[redis.Redis]:
        """Get Redis client (None when Redis is not configured or unreachable)."""
        return self._redis_client

    async def init_database(self) -> None:
        """Initialize database connections."""
        settings = get_settings()
        try:
            engine_kwargs = {
                "echo": settings.DEBUG,
            }

            if self.database_url.startswith("sqlite"):
                engine_kwargs["connect_args"] = {"check_same_thread": False}
                if ":memory:" in self.database_url:
                    engine_kwargs["poolclass"] = StaticPool
            else:
                engine_kwargs["pool_size"] = settings.DATABASE_POOL_SIZE
                engine_kwargs["max_overflow"] = settings.DATABASE_MAX_OVERFLOW

            self._engine = create_async_engine(self.database_url, **engine_kwargs)

            self._session_factory = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

            if self.redis_url:
                try:
                    self._redis_client = redis.from_url(
                        self.redis_url,
                        encoding="utf-8",
                        decode_responses=True
                    )
                    await self._test_redis_connection()
                except Exception as e:
                    logger.warning("Redis connection failed, keeping wizard sessions in memory", error=str(e))
                    self._redis_client = None

            await self._test_database_connection()

            logger.info("Database connections initialized", redis_enabled=self._redis_client is not None)

        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            raise

    async def _test_database_connection(self) -> None:
        """Test database connection."""
        async with self._engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection test successful")

    async def _test_redis_connection(self) -> None:
        """Test Redis connection."""
        await self._redis_client.ping()
        logger.info("Redis connection test successful")

    async def ping(self) -> bool:
        """Probe the database for health checks."""
        try:
            await self._test_database_connection()
            return True
        except Exception as e:
            logger.error("Database health probe failed", error=str(e))
            return False

    async def create_tables(self) -> None:
        """Create database tables."""
        # Import models so they are registered on the metadata
        import app.models  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error("Failed to create database tables", error=str(e))
            raise

    async def close_connections(self) -> None:
        """Close database connections."""
        if self._engine:
            await self._engine.dispose()
            logger.info("Database engine disposed")

        if self._redis_client:
            await self._redis_client.aclose()
            logger.info("Redis connection closed")

