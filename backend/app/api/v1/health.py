"""
Health Check API v1 Endpoints

System health and status monitoring endpoints.
"""

from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_db_manager
from app.core.config import get_settings
from app.core.database import DatabaseManager
from app.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> Dict[str, Any]:
    """Basic health check endpoint."""
    settings = get_settings()
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/status")
async def detailed_status(db_manager: DatabaseManager = Depends(get_db_manager)) -> Dict[str, Any]:
    """Detailed system status including a database probe."""
    settings = get_settings()
    database_ok = await db_manager.ping()
    if not database_ok:
        logger.error("Status check failed", service="database")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy"
        )

    return {
        "status": "healthy",
        "services": {
            "api": "healthy",
            "database": "healthy",
            "wizard_sessions": "redis" if db_manager.redis is not None else "memory",
        },
        "app_info": {
            "name": settings.APP_NAME,
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
        },
    }
