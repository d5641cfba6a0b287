"""
FastAPI Main Application

Entry point for the Xpat Jobs API server.
Configures routing, middleware, error responses and application lifecycle.
"""

from typing import Dict, Any
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.container import init_container, shutdown_container
from app.core.exceptions import BaseApplicationException, ErrorSeverity
from app.api.v1 import (
    jobs_router,
    contact_requests_router,
    profile_wizard_router,
    health_router,
    metrics_router,
)
from app.utils.logger import configure_logging, get_logger, log_error

configure_logging()

# Initialize logger
logger = get_logger(__name__)

# Get application settings
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Xpat Jobs API...")

    try:
        await init_container()
        logger.info("Application container initialized successfully")
    except Exception as e:
        logger.error("Container initialization failed", error=str(e))
        raise

    yield

    logger.info("Shutting down Xpat Jobs API...")
    await shutdown_container()
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    description="Job board connecting foreign workers in Malaysia with employers",
    version=settings.VERSION,
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
    openapi_url="/api/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=settings.CORS_CREDENTIALS,
    allow_methods=settings.get_cors_methods_list(),
    allow_headers=settings.get_cors_headers_list(),
)

# Include API routers
app.include_router(health_router, prefix="/api/v1")
app.include_router(jobs_router, prefix="/api/v1")
app.include_router(contact_requests_router, prefix="/api/v1")
app.include_router(profile_wizard_router, prefix="/api/v1")
app.include_router(metrics_router)


@app.exception_handler(BaseApplicationException)
async def application_exception_handler(request: Request, exc: BaseApplicationException) -> JSONResponse:
    """Map domain errors to their HTTP status with a user-facing message."""
    if exc.severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL):
        log_error(exc, {"path": request.url.path})
    else:
        logger.info("Request rejected", path=request.url.path, error_code=exc.error_code)
    return JSONResponse(
        status_code=exc.http_status,
        content={"detail": exc.user_message, "error": exc.to_dict()}
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    logger.warning("Validation error", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Request validation failed",
            "errors": jsonable_encoder(exc.errors())
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    log_error(exc, {"path": request.url.path})

    # Don't expose internal errors in production
    if settings.ENVIRONMENT == "production":
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error": str(exc)
        }
    )


@app.get("/")
async def root() -> Dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "message": settings.APP_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "status": "running",
        "docs_url": "/api/docs" if settings.DEBUG else None,
        "health_url": "/api/v1/health"
    }


@app.get("/api")
async def api_info() -> Dict[str, Any]:
    """API information endpoint."""
    return {
        "name": settings.APP_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "endpoints": {
            "health": "/api/v1/health",
            "jobs": "/api/v1/jobs",
            "contact_requests": "/api/v1/contact-requests",
            "profile_wizard": "/api/v1/profile-wizard",
            "metrics": "/metrics",
            "docs": "/api/docs" if settings.DEBUG else None
        }
    }


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
