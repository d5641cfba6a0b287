"""
API v1 Package

Contains all version 1 API endpoints for the Xpat Jobs application.
"""

from .jobs import router as jobs_router
from .contact_requests import router as contact_requests_router
from .profile_wizard import router as profile_wizard_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "jobs_router",
    "contact_requests_router",
    "profile_wizard_router",
    "health_router",
    "metrics_router",
]
