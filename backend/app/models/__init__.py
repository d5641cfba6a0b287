"""
Database Models Package

Contains SQLAlchemy ORM models for the Xpat Jobs application.
"""

from app.core.database import Base
from app.models.job import JobPost
from app.models.contact_request import ContactRequest

__all__ = [
    "Base",
    "JobPost",
    "ContactRequest",
]
