"""
Repository Layer

Data access layer using the repository pattern for clean separation
of database operations from business logic.
"""

from .base_repository import BaseRepository
from .job_repository import JobRepository
from .contact_request_repository import ContactRequestRepository

__all__ = [
    "BaseRepository",
    "JobRepository",
    "ContactRequestRepository",
]
