"""
Services Layer

Business logic layer containing service classes that orchestrate
business operations, validation, and coordination between repositories.
"""

from .job_service import JobService
from .contact_request_service import ContactRequestService
from .profile_wizard import WizardMachine, WizardState
from .wizard_service import WizardService

__all__ = [
    "JobService",
    "ContactRequestService",
    "WizardMachine",
    "WizardState",
    "WizardService",
]
