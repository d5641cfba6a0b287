"""
API Dependencies

Service lookups from the application container and the phone session
header used by the request portals.
"""

from fastapi import Header

from app.core.container import get_container
from app.core.database import DatabaseManager
from app.core.security import PhoneSession
from app.services.job_service import JobService
from app.services.contact_request_service import ContactRequestService
from app.services.wizard_service import WizardService
from app.utils.metrics import JobBoardMetrics

PHONE_HEADER = "X-Phone-Number"


def get_job_service() -> JobService:
    return get_container().get("job_service")


def get_contact_request_service() -> ContactRequestService:
    return get_container().get("contact_request_service")


def get_wizard_service() -> WizardService:
    return get_container().get("wizard_service")


def get_db_manager() -> DatabaseManager:
    return get_container().get("db_manager")


def get_metrics() -> JobBoardMetrics:
    return get_container().get("metrics")


async def get_phone_session(
    phone: str = Header(..., alias=PHONE_HEADER, description="Phone number the caller identifies with")
) -> PhoneSession:
    """
    Phone session dependency.

    Raises:
        InvalidPhoneNumberException: If the header holds no digits
    """
    return PhoneSession.from_phone(phone)
