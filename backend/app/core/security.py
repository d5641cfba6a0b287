"""
Phone Sessions

The request portals identify a participant by the phone number the client
claims. That number is a self-asserted capability, never verified by the
server: it only scopes which contact requests a caller sees and may act on.
"""

from dataclasses import dataclass
from typing import Optional

from app.core.exceptions import InvalidPhoneNumberException, AuthorizationException
from app.utils.phone import normalize_phone
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PhoneSession:
    """An unauthenticated portal session keyed by a normalised phone number."""

    phone: str
    normalized: str

    @classmethod
    def from_phone(cls, phone: Optional[str]) -> "PhoneSession":
        """
        Build a session from a raw phone string.

        Raises:
            InvalidPhoneNumberException: If nothing is left after normalising
        """
        normalized = normalize_phone(phone or "")
        if not normalized:
            raise InvalidPhoneNumberException(phone or "")
        return cls(phone=phone, normalized=normalized)

    def owns(self, normalized_phone: str) -> bool:
        return self.normalized == normalized_phone

    def require_owner(self, normalized_phone: str, resource: str) -> None:
        """Raise unless this session's phone matches ``normalized_phone``."""
        if not self.owns(normalized_phone):
            logger.warning("Phone session denied", resource=resource)
            raise AuthorizationException(resource)
