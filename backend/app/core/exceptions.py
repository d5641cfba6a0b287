"""
Custom Exceptions for Xpat Jobs

Business logic exceptions with user-friendly messages and proper error codes.
Every failure raised by the service layer resolves to one of these so the API
can always answer with an explicit error payload.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone
from enum import Enum

from fastapi import status


class ErrorSeverity(Enum):
    """Error severity levels for monitoring and alerting."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification and handling."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BUSINESS_LOGIC = "business_logic"
    DATABASE = "database"
    SYSTEM = "system"


class BaseApplicationException(Exception):
    """
    Base exception for all application-specific errors.

    Provides structured error information for consistent error handling
    and user-friendly error responses.
    """

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        error_code: Optional[str] = None,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        suggested_action: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.details = details or {}
        self.suggested_action = suggested_action
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "error_code": self.error_code,
            "message": self.user_message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
            "suggested_action": self.suggested_action,
        }


# Validation Exceptions
class ValidationException(BaseApplicationException):
    """Exception for input validation errors."""

    def __init__(
        self,
        message: str,
        field_errors: Optional[Dict[str, str]] = None,
        **kwargs
    ):
        kwargs.setdefault("user_message", "Please check your input")
        kwargs.setdefault("error_code", "VALIDATION_ERROR")
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            http_status=status.HTTP_400_BAD_REQUEST,
            **kwargs
        )
        self.field_errors = field_errors or {}
        self.details.update({"field_errors": self.field_errors})


class InvalidPhoneNumberException(ValidationException):
    """Exception for phone numbers that do not normalise to anything."""

    def __init__(self, phone: str, field: str = "phone", **kwargs):
        super().__init__(
            message=f"Invalid phone number: {phone!r}",
            user_message="Please enter a valid phone number.",
            error_code="INVALID_PHONE_NUMBER",
            field_errors={field: "Invalid phone number"},
            **kwargs
        )


class InvalidAnswerException(ValidationException):
    """Exception for a wizard answer rejected by its question's validator."""

    def __init__(self, field: str, reason: str, **kwargs):
        super().__init__(
            message=f"Invalid answer for {field}: {reason}",
            user_message=reason,
            error_code="INVALID_ANSWER",
            field_errors={field: reason},
            **kwargs
        )


# Authorization Exceptions
class AuthorizationException(BaseApplicationException):
    """Exception for authorization errors."""

    def __init__(self, resource: str = "resource", **kwargs):
        super().__init__(
            message=f"Access denied to {resource}",
            user_message="You are not allowed to perform this action",
            error_code="ACCESS_DENIED",
            category=ErrorCategory.AUTHORIZATION,
            severity=ErrorSeverity.MEDIUM,
            http_status=status.HTTP_403_FORBIDDEN,
            **kwargs
        )


# Resource Exceptions
class ResourceNotFoundException(BaseApplicationException):
    """Exception for resource not found errors."""

    def __init__(self, resource_type: str, resource_id: Optional[str] = None, **kwargs):
        kwargs.setdefault("user_message", f"The requested {resource_type} was not found")
        kwargs.setdefault("error_code", "RESOURCE_NOT_FOUND")
        super().__init__(
            message=f"{resource_type} not found",
            category=ErrorCategory.NOT_FOUND,
            severity=ErrorSeverity.LOW,
            http_status=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
            suggested_action="Check the identifier or refresh the list",
            **kwargs
        )


class JobNotFoundException(ResourceNotFoundException):
    """Exception for job not found errors."""

    def __init__(self, job_id: str, **kwargs):
        super().__init__(
            resource_type="job",
            resource_id=job_id,
            user_message="Job not found",
            error_code="JOB_NOT_FOUND",
            **kwargs
        )


class ContactRequestNotFoundException(ResourceNotFoundException):
    """Exception for contact request not found errors."""

    def __init__(self, request_id: str, **kwargs):
        super().__init__(
            resource_type="contact_request",
            resource_id=request_id,
            user_message="Contact request not found",
            error_code="CONTACT_REQUEST_NOT_FOUND",
            **kwargs
        )


class WizardSessionNotFoundException(ResourceNotFoundException):
    """Exception for expired or unknown wizard sessions."""

    def __init__(self, session_id: str, **kwargs):
        super().__init__(
            resource_type="wizard_session",
            resource_id=session_id,
            user_message="This profile session has expired, please start again",
            error_code="WIZARD_SESSION_NOT_FOUND",
            **kwargs
        )


# Business Logic Exceptions
class BusinessLogicException(BaseApplicationException):
    """Exception for business logic violations."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("user_message", message)
        kwargs.setdefault("error_code", "BUSINESS_LOGIC_ERROR")
        kwargs.setdefault("http_status", status.HTTP_400_BAD_REQUEST)
        kwargs.setdefault("category", ErrorCategory.BUSINESS_LOGIC)
        super().__init__(
            message=message,
            severity=ErrorSeverity.MEDIUM,
            **kwargs
        )


class MissingJobSeekerPhoneException(BusinessLogicException):
    """The referenced job post carries no phone number to contact."""

    def __init__(self, job_id: str, **kwargs):
        super().__init__(
            message=f"Job seeker's phone not found for job post {job_id}",
            user_message="This profile has no contact number",
            error_code="MISSING_JOB_SEEKER_PHONE",
            details={"job_id": job_id},
            **kwargs
        )


class RequestAlreadyResolvedException(BusinessLogicException):
    """Contact requests can only be resolved once."""

    def __init__(self, request_id: str, current_status: str, target_status: str, **kwargs):
        super().__init__(
            message=f"Contact request {request_id} is already {current_status}",
            user_message=f"This request has already been {current_status}",
            error_code="REQUEST_ALREADY_RESOLVED",
            category=ErrorCategory.CONFLICT,
            http_status=status.HTTP_409_CONFLICT,
            details={
                "request_id": request_id,
                "current_status": current_status,
                "target_status": target_status,
            },
            **kwargs
        )


class WizardStateException(BusinessLogicException):
    """An event arrived that the wizard cannot accept in its current state."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            error_code="WIZARD_STATE_CONFLICT",
            category=ErrorCategory.CONFLICT,
            http_status=status.HTTP_409_CONFLICT,
            **kwargs
        )


# Database Exceptions
class DatabaseException(BaseApplicationException):
    """Exception for database errors."""

    def __init__(self, message: str = "Database operation failed", **kwargs):
        super().__init__(
            message=message,
            user_message="The database is temporarily unavailable",
            error_code="DATABASE_ERROR",
            category=ErrorCategory.DATABASE,
            severity=ErrorSeverity.HIGH,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            suggested_action="Please try again later",
            **kwargs
        )
