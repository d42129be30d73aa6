# 📄 File: contactbook/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types the contact book uses to communicate
# what went wrong in a clear, organized way instead of generic error messages.
# 🧪 Purpose (Technical Summary):
# Closed error-kind enumeration mapped centrally to HTTP status codes, plus the custom
# exception hierarchy raised by domain services, infrastructure and dependencies.
# 🔗 Dependencies:
# FastAPI status constants, enum, typing
# 🔄 Connected Modules / Calls From:
# All modules for error handling, exception handlers in main.py, error handling middleware

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import status


class ErrorKind(str, Enum):
    """Every failure the API reports belongs to exactly one of these kinds."""
    VALIDATION = "VALIDATION"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"
    INTERNAL = "INTERNAL"


ERROR_STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.UPSTREAM_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(kind: ErrorKind) -> int:
    """Resolve the HTTP status code for an error kind."""
    return ERROR_STATUS_CODES[kind]


class ContactBookException(Exception):
    """
    Base exception class for the contact book service.
    All custom exceptions should inherit from this class.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return status_code_for(self.kind)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the public error body."""
        return {
            "message": self.message,
            "code": self.kind.value,
        }


# =============================================================================
# AUTHENTICATION
# =============================================================================

class AuthenticationError(ContactBookException):
    """
    Exception raised for authentication failures.
    Used when credentials or session tokens are invalid or missing.
    """

    kind = ErrorKind.UNAUTHORIZED
    default_message = "Not authorized"


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(ContactBookException):
    """
    Exception raised for data validation failures.
    Used when input data doesn't meet validation requirements.
    """

    kind = ErrorKind.VALIDATION
    default_message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        details = dict(details or {})
        if field:
            details["field"] = field
        super().__init__(message=message, details=details)


class NotFoundError(ContactBookException):
    """
    Exception raised when requested resource is not found.
    Also used when a resource exists but belongs to another owner.
    """

    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"

    def __init__(
        self,
        message: Optional[str] = None,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
    ):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details)


class ConflictError(ContactBookException):
    """
    Exception raised when attempting to create duplicate resources.
    Used for unique constraint violations such as a registered email.
    """

    kind = ErrorKind.CONFLICT
    default_message = "Resource already exists"


class RateLimitError(ContactBookException):
    """Exception raised when a client exceeds its request budget."""

    kind = ErrorKind.RATE_LIMITED
    default_message = "Rate limit exceeded"


# =============================================================================
# FILE HANDLING EXCEPTIONS
# =============================================================================

class FileProcessingError(ValidationError):
    """Raised when an upload cannot be accepted or staged."""

    default_message = "File upload failed"


class InvalidFileTypeError(FileProcessingError):
    """Raised when an uploaded file has a disallowed extension."""

    default_message = "Only .jpg, .jpeg, and .png files are allowed"


class FileTooLargeError(FileProcessingError):
    """Raised when an upload exceeds the configured size limit."""

    default_message = "File is too large"


# =============================================================================
# INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class ExternalServiceError(ContactBookException):
    """
    Exception raised when an external collaborator (email provider) fails.
    Surfaces as a server error; it is never swallowed.
    """

    kind = ErrorKind.UPSTREAM_FAILURE
    default_message = "External service failure"

    def __init__(
        self,
        message: Optional[str] = None,
        service_name: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        details = {}
        if service_name:
            details["service_name"] = service_name
        if status_code is not None:
            details["upstream_status"] = status_code
        super().__init__(message=message, details=details)


class DatabaseError(ContactBookException):
    """Exception raised for database connectivity or query failures."""

    kind = ErrorKind.UPSTREAM_FAILURE
    default_message = "Database operation failed"
