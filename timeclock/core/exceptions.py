"""
Domain exceptions for the kiosk and admin flows

All extend atams exceptions so setup_exception_handlers renders them.
"""
from typing import Optional, Any, Dict

from atams.exceptions import (
    UnauthorizedException,
    BadRequestException,
    InternalServerException,
)

KIOSK_FAILURE_MESSAGE = "Invalid PIN provided."


class CredentialMismatchException(UnauthorizedException):
    """401 - No employee credential matches the submitted PIN"""

    def __init__(self, message: str = KIOSK_FAILURE_MESSAGE, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class IdentityNotFoundException(BadRequestException):
    """400 - Identity disappeared between matching and writing"""

    def __init__(self, message: str = "Employee no longer exists", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class DuplicateCredentialException(BadRequestException):
    """400 - PIN already in use by another employee"""

    def __init__(
        self,
        message: str = "This PIN is already in use by another employee. Please choose a unique PIN.",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)


class StorageFailureException(InternalServerException):
    """500 - Persistence layer could not commit"""

    def __init__(self, message: str = "Failed to persist changes", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
