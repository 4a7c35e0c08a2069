"""
Custom Exceptions for the HR Access & Leave Service

This module defines the error taxonomy shared by repositories, services
and the HTTP boundary. Every error kind carries a stable ErrorCode.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Authentication
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_INACTIVE = "USER_INACTIVE"

    # Authorization
    FORBIDDEN = "FORBIDDEN"

    # Leave application state machine
    INVALID_RANGE = "INVALID_RANGE"
    NOT_EDITABLE = "NOT_EDITABLE"
    NOT_CANCELLABLE = "NOT_CANCELLABLE"
    NOT_PENDING = "NOT_PENDING"

    # Leave ledger integrity
    LEDGER_ROW_MISSING = "LEDGER_ROW_MISSING"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"


# Codes that all mean "who are you?" at the HTTP boundary.
AUTHENTICATION_CODES = frozenset({
    ErrorCode.UNAUTHENTICATED,
    ErrorCode.INVALID_TOKEN,
    ErrorCode.TOKEN_EXPIRED,
    ErrorCode.SESSION_EXPIRED,
    ErrorCode.USER_NOT_FOUND,
    ErrorCode.USER_INACTIVE,
})

HTTP_STATUS_BY_CODE: Dict[ErrorCode, int] = {
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.ALREADY_EXISTS: 409,
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.INVALID_RANGE: 400,
    ErrorCode.NOT_EDITABLE: 409,
    ErrorCode.NOT_CANCELLABLE: 409,
    ErrorCode.NOT_PENDING: 409,
    ErrorCode.LEDGER_ROW_MISSING: 409,
    ErrorCode.INSUFFICIENT_BALANCE: 409,
    **{code: 401 for code in AUTHENTICATION_CODES},
}


def http_status_for(code: ErrorCode) -> int:
    return HTTP_STATUS_BY_CODE.get(code, 500)


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code or http_status_for(error_code)
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.NOT_FOUND, details)


class EntityAlreadyExistsError(BaseAppException):
    """Exception raised when a unique constraint would be violated"""

    def __init__(self, message: str = "Entity already exists", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.ALREADY_EXISTS, details)


class RepositoryError(BaseAppException):
    """Exception raised when the data store fails unexpectedly"""

    def __init__(self, message: str = "Repository operation failed"):
        super().__init__(message, ErrorCode.INTERNAL_ERROR)


# ========================================
# Authentication & Authorization
# ========================================

class AuthenticationError(BaseAppException):
    """Raised when the caller's identity cannot be established"""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHENTICATED,
    ):
        if error_code not in AUTHENTICATION_CODES:
            raise ValueError(f"{error_code} is not an authentication error code")
        super().__init__(message, error_code)


class PermissionDenied(BaseAppException):
    """
    Raised when an authenticated caller lacks a required permission.

    The message is deliberately generic; the missing permission is never
    included so responses cannot be used to enumerate permissions.
    """

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message, ErrorCode.FORBIDDEN)


# ========================================
# Leave domain
# ========================================

class InvalidDateRangeError(BaseAppException):
    """Raised when a leave range ends before it starts"""

    def __init__(self, message: str = "End date must not be before start date"):
        super().__init__(message, ErrorCode.INVALID_RANGE)


class StateTransitionError(BaseAppException):
    """Raised when a leave record is not in the state an operation requires"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.NOT_PENDING,
        current_status: Optional[str] = None,
    ):
        details = {"current_status": current_status} if current_status else {}
        super().__init__(message, error_code, details)


class LedgerError(BaseAppException):
    """Raised when a ledger mutation would violate ledger integrity"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.LEDGER_ROW_MISSING,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


__all__ = [
    "ErrorCode",
    "AUTHENTICATION_CODES",
    "http_status_for",
    "BaseAppException",
    "ValidationError",
    "ResourceNotFoundError",
    "EntityAlreadyExistsError",
    "RepositoryError",
    "AuthenticationError",
    "PermissionDenied",
    "InvalidDateRangeError",
    "StateTransitionError",
    "LedgerError",
]
