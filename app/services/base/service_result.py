"""
Outcome objects returned by every service call.

A service never lets a domain exception escape to the API layer: it
returns either a successful ``ServiceResult`` carrying data, or a failed
one carrying a ``ServiceError`` whose ``code`` is a stable ``ErrorCode``.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from app.core.exceptions import BaseAppException, ErrorCode


class ErrorSeverity(str, Enum):
    """How loudly a failure was logged."""

    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    """Failure payload: stable code, human message, optional details."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.WARNING
    details: Optional[Dict[str, Any]] = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_app_exception(cls, exception: BaseAppException) -> "ServiceError":
        return cls(
            code=exception.error_code,
            message=exception.message,
            details=exception.details or None,
        )


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Success-or-failure wrapper.

    Attributes:
        is_success: True when ``data`` is meaningful
        data: Payload of a successful call
        error: Failure payload, set iff ``is_success`` is False
        message: Short status text for the caller
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, data: Optional[TData] = None, message: Optional[str] = None) -> "ServiceResult[TData]":
        return cls(is_success=True, data=data, message=message)

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[TData]":
        return cls(is_success=False, error=error, message=error.message)

    @classmethod
    def from_app_exception(cls, exception: BaseAppException) -> "ServiceResult[TData]":
        """Failed result keeping the exception's error code and details."""
        return cls.failure(ServiceError.from_app_exception(exception))

    @classmethod
    def not_found(cls, resource_type: str, resource_id: Optional[str] = None) -> "ServiceResult[TData]":
        message = f"{resource_type} not found"
        if resource_id:
            message = f"{message} (ID: {resource_id})"
        return cls.failure(
            ServiceError(
                code=ErrorCode.NOT_FOUND,
                message=message,
                details={"resource_type": resource_type, "resource_id": resource_id},
            )
        )

    def unwrap(self) -> TData:
        """
        Return ``data`` of a successful result.

        Raises:
            ValueError: If the result is a failure
        """
        if not self.is_success:
            raise ValueError(f"{self.error.code.value}: {self.error.message}")
        return self.data

    def __bool__(self) -> bool:
        return self.is_success
