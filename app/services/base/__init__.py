"""
Base services module.

This module provides foundational service layer components:
- Base service class with shared logging and transaction handling
- ServiceResult / ServiceError result objects

All services follow consistent patterns for:
- Result handling via ServiceResult
- Error management and logging
- Transaction safety
"""

from app.core.exceptions import ErrorCode
from app.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorSeverity,
)
from app.services.base.base_service import BaseService

__all__ = [
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    "ErrorSeverity",
    "BaseService",
]
