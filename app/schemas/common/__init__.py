"""
Common schemas shared across API modules.
"""

from app.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
)
from app.schemas.common.pagination import PaginatedResponse, PaginationMeta
from app.schemas.common.response import ErrorDetail, ErrorResponse, MessageResponse

__all__ = [
    "BaseCreateSchema",
    "BaseResponseSchema",
    "BaseSchema",
    "BaseUpdateSchema",
    "PaginatedResponse",
    "PaginationMeta",
    "ErrorDetail",
    "ErrorResponse",
    "MessageResponse",
]
