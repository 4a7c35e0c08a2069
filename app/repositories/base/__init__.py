"""
Base repositories package.

Provides base repository infrastructure and pagination.
"""

from app.repositories.base.base_repository import BaseRepository
from app.repositories.base.pagination import (
    PageInfo,
    PaginatedResult,
    PaginationParams,
    paginate,
)

__all__ = [
    "BaseRepository",
    "PageInfo",
    "PaginatedResult",
    "PaginationParams",
    "paginate",
]
