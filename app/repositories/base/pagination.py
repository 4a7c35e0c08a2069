"""
Offset pagination for repository queries.
"""

from typing import Generic, List, TypeVar
from dataclasses import dataclass
import math

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

ModelType = TypeVar("ModelType")


@dataclass
class PaginationParams:
    """Page request; pages are 1-based."""

    page: int = 1
    per_page: int = 20

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if not 1 <= self.per_page <= 100:
            raise ValueError("per_page must be between 1 and 100")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass
class PageInfo:
    """Pagination metadata."""

    current_page: int
    per_page: int
    total_items: int
    total_pages: int
    has_next: bool
    has_previous: bool


@dataclass
class PaginatedResult(Generic[ModelType]):
    """Paginated query result."""

    items: List[ModelType]
    page_info: PageInfo


def paginate(db: Session, stmt: Select, params: PaginationParams) -> PaginatedResult:
    """
    Run ``stmt`` for one page and count the full result set.

    Args:
        db: Database session
        stmt: Ordered select statement
        params: Page request

    Returns:
        PaginatedResult with the page items and metadata
    """
    total = db.execute(
        select(func.count()).select_from(stmt.order_by(None).subquery())
    ).scalar_one()
    items = list(db.execute(stmt.offset(params.skip).limit(params.per_page)).scalars())
    total_pages = math.ceil(total / params.per_page) if total else 0

    return PaginatedResult(
        items=items,
        page_info=PageInfo(
            current_page=params.page,
            per_page=params.per_page,
            total_items=total,
            total_pages=total_pages,
            has_next=params.page < total_pages,
            has_previous=params.page > 1,
        ),
    )
