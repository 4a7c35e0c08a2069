"""
Base repository with standardized CRUD operations and error handling.

Repositories never commit: the calling service owns the transaction
boundary and decides when to commit or roll back.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from app.models.base import BaseModel
from app.core.logging import get_logger
from app.core.exceptions import (
    RepositoryError,
    ResourceNotFoundError,
    EntityAlreadyExistsError,
)
from app.repositories.base.pagination import (
    PaginatedResult,
    PaginationParams,
    paginate,
)

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Provides lookup, create, update and delete helpers plus pagination
    for all domain repositories.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Add a new entity and flush it so defaults and ids are populated.

        Raises:
            EntityAlreadyExistsError: If a unique constraint is violated
            RepositoryError: On any other database failure
        """
        try:
            self.db.add(entity)
            self.db.flush()
            logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
            return entity
        except IntegrityError as e:
            raise EntityAlreadyExistsError(
                f"{self.model.__name__} already exists"
            ) from e
        except SQLAlchemyError as e:
            raise RepositoryError(f"Create failed: {str(e)}") from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        """
        Find entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity or None
        """
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by ID failed: {str(e)}") from e

    def get_by_id(self, id: str) -> ModelType:
        """
        Get entity by ID or raise exception.

        Raises:
            ResourceNotFoundError: If entity not found
        """
        entity = self.find_by_id(id)
        if entity is None:
            raise ResourceNotFoundError(self.model.__name__, id)
        return entity

    def find_all(self, **criteria: Any) -> List[ModelType]:
        """Find entities whose columns equal the given values."""
        try:
            stmt = select(self.model).filter_by(**criteria)
            return list(self.db.execute(stmt).scalars())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find all failed: {str(e)}") from e

    def find_one_by_criteria(self, **criteria: Any) -> Optional[ModelType]:
        try:
            stmt = select(self.model).filter_by(**criteria).limit(1)
            return self.db.execute(stmt).scalars().first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find one failed: {str(e)}") from e

    def count(self, **criteria: Any) -> int:
        stmt = select(func.count()).select_from(self.model).filter_by(**criteria)
        return self.db.execute(stmt).scalar_one()

    def exists(self, **criteria: Any) -> bool:
        return self.find_one_by_criteria(**criteria) is not None

    def paginate_query(self, stmt, pagination: PaginationParams) -> PaginatedResult[ModelType]:
        """
        Paginate a select statement using pagination parameters.

        Args:
            stmt: Ordered select statement over this repository's model
            pagination: Pagination parameters

        Returns:
            Paginated result
        """
        try:
            return paginate(self.db, stmt, pagination)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Pagination failed: {str(e)}") from e

    # ==================== Update / Delete ====================

    def update(self, entity: ModelType, data: Dict[str, Any]) -> ModelType:
        """
        Apply ``data`` to an already loaded entity and flush.

        Unknown keys are ignored.
        """
        for key, value in data.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise EntityAlreadyExistsError(
                f"{self.model.__name__} conflicts with an existing record"
            ) from e
        except SQLAlchemyError as e:
            raise RepositoryError(f"Update failed: {str(e)}") from e
        return entity

    def delete(self, entity: ModelType) -> None:
        try:
            self.db.delete(entity)
            self.db.flush()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Delete failed: {str(e)}") from e
