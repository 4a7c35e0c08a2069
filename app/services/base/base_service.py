"""
Shared plumbing for services: session, logger, failure conversion and
the commit/rollback boundary.
"""

from abc import ABC
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import BaseAppException, ErrorCode
from app.core.logging import get_logger
from app.repositories.base.base_repository import BaseRepository
from app.services.base.service_result import ErrorSeverity, ServiceError, ServiceResult

TModel = TypeVar("TModel")
TRepo = TypeVar("TRepo", bound=BaseRepository)


class BaseService(ABC, Generic[TModel, TRepo]):
    """
    Services own the transaction; repositories below them only flush.

    Public methods catch everything and return a ``ServiceResult`` via
    ``_handle_exception``.
    """

    def __init__(self, repository: TRepo, db_session: Session):
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(self.__class__.__name__)

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Turn an exception raised inside ``operation`` into a failure.

        Domain exceptions keep their ``ErrorCode`` and are logged at
        WARNING. Anything else is logged at ERROR with the traceback and
        reported as INTERNAL_ERROR (VALIDATION_ERROR for ``ValueError``)
        without exposing the exception text to the caller.
        """
        context: Dict[str, Any] = {
            "operation": operation,
            "entity_ref": None if entity_ref is None else str(entity_ref),
            "exception_type": type(exception).__name__,
        }
        if additional_context:
            context.update(additional_context)

        if isinstance(exception, BaseAppException):
            context["error_code"] = exception.error_code.value
            self._logger.warning(f"{operation} rejected: {exception.message}", extra=context)
            return ServiceResult.from_app_exception(exception)

        self._logger.error(f"Unexpected error during {operation}: {exception}", exc_info=True, extra=context)
        return ServiceResult.failure(
            ServiceError(
                code=self._map_exception_to_error_code(exception),
                message=f"Failed to {operation}",
                severity=ErrorSeverity.CRITICAL,
                details={"entity_ref": context["entity_ref"]},
            )
        )

    @staticmethod
    def _map_exception_to_error_code(exception: Exception) -> ErrorCode:
        if isinstance(exception, ValueError):
            return ErrorCode.VALIDATION_ERROR
        return ErrorCode.INTERNAL_ERROR

    @contextmanager
    def transaction(self, auto_commit: bool = True) -> Iterator[Session]:
        """
        Unit of work around repository calls.

        Commits on normal exit (unless ``auto_commit`` is False); any
        exception rolls back every write of the block and propagates.

        Example:
            with self.transaction():
                self.repository.update_application_status(...)
                self.balance_service.increment_used(...)
        """
        try:
            yield self.db
            if auto_commit:
                self._commit()
        except BaseAppException:
            self._rollback()
            raise
        except Exception:
            self._rollback()
            self._logger.error("Transaction aborted", exc_info=True)
            raise

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self._rollback()
            raise
        self._logger.debug("Transaction committed")

    def _rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            # Keep the error that caused the rollback.
            self._logger.warning(f"Rollback failed: {e}")
            return
        self._logger.debug("Transaction rolled back")

    def _log_operation(
        self,
        operation: str,
        entity_ref: Optional[Any] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """INFO record of a completed state change."""
        context: Dict[str, Any] = {"operation": operation, "entity_ref": None if entity_ref is None else str(entity_ref)}
        if extra:
            context.update(extra)
        self._logger.info(f"{operation} completed", extra=context)
