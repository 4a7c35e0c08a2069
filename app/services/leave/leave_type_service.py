"""
Leave type catalog service.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import EntityAlreadyExistsError, ResourceNotFoundError
from app.models.leave import LeaveType
from app.repositories.leave import LeaveTypeRepository
from app.services.base import BaseService, ServiceResult


class LeaveTypeService(BaseService[LeaveType, LeaveTypeRepository]):
    """
    Create, update and deactivate leave types. Names are unique;
    deactivation is soft so existing applications keep their type.
    """

    def __init__(self, leave_type_repository: LeaveTypeRepository, db_session: Session):
        super().__init__(leave_type_repository, db_session)

    def list_active(self) -> ServiceResult[List[LeaveType]]:
        try:
            return ServiceResult.success(self.repository.find_active())
        except Exception as e:
            return self._handle_exception(e, "list leave types")

    def create(
        self,
        name: str,
        description: Optional[str] = None,
        max_days: Optional[int] = None,
        requires_document: bool = False,
    ) -> ServiceResult[LeaveType]:
        try:
            self._ensure_name_free(name)
            with self.transaction():
                leave_type = self.repository.create(
                    LeaveType(
                        name=name,
                        description=description,
                        max_days=max_days,
                        requires_document=requires_document,
                        is_active=True,
                    )
                )
            self._log_operation("create leave type", leave_type.id, {"leave_type_name": name})
            return ServiceResult.success(leave_type, message="Leave type created")
        except Exception as e:
            return self._handle_exception(e, "create leave type", name)

    def update(self, leave_type_id: str, changes: Dict[str, Any]) -> ServiceResult[LeaveType]:
        try:
            leave_type = self.repository.get_by_id(leave_type_id)
            new_name = changes.get("name")
            if new_name and new_name != leave_type.name:
                self._ensure_name_free(new_name)

            values = {k: v for k, v in changes.items() if v is not None}
            with self.transaction():
                leave_type = self.repository.update(leave_type, values)
            self._log_operation("update leave type", leave_type_id, {"fields": sorted(values)})
            return ServiceResult.success(leave_type, message="Leave type updated")
        except Exception as e:
            return self._handle_exception(e, "update leave type", leave_type_id)

    def deactivate(self, leave_type_id: str) -> ServiceResult[LeaveType]:
        try:
            leave_type = self.repository.find_by_id(leave_type_id)
            if leave_type is None:
                raise ResourceNotFoundError("Leave type", leave_type_id)
            with self.transaction():
                leave_type = self.repository.update(leave_type, {"is_active": False})
            self._log_operation("deactivate leave type", leave_type_id)
            return ServiceResult.success(leave_type, message="Leave type deactivated")
        except Exception as e:
            return self._handle_exception(e, "deactivate leave type", leave_type_id)

    def _ensure_name_free(self, name: str) -> None:
        if self.repository.find_by_name(name) is not None:
            raise EntityAlreadyExistsError(
                f"Leave type '{name}' already exists",
                {"name": name},
            )
