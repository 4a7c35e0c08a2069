"""
Leave management endpoints: applications, leave types, ledger balances
and monetization requests.

Self-service routes act on the caller's own personnel record; review
routes (approve / reject) act on anyone's application.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.models.common.enums import LeaveStatus, Permission
from app.models.user import Personnel
from app.repositories.base.pagination import PaginationParams
from app.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta
from app.schemas.leave import (
    LeaveApplicationCreate,
    LeaveApplicationResponse,
    LeaveApplicationUpdate,
    LeaveBalanceInitialize,
    LeaveBalanceResponse,
    LeaveTypeCreate,
    LeaveTypeResponse,
    LeaveTypeUpdate,
    MonetizationApprove,
    MonetizationCreate,
    MonetizationResponse,
)
from app.services.auth import Principal
from app.services.leave import (
    LeaveApplicationService,
    LeaveBalanceService,
    LeaveMonetizationService,
    LeaveTypeService,
)

router = APIRouter(
    prefix="/leave-management",
    tags=["Leave Management"],
    responses={404: {"description": "Not found"}},
)


# ============================================================================
# LEAVE APPLICATIONS
# ============================================================================


@router.get("/applications", response_model=PaginatedResponse[LeaveApplicationResponse])
def list_applications(
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    leave_type_id: Optional[str] = None,
    personnel_id: Optional[str] = None,
    start_from: Optional[date] = None,
    end_to: Optional[date] = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_READ)),
    service: LeaveApplicationService = Depends(deps.get_leave_application_service),
):
    result = deps.unwrap(
        service.list(
            PaginationParams(page=page, per_page=per_page),
            status=status_filter,
            leave_type_id=leave_type_id,
            personnel_id=personnel_id,
            start_from=start_from,
            end_to=end_to,
        )
    )
    return PaginatedResponse[LeaveApplicationResponse](
        items=[LeaveApplicationResponse.model_validate(item) for item in result.items],
        pagination=PaginationMeta.model_validate(result.page_info),
    )


@router.post(
    "/applications",
    response_model=LeaveApplicationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_application(
    payload: LeaveApplicationCreate,
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_CREATE)),
    personnel: Personnel = Depends(deps.get_current_personnel),
    service: LeaveApplicationService = Depends(deps.get_leave_application_service),
):
    """Submit a leave application for the caller."""
    application = deps.unwrap(
        service.create(
            personnel.id,
            payload.leave_type_id,
            payload.start_date,
            payload.end_date,
            payload.reason,
            payload.supporting_document,
        )
    )
    return LeaveApplicationResponse.model_validate(application)


@router.get("/applications/my", response_model=List[LeaveApplicationResponse])
def list_my_applications(
    personnel: Personnel = Depends(deps.get_current_personnel),
    service: LeaveApplicationService = Depends(deps.get_leave_application_service),
):
    applications = deps.unwrap(service.list_for_personnel(personnel.id))
    return [LeaveApplicationResponse.model_validate(a) for a in applications]


@router.get("/applications/pending", response_model=List[LeaveApplicationResponse])
def list_pending_applications(
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_READ)),
    service: LeaveApplicationService = Depends(deps.get_leave_application_service),
):
    applications = deps.unwrap(service.list_pending())
    return [LeaveApplicationResponse.model_validate(a) for a in applications]


@router.get("/applications/{application_id}", response_model=LeaveApplicationResponse)
def get_application(
    application_id: str,
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_READ)),
    service: LeaveApplicationService = Depends(deps.get_leave_application_service),
):
    return LeaveApplicationResponse.model_validate(deps.unwrap(service.get(application_id)))


@router.put("/applications/{application_id}", response_model=LeaveApplicationResponse)
def edit_application(
    application_id: str,
    payload: LeaveApplicationUpdate,
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_UPDATE)),
    personnel: Personnel = Depends(deps.get_current_personnel),
    service: LeaveApplicationService = Depends(deps.get_leave_application_service),
):
    """Edit one of the caller's own pending applications."""
    application = deps.unwrap(
        service.edit(application_id, personnel.id, payload.changes())
    )
    return LeaveApplicationResponse.model_validate(application)


@router.delete("/applications/{application_id}", response_model=MessageResponse)
def cancel_application(
    application_id: str,
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_DELETE)),
    personnel: Personnel = Depends(deps.get_current_personnel),
    service: LeaveApplicationService = Depends(deps.get_leave_application_service),
):
    """Withdraw one of the caller's own pending applications."""
    result = service.cancel(application_id, personnel.id)
    deps.unwrap(result)
    return MessageResponse(message=result.message)


@router.put("/applications/{application_id}/approve", response_model=LeaveApplicationResponse)
def approve_application(
    application_id: str,
    principal: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_UPDATE)),
    service: LeaveApplicationService = Depends(deps.get_leave_application_service),
):
    """Approve a pending application and charge the current year's balance."""
    application = deps.unwrap(service.approve(application_id, principal.user_id))
    return LeaveApplicationResponse.model_validate(application)


@router.put("/applications/{application_id}/reject", response_model=LeaveApplicationResponse)
def reject_application(
    application_id: str,
    principal: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_UPDATE)),
    service: LeaveApplicationService = Depends(deps.get_leave_application_service),
):
    application = deps.unwrap(service.reject(application_id, principal.user_id))
    return LeaveApplicationResponse.model_validate(application)


# ============================================================================
# LEAVE TYPES
# ============================================================================


@router.get("/types", response_model=List[LeaveTypeResponse])
def list_leave_types(
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_TYPE_READ)),
    service: LeaveTypeService = Depends(deps.get_leave_type_service),
):
    return [LeaveTypeResponse.model_validate(t) for t in deps.unwrap(service.list_active())]


@router.post("/types", response_model=LeaveTypeResponse, status_code=status.HTTP_201_CREATED)
def create_leave_type(
    payload: LeaveTypeCreate,
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_TYPE_CREATE)),
    service: LeaveTypeService = Depends(deps.get_leave_type_service),
):
    leave_type = deps.unwrap(
        service.create(
            payload.name,
            description=payload.description,
            max_days=payload.max_days,
            requires_document=payload.requires_document,
        )
    )
    return LeaveTypeResponse.model_validate(leave_type)


@router.put("/types/{leave_type_id}", response_model=LeaveTypeResponse)
def update_leave_type(
    leave_type_id: str,
    payload: LeaveTypeUpdate,
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_TYPE_UPDATE)),
    service: LeaveTypeService = Depends(deps.get_leave_type_service),
):
    leave_type = deps.unwrap(service.update(leave_type_id, payload.changes()))
    return LeaveTypeResponse.model_validate(leave_type)


@router.delete("/types/{leave_type_id}", response_model=LeaveTypeResponse)
def deactivate_leave_type(
    leave_type_id: str,
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_TYPE_DELETE)),
    service: LeaveTypeService = Depends(deps.get_leave_type_service),
):
    return LeaveTypeResponse.model_validate(deps.unwrap(service.deactivate(leave_type_id)))


# ============================================================================
# LEAVE BALANCES
# ============================================================================


@router.get("/balance/my", response_model=List[LeaveBalanceResponse])
def my_balances(
    personnel: Personnel = Depends(deps.get_current_personnel),
    service: LeaveBalanceService = Depends(deps.get_leave_balance_service),
):
    """Current-year balances of the caller."""
    return [LeaveBalanceResponse.model_validate(b) for b in deps.unwrap(service.get_my_balances(personnel.id))]


@router.post("/balance/initialize", response_model=LeaveBalanceResponse)
def initialize_balance(
    payload: LeaveBalanceInitialize,
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_BALANCE_CREATE)),
    service: LeaveBalanceService = Depends(deps.get_leave_balance_service),
):
    balance = deps.unwrap(
        service.initialize(
            payload.personnel_id,
            payload.leave_type_id,
            payload.year,
            payload.total_credits,
        )
    )
    return LeaveBalanceResponse.model_validate(balance)


@router.get("/balance/{personnel_id}", response_model=List[LeaveBalanceResponse])
def personnel_balances(
    personnel_id: str,
    year: Optional[int] = Query(None, ge=1900, le=9999),
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_BALANCE_READ)),
    service: LeaveBalanceService = Depends(deps.get_leave_balance_service),
):
    return [LeaveBalanceResponse.model_validate(b) for b in deps.unwrap(service.get_balances(personnel_id, year))]


# ============================================================================
# MONETIZATION
# ============================================================================


@router.get("/monetization", response_model=List[MonetizationResponse])
def list_monetization_requests(
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    personnel_id: Optional[str] = None,
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_READ)),
    service: LeaveMonetizationService = Depends(deps.get_leave_monetization_service),
):
    requests = deps.unwrap(service.list(status=status_filter, personnel_id=personnel_id))
    return [MonetizationResponse.model_validate(r) for r in requests]


@router.post("/monetization", response_model=MonetizationResponse, status_code=status.HTTP_201_CREATED)
def create_monetization_request(
    payload: MonetizationCreate,
    _: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_CREATE)),
    personnel: Personnel = Depends(deps.get_current_personnel),
    service: LeaveMonetizationService = Depends(deps.get_leave_monetization_service),
):
    request = deps.unwrap(service.create(personnel.id, payload.leave_type_id, payload.days_to_monetize))
    return MonetizationResponse.model_validate(request)


@router.put("/monetization/{request_id}/approve", response_model=MonetizationResponse)
def approve_monetization_request(
    request_id: str,
    payload: Optional[MonetizationApprove] = None,
    principal: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_UPDATE)),
    service: LeaveMonetizationService = Depends(deps.get_leave_monetization_service),
):
    amount = payload.amount if payload else None
    request = deps.unwrap(service.approve(request_id, principal.user_id, amount))
    return MonetizationResponse.model_validate(request)


@router.put("/monetization/{request_id}/reject", response_model=MonetizationResponse)
def reject_monetization_request(
    request_id: str,
    principal: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_UPDATE)),
    service: LeaveMonetizationService = Depends(deps.get_leave_monetization_service),
):
    request = deps.unwrap(service.reject(request_id, principal.user_id))
    return MonetizationResponse.model_validate(request)
