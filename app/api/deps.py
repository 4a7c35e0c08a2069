"""
FastAPI dependencies: database session, service construction,
authentication and permission guards.

Example usage in a router:

    @router.get("/applications")
    def list_applications(
        principal: Principal = Depends(deps.require_permission(Permission.LEAVE_REQUEST_READ)),
        service: LeaveApplicationService = Depends(deps.get_leave_application_service),
    ):
        ...
"""

from typing import Any, Callable, Generator, NoReturn

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.config.database import get_db_session
from app.config.settings import Settings
from app.core.exceptions import http_status_for
from app.core.logging import user_id as user_id_context
from app.core.security import JWTManager, PasswordHasher
from app.models.common.enums import Permission
from app.models.user import Personnel
from app.repositories.auth import RoleRepository
from app.repositories.leave import (
    LeaveApplicationRepository,
    LeaveBalanceRepository,
    LeaveMonetizationRepository,
    LeaveTypeRepository,
)
from app.repositories.user import UserRepository
from app.services.admin import RoleService
from app.services.auth import (
    AuthenticationService,
    Identity,
    PermissionResolver,
    Principal,
    SessionValidator,
    require_all,
    require_any,
)
from app.services.base import ServiceResult
from app.services.leave import (
    LeaveApplicationService,
    LeaveBalanceService,
    LeaveMonetizationService,
    LeaveTypeService,
)


# --- Failure translation -------------------------------------------------------

def raise_for_failure(result: ServiceResult) -> NoReturn:
    """Translate a failed ServiceResult into an HTTPException."""
    error = result.error
    raise HTTPException(
        status_code=http_status_for(error.code),
        detail={
            "code": error.code.value,
            "message": error.message,
            "details": error.details,
        },
    )


def unwrap(result: ServiceResult) -> Any:
    """Return the result's data, or raise the matching HTTP error."""
    if not result.is_success:
        raise_for_failure(result)
    return result.data


# --- Settings & database -------------------------------------------------------

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Generator[Session, None, None]:
    yield from get_db_session(request.app.state.session_factory)


def get_jwt_manager(settings: Settings = Depends(get_settings)) -> JWTManager:
    return JWTManager(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


# --- Services ------------------------------------------------------------------

def get_session_validator(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> SessionValidator:
    return SessionValidator(
        UserRepository(db),
        db,
        jwt_manager,
        session_timeout_seconds=settings.SESSION_TIMEOUT_SECONDS,
    )


def get_permission_resolver(db: Session = Depends(get_db)) -> PermissionResolver:
    return PermissionResolver(UserRepository(db), RoleRepository(db), db)


def get_authentication_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> AuthenticationService:
    return AuthenticationService(
        UserRepository(db),
        db,
        jwt_manager,
        PasswordHasher(rounds=settings.PASSWORD_BCRYPT_ROUNDS),
    )


def get_role_service(
    db: Session = Depends(get_db),
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> RoleService:
    return RoleService(RoleRepository(db), UserRepository(db), resolver, db)


def get_leave_balance_service(db: Session = Depends(get_db)) -> LeaveBalanceService:
    return LeaveBalanceService(LeaveBalanceRepository(db), LeaveTypeRepository(db), db)


def get_leave_application_service(
    db: Session = Depends(get_db),
    balance_service: LeaveBalanceService = Depends(get_leave_balance_service),
) -> LeaveApplicationService:
    return LeaveApplicationService(
        LeaveApplicationRepository(db),
        LeaveTypeRepository(db),
        balance_service,
        db,
    )


def get_leave_type_service(db: Session = Depends(get_db)) -> LeaveTypeService:
    return LeaveTypeService(LeaveTypeRepository(db), db)


def get_leave_monetization_service(db: Session = Depends(get_db)) -> LeaveMonetizationService:
    return LeaveMonetizationService(LeaveMonetizationRepository(db), LeaveTypeRepository(db), db)


# --- Authentication & Authorization -------------------------------------------

def get_current_identity(
    request: Request,
    validator: SessionValidator = Depends(get_session_validator),
) -> Identity:
    identity = unwrap(validator.validate(request.headers.get("Authorization")))
    user_id_context.set(identity.user_id)
    return identity


def get_current_principal(
    identity: Identity = Depends(get_current_identity),
    resolver: PermissionResolver = Depends(get_permission_resolver),
) -> Principal:
    return Principal(
        user_id=identity.user_id,
        permissions=resolver.resolve(identity.user_id),
        username=identity.username,
    )


def require_permission(permission: Permission) -> Callable[..., Principal]:
    """Dependency factory: the caller must hold ``permission``."""
    return require_all_permissions(permission)


def require_all_permissions(*permissions: Permission) -> Callable[..., Principal]:
    """Dependency factory: the caller must hold every one of ``permissions``."""
    def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        require_all(principal, permissions)
        return principal
    return dependency


def require_any_permission(*permissions: Permission) -> Callable[..., Principal]:
    """Dependency factory: the caller must hold at least one of ``permissions``."""
    def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        require_any(principal, permissions)
        return principal
    return dependency


def get_current_personnel(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> Personnel:
    """Personnel record of the caller; 404 when the user has none."""
    personnel = UserRepository(db).find_personnel_by_user_id(principal.user_id)
    if personnel is None:
        raise_for_failure(ServiceResult.not_found("Personnel record"))
    return personnel


__all__ = [
    "raise_for_failure",
    "unwrap",
    "get_settings",
    "get_db",
    "get_jwt_manager",
    "get_session_validator",
    "get_permission_resolver",
    "get_authentication_service",
    "get_role_service",
    "get_leave_balance_service",
    "get_leave_application_service",
    "get_leave_type_service",
    "get_leave_monetization_service",
    "get_current_identity",
    "get_current_principal",
    "require_permission",
    "require_all_permissions",
    "require_any_permission",
    "get_current_personnel",
]
