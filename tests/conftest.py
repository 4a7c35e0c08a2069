"""
Shared fixtures: a throwaway SQLite database per test, seeded users,
roles and leave types, token helpers and service factories.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Callable, Iterable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import app.models  # noqa: F401  (registers every table on Base.metadata)
from app.config.database import create_db_engine, create_session_factory, get_db_context
from app.config.settings import Settings
from app.core.security import JWTManager, PasswordHasher
from app.main import create_app
from app.models import (
    Base,
    LeaveType,
    Permission,
    Personnel,
    Role,
    RolePermission,
    User,
    UserRole,
    UserStatus,
)
from app.repositories.auth import RoleRepository
from app.repositories.leave import (
    LeaveApplicationRepository,
    LeaveBalanceRepository,
    LeaveMonetizationRepository,
    LeaveTypeRepository,
)
from app.repositories.user import UserRepository
from app.services.admin import RoleService
from app.services.auth import PermissionResolver, SessionValidator
from app.services.leave import (
    LeaveApplicationService,
    LeaveBalanceService,
    LeaveMonetizationService,
    LeaveTypeService,
)

TEST_SECRET = "test-signing-secret"
TEST_PASSWORD = "correct horse battery"
LEDGER_TODAY = date(2024, 12, 1)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        JWT_SECRET_KEY=TEST_SECRET,
        DATABASE_URL=f"sqlite:///{tmp_path / 'hr_leave_test.db'}",
        PASSWORD_BCRYPT_ROUNDS=4,
        SESSION_TIMEOUT_SECONDS=1800,
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
        LOG_FORMAT="text",
    )


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def jwt_manager(settings) -> JWTManager:
    return JWTManager(settings.JWT_SECRET_KEY, access_token_expire_minutes=60)


# --- Seed data ------------------------------------------------------------------

@pytest.fixture
def make_user(session_factory, password_hasher) -> Callable[..., User]:
    def _make(
        username: str,
        status: UserStatus = UserStatus.ACTIVE,
        with_personnel: bool = True,
        password: str = TEST_PASSWORD,
    ) -> User:
        with get_db_context(session_factory) as session:
            user = User(
                username=username,
                email=f"{username}@example.com",
                password_hash=password_hasher.hash(password),
                status=status,
            )
            session.add(user)
            session.flush()
            if with_personnel:
                session.add(Personnel(user_id=user.id, first_name=username.title(), last_name="Tester"))
                session.flush()
            session.refresh(user)
            user.personnel  # load before the session closes
        return user
    return _make


@pytest.fixture
def make_role(session_factory) -> Callable[..., Role]:
    def _make(name: str, permissions: Iterable[Permission] = (), is_active: bool = True) -> Role:
        with get_db_context(session_factory) as session:
            role = Role(name=name, is_active=is_active)
            session.add(role)
            session.flush()
            for permission in permissions:
                session.add(RolePermission(role_id=role.id, permission=permission))
        return role
    return _make


@pytest.fixture
def assign_role(session_factory) -> Callable[..., None]:
    def _assign(user: User, role: Role, is_active: bool = True) -> None:
        with get_db_context(session_factory) as session:
            session.add(UserRole(user_id=user.id, role_id=role.id, is_active=is_active))
    return _assign


@pytest.fixture
def make_leave_type(session_factory) -> Callable[..., LeaveType]:
    def _make(name: str = "Vacation", is_active: bool = True) -> LeaveType:
        with get_db_context(session_factory) as session:
            leave_type = LeaveType(name=name, is_active=is_active)
            session.add(leave_type)
        return leave_type
    return _make


@pytest.fixture
def employee(make_user) -> User:
    return make_user("employee")


@pytest.fixture
def approver(make_user) -> User:
    return make_user("approver")


@pytest.fixture
def vacation(make_leave_type) -> LeaveType:
    return make_leave_type("Vacation")


# --- Tokens -----------------------------------------------------------------------

@pytest.fixture
def make_token(jwt_manager) -> Callable[..., str]:
    def _make(
        user_id: str,
        issued_ago: timedelta = timedelta(0),
        active_ago: Optional[timedelta] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        now = datetime.now(timezone.utc)
        return jwt_manager.create_access_token(
            user_id,
            issued_at=now - issued_ago,
            last_activity=now - active_ago if active_ago is not None else None,
            expires_delta=expires_delta,
        )
    return _make


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# --- Services ---------------------------------------------------------------------

def build_leave_services(session: Session, today: date = LEDGER_TODAY):
    """Application and ledger services sharing one session."""
    balance_service = LeaveBalanceService(
        LeaveBalanceRepository(session),
        LeaveTypeRepository(session),
        session,
        today_provider=lambda: today,
    )
    application_service = LeaveApplicationService(
        LeaveApplicationRepository(session),
        LeaveTypeRepository(session),
        balance_service,
        session,
        today_provider=lambda: today,
    )
    return application_service, balance_service


@pytest.fixture
def leave_services(db):
    return build_leave_services(db)


@pytest.fixture
def application_service(leave_services) -> LeaveApplicationService:
    return leave_services[0]


@pytest.fixture
def balance_service(leave_services) -> LeaveBalanceService:
    return leave_services[1]


@pytest.fixture
def leave_type_service(db) -> LeaveTypeService:
    return LeaveTypeService(LeaveTypeRepository(db), db)


@pytest.fixture
def monetization_service(db) -> LeaveMonetizationService:
    return LeaveMonetizationService(LeaveMonetizationRepository(db), LeaveTypeRepository(db), db)


@pytest.fixture
def resolver(db) -> PermissionResolver:
    return PermissionResolver(UserRepository(db), RoleRepository(db), db)


@pytest.fixture
def role_service(db, resolver) -> RoleService:
    return RoleService(RoleRepository(db), UserRepository(db), resolver, db)


@pytest.fixture
def session_validator(db, jwt_manager) -> SessionValidator:
    return SessionValidator(UserRepository(db), db, jwt_manager, session_timeout_seconds=1800)


# --- HTTP ---------------------------------------------------------------------------

@pytest.fixture
def client(settings, engine) -> TestClient:
    with TestClient(create_app(settings)) as test_client:
        yield test_client
