import pytest

from app.core.exceptions import AuthenticationError, ErrorCode, PermissionDenied
from app.models import Permission
from app.services.auth.access_guard import (
    Principal,
    has_all,
    has_any,
    has_one,
    require_all,
    require_any,
    require_one,
)

READER = Principal(
    user_id="u-1",
    permissions=frozenset({Permission.LEAVE_REQUEST_READ, Permission.LEAVE_TYPE_READ}),
)


def test_require_all_passes_for_subset():
    require_all(READER, [Permission.LEAVE_REQUEST_READ])
    require_all(READER, [Permission.LEAVE_REQUEST_READ, Permission.LEAVE_TYPE_READ])


def test_require_all_rejects_partial_grant():
    with pytest.raises(PermissionDenied) as exc_info:
        require_all(READER, [Permission.LEAVE_REQUEST_READ, Permission.LEAVE_REQUEST_UPDATE])

    assert exc_info.value.error_code == ErrorCode.FORBIDDEN
    assert "leave_request_update" not in exc_info.value.message
    assert "LEAVE_REQUEST_UPDATE" not in exc_info.value.message


def test_require_any():
    require_any(READER, [Permission.LEAVE_REQUEST_UPDATE, Permission.LEAVE_TYPE_READ])

    with pytest.raises(PermissionDenied):
        require_any(READER, [Permission.LEAVE_REQUEST_UPDATE, Permission.ROLE_READ])


def test_require_any_with_nothing_required_fails():
    with pytest.raises(PermissionDenied):
        require_any(READER, [])


def test_require_one():
    require_one(READER, Permission.LEAVE_TYPE_READ)

    with pytest.raises(PermissionDenied):
        require_one(READER, Permission.LEAVE_TYPE_CREATE)


@pytest.mark.parametrize("check", [
    lambda: require_all(None, [Permission.LEAVE_REQUEST_READ]),
    lambda: require_any(None, [Permission.LEAVE_REQUEST_READ]),
    lambda: require_one(None, Permission.LEAVE_REQUEST_READ),
])
def test_missing_principal_is_authentication_failure(check):
    with pytest.raises(AuthenticationError) as exc_info:
        check()

    assert exc_info.value.error_code == ErrorCode.UNAUTHENTICATED


def test_boolean_twins():
    assert has_all(READER, [Permission.LEAVE_REQUEST_READ])
    assert not has_all(READER, [Permission.LEAVE_REQUEST_READ, Permission.ROLE_READ])
    assert has_any(READER, [Permission.ROLE_READ, Permission.LEAVE_TYPE_READ])
    assert not has_any(READER, [])
    assert has_one(READER, Permission.LEAVE_TYPE_READ)
    assert not has_one(READER, Permission.ROLE_READ)
