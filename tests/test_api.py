from datetime import date, timedelta

import pytest

from app.models import Permission
from tests.conftest import TEST_PASSWORD, bearer

API = "/api/v1"

EMPLOYEE_PERMISSIONS = [
    Permission.LEAVE_REQUEST_READ,
    Permission.LEAVE_REQUEST_CREATE,
    Permission.LEAVE_REQUEST_UPDATE,
    Permission.LEAVE_REQUEST_DELETE,
    Permission.LEAVE_BALANCE_READ,
]
MANAGER_PERMISSIONS = EMPLOYEE_PERMISSIONS + [
    Permission.LEAVE_BALANCE_CREATE,
    Permission.LEAVE_TYPE_READ,
    Permission.LEAVE_TYPE_CREATE,
    Permission.PERMISSION_READ,
    Permission.PERMISSION_UPDATE,
    Permission.ROLE_READ,
]


def login(client, username: str) -> str:
    response = client.post(f"{API}/auth/login", json={"username": username, "password": TEST_PASSWORD})
    assert response.status_code == 200, response.text
    return response.json()["access_token"]


@pytest.fixture
def staff(make_user, make_role, assign_role):
    employee = make_user("employee")
    manager = make_user("manager")
    outsider = make_user("outsider")
    assign_role(employee, make_role("Employee", EMPLOYEE_PERMISSIONS))
    assign_role(manager, make_role("Leave Manager", MANAGER_PERMISSIONS))
    return {"employee": employee, "manager": manager, "outsider": outsider}


class TestAuthentication:

    def test_login_issues_token(self, client, staff):
        response = client.post(f"{API}/auth/login", json={"username": "employee", "password": TEST_PASSWORD})

        body = response.json()
        assert response.status_code == 200
        assert body["token_type"] == "bearer"
        assert body["user_id"] == staff["employee"].id
        assert body["expires_in"] == 3600

    def test_login_by_email(self, client, staff):
        response = client.post(
            f"{API}/auth/login", json={"username": "employee@example.com", "password": TEST_PASSWORD}
        )

        assert response.status_code == 200

    def test_wrong_password(self, client, staff):
        response = client.post(f"{API}/auth/login", json={"username": "employee", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "UNAUTHENTICATED"

    def test_long_password_fails_alike_for_any_username(self, client, staff):
        for username in ("employee", "nobody"):
            response = client.post(f"{API}/auth/login", json={"username": username, "password": "x" * 100})

            assert response.status_code == 401
            assert response.json()["detail"]["code"] == "UNAUTHENTICATED"

    def test_me_requires_token(self, client):
        response = client.get(f"{API}/auth/me")

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "UNAUTHENTICATED"

    def test_me_lists_effective_permissions(self, client, staff):
        response = client.get(f"{API}/auth/me", headers=bearer(login(client, "employee")))

        body = response.json()
        assert response.status_code == 200
        assert body["username"] == "employee"
        assert set(body["permissions"]) == {p.value for p in EMPLOYEE_PERMISSIONS}

    def test_idle_token_is_rejected(self, client, staff, make_token):
        token = make_token(staff["employee"].id, issued_ago=timedelta(minutes=45))

        response = client.get(f"{API}/auth/me", headers=bearer(token))

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "SESSION_EXPIRED"

    def test_refresh_activity_extends_idle_session(self, client, staff, make_token):
        token = make_token(staff["employee"].id, issued_ago=timedelta(minutes=25))

        refreshed = client.post(f"{API}/auth/refresh-activity", headers=bearer(token))

        assert refreshed.status_code == 200
        assert client.get(f"{API}/auth/me", headers=bearer(refreshed.json()["access_token"])).status_code == 200

    def test_request_id_is_echoed(self, client):
        response = client.get(f"{API}/health", headers={"X-Request-ID": "req-123"})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "req-123"


class TestAuthorization:

    def test_missing_permission_is_forbidden_without_naming_it(self, client, staff):
        response = client.get(f"{API}/leave-management/applications", headers=bearer(login(client, "outsider")))

        detail = response.json()["detail"]
        assert response.status_code == 403
        assert detail["code"] == "FORBIDDEN"
        assert "leave_request_read" not in response.text
        assert "LEAVE_REQUEST_READ" not in response.text

    def test_any_of_permissions(self, client, staff, make_role):
        role = make_role("Viewer", [Permission.ROLE_READ])
        headers = bearer(login(client, "manager"))

        response = client.get(f"{API}/roles/{role.id}/permissions", headers=headers)

        assert response.status_code == 200
        assert response.json()["permissions"] == ["role_read"]

    def test_unknown_permission_name_is_rejected(self, client, staff, make_role):
        role = make_role("Viewer", [Permission.ROLE_READ])
        headers = bearer(login(client, "manager"))

        response = client.put(
            f"{API}/roles/{role.id}/permissions",
            json={"permissions": ["role_read", "delete_everything"]},
            headers=headers,
        )

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "VALIDATION_ERROR"
        unchanged = client.get(f"{API}/roles/{role.id}/permissions", headers=headers)
        assert unchanged.json()["permissions"] == ["role_read"]


class TestLeaveFlow:

    @pytest.fixture
    def vacation_id(self, client, staff):
        response = client.post(
            f"{API}/leave-management/types",
            json={"name": "Vacation", "max_days": 15},
            headers=bearer(login(client, "manager")),
        )
        assert response.status_code == 201, response.text
        return response.json()["id"]

    def test_apply_approve_and_charge_balance(self, client, staff, vacation_id):
        employee_headers = bearer(login(client, "employee"))
        manager_headers = bearer(login(client, "manager"))
        personnel_id = staff["employee"].personnel.id

        initialized = client.post(
            f"{API}/leave-management/balance/initialize",
            json={
                "personnel_id": personnel_id,
                "leave_type_id": vacation_id,
                "year": date.today().year,
                "total_credits": 15,
            },
            headers=manager_headers,
        )
        assert initialized.status_code == 200, initialized.text

        created = client.post(
            f"{API}/leave-management/applications",
            json={
                "leave_type_id": vacation_id,
                "start_date": "2024-12-15",
                "end_date": "2024-12-20",
                "reason": "Family vacation",
            },
            headers=employee_headers,
        )
        assert created.status_code == 201, created.text
        application = created.json()
        assert application["status"] == "Pending"
        assert application["total_days"] == 6

        approved = client.put(
            f"{API}/leave-management/applications/{application['id']}/approve", headers=manager_headers
        )
        assert approved.status_code == 200, approved.text
        assert approved.json()["status"] == "Approved"
        assert approved.json()["reviewed_by"] == staff["manager"].id

        again = client.put(
            f"{API}/leave-management/applications/{application['id']}/approve", headers=manager_headers
        )
        assert again.status_code == 409
        assert again.json()["detail"]["code"] == "NOT_PENDING"

        balances = client.get(f"{API}/leave-management/balance/my", headers=employee_headers).json()
        assert [(b["used_credits"], b["remaining_credits"]) for b in balances] == [(6, 9)]

    def test_reversed_range_is_rejected(self, client, staff, vacation_id):
        response = client.post(
            f"{API}/leave-management/applications",
            json={
                "leave_type_id": vacation_id,
                "start_date": "2024-12-20",
                "end_date": "2024-12-15",
                "reason": "Backwards",
            },
            headers=bearer(login(client, "employee")),
        )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_RANGE"

    def test_only_owner_may_cancel(self, client, staff, vacation_id):
        employee_headers = bearer(login(client, "employee"))
        application = client.post(
            f"{API}/leave-management/applications",
            json={
                "leave_type_id": vacation_id,
                "start_date": "2024-12-15",
                "end_date": "2024-12-15",
                "reason": "Errand",
            },
            headers=employee_headers,
        ).json()
        url = f"{API}/leave-management/applications/{application['id']}"

        foreign = client.delete(url, headers=bearer(login(client, "manager")))
        assert foreign.status_code == 404

        own = client.delete(url, headers=employee_headers)
        assert own.status_code == 200
        assert client.get(url, headers=employee_headers).status_code == 404

    def test_listing_is_paginated(self, client, staff, vacation_id):
        headers = bearer(login(client, "employee"))
        for day in (1, 2, 3):
            client.post(
                f"{API}/leave-management/applications",
                json={
                    "leave_type_id": vacation_id,
                    "start_date": f"2024-11-0{day}",
                    "end_date": f"2024-11-0{day}",
                    "reason": "Day off",
                },
                headers=headers,
            )

        response = client.get(
            f"{API}/leave-management/applications",
            params={"status": "Pending", "page": 1, "per_page": 2},
            headers=headers,
        )

        body = response.json()
        assert response.status_code == 200
        assert len(body["items"]) == 2
        assert body["pagination"]["total_items"] == 3

    def test_self_service_routes_need_only_a_session(self, client, make_user, make_role, assign_role):
        clerk = make_user("clerk")
        assign_role(clerk, make_role("Self Service", [Permission.LEAVE_REQUEST_CREATE]))
        headers = bearer(login(client, "clerk"))

        balances = client.get(f"{API}/leave-management/balance/my", headers=headers)
        applications = client.get(f"{API}/leave-management/applications/my", headers=headers)

        assert balances.status_code == 200
        assert balances.json() == []
        assert applications.status_code == 200
        assert applications.json() == []
        assert client.get(f"{API}/leave-management/balance/my").status_code == 401

    def test_decisions_use_put(self, client, staff, vacation_id):
        application = client.post(
            f"{API}/leave-management/applications",
            json={
                "leave_type_id": vacation_id,
                "start_date": "2024-12-15",
                "end_date": "2024-12-15",
                "reason": "Errand",
            },
            headers=bearer(login(client, "employee")),
        ).json()
        url = f"{API}/leave-management/applications/{application['id']}/reject"
        manager_headers = bearer(login(client, "manager"))

        assert client.post(url, headers=manager_headers).status_code == 405
        rejected = client.put(url, headers=manager_headers)
        assert rejected.status_code == 200, rejected.text
        assert rejected.json()["status"] == "Rejected"
