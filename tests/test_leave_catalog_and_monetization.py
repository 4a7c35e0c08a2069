from decimal import Decimal

import pytest

from app.core.exceptions import ErrorCode
from app.models import LeaveStatus


class TestLeaveTypes:

    def test_create_and_list(self, leave_type_service):
        created = leave_type_service.create("Sick", "Medical leave", max_days=10, requires_document=True)

        assert created.is_success
        assert [t.name for t in leave_type_service.list_active().data] == ["Sick"]

    def test_duplicate_name(self, leave_type_service, vacation):
        assert leave_type_service.create("Vacation").error.code == ErrorCode.ALREADY_EXISTS

    def test_rename_onto_existing_name(self, leave_type_service, vacation, make_leave_type):
        sick = make_leave_type("Sick")

        assert leave_type_service.update(sick.id, {"name": "Vacation"}).error.code == ErrorCode.ALREADY_EXISTS

    def test_update(self, leave_type_service, vacation):
        result = leave_type_service.update(vacation.id, {"description": "Paid time off", "max_days": 20})

        assert result.data.description == "Paid time off"
        assert result.data.max_days == 20

    def test_deactivated_types_are_hidden(self, leave_type_service, vacation):
        assert leave_type_service.deactivate(vacation.id).data.is_active is False
        assert leave_type_service.list_active().data == []

    def test_deactivate_unknown(self, leave_type_service):
        assert leave_type_service.deactivate("missing").error.code == ErrorCode.NOT_FOUND


class TestMonetization:

    @pytest.fixture
    def personnel_id(self, employee):
        return employee.personnel.id

    def test_days_must_be_positive(self, monetization_service, personnel_id, vacation):
        result = monetization_service.create(personnel_id, vacation.id, 0)

        assert result.error.code == ErrorCode.VALIDATION_ERROR

    def test_approve_records_decision_without_ledger_effect(
        self, monetization_service, balance_service, personnel_id, vacation, approver
    ):
        balance_service.initialize(personnel_id, vacation.id, 2024, 15).unwrap()
        request = monetization_service.create(personnel_id, vacation.id, 3).unwrap()

        result = monetization_service.approve(request.id, approver.id, Decimal("450.00"))

        assert result.data.status == LeaveStatus.APPROVED
        assert result.data.approved_by == approver.id
        assert result.data.approval_date is not None
        assert result.data.amount == Decimal("450.00")
        assert balance_service.get_balance(personnel_id, vacation.id, 2024).data.used_credits == 0

    def test_decisions_happen_once(self, monetization_service, personnel_id, vacation, approver):
        request = monetization_service.create(personnel_id, vacation.id, 2).unwrap()
        monetization_service.reject(request.id, approver.id).unwrap()

        assert monetization_service.approve(request.id, approver.id).error.code == ErrorCode.NOT_PENDING

    def test_decide_unknown_request(self, monetization_service, approver):
        assert monetization_service.reject("missing", approver.id).error.code == ErrorCode.NOT_FOUND

    def test_list_by_status(self, monetization_service, personnel_id, vacation, approver):
        first = monetization_service.create(personnel_id, vacation.id, 1).unwrap()
        monetization_service.create(personnel_id, vacation.id, 2).unwrap()
        monetization_service.approve(first.id, approver.id).unwrap()

        pending = monetization_service.list(status=LeaveStatus.PENDING).data
        mine = monetization_service.list(personnel_id=personnel_id).data

        assert [r.days_to_monetize for r in pending] == [2]
        assert len(mine) == 2
