from datetime import date

import pytest

from app.core.exceptions import ErrorCode, InvalidDateRangeError
from app.models import LeaveStatus
from app.repositories.base.pagination import PaginationParams
from app.services.leave.leave_application_service import calculate_total_days
from tests.conftest import build_leave_services

DEC_15 = date(2024, 12, 15)
DEC_20 = date(2024, 12, 20)


@pytest.fixture
def personnel_id(employee) -> str:
    return employee.personnel.id


@pytest.fixture
def pending(application_service, personnel_id, vacation):
    return application_service.create(personnel_id, vacation.id, DEC_15, DEC_20, "Family trip").unwrap()


@pytest.fixture
def funded(balance_service, personnel_id, vacation):
    return balance_service.initialize(personnel_id, vacation.id, 2024, 15).unwrap()


def test_total_days_is_inclusive():
    assert calculate_total_days(DEC_15, DEC_20) == 6
    assert calculate_total_days(DEC_15, DEC_15) == 1


def test_total_days_rejects_reversed_range():
    with pytest.raises(InvalidDateRangeError):
        calculate_total_days(DEC_20, DEC_15)


class TestCreate:

    def test_creates_pending_application(self, pending, personnel_id):
        assert pending.status == LeaveStatus.PENDING
        assert pending.total_days == 6
        assert pending.personnel_id == personnel_id
        assert pending.reviewed_by is None

    def test_reversed_range_persists_nothing(self, application_service, personnel_id, vacation):
        result = application_service.create(personnel_id, vacation.id, DEC_20, DEC_15, "Oops")

        assert result.error.code == ErrorCode.INVALID_RANGE
        assert application_service.list_for_personnel(personnel_id).data == []

    def test_inactive_leave_type_is_not_found(
        self, application_service, personnel_id, make_leave_type
    ):
        retired = make_leave_type("Sabbatical", is_active=False)

        result = application_service.create(personnel_id, retired.id, DEC_15, DEC_20, "Rest")

        assert result.error.code == ErrorCode.NOT_FOUND

    def test_create_does_not_touch_the_ledger(
        self, application_service, balance_service, funded, personnel_id, vacation
    ):
        application_service.create(personnel_id, vacation.id, DEC_15, DEC_20, "Trip")

        assert balance_service.get_balance(personnel_id, vacation.id, 2024).data.used_credits == 0


class TestApprove:

    def test_approval_charges_current_year_ledger(
        self, application_service, balance_service, pending, funded, approver, personnel_id, vacation
    ):
        result = application_service.approve(pending.id, approver.id)

        assert result.is_success
        assert result.data.status == LeaveStatus.APPROVED
        assert result.data.reviewed_by == approver.id
        assert result.data.reviewed_at is not None

        balance = balance_service.get_balance(personnel_id, vacation.id, 2024).data
        assert balance.used_credits == 6
        assert balance.remaining_credits == 9

    def test_second_approval_is_not_pending(
        self, application_service, balance_service, pending, funded, approver, personnel_id, vacation
    ):
        assert application_service.approve(pending.id, approver.id).is_success

        again = application_service.approve(pending.id, approver.id)

        assert again.error.code == ErrorCode.NOT_PENDING
        assert balance_service.get_balance(personnel_id, vacation.id, 2024).data.used_credits == 6

    def test_concurrent_approvals_charge_once(
        self, session_factory, pending, funded, approver, personnel_id, vacation
    ):
        first_session, second_session = session_factory(), session_factory()
        try:
            first, _ = build_leave_services(first_session)
            second, ledger = build_leave_services(second_session)

            # Both deciders have seen the application while it was pending.
            assert first.get(pending.id).data.status == LeaveStatus.PENDING
            assert second.get(pending.id).data.status == LeaveStatus.PENDING

            winner = first.approve(pending.id, approver.id)
            loser = second.approve(pending.id, approver.id)

            assert winner.is_success
            assert loser.error.code == ErrorCode.NOT_PENDING
            assert ledger.get_balance(personnel_id, vacation.id, 2024).data.used_credits == 6
        finally:
            first_session.close()
            second_session.close()

    def test_edit_landing_before_approval_charges_edited_days(
        self, session_factory, pending, funded, approver, personnel_id, vacation
    ):
        approver_session, owner_session = session_factory(), session_factory()
        try:
            approving, ledger = build_leave_services(approver_session)
            owning, _ = build_leave_services(owner_session)

            # The approver loads the six-day version first.
            assert approving.get(pending.id).data.total_days == 6

            edited = owning.edit(pending.id, personnel_id, {"end_date": date(2024, 12, 24)})
            assert edited.data.total_days == 10

            result = approving.approve(pending.id, approver.id)

            assert result.is_success
            assert result.data.total_days == 10
            assert ledger.get_balance(personnel_id, vacation.id, 2024).data.used_credits == 10
        finally:
            approver_session.close()
            owner_session.close()

    def test_missing_ledger_row_leaves_application_pending(
        self, application_service, pending, approver
    ):
        result = application_service.approve(pending.id, approver.id)

        assert result.error.code == ErrorCode.LEDGER_ROW_MISSING
        assert application_service.get(pending.id).data.status == LeaveStatus.PENDING

    def test_insufficient_balance_rolls_back_status(
        self, application_service, balance_service, pending, approver, personnel_id, vacation
    ):
        balance_service.initialize(personnel_id, vacation.id, 2024, 5).unwrap()

        result = application_service.approve(pending.id, approver.id)

        assert result.error.code == ErrorCode.INSUFFICIENT_BALANCE
        assert application_service.get(pending.id).data.status == LeaveStatus.PENDING
        assert balance_service.get_balance(personnel_id, vacation.id, 2024).data.used_credits == 0

    def test_ledger_year_follows_approval_date(self, db, personnel_id, vacation, approver):
        applications, ledger = build_leave_services(db, today=date(2025, 1, 2))
        ledger.initialize(personnel_id, vacation.id, 2024, 10).unwrap()
        ledger.initialize(personnel_id, vacation.id, 2025, 10).unwrap()
        spanning = applications.create(
            personnel_id, vacation.id, date(2024, 12, 30), date(2025, 1, 2), "New year"
        ).unwrap()

        assert applications.approve(spanning.id, approver.id).is_success

        assert ledger.get_balance(personnel_id, vacation.id, 2025).data.used_credits == 4
        assert ledger.get_balance(personnel_id, vacation.id, 2024).data.used_credits == 0

    def test_unknown_application(self, application_service, approver):
        assert application_service.approve("missing", approver.id).error.code == ErrorCode.NOT_FOUND


class TestReject:

    def test_reject_has_no_ledger_effect(
        self, application_service, balance_service, pending, funded, approver, personnel_id, vacation
    ):
        result = application_service.reject(pending.id, approver.id)

        assert result.data.status == LeaveStatus.REJECTED
        assert result.data.reviewed_by == approver.id
        assert balance_service.get_balance(personnel_id, vacation.id, 2024).data.used_credits == 0

    def test_rejected_application_cannot_be_approved(
        self, application_service, pending, funded, approver
    ):
        application_service.reject(pending.id, approver.id).unwrap()

        assert application_service.approve(pending.id, approver.id).error.code == ErrorCode.NOT_PENDING


class TestEditAndCancel:

    def test_edit_recomputes_total_days(self, application_service, pending, personnel_id):
        result = application_service.edit(
            pending.id, personnel_id, {"end_date": date(2024, 12, 16), "reason": "Shorter trip"}
        )

        assert result.is_success
        assert result.data.total_days == 2
        assert result.data.reason == "Shorter trip"

    def test_edit_with_reversed_range(self, application_service, pending, personnel_id):
        result = application_service.edit(pending.id, personnel_id, {"end_date": date(2024, 12, 1)})

        assert result.error.code == ErrorCode.INVALID_RANGE
        assert application_service.get(pending.id).data.total_days == 6

    def test_edit_after_decision(
        self, application_service, pending, funded, approver, personnel_id
    ):
        application_service.approve(pending.id, approver.id).unwrap()

        result = application_service.edit(pending.id, personnel_id, {"reason": "Changed my mind"})

        assert result.error.code == ErrorCode.NOT_EDITABLE

    def test_edit_by_someone_else_is_not_found(self, application_service, pending, approver):
        result = application_service.edit(pending.id, approver.personnel.id, {"reason": "Mine now"})

        assert result.error.code == ErrorCode.NOT_FOUND
        assert application_service.get(pending.id).data.reason == "Family trip"

    def test_cancel_removes_pending_application(self, application_service, pending, personnel_id):
        assert application_service.cancel(pending.id, personnel_id).data is True

        assert application_service.get(pending.id).error.code == ErrorCode.NOT_FOUND

    def test_cancel_after_decision(self, application_service, pending, approver, personnel_id):
        application_service.reject(pending.id, approver.id).unwrap()

        result = application_service.cancel(pending.id, personnel_id)

        assert result.error.code == ErrorCode.NOT_CANCELLABLE

    def test_cancel_by_someone_else_is_not_found(self, application_service, pending, approver):
        result = application_service.cancel(pending.id, approver.personnel.id)

        assert result.error.code == ErrorCode.NOT_FOUND
        assert application_service.get(pending.id).is_success


class TestQueries:

    def test_list_filters_and_paginates(
        self, application_service, personnel_id, vacation, approver
    ):
        created = [
            application_service.create(
                personnel_id, vacation.id, date(2024, month, 1), date(2024, month, 2), "Break"
            ).unwrap()
            for month in (3, 4, 5)
        ]
        application_service.reject(created[0].id, approver.id).unwrap()

        pending_page = application_service.list(PaginationParams(page=1, per_page=1), status=LeaveStatus.PENDING)

        assert pending_page.data.page_info.total_items == 2
        assert len(pending_page.data.items) == 1

        everything = application_service.list(PaginationParams(), personnel_id=personnel_id)
        assert everything.data.page_info.total_items == 3

    def test_pending_and_own_lists(self, application_service, pending, personnel_id, approver):
        assert [a.id for a in application_service.list_pending().data] == [pending.id]
        assert [a.id for a in application_service.list_for_personnel(personnel_id).data] == [pending.id]
        assert application_service.list_for_personnel(approver.personnel.id).data == []
