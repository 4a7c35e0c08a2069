import pytest

from app.core.exceptions import ErrorCode, LedgerError


@pytest.fixture
def personnel_id(employee) -> str:
    return employee.personnel.id


def test_initialize_creates_fresh_row(balance_service, personnel_id, vacation):
    row = balance_service.initialize(personnel_id, vacation.id, 2024, 15).unwrap()

    assert (row.total_credits, row.used_credits, row.earned_credits) == (15, 0, 0)
    assert row.remaining_credits == 15


def test_reinitialize_keeps_used_credits(balance_service, personnel_id, vacation):
    balance_service.initialize(personnel_id, vacation.id, 2024, 15).unwrap()
    balance_service.adjust_used(personnel_id, vacation.id, 2024, 4).unwrap()

    row = balance_service.initialize(personnel_id, vacation.id, 2024, 20).unwrap()

    assert row.total_credits == 20
    assert row.used_credits == 4
    assert len(balance_service.get_balances(personnel_id).data) == 1


def test_initialize_below_used_is_refused(balance_service, personnel_id, vacation):
    balance_service.initialize(personnel_id, vacation.id, 2024, 15).unwrap()
    balance_service.adjust_used(personnel_id, vacation.id, 2024, 10).unwrap()

    result = balance_service.initialize(personnel_id, vacation.id, 2024, 9)

    assert result.error.code == ErrorCode.INSUFFICIENT_BALANCE
    assert balance_service.get_balance(personnel_id, vacation.id, 2024).data.total_credits == 15


def test_initialize_rejects_negative_total(balance_service, personnel_id, vacation):
    assert balance_service.initialize(personnel_id, vacation.id, 2024, -1).error.code == ErrorCode.VALIDATION_ERROR


def test_initialize_for_unknown_leave_type(balance_service, personnel_id):
    assert balance_service.initialize(personnel_id, "missing", 2024, 5).error.code == ErrorCode.NOT_FOUND


def test_increment_without_row_raises(balance_service, personnel_id, vacation):
    with pytest.raises(LedgerError) as exc_info:
        balance_service.increment_used(personnel_id, vacation.id, 2024, 1)

    assert exc_info.value.error_code == ErrorCode.LEDGER_ROW_MISSING


def test_adjust_beyond_capacity(balance_service, personnel_id, vacation):
    balance_service.initialize(personnel_id, vacation.id, 2024, 3).unwrap()

    result = balance_service.adjust_used(personnel_id, vacation.id, 2024, 4)

    assert result.error.code == ErrorCode.INSUFFICIENT_BALANCE
    assert balance_service.get_balance(personnel_id, vacation.id, 2024).data.used_credits == 0


def test_reverse_used(balance_service, personnel_id, vacation):
    balance_service.initialize(personnel_id, vacation.id, 2024, 10).unwrap()
    balance_service.adjust_used(personnel_id, vacation.id, 2024, 6).unwrap()

    row = balance_service.reverse_used(personnel_id, vacation.id, 2024, 2).unwrap()

    assert row.used_credits == 4
    assert row.remaining_credits == 6


def test_reverse_never_goes_below_zero(balance_service, personnel_id, vacation):
    balance_service.initialize(personnel_id, vacation.id, 2024, 10).unwrap()
    balance_service.adjust_used(personnel_id, vacation.id, 2024, 2).unwrap()

    result = balance_service.reverse_used(personnel_id, vacation.id, 2024, 3)

    assert result.error.code == ErrorCode.VALIDATION_ERROR
    assert balance_service.get_balance(personnel_id, vacation.id, 2024).data.used_credits == 2


def test_missing_balance_is_not_found(balance_service, personnel_id, vacation):
    assert balance_service.get_balance(personnel_id, vacation.id, 2030).error.code == ErrorCode.NOT_FOUND


def test_my_balances_are_current_year_only(balance_service, personnel_id, vacation, make_leave_type):
    sick = make_leave_type("Sick")
    balance_service.initialize(personnel_id, vacation.id, 2023, 12).unwrap()
    balance_service.initialize(personnel_id, vacation.id, 2024, 15).unwrap()
    balance_service.initialize(personnel_id, sick.id, 2024, 5).unwrap()

    mine = balance_service.get_my_balances(personnel_id).data

    assert {row.year for row in mine} == {2024}
    assert len(mine) == 2
    assert len(balance_service.get_balances(personnel_id).data) == 3
