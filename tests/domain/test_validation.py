"""Tests for record validation."""

from datetime import date
from decimal import Decimal

import pytest

from personal_economy.domain.exceptions import RecordValidationError
from personal_economy.domain.models import (
    Account,
    AccountSnapshot,
    Debt,
    Expense,
    Income,
    Period,
    ProjectedIncome,
)
from personal_economy.domain.services.validation import (
    validate_account,
    validate_debt,
    validate_expense,
    validate_income,
    validate_period,
    validate_projected_income,
    validate_snapshot,
)


def test_valid_records_are_returned_unchanged() -> None:
    period = Period(id="2024-01", year=2024, month=1, usd_cop_rate=Decimal("3900"))
    income = Income(
        id="i1",
        period_id="2024-01",
        amount=Decimal("1"),
        currency="usd",
        is_salary=False,
        entry_date=date(2024, 1, 15),
    )

    assert validate_period(period) is period
    assert validate_income(income) is income


def test_period_fields_must_match_identifier() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        validate_period(Period(id="2024-01", year=2024, month=2))

    assert excinfo.value.record_type == "Period"
    assert excinfo.value.field == "month"


def test_period_rate_must_be_positive() -> None:
    with pytest.raises(RecordValidationError):
        validate_period(
            Period(id="2024-01", year=2024, month=1, usd_cop_rate=Decimal("0"))
        )


def test_account_requires_known_categories() -> None:
    with pytest.raises(RecordValidationError):
        validate_account(Account(id="a", entity_id="e", currency="COP"))
    with pytest.raises(RecordValidationError):
        validate_account(
            Account(id="a", entity_id="e", currency="COP", categories=("GOLD",))
        )


def test_account_accepts_legacy_category() -> None:
    account = Account(id="a", entity_id="e", currency="COP", category="savings")

    assert validate_account(account) is account


def test_unsupported_currency_is_rejected() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        validate_expense(
            Expense(id="x", period_id="2024-01", amount=Decimal("1"), currency="EUR")
        )

    assert excinfo.value.field == "currency"


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
def test_amounts_must_be_positive(amount) -> None:
    with pytest.raises(RecordValidationError):
        validate_debt(
            Debt(id="d", period_id="2024-01", amount=amount, currency="COP")
        )


def test_expense_installments_must_be_positive() -> None:
    with pytest.raises(RecordValidationError):
        validate_expense(
            Expense(
                id="x",
                period_id="2024-01",
                amount=Decimal("1"),
                currency="COP",
                installments=0,
            )
        )


def test_debt_amortization_cannot_be_negative() -> None:
    with pytest.raises(RecordValidationError):
        validate_debt(
            Debt(
                id="d",
                period_id="2024-01",
                amount=Decimal("10"),
                currency="COP",
                amortization_amount=Decimal("-1"),
            )
        )


def test_snapshot_allows_negative_balance_but_not_rate_below_minus_one() -> None:
    overdrawn = AccountSnapshot(
        id="s",
        period_id="2024-01",
        account_id="a",
        balance=Decimal("-10"),
    )
    assert validate_snapshot(overdrawn) is overdrawn

    with pytest.raises(RecordValidationError):
        validate_snapshot(
            AccountSnapshot(
                id="s",
                period_id="2024-01",
                account_id="a",
                balance=Decimal("10"),
                effective_annual_rate_projected=Decimal("-1.01"),
            )
        )


def test_projected_income_type_must_be_known() -> None:
    with pytest.raises(RecordValidationError):
        validate_projected_income(
            ProjectedIncome(
                id="p",
                period_id="2024-01",
                account_id="a",
                income_type="BONUS",
            )
        )
