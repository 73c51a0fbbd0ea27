"""Validation of records before they reach the summary engine.

Validators return the record unchanged when it is well formed and raise
``RecordValidationError`` otherwise.
"""

from decimal import Decimal

from personal_economy.domain.constants import (
    ACCOUNT_CATEGORIES,
    PROJECTED_INCOME_TYPES,
    SUPPORTED_CURRENCIES,
)
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
from personal_economy.domain.services.categories import categories_of
from personal_economy.domain.services.normalization import normalize_currency
from personal_economy.domain.services.periods import parse_period_id


MIN_YEAR = 2000
MAX_YEAR = 2100


def validate_period(period: Period) -> Period:
    """Validate identifier, calendar fields and exchange rate of a period."""
    year, month = parse_period_id(period.id)
    if not MIN_YEAR <= period.year <= MAX_YEAR:
        raise RecordValidationError("Period", "year", f"out of range: {period.year}")
    if (period.year, period.month) != (year, month):
        raise RecordValidationError(
            "Period",
            "month",
            f"{period.year}-{period.month} does not match id {period.id}",
        )
    if period.usd_cop_rate is not None and period.usd_cop_rate <= 0:
        raise RecordValidationError(
            "Period", "usd_cop_rate", "must be positive when set"
        )
    return period


def validate_account(account: Account) -> Account:
    """Validate currency and categories of an account."""
    _check_currency("Account", account.currency)
    categories = categories_of(account)
    if not categories:
        raise RecordValidationError("Account", "categories", "must not be empty")
    unknown = categories.difference(ACCOUNT_CATEGORIES)
    if unknown:
        raise RecordValidationError(
            "Account", "categories", f"unknown: {', '.join(sorted(unknown))}"
        )
    return account


def validate_snapshot(snapshot: AccountSnapshot) -> AccountSnapshot:
    """Validate the period and projected rate of a snapshot.

    Balances may be negative (overdrawn accounts); the projected rate may not
    fall below -100%.
    """
    parse_period_id(snapshot.period_id)
    rate = snapshot.effective_annual_rate_projected
    if rate is not None and rate < Decimal("-1"):
        raise RecordValidationError(
            "AccountSnapshot",
            "effective_annual_rate_projected",
            f"below -100%: {rate}",
        )
    return snapshot


def validate_income(income: Income) -> Income:
    parse_period_id(income.period_id)
    _check_currency("Income", income.currency)
    _check_positive("Income", "amount", income.amount)
    return income


def validate_expense(expense: Expense) -> Expense:
    parse_period_id(expense.period_id)
    _check_currency("Expense", expense.currency)
    _check_positive("Expense", "amount", expense.amount)
    if expense.installments < 1:
        raise RecordValidationError(
            "Expense", "installments", f"must be at least 1: {expense.installments}"
        )
    return expense


def validate_debt(debt: Debt) -> Debt:
    """Validate amount and amortization of a debt."""
    parse_period_id(debt.period_id)
    _check_currency("Debt", debt.currency)
    _check_positive("Debt", "amount", debt.amount)
    if debt.amortization_amount is not None and debt.amortization_amount < 0:
        raise RecordValidationError(
            "Debt", "amortization_amount", "must not be negative"
        )
    return debt


def validate_projected_income(item: ProjectedIncome) -> ProjectedIncome:
    parse_period_id(item.period_id)
    if item.income_type not in PROJECTED_INCOME_TYPES:
        raise RecordValidationError(
            "ProjectedIncome", "income_type", f"unknown: {item.income_type}"
        )
    return item


def _check_currency(record_type: str, currency: str | None) -> None:
    if normalize_currency(currency) not in SUPPORTED_CURRENCIES:
        raise RecordValidationError(
            record_type, "currency", f"unsupported: {currency!r}"
        )


def _check_positive(record_type: str, field: str, value) -> None:
    if value is None or value <= 0:
        raise RecordValidationError(record_type, field, f"must be positive: {value}")


__all__ = [
    "validate_period",
    "validate_account",
    "validate_snapshot",
    "validate_income",
    "validate_expense",
    "validate_debt",
    "validate_projected_income",
]
