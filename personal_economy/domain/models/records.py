"""Domain models for the monthly records kept per period."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class Period:
    """A calendar month with its manual USD to COP rate.

    Attributes:
        id: Period identifier in ``YYYY-MM`` format.
        year: Calendar year.
        month: Calendar month (1-12).
        usd_cop_rate: Manual exchange rate, or None when unset.
    """

    id: str
    year: int
    month: int
    usd_cop_rate: Decimal | None = None


@dataclass(frozen=True)
class Entity:
    """Bank, employer, broker or person that records refer to."""

    id: str
    name: str
    entity_type: str | None = None


@dataclass(frozen=True)
class Account:
    """Account held at an entity.

    ``categories`` is the current representation. Older records carry a
    single ``category`` instead; use ``categories_of`` to read either.
    """

    id: str
    entity_id: str
    currency: str
    categories: tuple[str, ...] = ()
    category: str | None = None
    name: str = ""
    account_type: str = ""
    is_active: bool = True
    is_salary_account: bool = False


@dataclass(frozen=True)
class AccountSnapshot:
    """Balance of an account at the close of a period."""

    id: str
    period_id: str
    account_id: str
    balance: Decimal
    effective_annual_rate_projected: Decimal | None = None


@dataclass(frozen=True)
class Income:
    """Income received during a period."""

    id: str
    period_id: str
    amount: Decimal
    currency: str
    is_salary: bool
    concept: str = ""
    entry_date: date | None = None
    entity_id: str | None = None


@dataclass(frozen=True)
class Expense:
    """Expense paid during a period."""

    id: str
    period_id: str
    amount: Decimal
    currency: str
    reason: str = ""
    entry_date: date | None = None
    entity_id: str | None = None
    method: str = "OTHER"
    installments: int = 1


@dataclass(frozen=True)
class Debt:
    """Outstanding debt for a period.

    ``series_id`` links the monthly copies of the same logical debt.
    """

    id: str
    period_id: str
    amount: Decimal
    currency: str
    series_id: str | None = None
    entity_id: str | None = None
    debt_type: str = "OTHER"
    amortization_amount: Decimal | None = None


@dataclass(frozen=True)
class ProjectedIncome:
    """Expected income tied to an account for a period.

    Rates are stored as percentages (``12`` means 12%). Recurring items are
    copied into the next month by the carry-forward job.
    """

    id: str
    period_id: str
    account_id: str
    income_type: str
    rate_ea: Decimal | None = None
    rate_monthly: Decimal | None = None
    amount: Decimal | None = None
    entry_date: date | None = None
    is_recurring: bool = False


__all__ = [
    "Period",
    "Entity",
    "Account",
    "AccountSnapshot",
    "Income",
    "Expense",
    "Debt",
    "ProjectedIncome",
]
