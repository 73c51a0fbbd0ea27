"""Domain models for financial aggregates."""

from dataclasses import dataclass, field
from decimal import Decimal

from personal_economy.domain.constants import REPORTING_CURRENCY
from personal_economy.domain.models.records import (
    AccountSnapshot,
    Debt,
    Expense,
    Income,
    Period,
    ProjectedIncome,
)


@dataclass(frozen=True)
class ProjectedReturn:
    """Return implied by an effective annual rate over one month.

    Attributes:
        monthly_rate: Monthly rate as a decimal (0.01 means 1%).
        end_balance: Balance expected at the end of the month.
        monthly_return: ``end_balance - balance``.
    """

    monthly_rate: Decimal
    end_balance: Decimal
    monthly_return: Decimal


@dataclass(frozen=True)
class RealReturn:
    """Observed return between two consecutive snapshots.

    Attributes:
        monthly_return: Absolute balance change.
        monthly_rate: Relative change, or None without a positive base.
        annual_rate: Monthly rate compounded over a year, or None.
    """

    monthly_return: Decimal
    monthly_rate: Decimal | None = None
    annual_rate: Decimal | None = None


@dataclass(frozen=True)
class PeriodSummary:
    """Aggregated figures for a single period, in the reporting currency.

    Attributes:
        period_id: Period the summary belongs to.
        income_total: Salary plus realized non-salary income.
        income_salary: Salary income.
        income_non_salary_real: Manual non-salary income plus real returns.
        income_non_salary_projected: Projected returns, never part of totals.
        expenses_total: Recorded expenses.
        balance: ``income_total - expenses_total``.
        balance_without_salary: ``income_non_salary_real - expenses_total``.
        debt_total: Net outstanding debt.
        liquid_total: Balances held in liquid accounts.
        capital_total: Capital-eligible balances minus net debt.
        unspecified_expense: Flow/stock gap, never negative.
        conversion_complete: False when a foreign amount had no rate.
    """

    period_id: str
    income_total: Decimal
    income_salary: Decimal
    income_non_salary_real: Decimal
    income_non_salary_projected: Decimal
    expenses_total: Decimal
    balance: Decimal
    balance_without_salary: Decimal
    debt_total: Decimal
    liquid_total: Decimal
    capital_total: Decimal
    unspecified_expense: Decimal
    conversion_complete: bool = True
    currency_code: str = REPORTING_CURRENCY

    @property
    def non_liquid_total(self) -> Decimal:
        """Return net capital not held in liquid accounts."""
        return max(Decimal("0"), self.capital_total - self.liquid_total)


@dataclass(frozen=True)
class PeriodRecords:
    """Records of one period used to build multi-period series."""

    period: Period | None = None
    snapshots: tuple[AccountSnapshot, ...] = ()
    debts: tuple[Debt, ...] = ()
    expenses: tuple[Expense, ...] = ()
    incomes: tuple[Income, ...] = ()
    projected_incomes: tuple[ProjectedIncome, ...] = ()


@dataclass(frozen=True)
class SeriesPoint:
    """Per-period aggregates for charting."""

    period_id: str
    label: str
    capital_total: Decimal
    liquid_total: Decimal
    debt_total: Decimal
    expenses_total: Decimal
    real_income: Decimal
    projected_income: Decimal


@dataclass(frozen=True)
class PeriodSeries:
    """Ordered series of period aggregates."""

    points: list[SeriesPoint] = field(default_factory=list)
    currency_code: str = REPORTING_CURRENCY

    @property
    def period_ids(self) -> list[str]:
        return [point.period_id for point in self.points]


@dataclass(frozen=True)
class CategoryAmount:
    """Amount aggregated under a label."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class EntityReturns:
    """Real and projected returns aggregated for an entity."""

    entity: str
    real: Decimal
    projected: Decimal


@dataclass(frozen=True)
class PeriodBreakdowns:
    """Dashboard breakdowns for a single period."""

    period_id: str
    expenses_by_entity: list[CategoryAmount]
    returns_by_entity: list[EntityReturns]
    assets_by_account_type: list[CategoryAmount]
    investment_terms: list[CategoryAmount]
    liquidity_split: list[CategoryAmount]
    capital_waterfall: list[CategoryAmount]
    currency_code: str = REPORTING_CURRENCY


__all__ = [
    "ProjectedReturn",
    "RealReturn",
    "PeriodSummary",
    "PeriodRecords",
    "SeriesPoint",
    "PeriodSeries",
    "CategoryAmount",
    "EntityReturns",
    "PeriodBreakdowns",
]
