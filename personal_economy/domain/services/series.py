"""Multi-period series for dashboard charts."""

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from logging import Logger

from personal_economy.domain.models import (
    Account,
    AccountSnapshot,
    PeriodRecords,
    PeriodSeries,
    ProjectedIncome,
    SeriesPoint,
)
from personal_economy.domain.services.debts import net_debt_total
from personal_economy.domain.services.fx import ZERO, ReportingConverter
from personal_economy.domain.services.periods import default_period, period_label
from personal_economy.domain.services.returns import projected_income_amount
from personal_economy.domain.services.summary import balance_totals


def build_series(
    period_ids: Sequence[str],
    period_data: Mapping[str, PeriodRecords],
    accounts: Iterable[Account],
    logger: Logger,
) -> PeriodSeries:
    """Build per-period aggregates with period-over-period real income.

    Args:
        period_ids: Period identifiers, oldest first.
        period_data: Records per period identifier. Missing identifiers are
            treated as empty periods without exchange rate.
        accounts: Accounts the snapshots refer to.
        logger: Logger used for warnings.

    Returns:
        PeriodSeries: One point per identifier. ``real_income`` is the change
        in net capital from the previous point, zero for the first one.
    """
    accounts_by_id = {account.id: account for account in accounts}
    points: list[SeriesPoint] = []
    previous_capital: Decimal | None = None
    for period_id in period_ids:
        records = period_data.get(period_id) or PeriodRecords()
        period = records.period or default_period(period_id)
        converter = ReportingConverter(period, logger)

        liquid_total, capital_gross = balance_totals(
            records.snapshots, accounts_by_id, converter, logger
        )
        debt_total = net_debt_total(
            records.debts, period, logger, converter=converter
        )
        capital_total = capital_gross - debt_total
        expenses_total = sum(
            (
                converter.convert(expense.amount, expense.currency)
                for expense in records.expenses
            ),
            ZERO,
        )
        projected_income = projected_income_total(
            records.projected_incomes,
            records.snapshots,
            accounts_by_id,
            converter,
        )
        baseline = capital_total if previous_capital is None else previous_capital
        points.append(
            SeriesPoint(
                period_id=period_id,
                label=period_label(period_id),
                capital_total=capital_total,
                liquid_total=liquid_total,
                debt_total=debt_total,
                expenses_total=expenses_total,
                real_income=capital_total - baseline,
                projected_income=projected_income,
            )
        )
        previous_capital = capital_total
    return PeriodSeries(points=points)


def projected_income_total(
    items: Iterable[ProjectedIncome],
    snapshots: Iterable[AccountSnapshot],
    accounts_by_id: Mapping[str, Account],
    converter: ReportingConverter,
) -> Decimal:
    """Sum projected incomes against the balances of the same period.

    Items whose account is unknown are skipped; accounts without a snapshot
    project from a zero balance.
    """
    balances = {snapshot.account_id: snapshot.balance for snapshot in snapshots}
    total = ZERO
    for item in items:
        account = accounts_by_id.get(item.account_id)
        if account is None:
            continue
        amount = projected_income_amount(item, balances.get(item.account_id, ZERO))
        total += converter.convert(amount, account.currency)
    return total


__all__ = ["build_series", "projected_income_total"]
