"""Period summary aggregation.

``summarize`` folds the records of a period, and the snapshots and debts of
the previous period, into a ``PeriodSummary`` in the reporting currency.
Missing data (first month of an account, unset exchange rate, snapshot of an
unknown account) degrades to zero or None values instead of raising.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from logging import Logger

from personal_economy.domain.models import (
    Account,
    AccountSnapshot,
    Debt,
    Expense,
    Income,
    Period,
    PeriodSummary,
)
from personal_economy.domain.services.categories import (
    is_capital_eligible,
    is_liquid,
)
from personal_economy.domain.services.debts import net_debt_total
from personal_economy.domain.services.fx import ZERO, ReportingConverter
from personal_economy.domain.services.returns import projected_return, real_return


def summarize(
    period: Period,
    incomes: Iterable[Income],
    expenses: Iterable[Expense],
    debts: Iterable[Debt],
    previous_period_debts: Iterable[Debt],
    accounts: Iterable[Account],
    snapshots: Iterable[AccountSnapshot],
    previous_snapshots: Iterable[AccountSnapshot],
    logger: Logger,
) -> PeriodSummary:
    """Compute the financial summary of a period.

    Args:
        period: Period being summarized; its rate converts every amount.
        incomes: Incomes recorded in the period.
        expenses: Expenses recorded in the period.
        debts: Debts recorded in the period.
        previous_period_debts: Debts of the previous period.
        accounts: Accounts the snapshots refer to.
        snapshots: Account balances at the close of the period.
        previous_snapshots: Account balances at the close of the previous
            period, read before any carry-forward into this period.
        logger: Logger used for warnings.

    Returns:
        PeriodSummary: Aggregated totals in the reporting currency.
    """
    converter = ReportingConverter(period, logger)
    accounts_by_id = {account.id: account for account in accounts}
    snapshots = list(snapshots)
    previous_snapshots = list(previous_snapshots)
    previous_by_account = {
        snapshot.account_id: snapshot for snapshot in previous_snapshots
    }

    income_salary = ZERO
    manual_non_salary = ZERO
    for income in incomes:
        converted = converter.convert(income.amount, income.currency)
        if income.is_salary:
            income_salary += converted
        else:
            manual_non_salary += converted

    real_returns, projected_returns = returns_totals(
        snapshots,
        accounts_by_id,
        previous_by_account,
        converter,
        logger,
    )

    income_non_salary_real = manual_non_salary + real_returns
    income_total = income_salary + income_non_salary_real

    expenses_total = sum(
        (converter.convert(expense.amount, expense.currency) for expense in expenses),
        ZERO,
    )

    balance = income_total - expenses_total
    balance_without_salary = income_non_salary_real - expenses_total

    debt_total = net_debt_total(debts, period, logger, converter=converter)

    liquid_total, capital_gross = balance_totals(
        snapshots, accounts_by_id, converter, logger
    )
    # Previous balances convert with this period's rate.
    _, previous_capital_gross = balance_totals(
        previous_snapshots, accounts_by_id, converter, logger
    )

    capital_total = capital_gross - debt_total
    previous_capital_total = previous_capital_gross - net_debt_total(
        previous_period_debts, period, logger, converter=converter
    )

    savings_flow = income_total - expenses_total
    savings_stock = capital_total - previous_capital_total
    leakage = savings_flow - savings_stock

    summary = PeriodSummary(
        period_id=period.id,
        income_total=income_total,
        income_salary=income_salary,
        income_non_salary_real=income_non_salary_real,
        income_non_salary_projected=projected_returns,
        expenses_total=expenses_total,
        balance=balance,
        balance_without_salary=balance_without_salary,
        debt_total=debt_total,
        liquid_total=liquid_total,
        capital_total=capital_total,
        unspecified_expense=max(ZERO, leakage),
        conversion_complete=converter.complete,
    )
    logger.debug(
        f"Period {period.id} summarized: income={income_total}, "
        f"expenses={expenses_total}, capital={capital_total}"
    )
    return summary


def returns_totals(
    snapshots: Iterable[AccountSnapshot],
    accounts_by_id: Mapping[str, Account],
    previous_by_account: Mapping[str, AccountSnapshot],
    converter: ReportingConverter,
    logger: Logger,
) -> tuple[Decimal, Decimal]:
    """Sum real and projected monthly returns of the snapshots.

    Returns:
        tuple[Decimal, Decimal]: Real returns and projected returns.
    """
    real_total = ZERO
    projected_total = ZERO
    for snapshot in snapshots:
        account = accounts_by_id.get(snapshot.account_id)
        if account is None:
            _log_orphan(snapshot, logger)
            continue
        previous = previous_by_account.get(snapshot.account_id)
        real = real_return(
            snapshot.balance,
            previous.balance if previous is not None else None,
        )
        real_total += converter.convert(real.monthly_return, account.currency)

        rate = snapshot.effective_annual_rate_projected
        if rate is None:
            continue
        projected = projected_return(snapshot.balance, rate, logger)
        projected_total += converter.convert(
            projected.monthly_return, account.currency
        )
    return real_total, projected_total


def balance_totals(
    snapshots: Iterable[AccountSnapshot],
    accounts_by_id: Mapping[str, Account],
    converter: ReportingConverter,
    logger: Logger,
) -> tuple[Decimal, Decimal]:
    """Sum converted balances of liquid and capital-eligible accounts.

    A snapshot contributes to both totals when its account is in both
    buckets.

    Returns:
        tuple[Decimal, Decimal]: Liquid total and gross capital total.
    """
    liquid_total = ZERO
    capital_total = ZERO
    for snapshot in snapshots:
        account = accounts_by_id.get(snapshot.account_id)
        if account is None:
            _log_orphan(snapshot, logger)
            continue
        converted = converter.convert(snapshot.balance, account.currency)
        if is_liquid(account):
            liquid_total += converted
        if is_capital_eligible(account):
            capital_total += converted
    return liquid_total, capital_total


def _log_orphan(snapshot: AccountSnapshot, logger: Logger) -> None:
    logger.debug(
        f"Skipping snapshot {snapshot.id} for unknown account {snapshot.account_id}"
    )


__all__ = ["summarize", "returns_totals", "balance_totals"]
