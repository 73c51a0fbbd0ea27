"""Carry records of one period into the next."""

from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date
from uuid import uuid4

from personal_economy.domain.models import Debt, Income, ProjectedIncome
from personal_economy.domain.services.debts import outstanding_amount
from personal_economy.domain.services.fx import ZERO
from personal_economy.domain.services.periods import parse_period_id


def new_record_id() -> str:
    return str(uuid4())


def copy_incomes(
    previous_incomes: Iterable[Income],
    period_id: str,
    id_factory: Callable[[], str] = new_record_id,
) -> list[Income]:
    """Copy incomes into ``period_id`` with fresh identifiers.

    The day of month of each entry date is kept when it exists in the target
    month (the 31st does not exist in April); otherwise the 1st is used.
    """
    year, month = parse_period_id(period_id)
    return [
        replace(
            income,
            id=id_factory(),
            period_id=period_id,
            entry_date=_shift_date(income.entry_date, year, month),
        )
        for income in previous_incomes
    ]


def carry_forward_debts(
    previous_debts: Iterable[Debt],
    period_id: str,
    id_factory: Callable[[], str] = new_record_id,
) -> list[Debt]:
    """Roll unpaid debts into ``period_id``.

    The new amount is the outstanding balance and amortization restarts at
    zero. Paid-off debts are dropped. Copies keep the ``series_id`` of the
    debt they come from, which defaults to its own id.
    """
    carried: list[Debt] = []
    for debt in previous_debts:
        remaining = outstanding_amount(debt)
        if remaining == 0:
            continue
        carried.append(
            replace(
                debt,
                id=id_factory(),
                period_id=period_id,
                series_id=debt.series_id or debt.id,
                amount=remaining,
                amortization_amount=ZERO,
            )
        )
    return carried


def carry_forward_projected_incomes(
    previous_items: Iterable[ProjectedIncome],
    period_id: str,
    id_factory: Callable[[], str] = new_record_id,
) -> list[ProjectedIncome]:
    """Copy the recurring projected incomes into ``period_id``.

    Non-recurring items stay in their month. Dates move into the target
    month the same way income dates do.
    """
    year, month = parse_period_id(period_id)
    return [
        replace(
            item,
            id=id_factory(),
            period_id=period_id,
            entry_date=_shift_date(item.entry_date, year, month),
        )
        for item in previous_items
        if item.is_recurring
    ]


def _shift_date(entry_date: date | None, year: int, month: int) -> date:
    day = entry_date.day if entry_date is not None else 1
    try:
        return date(year, month, day)
    except ValueError:
        return date(year, month, 1)


__all__ = [
    "new_record_id",
    "copy_incomes",
    "carry_forward_debts",
    "carry_forward_projected_incomes",
]
