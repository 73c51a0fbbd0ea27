"""Net outstanding debt after amortization."""

from collections.abc import Iterable
from decimal import Decimal
from logging import Logger

from personal_economy.domain.models import Debt, Period
from personal_economy.domain.services.fx import (
    ZERO,
    ReportingConverter,
    to_reporting_currency,
)
from personal_economy.utils.decimal_utils import coerce_decimal


def outstanding_amount(debt: Debt) -> Decimal:
    """Return the outstanding balance in the debt's own currency.

    Args:
        debt: Debt record.

    Returns:
        Decimal: ``max(0, amount - amortization)``.
    """
    amortization = coerce_decimal(debt.amortization_amount)
    return max(ZERO, coerce_decimal(debt.amount) - amortization)


def net_debt(
    debt: Debt,
    period: Period,
    logger: Logger,
) -> Decimal:
    """Return the outstanding balance of a debt in the reporting currency.

    The clamp at zero happens in the debt's currency, before conversion.
    """
    return to_reporting_currency(
        outstanding_amount(debt),
        debt.currency,
        period,
        logger,
    )


def net_debt_total(
    debts: Iterable[Debt],
    period: Period,
    logger: Logger,
    converter: ReportingConverter | None = None,
) -> Decimal:
    """Sum the net outstanding balance of debts in the reporting currency.

    Args:
        debts: Debt records to sum.
        period: Period whose rate applies.
        logger: Logger used for missing-rate warnings.
        converter: Optional converter shared with a running aggregation.

    Returns:
        Decimal: Total net debt, never negative.
    """
    resolved = converter or ReportingConverter(period, logger)
    return sum(
        (resolved.convert(outstanding_amount(debt), debt.currency) for debt in debts),
        ZERO,
    )


def is_paid_off(debt: Debt) -> bool:
    """Return True when nothing is left to pay on the debt."""
    return outstanding_amount(debt) == 0


__all__ = ["outstanding_amount", "net_debt", "net_debt_total", "is_paid_off"]
