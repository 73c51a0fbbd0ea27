"""Real and projected monthly returns for account balances."""

from decimal import Decimal
from logging import Logger

from personal_economy.domain.models import ProjectedIncome, ProjectedReturn, RealReturn
from personal_economy.utils.decimal_utils import coerce_decimal

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = 12
ONE_TWELFTH = ONE / Decimal(MONTHS_PER_YEAR)


def monthly_rate_from_annual(annual_rate) -> Decimal:
    """Convert an effective annual rate into the equivalent monthly rate.

    Args:
        annual_rate: Effective annual rate as a decimal (0.12 for 12%).

    Returns:
        Decimal: ``(1 + annual_rate) ** (1/12) - 1``.

    Raises:
        ValueError: If ``annual_rate`` is below -1.
    """
    rate = coerce_decimal(annual_rate)
    base = ONE + rate
    if base < 0:
        raise ValueError(f"Annual rate below -100% is undefined: {rate}")
    if base == 0:
        return -ONE
    return base**ONE_TWELFTH - ONE


def projected_return(
    balance,
    annual_rate,
    logger: Logger,
) -> ProjectedReturn:
    """Project the return of a balance over one month.

    Args:
        balance: Balance at the close of the period.
        annual_rate: Effective annual rate as a decimal (0.12 for 12%).
        logger: Logger used when the rate is out of range.

    Returns:
        ProjectedReturn: Monthly rate, expected end balance and return.
        Rates below -1 yield a zero return.
    """
    amount = coerce_decimal(balance)
    try:
        monthly_rate = monthly_rate_from_annual(annual_rate)
    except ValueError as exc:
        logger.warning(f"Skipping projected return: {exc}")
        return ProjectedReturn(
            monthly_rate=ZERO,
            end_balance=amount,
            monthly_return=ZERO,
        )
    end_balance = amount * (ONE + monthly_rate)
    return ProjectedReturn(
        monthly_rate=monthly_rate,
        end_balance=end_balance,
        monthly_return=end_balance - amount,
    )


def real_return(current_balance, previous_balance=None) -> RealReturn:
    """Compute the observed return between two consecutive balances.

    Args:
        current_balance: Balance at the close of the period.
        previous_balance: Balance at the close of the previous period, or
            None for the first recorded month of the account.

    Returns:
        RealReturn: Absolute return, with rates only on a positive base.
    """
    if previous_balance is None:
        return RealReturn(monthly_return=ZERO)

    current = coerce_decimal(current_balance)
    previous = coerce_decimal(previous_balance)
    monthly_return = current - previous
    if previous <= 0:
        return RealReturn(monthly_return=monthly_return)

    monthly_rate = current / previous - ONE
    annual_rate = (ONE + monthly_rate) ** MONTHS_PER_YEAR - ONE
    return RealReturn(
        monthly_return=monthly_return,
        monthly_rate=monthly_rate,
        annual_rate=annual_rate,
    )


def projected_income_amount(item: ProjectedIncome, balance) -> Decimal:
    """Return the expected monthly income of a projected income item.

    ``SALARY`` items carry a fixed amount. ``FIXED_EA`` items apply an
    effective annual percentage to the balance, ``VARIABLE_MONTHLY`` items a
    monthly percentage.
    """
    if item.income_type == "SALARY":
        return coerce_decimal(item.amount)
    amount = coerce_decimal(balance)
    if item.income_type == "FIXED_EA":
        annual_rate = coerce_decimal(item.rate_ea) / HUNDRED
        if annual_rate < -ONE:
            return ZERO
        return amount * monthly_rate_from_annual(annual_rate)
    return amount * (coerce_decimal(item.rate_monthly) / HUNDRED)


__all__ = [
    "monthly_rate_from_annual",
    "projected_return",
    "real_return",
    "projected_income_amount",
]
